"""Number formatting and access-log helpers for displaying appraisals."""