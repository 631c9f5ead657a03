"""Loading item types from the EVE static data export, with renamed-item aliases."""