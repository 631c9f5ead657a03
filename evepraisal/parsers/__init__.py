"""Parsers for the text formats the EVE Online client puts on the clipboard."""