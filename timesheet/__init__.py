"""Time-tracking form: entry calculation, validation, persistence and browsing."""
