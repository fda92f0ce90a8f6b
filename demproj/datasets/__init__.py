"""Loading of the sector input data."""
