"""HTTP API over a GeoCatalog."""
