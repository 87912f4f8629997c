"""HTTP API for workspace uploads."""
