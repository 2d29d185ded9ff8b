"""HTTP API for the holdings UI."""
