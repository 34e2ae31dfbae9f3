"""HTTP adapter for the router."""
