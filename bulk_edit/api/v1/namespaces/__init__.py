"""API v1 namespaces."""
