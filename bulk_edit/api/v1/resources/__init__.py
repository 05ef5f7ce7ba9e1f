"""API v1 resource helpers."""
