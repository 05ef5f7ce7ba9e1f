"""请求 payload schema(pydantic)."""
