"""MCP tool families.  Each module exposes ``register() -> (tools, handlers)``."""
