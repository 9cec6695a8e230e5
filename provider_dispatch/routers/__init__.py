"""HTTP routers. Thin wrappers: validate with pydantic, call a pure service."""
