"""HTTP layer: FastAPI application, routers and request schemas."""
