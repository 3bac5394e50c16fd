"""FastAPI application wiring: factory, lifespan, middleware and handlers."""
