"""HTTP boundary - FastAPI application, routes and dependencies."""
