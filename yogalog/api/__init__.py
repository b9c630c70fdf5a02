"""HTTP Shell — FastAPI routers, dependencies and error handlers."""
