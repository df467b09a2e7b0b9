"""HTTP boundary: dependencies, error handlers and routes."""
