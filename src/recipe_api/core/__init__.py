"""Core application plumbing: configuration, exceptions, lifespan, middleware."""
