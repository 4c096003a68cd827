"""Application layer: configuration and the FastAPI surface."""
