"""HTTP server module - FastAPI app and routes."""
