"""FastAPI dependency wiring for Casework routes."""
