"""Request/response models for the Casework API."""
