"""File storage adapters for the two-step upload flow."""

from casework.infrastructure.adapters.storage.local_file_storage import (
    LocalFileStorage,
)

__all__ = ["LocalFileStorage"]
