"""Pure domain rules for Casework (no I/O)."""

__all__: list[str] = []
