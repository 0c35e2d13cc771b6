"""
Casework - Immigration case management service

Tracks collective processes (corporate sponsorships), the individual
applications grouped under them, their status history, and the
documents delivered for each application, with bulk operations for
day-to-day back office work.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
