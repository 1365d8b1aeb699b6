"""
Utility functions for the application.
"""
from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Current UTC time as an ISO string ending in Z, as browsers send it."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
