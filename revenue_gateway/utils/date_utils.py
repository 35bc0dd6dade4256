"""Date manipulation utilities"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Timezone-aware current UTC timestamp"""
    return datetime.now(timezone.utc)
