# consumer_integration/models/base.py
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC timestamp, stored the same way on PostgreSQL and SQLite."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
