# ============================================================================
# FILE: music_api/db/base.py
# ============================================================================
from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp for DateTime columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
