# ============================================================================
# FILE: music_api/core/logging.py
# ============================================================================
import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once per process"""
    global _configured

    resolved = logging.getLevelName((level or "INFO").upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    if _configured:
        logging.getLogger().setLevel(resolved)
        return

    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    # Keep SQL echo out of the application log unless asked for
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    _configured = True
