"""clawsync utilities."""

from clawsync.utils.helpers import hash_content, daily_note_dates, now_utc
from clawsync.utils.logging import get_logger, setup_logging

__all__ = [
    "now_utc",
    "hash_content",
    "daily_note_dates",
    "setup_logging",
    "get_logger",
]
