from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional


logger = logging.getLogger(__name__)

PGN_DATETIME_FORMAT = "%Y.%m.%d %H:%M:%S"


def parse_rating(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        # PGN uses "?" or "-" for unknown ratings
        return None


def parse_end_time(date: str, time_of_day: str) -> Optional[int]:
    """Convert PGN ``Date``/``Time`` header values to epoch seconds (UTC)."""
    stamp = f"{date.strip()} {time_of_day.strip()}"
    try:
        dt = datetime.strptime(stamp, PGN_DATETIME_FORMAT)
    except ValueError:
        logger.debug("unparsable game date/time: %r", stamp)
        return None
    return int(dt.replace(tzinfo=timezone.utc).timestamp())
