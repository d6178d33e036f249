"""Helper functions for anime-renamer."""

from datetime import date, datetime
from typing import Any, Dict, Optional

from ..models.types import LANGUAGES

_LANGUAGE_LOOKUP = {lang.lower(): lang for lang in LANGUAGES}


def date_table(d: Optional[date]) -> Optional[Dict[str, Any]]:
    """Lua os.date("*t") style table for a date or datetime."""
    if d is None:
        return None
    dt = d if isinstance(d, datetime) else datetime(d.year, d.month, d.day)
    return {
        "year": dt.year,
        "month": dt.month,
        "day": dt.day,
        "hour": dt.hour,
        "min": dt.minute,
        "sec": dt.second,
        "wday": dt.isoweekday() % 7 + 1,   # Sunday == 1
        "yday": dt.timetuple().tm_yday,
        "isdst": False,
    }


def parse_language(name: Optional[str]) -> Optional[str]:
    """Language enum name for a free-form language name, if it is one."""
    if not name:
        return None
    return _LANGUAGE_LOOKUP.get(name.strip().lower().replace(" ", ""))


def track_language(language: Optional[str], title: Optional[str]) -> str:
    return parse_language(language) or parse_language(title) or "Unknown"
