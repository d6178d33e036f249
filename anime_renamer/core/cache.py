"""Short-lived cache of rename decisions."""

import time
from typing import Dict, Any, NamedTuple, Optional, Tuple

from ..models.types import FileInfo, ImportFolder

# Constants
CACHE_WINDOW = 2  # seconds


class Decision(NamedTuple):
    filename: str
    destination: ImportFolder
    subfolder: str


def fingerprint(file: FileInfo) -> Optional[str]:
    """Cache key for a file: its CRC, else the first other hash present."""
    h = file["hashes"]
    for k in ("crc", "ed2k", "sha1", "md5"):
        if h.get(k):
            return f"{k}|{h[k].upper()}"
    return None


class ResultCache:
    """Decisions keyed by file fingerprint, valid for one script text.

    A change of script text drops every entry. Entries expire CACHE_WINDOW
    seconds after they were stored and are never refreshed in place.
    """

    def __init__(self, window: float = CACHE_WINDOW) -> None:
        self.window = window
        self._script = ""
        self._entries: Dict[str, Tuple[float, Decision]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, script: str, key: Optional[str]) -> Optional[Decision]:
        """Get a decision if the script is unchanged and the entry not expired."""
        if script != self._script:
            self._script = script
            self._entries.clear()
            self.misses += 1
            return None

        it = self._entries.get(key) if key else None
        if not it:
            self.misses += 1
            return None

        set_time, decision = it
        if time.time() >= set_time + self.window:
            self._entries.pop(key, None)
            self.misses += 1
            return None

        self.hits += 1
        return decision

    def set(self, key: Optional[str], decision: Decision) -> None:
        if key:
            self._entries[key] = (time.time(), decision)

    def info(self) -> Dict[str, Any]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "size": len(self._entries),
            "windowSec": self.window,
        }

    def clear(self) -> int:
        """Clear cache and return number of cleared items."""
        n = len(self._entries)
        self._entries.clear()
        self._script = ""
        return n
