"""Shoko Server collaborators: import folder catalog and prior file placements."""

import logging
from typing import Any, Dict, List, Optional

from .http_client import DEFAULT_TIMEOUT, http_get
from .normalizers import norm_import_folder_from_shoko, norm_placements_from_shoko
from ..models.types import ImportFolder, Placement

logger = logging.getLogger(__name__)


class ShokoClient:
    """Reads import folders and file locations from the Shoko v3 REST API."""

    def __init__(self, base_url: str, api_key: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    def _get(self, path: str, **params):
        r = http_get(
            f"{self.base_url}/api/v3/{path}",
            headers={"apikey": self.api_key, "Accept": "application/json"},
            params=params or None,
            timeout=self.timeout,
        )
        if r.status_code == 404:
            return None
        r.raise_for_status()
        return r.json()

    def list_all(self) -> List[ImportFolder]:
        return [norm_import_folder_from_shoko(d) for d in self._get("ImportFolder") or []]

    def location_by_id(self, folder_id: int) -> Optional[ImportFolder]:
        d = self._get(f"ImportFolder/{folder_id}")
        return norm_import_folder_from_shoko(d) if d else None

    def placements_for(self, anime_id: int) -> List[Placement]:
        series = self._get(f"Series/AniDB/{anime_id}/Series")
        if not series:
            logger.debug("No Shoko series for AniDB anime %s", anime_id)
            return []
        series_id = (series.get("IDs") or {}).get("ID")
        files = self._get(f"Series/{series_id}/File", pageSize=0) or []
        if isinstance(files, dict):
            files = files.get("List") or []
        out: List[Placement] = []
        for f in files:
            out.extend(norm_placements_from_shoko(f))
        return out
