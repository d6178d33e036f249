"""HTTP access to upstream services (Shoko Server) with retries."""

import logging
import random
import time
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

# Constants
DEFAULT_TIMEOUT = 15
MAX_ATTEMPTS = 3
BASE_BACKOFF = 0.7
MAX_RETRY_AFTER = 10
RETRY_CODES = {429, 500, 502, 503, 504}
UA = "anime-renamer/0.1"
SCHEMA = "1.0.0"


def _delay(attempt: int, resp: Optional[requests.Response]) -> float:
    """Seconds to wait before the next attempt; honours a numeric Retry-After."""
    retry_after = resp.headers.get("Retry-After") if resp is not None else None
    if retry_after and retry_after.isdigit():
        return min(float(retry_after), MAX_RETRY_AFTER)
    return BASE_BACKOFF * (2 ** attempt) + random.random() * 0.4


def http_get(url: str, **kw) -> requests.Response:
    """GET `url`, retrying on RETRY_CODES and connection errors.

    Non-retryable statuses are returned as-is for the caller to inspect.
    """
    timeout = kw.pop("timeout", DEFAULT_TIMEOUT)
    headers = {"User-Agent": UA, **(kw.pop("headers", None) or {})}

    for attempt in range(MAX_ATTEMPTS):
        last = attempt == MAX_ATTEMPTS - 1
        try:
            r = requests.request("GET", url, timeout=timeout, headers=headers, **kw)
        except requests.HTTPError as e:
            # an error response is falsy, so test for presence explicitly
            resp = e.response
            if resp is None or resp.status_code not in RETRY_CODES or last:
                raise
        except requests.RequestException as e:
            if last:
                raise
            resp = None
            logger.warning("GET %s failed (%s), retrying", url, e)
        else:
            if r.status_code not in RETRY_CODES:
                return r
            if last:
                raise requests.HTTPError(f"{r.status_code} upstream", response=r)
            resp = r
        if resp is not None:
            logger.warning("GET %s returned %s, retrying", url, resp.status_code)
        time.sleep(_delay(attempt, resp))


def err_payload(source: str, code: str, message: str) -> Dict[str, Any]:
    return {"schemaVersion": SCHEMA, "error": {"code": code, "message": message, "source": source}}
