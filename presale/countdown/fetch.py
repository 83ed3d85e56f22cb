from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Optional

import requests
from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

DEFAULT_PRESALE_TIME_URL = "https://funs-coin-timer-dashboard-backend.vercel.app/api/presale"

# Wall-clock local time, like the timestamp shown on the landing page.
FALLBACK_PRESALE_END = datetime(2025, 1, 14, 16, 0, 0).astimezone()


def presale_time_url() -> str:
    return (os.getenv("PRESALE_TIME_URL") or "").strip() or DEFAULT_PRESALE_TIME_URL


def parse_presale_end_time(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as local time."""
    dt = date_parser.isoparse(value)
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


def fetch_presale_end_time(
    url: Optional[str] = None,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = 10,
) -> datetime:
    """
    Fetch `{"presaleEndTime": "<ISO-8601>"}` from the timer endpoint.

    Never raises: any network, HTTP, JSON or parse failure returns FALLBACK_PRESALE_END.
    """
    target = url or presale_time_url()
    http = session or requests
    try:
        r = http.get(target, timeout=timeout)
        r.raise_for_status()
        data = r.json()
        if not isinstance(data, dict):
            raise ValueError("Invalid presale time response")
        return parse_presale_end_time(str(data["presaleEndTime"]))
    except (requests.RequestException, ValueError, KeyError, TypeError, OverflowError) as e:
        logger.warning("Error fetching presale time from %s, using fallback: %s", target, str(e))
        return FALLBACK_PRESALE_END
