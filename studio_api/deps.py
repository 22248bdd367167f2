# studio_api/deps.py

from datetime import date, datetime, timezone

import httpx

from .config import SCRAPING_TIMEOUT_SECONDS
from .errors import Forbidden


def require_owner_or_admin(user: dict, owner_id: int):
    if user["id"] != owner_id and user["role"] != "admin":
        raise Forbidden("Only the owner or an admin can modify this studio")


def get_today() -> date:
    # UTC calendar day, overridable in tests
    return datetime.now(timezone.utc).date()


def get_http_client():
    with httpx.Client(timeout=SCRAPING_TIMEOUT_SECONDS) as client:
        yield client
