# studio_api/routers/scraping_routes.py

from typing import Optional

import httpx
from fastapi import APIRouter, Depends

from studio_api import config
from studio_api.schemas import ScrapingResult
from studio_api.auth import get_current_user
from studio_api.deps import get_http_client
from studio_api.errors import InternalError, ValidationError
from studio_api.scraping import trigger_workflow

router = APIRouter(
    prefix="/api/scraping",
    tags=["scraping"],
)


@router.get("/trigger", response_model=ScrapingResult)
def trigger(
    city: Optional[str] = None,
    keyword: Optional[str] = None,
    client: httpx.Client = Depends(get_http_client),
    current_user: dict = Depends(get_current_user),
):
    if not city or not keyword:
        raise ValidationError("City and keyword are required")

    if not config.N8N_WEBHOOK_URL:
        raise InternalError("Scraping webhook URL is not configured")

    sheet_url = trigger_workflow(client, config.N8N_WEBHOOK_URL, city, keyword, current_user["email"])
    return {"success": True, "message": "Scraping finished successfully", "sheetUrl": sheet_url}
