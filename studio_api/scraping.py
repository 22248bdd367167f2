# studio_api/scraping.py
#
# Pass-through to the external scraping workflow (n8n webhook). The workflow
# answers {"success": true, "sheetUrl": "..."} once the sheet is ready.

import logging

import httpx

from .errors import UpstreamError

logger = logging.getLogger(__name__)


def trigger_workflow(client: httpx.Client, webhook_url: str, city: str, keyword: str, user_email: str) -> str:
    """Run the workflow for ``keyword`` in ``city`` and return the sheet URL.

    Every upstream failure (timeout, transport error, non-2xx, unusable body)
    is raised as UpstreamError; nothing is retried.
    """
    params = {"city": city, "keyword": keyword, "userEmail": user_email}
    logger.info("Triggering scraping workflow for %r in %r (user %s)", keyword, city, user_email)

    try:
        response = client.get(webhook_url, params=params)
    except httpx.TimeoutException as exc:
        logger.error("Scraping workflow timed out: %s", exc)
        raise UpstreamError("Scraping workflow timed out")
    except httpx.HTTPError as exc:
        logger.error("Scraping workflow unreachable: %s", exc)
        raise UpstreamError(details=str(exc))

    if response.is_error:
        logger.error("Scraping workflow error: %s - %s", response.status_code, response.text)
        raise UpstreamError(details={"status": response.status_code, "body": response.text})

    try:
        data = response.json()
    except ValueError:
        logger.error("Scraping workflow returned a non-JSON body")
        raise UpstreamError("Scraping workflow returned an invalid response")

    if not isinstance(data, dict) or data.get("success") is False:
        error = data.get("error") if isinstance(data, dict) else None
        raise UpstreamError("Scraping workflow reported a failure", details=error)

    sheet_url = data.get("sheetUrl")
    if not sheet_url:
        raise UpstreamError("Scraping workflow returned no sheet URL")

    return sheet_url
