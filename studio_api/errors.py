# studio_api/errors.py
#
# Error taxonomy. Every error renders as {"error": ..., "details"?: ...}
# through the handlers registered in main.py.

from typing import Any, Optional

from fastapi import HTTPException


class APIError(HTTPException):
    status_code = 500
    message = "Internal server error"

    def __init__(self, detail: Optional[str] = None, details: Any = None, headers: Optional[dict] = None):
        super().__init__(status_code=self.status_code, detail=detail or self.message, headers=headers)
        self.details = details


class ValidationError(APIError):
    status_code = 400
    message = "Invalid request"


class Unauthorized(APIError):
    status_code = 401
    message = "Unauthorized"

    def __init__(self, detail: Optional[str] = None, details: Any = None):
        super().__init__(detail, details, headers={"WWW-Authenticate": "Bearer"})


class InvalidCredentials(Unauthorized):
    message = "Invalid credentials"


class Forbidden(APIError):
    status_code = 403
    message = "Forbidden"


class NotFound(APIError):
    status_code = 404
    message = "Not found"


class Conflict(APIError):
    status_code = 409
    message = "Conflict"


class OwnerBlocked(Conflict):
    message = "Studio is reserved by its owner"


class RangeConflict(Conflict):
    message = "Studio is already booked for all or part of this period"


class UpstreamError(APIError):
    status_code = 502
    message = "Failed to trigger scraping workflow"


class InternalError(APIError):
    status_code = 500
    message = "Internal server error"
