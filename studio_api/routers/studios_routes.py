# studio_api/routers/studios_routes.py

import json
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import delete
from sqlmodel import Session, select, col, or_

from studio_api.db import get_session
from studio_api.models import Studio, Booking, Review, Favorite
from studio_api.schemas import (
    StudioCreate, StudioUpdate, StudioPublic, BookedRange, CreatedResponse, MessageResponse,
)
from studio_api.auth import get_current_user
from studio_api.deps import require_owner_or_admin, get_today
from studio_api.core import derive_display_status, expire_owner_reservations
from studio_api.errors import NotFound, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/items",
    tags=["studios"],
)


def build_studio_query(
    category: Optional[str] = None,
    city: Optional[str] = None,
    status: Optional[str] = None,
    price_max: Optional[float] = None,
    search: Optional[str] = None,
):
    """AND-combined studio filters; absent filters (and "all") are no-ops."""
    stmt = select(Studio)

    if category and category != "all":
        stmt = stmt.where(col(Studio.services).contains(category))
    if city and city != "all":
        stmt = stmt.where(Studio.city == city)
    if status and status != "all":
        stmt = stmt.where(Studio.status == status)
    if price_max is not None:
        stmt = stmt.where(Studio.price_per_hour <= price_max)
    if search:
        stmt = stmt.where(or_(col(Studio.name).contains(search), col(Studio.city).contains(search)))

    return stmt.order_by(col(Studio.created_at).desc(), col(Studio.id).desc())


def with_display_status(session: Session, studio: Studio, today: date) -> StudioPublic:
    public = StudioPublic.model_validate(studio)
    public.status = derive_display_status(session, studio, today)
    return public


async def raw_body(request: Request) -> bytes:
    return await request.body()


def get_studio_or_404(session: Session, studio_id: int) -> Studio:
    studio = session.get(Studio, studio_id)
    if studio is None:
        raise NotFound("Studio not found")
    return studio


@router.get("", response_model=List[StudioPublic])
def list_studios(
    category: Optional[str] = None,
    city: Optional[str] = None,
    status: Optional[str] = None,
    price_max: Optional[float] = Query(None, alias="priceMax"),
    search: Optional[str] = None,
    session: Session = Depends(get_session),
    today: date = Depends(get_today),
):
    # release expired owner reservations first (best-effort)
    expire_owner_reservations(session, today)

    stmt = build_studio_query(category, city, status, price_max, search)
    studios = session.exec(stmt).all()
    return [with_display_status(session, s, today) for s in studios]


@router.get("/{studio_id}", response_model=StudioPublic)
def get_studio(
    studio_id: int,
    session: Session = Depends(get_session),
    today: date = Depends(get_today),
):
    logger.debug("Fetching studio %s", studio_id)
    studio = get_studio_or_404(session, studio_id)
    return with_display_status(session, studio, today)


@router.post("", status_code=201, response_model=CreatedResponse)
def create_studio(
    body: StudioCreate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    db_studio = Studio(
        name=body.name,
        city=body.city,
        price_per_hour=body.price,
        status=body.status,
        reserved_until=body.reserved_until,
        services=body.services,
        equipments=body.equipments,
        image=body.image,
        description=body.description,
        created_by=current_user["id"],
    )

    session.add(db_studio)
    session.commit()
    session.refresh(db_studio)  # fills db_studio.id

    return {"message": "Studio created successfully", "id": db_studio.id}


@router.put("/{studio_id}", response_model=MessageResponse)
def update_studio(
    studio_id: int,
    raw: bytes = Depends(raw_body),
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    studio = get_studio_or_404(session, studio_id)
    require_owner_or_admin(current_user, studio.created_by)

    # body is decoded and validated only once the caller is known to be allowed
    try:
        payload = json.loads(raw) if raw.strip() else None
    except ValueError:
        raise ValidationError("Request body is not valid JSON")

    try:
        body = StudioUpdate.model_validate(payload or {})
    except PydanticValidationError as exc:
        raise ValidationError("Invalid studio update", details=exc.errors(include_url=False, include_context=False))

    updates = body.changes()
    if not updates:
        return {"message": "No changes"}

    for key, value in updates.items():
        setattr(studio, key, value)

    session.add(studio)
    session.commit()

    return {"message": "Studio updated successfully"}


@router.delete("/{studio_id}", response_model=MessageResponse)
def delete_studio(
    studio_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    studio = get_studio_or_404(session, studio_id)
    require_owner_or_admin(current_user, studio.created_by)

    # dependents first; not every backend enforces ON DELETE CASCADE
    session.exec(delete(Booking).where(Booking.item_id == studio_id))
    session.exec(delete(Review).where(Review.studio_id == studio_id))
    session.exec(delete(Favorite).where(Favorite.studio_id == studio_id))
    session.delete(studio)
    session.commit()

    return {"message": "Studio deleted successfully"}


@router.get("/{studio_id}/bookings", response_model=List[BookedRange])
def studio_bookings(
    studio_id: int,
    session: Session = Depends(get_session),
):
    """Booked ranges of a studio, for availability display."""
    stmt = (
        select(Booking)
        .where(Booking.item_id == studio_id)
        .where(Booking.status != "cancelled")
        .order_by(Booking.date)
    )
    return session.exec(stmt).all()
