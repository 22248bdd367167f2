# studio_api/core.py
#
# Booking engine: inclusive date-range overlap, booking creation with owner
# blocks, display status and the owner-reservation expiry sweep.

import logging
from datetime import date
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select, col

from .errors import NotFound, OwnerBlocked, RangeConflict, ValidationError
from .models import Booking, Studio

logger = logging.getLogger(__name__)


def overlaps(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    # both boundaries count: a range ending on day X conflicts with one starting on X
    return not (a_end < b_start or a_start > b_end)


def is_owner_blocked(studio: Studio, start: date) -> bool:
    return (
        studio.status == "reserved"
        and studio.reserved_until is not None
        and start <= studio.reserved_until
    )


def create_booking(
    session: Session,
    studio_id: int,
    requester_id: int,
    start: date,
    end: Optional[date] = None,
) -> Booking:
    """Book ``studio_id`` from ``start`` to ``end`` (inclusive) for ``requester_id``.

    The studio row is selected FOR UPDATE, so on PostgreSQL concurrent requests
    for the same studio serialize between the conflict check and the insert.
    SQLite drops the clause: two deferred transactions can both pass the check
    before either writes, so the race remains there.

    Raises ValidationError, NotFound, OwnerBlocked or RangeConflict.
    """
    if end is None:
        end = start
    if end < start:
        raise ValidationError("End date must be on or after the start date")

    try:
        studio = session.exec(
            select(Studio).where(Studio.id == studio_id).with_for_update()
        ).first()
        if studio is None:
            raise NotFound("Studio not found")

        # 1) Owner's long-term reservation
        if is_owner_blocked(studio, start):
            raise OwnerBlocked(
                f"Studio is reserved by its owner until {studio.reserved_until.isoformat()}"
            )

        # 2) Overlap with existing bookings
        existing = session.exec(
            select(Booking)
            .where(Booking.item_id == studio_id)
            .where(Booking.status != "cancelled")
        ).all()

        for b in existing:
            if overlaps(start, end, b.date, b.end_date):
                raise RangeConflict()

        booking = Booking(
            user_id=requester_id,
            item_id=studio_id,
            date=start,
            end_date=end,
            status="confirmed",
        )
        session.add(booking)
        session.commit()
    except Exception:
        session.rollback()
        raise

    session.refresh(booking)
    return booking


def derive_display_status(session: Session, studio: Studio, today: date) -> str:
    """Status to show for ``studio`` on ``today``; the stored row is left untouched."""
    if studio.status == "reserved":
        return studio.status

    current = session.exec(
        select(Booking.id)
        .where(Booking.item_id == studio.id)
        .where(Booking.status != "cancelled")
        .where(Booking.date <= today)
        .where(Booking.end_date >= today)
    ).first()

    if current is not None:
        return "reserved"
    return studio.status


def expire_owner_reservations(session: Session, today: date) -> int:
    """Release owner reservations whose ``reserved_until`` is before ``today``.

    Best-effort: a store failure is logged and swallowed. Returns the number
    of studios reset.
    """
    try:
        result = session.exec(
            update(Studio)
            .where(Studio.status == "reserved")
            .where(col(Studio.reserved_until).is_not(None))
            .where(col(Studio.reserved_until) < today)
            .values(status="available", reserved_until=None)
        )
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.warning("Reservation expiry sweep skipped: %s", exc)
        return 0

    if result.rowcount:
        logger.info("Released %d expired owner reservation(s)", result.rowcount)
    return result.rowcount
