# studio_api/routers/bookings_routes.py

from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session, select, col

from studio_api.db import get_session
from studio_api.models import Booking, Studio
from studio_api.schemas import BookingCreate, CreatedResponse, MyBooking
from studio_api.auth import get_current_user
from studio_api.core import create_booking

router = APIRouter(
    prefix="/api/bookings",
    tags=["bookings"],
)


@router.post("", status_code=201, response_model=CreatedResponse)
def book_studio(
    body: BookingCreate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    booking = create_booking(
        session,
        studio_id=body.item_id,
        requester_id=current_user["id"],
        start=body.date,
        end=body.end_date,
    )
    return {"message": "Booking confirmed", "id": booking.id}


@router.get("/my-bookings", response_model=List[MyBooking])
def my_bookings(
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    rows = session.exec(
        select(Booking, Studio)
        .join(Studio, Booking.item_id == Studio.id)
        .where(Booking.user_id == current_user["id"])
        .order_by(col(Booking.date).desc(), col(Booking.id).desc())
    ).all()

    return [
        {
            **booking.model_dump(),
            "studio_name": studio.name,
            "price_per_hour": studio.price_per_hour,
            "city": studio.city,
            "equipments": studio.equipments,
        }
        for booking, studio in rows
    ]
