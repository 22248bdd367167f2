# studio_api/routers/reviews_routes.py

from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session, select, col

from studio_api.db import get_session
from studio_api.models import Review, Studio, User
from studio_api.schemas import ReviewCreate, ReviewPublic, MessageResponse
from studio_api.auth import get_current_user
from studio_api.errors import NotFound

router = APIRouter(
    prefix="/api/items",
    tags=["reviews"],
)


@router.post("/{studio_id}/reviews", status_code=201, response_model=MessageResponse)
def add_review(
    studio_id: int,
    review: ReviewCreate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    if session.get(Studio, studio_id) is None:
        raise NotFound("Studio not found")

    session.add(Review(
        user_id=current_user["id"],
        studio_id=studio_id,
        rating=review.rating,
        comment=review.comment,
    ))
    session.commit()

    return {"message": "Review added"}


@router.get("/{studio_id}/reviews", response_model=List[ReviewPublic])
def list_reviews(
    studio_id: int,
    session: Session = Depends(get_session),
):
    rows = session.exec(
        select(Review, User.username)
        .join(User, Review.user_id == User.id)
        .where(Review.studio_id == studio_id)
        .order_by(col(Review.created_at).desc(), col(Review.id).desc())
    ).all()

    return [{**review.model_dump(), "username": username} for review, username in rows]
