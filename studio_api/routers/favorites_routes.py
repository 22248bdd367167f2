# studio_api/routers/favorites_routes.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, col

from studio_api.db import get_session
from studio_api.models import Favorite, Studio
from studio_api.schemas import MessageResponse, StudioPublic
from studio_api.auth import get_current_user
from studio_api.errors import NotFound

router = APIRouter(
    prefix="/api/favorites",
    tags=["favorites"],
)


@router.get("/my-favorites", response_model=List[StudioPublic])
def my_favorites(
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    studios = session.exec(
        select(Studio)
        .join(Favorite, Favorite.studio_id == Studio.id)
        .where(Favorite.user_id == current_user["id"])
        .order_by(col(Favorite.created_at).desc(), col(Favorite.id).desc())
    ).all()
    return studios


@router.post("/{item_id}", response_model=MessageResponse)
def add_favorite(
    item_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    if session.get(Studio, item_id) is None:
        raise NotFound("Studio not found")

    existing = session.exec(
        select(Favorite)
        .where(Favorite.user_id == current_user["id"])
        .where(Favorite.studio_id == item_id)
    ).first()
    if existing is not None:
        return {"message": "Already in favorites"}

    session.add(Favorite(user_id=current_user["id"], studio_id=item_id))
    try:
        session.commit()
    except IntegrityError:
        # concurrent duplicate caught by uq_favorite_user_studio
        session.rollback()
        return {"message": "Already in favorites"}

    return {"message": "Added to favorites"}


@router.delete("/{item_id}", response_model=MessageResponse)
def remove_favorite(
    item_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    session.exec(
        delete(Favorite)
        .where(Favorite.user_id == current_user["id"])
        .where(Favorite.studio_id == item_id)
    )
    session.commit()
    return {"message": "Removed from favorites"}
