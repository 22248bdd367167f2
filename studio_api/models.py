# studio_api/models.py

from typing import Optional
from datetime import datetime, date as Date, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str
    email: str = Field(index=True, unique=True)
    password_hash: str
    role: str = "user"  # user or admin
    created_at: datetime = Field(default_factory=utcnow)


class Studio(SQLModel, table=True):
    __tablename__ = "studios"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    city: str = Field(index=True)
    price_per_hour: float
    status: str = "available"  # available or reserved (owner-level block)
    reserved_until: Optional[Date] = None

    # comma-joined tag lists
    services: str = ""
    equipments: str = ""

    image: Optional[str] = None
    description: str = ""
    created_by: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utcnow)


class Booking(SQLModel, table=True):
    __tablename__ = "bookings"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    item_id: int = Field(foreign_key="studios.id", index=True)
    date: Date = Field(index=True)
    end_date: Date
    status: str = "confirmed"  # confirmed or cancelled
    created_at: datetime = Field(default_factory=utcnow)


class Favorite(SQLModel, table=True):
    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "studio_id", name="uq_favorite_user_studio"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    studio_id: int = Field(foreign_key="studios.id", index=True)
    created_at: datetime = Field(default_factory=utcnow)


class Review(SQLModel, table=True):
    __tablename__ = "reviews"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id")
    studio_id: int = Field(foreign_key="studios.id", index=True)
    rating: int  # 1..5
    comment: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
