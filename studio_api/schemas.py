# studio_api/schemas.py

from datetime import datetime, date as Date
from enum import Enum
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


def join_tags(value: Any) -> str:
    """Tag lists are stored comma-joined; a string is taken as already joined."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(tag) for tag in value)
    return value


def split_tags(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return value.split(",")


class UserRole(str, Enum):
    user = "user"
    admin = "admin"


class StudioStatus(str, Enum):
    available = "available"
    reserved = "reserved"


class BookingStatus(str, Enum):
    confirmed = "confirmed"
    cancelled = "cancelled"


# --- users / auth ---

class UserCreate(BaseModel):
    username: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=1, max_length=72)  # bcrypt limit


class UserLogin(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: UserRole
    created_at: datetime


class LoginResponse(BaseModel):
    message: str = "Login successful"
    token: str
    user: UserPublic


class MessageResponse(BaseModel):
    message: str


class RegisterResponse(MessageResponse):
    success: bool = True


class CreatedResponse(MessageResponse):
    id: int


# --- studios ---

class StudioCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(min_length=1)
    price: float = Field(gt=0)
    city: str = Field(min_length=1)
    services: str = ""
    equipments: str = Field("", validation_alias=AliasChoices("equipments", "equipment"))
    status: StudioStatus = Field(StudioStatus.available, validate_default=True)
    image: Optional[str] = None
    description: str = ""
    reserved_until: Optional[Date] = Field(
        None, validation_alias=AliasChoices("reservedUntil", "reserved_until")
    )

    @field_validator("services", "equipments", mode="before")
    @classmethod
    def _join_tags(cls, value):
        return join_tags(value)

    @field_validator("description", mode="before")
    @classmethod
    def _description_not_null(cls, value):
        return "" if value is None else value

    @field_validator("reserved_until", mode="before")
    @classmethod
    def _blank_date(cls, value):
        return None if value == "" else value


class StudioUpdate(BaseModel):
    """Partial update: only the fields present in the body are applied.

    ``model_fields_set`` tells "not provided" apart from an explicit null or
    empty string, so callers should dump with ``exclude_unset=True``.
    """

    model_config = ConfigDict(use_enum_values=True)

    name: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, gt=0)
    city: Optional[str] = Field(None, min_length=1)
    status: Optional[StudioStatus] = None
    services: Optional[str] = None
    equipments: Optional[str] = Field(None, validation_alias=AliasChoices("equipments", "equipment"))
    image: Optional[str] = None
    description: Optional[str] = None
    reserved_until: Optional[Date] = Field(
        None, validation_alias=AliasChoices("reservedUntil", "reserved_until")
    )

    @field_validator("services", "equipments", mode="before")
    @classmethod
    def _join_tags(cls, value):
        return join_tags(value)

    @field_validator("description", mode="before")
    @classmethod
    def _description_not_null(cls, value):
        return "" if value is None else value

    @field_validator("reserved_until", mode="before")
    @classmethod
    def _blank_date(cls, value):
        return None if value == "" else value

    @model_validator(mode="after")
    def _required_fields_not_null(self):
        for name in ("name", "price", "city", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        """Column -> value for every field present in the request."""
        updates = self.model_dump(exclude_unset=True)
        if "price" in updates:
            updates["price_per_hour"] = updates.pop("price")
        return updates


class StudioPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    city: str
    price_per_hour: float
    status: str
    reserved_until: Optional[Date] = None
    services: str
    equipments: str
    image: Optional[str] = None
    description: str
    created_by: int
    created_at: datetime


class BookedRange(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: Date
    end_date: Date


# --- bookings ---

class BookingCreate(BaseModel):
    item_id: int = Field(validation_alias=AliasChoices("itemId", "item_id"))
    date: Date
    end_date: Optional[Date] = Field(None, validation_alias=AliasChoices("endDate", "end_date"))

    @field_validator("end_date", mode="before")
    @classmethod
    def _blank_date(cls, value):
        return None if value == "" else value


class BookingPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    item_id: int
    date: Date
    end_date: Date
    status: BookingStatus
    created_at: datetime


class MyBooking(BookingPublic):
    studio_name: str
    price_per_hour: float
    city: str
    equipments: str


# --- reviews ---

class ReviewCreate(BaseModel):
    rating: int = Field(ge=1, le=5, strict=True)
    comment: Optional[str] = None


class ReviewPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    studio_id: int
    rating: int
    comment: Optional[str] = None
    created_at: datetime
    username: str


# --- scraping ---

class ScrapingResult(BaseModel):
    success: bool = True
    message: str = "Scraping finished successfully"
    sheetUrl: str
