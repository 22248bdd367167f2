# studio_api/routers/auth_routes.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, col

from studio_api.db import get_session
from studio_api.models import User, Studio
from studio_api.schemas import (
    UserCreate, UserLogin, UserPublic, LoginResponse, RegisterResponse, StudioPublic,
)
from studio_api.auth import get_current_user, hash_password, verify_password, token_for_user
from studio_api.errors import Conflict, InvalidCredentials, NotFound

router = APIRouter(
    prefix="/api/auth",
    tags=["auth"],
)


@router.post("/register", status_code=201, response_model=RegisterResponse)
def register(
    user: UserCreate,
    session: Session = Depends(get_session),
):
    # 1) Check if email already exists
    existing = session.exec(
        select(User).where(User.email == user.email)
    ).first()
    if existing is not None:
        raise Conflict("Email already exists")

    # 2) Create user in DB (hash only, no auto-login)
    db_user = User(
        username=user.username,
        email=user.email,
        password_hash=hash_password(user.password),
    )

    session.add(db_user)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise Conflict("Email already exists")

    return {"message": "User registered successfully", "success": True}


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    session: Session = Depends(get_session),
):
    user = session.exec(
        select(User).where(User.email == credentials.email)
    ).first()

    # same answer for unknown email and wrong password
    if user is None or not verify_password(credentials.password, user.password_hash):
        raise InvalidCredentials()

    return {
        "message": "Login successful",
        "token": token_for_user(user),
        "user": user,
    }


@router.get("/me", response_model=UserPublic)
def me(
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    user = session.get(User, current_user["id"])
    if user is None:
        raise NotFound("User not found")
    return user


@router.get("/my-items", response_model=List[StudioPublic])
def my_items(
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    stmt = (
        select(Studio)
        .where(Studio.created_by == current_user["id"])
        .order_by(col(Studio.created_at).desc(), col(Studio.id).desc())
    )
    return session.exec(stmt).all()
