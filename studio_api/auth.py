# studio_api/auth.py

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext

from .config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES
from .errors import Unauthorized

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
# auto_error off so a missing header renders through our own Unauthorized
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login", auto_error=False)


def create_access_token(data: dict, expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode["exp"] = expire
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def token_for_user(user) -> str:
    return create_access_token({
        "sub": user.email,
        "id": user.id,
        "email": user.email,
        "role": user.role,
    })


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> dict:
    """Verify the bearer token and return the identity it carries.

    The token is trusted as-is (signature + expiry); the user row is not
    re-read, so a role change only applies after the next login.
    """
    if not token:
        raise Unauthorized("Unauthorized: Missing or invalid token")
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise Unauthorized("Unauthorized: Invalid token")

    user_id = payload.get("id")
    if user_id is None:
        raise Unauthorized("Unauthorized: Invalid token")

    return {
        "id": user_id,
        "email": payload.get("email"),
        "role": payload.get("role", "user"),
    }
