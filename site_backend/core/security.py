# site_backend/core/security.py

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from site_backend.core.errors import InvalidTokenError


ALGORITHM = "HS256"
BCRYPT_ROUNDS = 10


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(data: dict, secret: str, expires_delta: timedelta) -> str:
    if not secret:
        raise RuntimeError("Token signing secret is not configured")
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    to_encode.update({"iat": now, "exp": now + expires_delta})
    return jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def decode_access_token(token: str, secret: str) -> dict:
    """
    Returns the token claims. Raises InvalidTokenError on a bad signature,
    a malformed token or an expired one.
    """
    try:
        return jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError as e:
        raise InvalidTokenError("Could not validate credentials") from e
