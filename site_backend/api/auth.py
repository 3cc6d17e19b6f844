# site_backend/api/auth.py

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from site_backend.config import Settings, get_app_settings
from site_backend.core.errors import (
    AuthError,
    ConflictError,
    InvalidTokenError,
    NotFoundError,
    storage_errors,
)
from site_backend.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from site_backend.database import get_db
from site_backend.models.user import User as UserModel


MIN_PASSWORD_LENGTH = 6


logger = logging.getLogger(__name__)
router = APIRouter()


# -------------------------------
# Request / Response Schemas
# -------------------------------

class RegisterRequest(BaseModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def username_required(cls, value: str) -> str:
        if not value:
            raise ValueError("Username is required")
        return value

    @field_validator("password")
    @classmethod
    def password_length(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        return value


class LoginRequest(BaseModel):
    username: str
    password: str

    @field_validator("username", "password")
    @classmethod
    def required(cls, value: str, info) -> str:
        if not value:
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return value


class Token(BaseModel):
    token: str


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str


# -------------------------------
# Token Dependency
# -------------------------------

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="login", auto_error=False)


def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    settings: Settings = Depends(get_app_settings),
    db: Session = Depends(get_db),
) -> UserModel:
    if not token:
        raise InvalidTokenError("Not authenticated")
    payload = decode_access_token(token, settings.jwt_secret)
    user_id = payload.get("id")
    if user_id is None:
        raise InvalidTokenError("Could not validate credentials")
    with storage_errors("Error fetching user"):
        user = db.get(UserModel, user_id)
    if user is None:
        raise InvalidTokenError("Could not validate credentials")
    return user


def require_write_access(
    token: str | None = Depends(oauth2_scheme),
    settings: Settings = Depends(get_app_settings),
):
    """
    Guards mutating routes when REQUIRE_AUTH_FOR_WRITES is on.
    With the flag off every route stays open.
    """
    if not settings.require_auth_for_writes:
        return
    if not token:
        raise InvalidTokenError("Not authenticated")
    decode_access_token(token, settings.jwt_secret)


# -------------------------------
# Endpoints
# -------------------------------

@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(req: RegisterRequest, db: Session = Depends(get_db)):
    with storage_errors("Error registering user"):
        user_exists = db.query(UserModel).filter(UserModel.username == req.username).first()
        if user_exists:
            raise ConflictError("User already exists")

        new_user = UserModel(username=req.username, hashed_password=get_password_hash(req.password))
        db.add(new_user)
        try:
            db.commit()
        except IntegrityError:
            # lost a race against a concurrent registration of the same name
            db.rollback()
            raise ConflictError("User already exists")

    logger.info("Registered user %s", req.username)
    return {"message": "User registered successfully"}


@router.get("/users", response_model=list[User])
def list_users(db: Session = Depends(get_db)):
    with storage_errors("Error fetching users"):
        return db.query(UserModel).all()


@router.post("/login", response_model=Token)
def login(
    req: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    with storage_errors("Error logging in"):
        user = db.query(UserModel).filter(UserModel.username == req.username).first()
        if not user:
            raise NotFoundError("User not found", status_code=status.HTTP_400_BAD_REQUEST)
        if not verify_password(req.password, user.hashed_password):
            raise AuthError("Invalid password")

        token = create_access_token(
            data={"id": user.id},
            secret=settings.jwt_secret,
            expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
        )
    return {"token": token}


@router.get("/users/me", response_model=User)
def read_users_me(current_user: UserModel = Depends(get_current_user)):
    return current_user
