"""Authentication endpoints for user login and registration."""

from datetime import timedelta
from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm

from restapi.dependencies import get_settings, get_storage
from tracker.core.config import Settings
from tracker.core.security import (
    verify_password,
    get_password_hash,
    create_access_token,
    verify_token,
)
from tracker.storage.base import Storage
from tracker.user.schemas import UserCreate, UserInDB, UserWithToken

router = APIRouter(prefix="/api/auth", tags=["authentication"])
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login")

SECRET_FIELDS = {"password", "plaid_access_token"}


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
) -> UserInDB:
    """Get current user from JWT token."""
    payload = verify_token(token, settings.SECRET_KEY)
    subject = payload.get("sub") if payload else None
    if subject is None or not str(subject).isdigit():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await storage.get_user(int(subject))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def with_token(user: UserInDB, settings: Settings) -> UserWithToken:
    access_token = create_access_token(
        data={"sub": str(user.id)},
        secret_key=settings.SECRET_KEY,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return UserWithToken(
        **user.model_dump(exclude=SECRET_FIELDS),
        access_token=access_token,
    )


@router.post("/register", response_model=UserWithToken, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserCreate,
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
) -> Any:
    """Create new user and return JWT token."""
    if await storage.get_user_by_username(user_in.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already registered",
        )

    user = await storage.create_user(user_in, get_password_hash(user_in.password))
    return with_token(user, settings)


@router.post("/login", response_model=UserWithToken)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
) -> Any:
    """Login user and return JWT token."""
    user = await storage.get_user_by_username(form_data.username)

    if not user or not verify_password(form_data.password, user.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return with_token(user, settings)
