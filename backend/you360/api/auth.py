"""
Authentication API endpoints.
"""

from fastapi import APIRouter, HTTPException, status, Depends
from datetime import timedelta

from ..models import UserCreate, UserLogin, User, AuthResponse
from ..utils.auth import (
    authenticate_user,
    create_access_token,
    get_password_hash,
    create_user_in_db,
    get_user_by_email,
    get_current_user_id,
    get_user_from_db,
)
from ..config import settings

router = APIRouter(prefix="/api/auth", tags=["authentication"])


def _public(user: dict) -> User:
    return User(**{k: v for k, v in user.items() if k != 'hashed_password'})


def _issue_token(user: dict) -> str:
    return create_access_token(
        data={"sub": user["user_id"], "email": user["email"]},
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserCreate):
    """
    Register a new user and log them in.

    Raises:
        HTTPException: If the email is already registered
    """
    if await get_user_by_email(user_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    user = await create_user_in_db(
        name=user_data.name,
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
    )
    return AuthResponse(token=_issue_token(user), user=_public(user))


@router.post("/login", response_model=AuthResponse)
async def login(credentials: UserLogin):
    """
    Exchange email and password for a token.

    Raises:
        HTTPException: If authentication fails
    """
    user = await authenticate_user(credentials.email, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return AuthResponse(token=_issue_token(user), user=_public(user))


@router.get("/me", response_model=User)
async def get_current_user(user_id: str = Depends(get_current_user_id)):
    """Current user from the bearer token."""
    user = await get_user_from_db(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return _public(user)
