"""
Registration and login endpoints.
"""

from fastapi import APIRouter, Depends, Request, status

from cardzen_api.app.core.db import Database, get_db
from cardzen_api.app.schemas.common import MessageResponse
from cardzen_api.app.schemas.user import LoginResponse, UserCreate, UserLogin
from cardzen_api.app.services.user_service import UserService


router = APIRouter()


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    user: UserCreate,
    request: Request,
    db: Database = Depends(get_db),
) -> MessageResponse:
    """Register a new user.

    Username, email and password are required; a taken username or
    email is rejected with 400.  No token is issued here, clients log
    in separately.
    """
    settings = request.app.state.settings
    await UserService.create_user(db, user, settings.password_hash_iterations)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
async def login_user(
    credentials: UserLogin,
    request: Request,
    db: Database = Depends(get_db),
) -> LoginResponse:
    """Authenticate a user and return a one‑hour access token."""
    settings = request.app.state.settings
    result = await UserService.authenticate(
        db,
        credentials,
        request.app.state.secret_key,
        settings.access_token_expire_minutes * 60,
    )
    return LoginResponse(**result)
