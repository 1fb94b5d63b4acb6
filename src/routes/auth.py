# src/routes/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any
from db.database import get_db
from schemas.base_schemas import ResponseBase
from schemas.user_schemas import UserCreate, UserLogin, UserLoginResponse, UserPublic
from services.auth_service import auth_service
from utils.logger import setup_logger

logger = setup_logger("AUTH_ROUTER")

router = APIRouter(tags=["authentication"])


@router.post(
    "/signup",
    response_model=ResponseBase,
    status_code=status.HTTP_201_CREATED,
    summary="Dietitian signup",
    description="Create a dietitian account identified by user id and email",
)
async def signup(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """User signup endpoint"""
    await auth_service.signup(db, user_data)
    return ResponseBase(message="Signup successful!")


@router.post(
    "/login",
    response_model=UserLoginResponse,
    summary="Dietitian login",
    description="Check a user id and password and return the user's profile",
)
async def login(
    login_data: UserLogin,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """User login endpoint"""
    user = await auth_service.login(db, login_data)
    return UserLoginResponse(
        message="Login successful", user=UserPublic.model_validate(user)
    )
