# src/services/auth_service.py
from datetime import datetime, timezone
from passlib.context import CryptContext
from sqlalchemy import select, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from models.user import User
from schemas.user_schemas import UserCreate, UserLogin
from utils.exceptions import (
    ConflictException,
    UnauthorizedException,
    handle_db_exception,
)
from utils.logger import setup_logger
from .base_service import BaseService

logger = setup_logger("AUTH_SERVICE")

DUPLICATE_USER = "Email or User ID already exists."
INVALID_CREDENTIALS = "Invalid credentials."


class AuthService(BaseService):
    def __init__(self):
        super().__init__(User, "AUTH_SERVICE")
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    def get_password_hash(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password; a malformed stored hash never matches"""
        if not plain_password or not hashed_password:
            return False
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError) as e:
            logger.error(f"Error verifying password: {str(e)}")
            return False

    async def signup(self, db: AsyncSession, user_data: UserCreate) -> User:
        """Create a dietitian credential; user id and email are unique"""
        result = await db.execute(
            select(User.id).where(
                or_(User.user_id == user_data.user_id, User.email == user_data.email)
            )
        )
        if result.first() is not None:
            logger.warning(f"Signup rejected, duplicate user {user_data.user_id}")
            raise ConflictException(DUPLICATE_USER)

        values = user_data.model_dump(exclude={"password"})
        values["hashed_password"] = self.get_password_hash(user_data.password)
        return await self.create(db, values, conflict_detail=DUPLICATE_USER)

    async def login(self, db: AsyncSession, login_data: UserLogin) -> User:
        """
        Check a user id and password.

        Unknown users and wrong passwords raise the same 401 so callers cannot
        tell which one occurred.
        """
        try:
            result = await db.execute(
                select(User).where(User.user_id == login_data.user_id)
            )
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await handle_db_exception(db, logger, "log in", e, user_id=login_data.user_id)

        if user is None:
            logger.info(f"Login failed for {login_data.user_id}: unknown user")
            raise UnauthorizedException(INVALID_CREDENTIALS)

        if not self.verify_password(login_data.password, user.hashed_password):
            logger.info(f"Login failed for {login_data.user_id}: wrong password")
            raise UnauthorizedException(INVALID_CREDENTIALS)

        user.last_login_at = datetime.now(timezone.utc)
        await db.commit()

        logger.info(f"User {user.user_id} logged in")
        return user


auth_service = AuthService()
