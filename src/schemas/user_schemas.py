# src/schemas/user_schemas.py
from pydantic import EmailStr, Field
from .base_schemas import BaseSchema, ResponseBase


class UserCreate(BaseSchema):
    """Signup payload"""

    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    user_id: str = Field(alias="userId", min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=72)


class UserLogin(BaseSchema):
    user_id: str = Field(alias="userId", min_length=1)
    password: str = Field(min_length=1)


class UserPublic(BaseSchema):
    user_id: str = Field(alias="userId")
    name: str
    email: str


class UserLoginResponse(ResponseBase):
    user: UserPublic
