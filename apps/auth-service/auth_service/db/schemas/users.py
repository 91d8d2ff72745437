from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UpdateProfileRequest(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr


class User(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    token: str
    user: User


class PaginatedUsers(BaseModel):
    data: List[User]
    page: int
    limit: int
    total: int
    total_pages: int


class MessageResponse(BaseModel):
    message: str
