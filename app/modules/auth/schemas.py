from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    full_name: Optional[str] = None
    language_preference: Optional[str] = "en"


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    message: str


class AnonymousSessionResponse(BaseModel):
    session_id: str
    expires_at: datetime
    is_new: bool = True
