from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = 900  # 15 minutes in seconds


class TokenPayload(BaseModel):
    sub: Optional[str] = None
    exp: Optional[int] = None
    email: Optional[str] = None


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class Credentials(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)


class SignUpRequest(Credentials):
    redirect_to: Optional[str] = None


class IdentityRead(BaseModel):
    id: str
    email: EmailStr
    is_active: bool = True
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SessionResponse(Token):
    """Login response: tokens plus the identity they belong to."""
    user: IdentityRead
