from pydantic import BaseModel, EmailStr, Field
from typing import Any, Optional


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    role: str


class Response(BaseModel):
    status_code: int
    success: bool
    message: str
    data: Optional[Any] = None
