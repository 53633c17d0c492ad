"""Auth Service — request/response models."""

from typing import Optional

from pydantic import BaseModel


class UserRegister(BaseModel):
    email: str
    password: str


class UserLogin(BaseModel):
    email: str
    password: str


class TokenPayload(BaseModel):
    token: str


class TokenResponse(BaseModel):
    token: str
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str


class VerifyResponse(BaseModel):
    valid: bool
    sub: str
    exp: int


class ProfileResponse(BaseModel):
    email: str


class HealthResponse(BaseModel):
    status: str
    service: str
    accounts: int
    database: str
