"""Pydantic schemas for request/response validation"""
from eternal_admin.schemas.auth import (
    AdminCreate,
    AdminResponse,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RefreshResponse,
    RefreshTokenRequest,
)

__all__ = [
    "AdminCreate",
    "AdminResponse",
    "ErrorResponse",
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "RefreshResponse",
    "RefreshTokenRequest",
]
