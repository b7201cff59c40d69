"""Auth request/response schemas"""
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

# Request fields accept any JSON value; missing, blank or non-string values
# are rejected by the session manager with a field-specific 400.


class LoginRequest(BaseModel):
    email: Optional[Any] = Field(None, examples=["admin@example.com"])
    password: Optional[Any] = Field(None, examples=["admin123"])


class RefreshTokenRequest(BaseModel):
    refreshToken: Optional[Any] = Field(None, description="Refresh token issued at login (valid 7 days)")


class AdminCreate(BaseModel):
    email: Optional[Any] = None
    password: Optional[Any] = None
    name: Optional[Any] = None
    role: Optional[Any] = Field(None, description="SUPER_ADMIN | ADMIN | EDITOR (defaults to EDITOR)")


class AdminSummary(BaseModel):
    id: str
    email: str
    name: str
    role: str


class AdminPublic(AdminSummary):
    isActive: bool
    lastLoginAt: Optional[datetime] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class LoginData(BaseModel):
    accessToken: str
    refreshToken: str
    admin: AdminSummary


class AccessTokenData(BaseModel):
    accessToken: str


class LogoutData(BaseModel):
    deletedCount: int


class AdminData(BaseModel):
    admin: AdminPublic


class LoginResponse(BaseModel):
    status: Literal["success"] = "success"
    data: LoginData


class RefreshResponse(BaseModel):
    status: Literal["success"] = "success"
    data: AccessTokenData


class LogoutResponse(BaseModel):
    status: Literal["success"] = "success"
    data: LogoutData


class AdminResponse(BaseModel):
    status: Literal["success"] = "success"
    data: AdminData


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str
