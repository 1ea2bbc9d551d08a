"""Authentication and session models."""

from __future__ import annotations

from pydantic import BaseModel

from hrerp.models.schema import UserRole


class TokenPayload(BaseModel):
    sub: str | None = None
    email: str | None = None
    role: str | None = None


class Principal(BaseModel):
    """The authenticated identity supplied by the auth service."""

    id: str
    email: str | None = None


class User(BaseModel):
    """Application-level user resolved from the principal's profile row."""

    id: str
    name: str
    email: str = ""
    role: UserRole = UserRole.EMPLOYEE
    avatar: str | None = None
    department: str | None = None
    position: str | None = None


class SessionInfo(BaseModel):
    authenticated: bool
    user: User | None = None
