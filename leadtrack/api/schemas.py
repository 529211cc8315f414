"""Pydantic request and response bodies for the HTTP API."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserResponse(BaseModel):
    """Public view of a user."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str


class SessionResponse(BaseModel):
    """Session token plus the signed-in user."""

    token: str
    user: UserResponse


class SSOLoginPayload(BaseModel):
    """Request body for POST /api/auth/sso."""

    token: str = ""


class DevTokenPayload(BaseModel):
    """Request body for POST /api/dev/sso-token."""

    email: str
    name: str | None = None


class DevTokenResponse(BaseModel):
    """Response for POST /api/dev/sso-token."""

    token: str


class RegisterPayload(BaseModel):
    """Request body for POST /api/auth/register."""

    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)


class CredentialsPayload(BaseModel):
    """Request body for POST /api/auth/login."""

    email: str
    password: str


class LeadPayload(BaseModel):
    """Request body for creating or replacing a lead."""

    client: str
    title: str
    date: dt.date | None = None
    value: float = 0.0
    likelihood: int = Field(default=50, ge=0, le=100)
    status: str = "new"


class LeadResponse(BaseModel):
    """A stored lead."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    client: str
    title: str
    date: dt.date | None = None
    value: float
    likelihood: int
    status: str
    user_id: str
    created_at: dt.datetime


class HealthResponse(BaseModel):
    """Response for GET /api/health."""

    status: str = "ok"
    message: str = "Lead Tracker API is running"
