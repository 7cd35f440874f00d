"""
Pydantic schemas for authentication endpoints (signup and login).

Pydantic validates incoming data automatically — if a required field is
missing or the wrong type, FastAPI returns a 422 error before our code
even runs.
"""

import uuid
from datetime import date

from pydantic import BaseModel, EmailStr, Field


class CustomerSignupRequest(BaseModel):
    """Request body for POST /auth/signup."""
    email: EmailStr
    password: str = Field(min_length=8)
    name: str = Field(min_length=1, max_length=100)
    city: str | None = Field(None, max_length=100)
    zipcode: str | None = Field(None, max_length=10)
    date_of_birth: date | None = None


class CustomerLoginRequest(BaseModel):
    """Request body for POST /auth/login."""
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """Response body for successful login — contains the JWT."""
    token: str
    token_type: str = "bearer"


class SignupResponse(BaseModel):
    """Response body for successful signup — customer info + JWT."""
    customer_id: uuid.UUID
    email: str
    role: str
    token: str
    token_type: str = "bearer"
