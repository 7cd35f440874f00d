"""
Authentication router — signup and login endpoints.

These are the only public (unauthenticated) endpoints in the API.
Everything else requires a valid JWT token.

Endpoints:
  POST /auth/signup  — Register a new customer and get a token
  POST /auth/login   — Authenticate and get a token

Plaintext passwords exist only in memory during request processing; they
are hashed before any database operation and never logged.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from banking.database import get_db
from banking.schemas.auth import (
    CustomerLoginRequest,
    CustomerSignupRequest,
    SignupResponse,
    TokenResponse,
)
from banking.services import customer_service

router = APIRouter()


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new customer",
)
async def signup(
    request: CustomerSignupRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new customer. Returns a JWT token so the customer is
    logged in immediately.

    - **email**: Must be a valid email format and not already registered
    - **password**: Minimum 8 characters
    - **name**: Required, 1-100 characters
    - **city** / **zipcode** / **date_of_birth**: Optional
    """
    customer, token = await customer_service.signup(
        db=db,
        email=request.email,
        password=request.password,
        name=request.name,
        city=request.city,
        zipcode=request.zipcode,
        date_of_birth=request.date_of_birth,
    )

    return SignupResponse(
        customer_id=customer.id,
        email=customer.email,
        role=customer.role.value,
        token=token,
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Authenticate and get a token",
)
async def login(
    request: CustomerLoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Authenticate with email and password.

    Send the returned token on every other request:

        Authorization: Bearer <token>
    """
    customer, token = await customer_service.login(
        db=db,
        email=request.email,
        password=request.password,
    )

    return TokenResponse(token=token)
