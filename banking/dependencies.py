"""
FastAPI dependencies for authentication, authorization and service wiring.

  get_current_customer (JWT -> Customer)
      ├── require_path_customer (path customer_id must be the caller)
      └── require_admin (Customer -> Customer)           [ADMIN role]

  get_account_service (session -> AccountService)

Authentication (who is calling) happens here; the account service trusts
the customer id it is given. Account-level authorization (may this customer
touch this account) is not done here: it is the ownership guard inside
AccountService, so it cannot be skipped by a route that forgets a
dependency.
"""

import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from banking.config import settings
from banking.database import get_db
from banking.exceptions import UnauthorizedError
from banking.models.customer import Customer, CustomerRole
from banking.repositories.account_repository import SqlAlchemyAccountRepository
from banking.repositories.ledger_repository import SqlAlchemyLedgerRepository
from banking.security import decode_access_token
from banking.services.account_service import AccountService


# Reads "Authorization: Bearer <token>"; tokenUrl feeds Swagger UI's
# "Authorize" button.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


async def get_current_customer(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> Customer:
    """
    Extract and validate the JWT token, then return the corresponding Customer.

    Raises:
        HTTPException 401: If the token is invalid or the customer doesn't
                           exist or is inactive.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_access_token(token)
        customer_id_str: str | None = payload.get("sub")
        if customer_id_str is None:
            raise credentials_exception
        customer_id = uuid.UUID(customer_id_str)
    except (JWTError, ValueError):
        raise credentials_exception

    result = await db.execute(select(Customer).where(Customer.id == customer_id))
    customer = result.scalar_one_or_none()

    if customer is None or not customer.is_active:
        raise credentials_exception

    return customer


async def require_path_customer(
    customer_id: uuid.UUID,
    customer: Customer = Depends(get_current_customer),
) -> Customer:
    """
    Member routes are nested under /customers/{customer_id}; the caller may
    only use their own id there.

    Raises:
        UnauthorizedError: The path names a different customer.
    """
    if customer.id != customer_id:
        raise UnauthorizedError("You may only act on your own customer record")
    return customer


async def require_admin(
    customer: Customer = Depends(get_current_customer),
) -> Customer:
    """
    Require the authenticated customer to have the ADMIN role.

    Raises:
        HTTPException 403: If the caller is not an admin.
    """
    if customer.role != CustomerRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return customer


async def get_account_service(
    db: AsyncSession = Depends(get_db),
) -> AccountService:
    """Build an AccountService bound to this request's session."""
    return AccountService(
        accounts=SqlAlchemyAccountRepository(db),
        ledger=SqlAlchemyLedgerRepository(db),
        max_retries=settings.MAX_TRANSACTION_RETRIES,
        minimum_opening_cents=settings.MIN_OPENING_DEPOSIT_CENTS,
    )
