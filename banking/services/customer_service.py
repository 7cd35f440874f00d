"""
Customer service — signup, login and customer lookups.

Customer records have no invariant beyond a unique email, so this module
works directly on the ORM session instead of going through a repository.

Signup flow:
  1. Reject an email that is already registered
  2. Hash the password with Argon2id
  3. Insert the Customer and return a JWT so they are logged in at once

Login returns the same error for "unknown email", "wrong password" and
"inactive customer" so the endpoint cannot be used to enumerate customers.
"""

import uuid
from datetime import date

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from banking.exceptions import (
    CustomerNotFoundError,
    DuplicateEmailError,
    InvalidCredentialsError,
    ValidationError,
)
from banking.models.customer import Customer, CustomerRole
from banking.security import create_access_token, hash_password, verify_password

logger = structlog.get_logger()


async def signup(
    db: AsyncSession,
    email: str,
    password: str,
    name: str,
    city: str | None = None,
    zipcode: str | None = None,
    date_of_birth: date | None = None,
) -> tuple[Customer, str]:
    """
    Register a new customer.

    Returns:
        Tuple of (Customer instance, JWT token string).

    Raises:
        DuplicateEmailError: If the email is already registered.
    """
    result = await db.execute(select(Customer).where(Customer.email == email))
    if result.scalar_one_or_none() is not None:
        raise DuplicateEmailError(email)

    customer = Customer(
        email=email,
        hashed_password=hash_password(password),
        name=name,
        city=city,
        zipcode=zipcode,
        date_of_birth=date_of_birth,
        role=CustomerRole.MEMBER,
    )
    db.add(customer)
    try:
        await db.flush()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same email
        raise DuplicateEmailError(email) from None

    logger.info("customer_registered", customer_id=str(customer.id))
    token = create_access_token(data={"sub": str(customer.id)})
    return customer, token


async def login(
    db: AsyncSession,
    email: str,
    password: str,
) -> tuple[Customer, str]:
    """
    Authenticate a customer and return a JWT token.

    Raises:
        InvalidCredentialsError: Unknown email, wrong password or inactive customer.
    """
    result = await db.execute(select(Customer).where(Customer.email == email))
    customer = result.scalar_one_or_none()

    if not customer or not verify_password(password, customer.hashed_password):
        logger.info("login_failed")
        raise InvalidCredentialsError()

    if not customer.is_active:
        logger.info("login_failed", customer_id=str(customer.id), reason="inactive")
        raise InvalidCredentialsError()

    token = create_access_token(data={"sub": str(customer.id)})
    return customer, token


async def get_customer(db: AsyncSession, customer_id: uuid.UUID) -> Customer:
    """
    Raises:
        CustomerNotFoundError: If no customer has this id.
    """
    result = await db.execute(select(Customer).where(Customer.id == customer_id))
    customer = result.scalar_one_or_none()
    if customer is None:
        raise CustomerNotFoundError(customer_id)
    return customer


async def list_customers(
    db: AsyncSession,
    status: str | None = None,
) -> list[Customer]:
    """
    List customers, optionally filtered by status ("active" or "inactive").

    Raises:
        ValidationError: Unknown status filter.
    """
    query = select(Customer).order_by(Customer.created_at)
    if status is not None:
        if status not in ("active", "inactive"):
            raise ValidationError("status must be 'active' or 'inactive'")
        query = query.where(Customer.is_active == (status == "active"))

    result = await db.execute(query)
    return list(result.scalars().all())
