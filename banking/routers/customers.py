"""
Customers router — customer lookups.

  GET /customers                 — [Admin] list all customers (?status=active|inactive)
  GET /customers/{customer_id}   — the caller's own record, or any record for admins
"""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from banking.database import get_db
from banking.dependencies import get_current_customer, require_admin
from banking.exceptions import UnauthorizedError
from banking.models.customer import Customer, CustomerRole
from banking.schemas.customer import CustomerResponse
from banking.services import customer_service

router = APIRouter()


@router.get(
    "",
    response_model=list[CustomerResponse],
    summary="[Admin] List all customers",
)
async def list_customers(
    status: str | None = Query(None, description="Filter by status: active, inactive"),
    admin: Customer = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """[ADMIN ONLY] List every customer, optionally filtered by status."""
    return await customer_service.list_customers(db, status=status)


@router.get(
    "/{customer_id}",
    response_model=CustomerResponse,
    summary="Get customer details",
)
async def get_customer(
    customer_id: uuid.UUID,
    current: Customer = Depends(get_current_customer),
    db: AsyncSession = Depends(get_db),
):
    """
    Members may read only their own record (403 otherwise); admins may read
    any record.
    """
    if current.role != CustomerRole.ADMIN and current.id != customer_id:
        raise UnauthorizedError("You may only view your own customer record")
    return await customer_service.get_customer(db, customer_id)
