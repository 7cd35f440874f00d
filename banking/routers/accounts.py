"""
Accounts router — account and transaction endpoints for the caller.

All routes live under /customers/{customer_id}/accounts and require the
path customer to be the authenticated customer (require_path_customer).
Whether the caller owns the {account_id} in the path is then decided by
the ownership guard inside AccountService.

  POST  /customers/{customer_id}/accounts                              — open an account
  GET   /customers/{customer_id}/accounts                              — list own accounts
  GET   /customers/{customer_id}/accounts/{account_id}                 — account view
  PATCH /customers/{customer_id}/accounts/{account_id}                 — block / reactivate / close
  POST  /customers/{customer_id}/accounts/{account_id}/transactions    — deposit or withdrawal
  GET   /customers/{customer_id}/accounts/{account_id}/transactions    — history, newest first

All amounts are in integer cents.
"""

import uuid

from fastapi import APIRouter, Depends, Query, status

from banking.dependencies import get_account_service, require_path_customer
from banking.models.customer import Customer
from banking.schemas.account import (
    AccountCreateRequest,
    AccountResponse,
    AccountStatusUpdateRequest,
    LedgerEntryResponse,
    TransactionCreateRequest,
    TransactionResultResponse,
)
from banking.services.account_service import AccountService

router = APIRouter()


@router.post(
    "/{customer_id}/accounts",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Open a new bank account",
)
async def open_account(
    customer_id: uuid.UUID,
    request: AccountCreateRequest,
    customer: Customer = Depends(require_path_customer),
    service: AccountService = Depends(get_account_service),
):
    """
    Open a saving or checking account funded with the opening deposit.
    A negative opening amount is rejected with 400.
    """
    return await service.open_account(
        customer_id=customer.id,
        account_type=request.account_type,
        opening_amount_cents=request.opening_amount_cents,
    )


@router.get(
    "/{customer_id}/accounts",
    response_model=list[AccountResponse],
    summary="List your accounts",
)
async def list_accounts(
    customer_id: uuid.UUID,
    customer: Customer = Depends(require_path_customer),
    service: AccountService = Depends(get_account_service),
):
    return await service.list_accounts(customer.id)


@router.get(
    "/{customer_id}/accounts/{account_id}",
    response_model=AccountResponse,
    summary="Get account details",
)
async def get_account(
    customer_id: uuid.UUID,
    account_id: uuid.UUID,
    customer: Customer = Depends(require_path_customer),
    service: AccountService = Depends(get_account_service),
):
    """Returns 403 if the account belongs to someone else, 404 if it doesn't exist."""
    return await service.get_account(account_id, customer.id)


@router.patch(
    "/{customer_id}/accounts/{account_id}",
    response_model=AccountResponse,
    summary="Change account status",
)
async def change_account_status(
    customer_id: uuid.UUID,
    account_id: uuid.UUID,
    request: AccountStatusUpdateRequest,
    customer: Customer = Depends(require_path_customer),
    service: AccountService = Depends(get_account_service),
):
    """
    Block, reactivate or close an account. Closed accounts cannot be
    reopened, and only an account with a zero balance can be closed (409).
    """
    return await service.change_status(account_id, customer.id, request.status)


@router.post(
    "/{customer_id}/accounts/{account_id}/transactions",
    response_model=TransactionResultResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Deposit into or withdraw from an account",
)
async def create_transaction(
    customer_id: uuid.UUID,
    account_id: uuid.UUID,
    request: TransactionCreateRequest,
    customer: Customer = Depends(require_path_customer),
    service: AccountService = Depends(get_account_service),
):
    """
    - **deposit**: adds amount_cents to the balance
    - **withdrawal**: removes amount_cents; 409 if the balance is too low

    Zero or negative amounts are rejected with 400. A blocked or closed
    account rejects every transaction with 409.
    """
    if request.transaction_type == "deposit":
        return await service.deposit(account_id, customer.id, request.amount_cents)
    return await service.withdraw(account_id, customer.id, request.amount_cents)


@router.get(
    "/{customer_id}/accounts/{account_id}/transactions",
    response_model=list[LedgerEntryResponse],
    summary="List transactions for an account",
)
async def list_transactions(
    customer_id: uuid.UUID,
    account_id: uuid.UUID,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    customer: Customer = Depends(require_path_customer),
    service: AccountService = Depends(get_account_service),
):
    return await service.list_transactions(account_id, customer.id, limit=limit, offset=offset)
