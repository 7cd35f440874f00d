"""
Pydantic schemas for Account and Transaction endpoints.

All monetary amounts are integer cents (e.g., $10.50 = 1050).

Request schemas only check shape (types, enum values). Amount rules such as
"not zero" and "not more than the balance" belong to the transaction engine,
so amount_cents is a plain int here and a zero deposit reaches the service
and comes back as a 400 validation error.
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from banking.domain.account import AccountStatus, AccountType
from banking.domain.ledger import TransactionType


class AccountCreateRequest(BaseModel):
    """Request body for POST /customers/{customer_id}/accounts."""
    account_type: Literal["saving", "checking"] = Field(
        default="checking",
        description="Type of bank account to open",
    )
    opening_amount_cents: int = Field(
        default=0,
        description="Opening deposit in cents",
    )


class AccountStatusUpdateRequest(BaseModel):
    """Request body for PATCH /customers/{customer_id}/accounts/{account_id}."""
    status: Literal["active", "blocked", "closed"]


class AccountResponse(BaseModel):
    """Client-facing view of an account. The owner id is deliberately absent."""
    account_id: uuid.UUID
    account_type: AccountType
    status: AccountStatus
    balance_cents: int

    model_config = {"from_attributes": True}


class TransactionCreateRequest(BaseModel):
    """Request body for POST .../accounts/{account_id}/transactions."""
    transaction_type: Literal["deposit", "withdrawal"]
    amount_cents: int = Field(description="Amount in cents (must be positive)")


class TransactionResultResponse(BaseModel):
    """Response body for a committed deposit or withdrawal."""
    transaction_id: uuid.UUID | None
    transaction_type: TransactionType
    amount_cents: int
    account: AccountResponse

    model_config = {"from_attributes": True}


class LedgerEntryResponse(BaseModel):
    """One entry of an account's transaction history."""
    transaction_id: uuid.UUID
    transaction_type: TransactionType
    amount_cents: int
    balance_after_cents: int
    created_at: datetime

    model_config = {"from_attributes": True}
