"""
Transaction engine — decides whether a signed amount may be applied to an
account and what the resulting balance is.

Positive amounts are deposits, negative amounts are withdrawals. The engine
is a pure function of (account, amount): it does no I/O, holds no state and
never retries, so the same inputs always give the same balance or the same
error. Persisting the result is the caller's job and must go through the
repository's compare-and-update so a concurrent change is detected rather
than overwritten.
"""

import enum
import uuid
from dataclasses import dataclass
from datetime import datetime

from banking.domain.account import Account, AccountStatus
from banking.exceptions import AccountNotActiveError, InsufficientFundsError, ValidationError


class TransactionType(str, enum.Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"

    @classmethod
    def for_amount(cls, signed_amount_cents: int) -> "TransactionType":
        return cls.DEPOSIT if signed_amount_cents > 0 else cls.WITHDRAWAL


@dataclass(frozen=True)
class LedgerEntry:
    """A committed transaction as recorded in the history."""
    transaction_id: uuid.UUID
    account_id: uuid.UUID
    transaction_type: TransactionType
    amount_cents: int
    balance_after_cents: int
    created_at: datetime


def apply_transaction(account: Account, requested_amount_cents: int) -> int:
    """
    Validate a transaction against the account and compute the new balance.

    Args:
        account: The account as just read from the repository.
        requested_amount_cents: Signed amount in cents.

    Returns:
        The balance after the transaction, in cents.

    Raises:
        AccountNotActiveError: The account is blocked or closed.
        ValidationError: The amount is zero or not an integer.
        InsufficientFundsError: A withdrawal exceeds the current balance.
    """
    if account.status != AccountStatus.ACTIVE:
        raise AccountNotActiveError(account.account_id, account.status.value)

    # bool is an int subclass; True must not be read as one cent
    if isinstance(requested_amount_cents, bool) or not isinstance(requested_amount_cents, int):
        raise ValidationError("Transaction amount must be an integer number of cents")

    if requested_amount_cents == 0:
        raise ValidationError("Zero-amount transaction not permitted")

    new_balance = account.balance_cents + requested_amount_cents
    if new_balance < 0:
        raise InsufficientFundsError(
            account_id=account.account_id,
            requested_cents=-requested_amount_cents,
            available_cents=account.balance_cents,
        )

    return new_balance
