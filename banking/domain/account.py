"""
Account entity — the in-memory view of a bank account the core works with.

The ORM model in banking/models/account.py is how an account is stored;
this dataclass is what the service, engine and guard pass around. Keeping
them apart means the balance rules can be tested without a database and a
repository can be swapped without touching the rules.

An Account is frozen. Balance and status changes produce a new value via
dataclasses.replace() and only become real once the repository persists
them, so nothing in the core can mutate an account behind the repository's
back.

Amounts are integer cents ($10.50 = 1050). Floats never appear in balances:
0.1 + 0.2 != 0.3 in IEEE 754, and repeated transactions would drift.
"""

import dataclasses
import enum
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from banking.exceptions import ConflictError, InvalidStatusTransitionError, ValidationError


class AccountType(str, enum.Enum):
    """Account category, fixed when the account is opened."""
    SAVING = "saving"
    CHECKING = "checking"


class AccountStatus(str, enum.Enum):
    """
    Lifecycle state of an account.

    Only ACTIVE accounts accept transactions. BLOCKED is reversible;
    CLOSED is terminal.
    """
    ACTIVE = "active"
    BLOCKED = "blocked"
    CLOSED = "closed"


@dataclass(frozen=True)
class Account:
    customer_id: uuid.UUID
    account_type: AccountType
    balance_cents: int
    status: AccountStatus
    opened_at: datetime
    # None until the repository assigns one in save_new()
    account_id: uuid.UUID | None = None


@dataclass(frozen=True)
class AccountView:
    """The fields of an account that are safe to return to a client."""
    account_id: uuid.UUID
    account_type: AccountType
    status: AccountStatus
    balance_cents: int


def _parse_account_type(account_type: AccountType | str) -> AccountType:
    try:
        return AccountType(account_type)
    except ValueError:
        allowed = ", ".join(t.value for t in AccountType)
        raise ValidationError(
            f"Unknown account type {account_type!r}; expected one of: {allowed}"
        ) from None


def new_account(
    customer_id: uuid.UUID,
    account_type: AccountType | str,
    opening_amount_cents: int,
    minimum_opening_cents: int = 0,
) -> Account:
    """
    Build a new ACTIVE account holding the opening deposit.

    Args:
        customer_id: The owner. Never changes afterwards.
        account_type: An AccountType or its string value ("saving", "checking").
        opening_amount_cents: Initial balance in cents, must be >= 0.
        minimum_opening_cents: Smallest opening deposit accepted.

    Returns:
        An unsaved Account (account_id is None).

    Raises:
        ValidationError: Unknown account type, non-integer or negative amount,
                         or an amount below the minimum opening deposit.
    """
    parsed_type = _parse_account_type(account_type)

    if isinstance(opening_amount_cents, bool) or not isinstance(opening_amount_cents, int):
        raise ValidationError("Opening amount must be an integer number of cents")
    if opening_amount_cents < 0:
        raise ValidationError("Opening amount cannot be negative")
    if opening_amount_cents < minimum_opening_cents:
        raise ValidationError(
            f"Opening amount must be at least {minimum_opening_cents} cents"
        )

    return Account(
        customer_id=customer_id,
        account_type=parsed_type,
        balance_cents=opening_amount_cents,
        status=AccountStatus.ACTIVE,
        opened_at=datetime.now(timezone.utc),
    )


def to_public_view(account: Account) -> AccountView:
    """Project an account onto its client-facing fields (no owner id)."""
    return AccountView(
        account_id=account.account_id,
        account_type=account.account_type,
        status=account.status,
        balance_cents=account.balance_cents,
    )


def change_status(account: Account, new_status: AccountStatus | str) -> Account:
    """
    Return a copy of the account in a new lifecycle state.

    Rules:
      - CLOSED is terminal: nothing transitions out of it.
      - Moving to the current status is rejected rather than silently ignored.
      - Closing requires a zero balance, so no money is stranded in a
        closed account.

    Raises:
        ValidationError: Unknown status value.
        InvalidStatusTransitionError: Transition out of CLOSED, or a no-op.
        ConflictError: Closing an account that still holds money.
    """
    try:
        target = AccountStatus(new_status)
    except ValueError:
        raise ValidationError(f"Unknown account status {new_status!r}") from None

    if account.status == AccountStatus.CLOSED or account.status == target:
        raise InvalidStatusTransitionError(account.status.value, target.value)

    if target == AccountStatus.CLOSED and account.balance_cents != 0:
        raise ConflictError(
            f"Account balance must be zero to close (balance: {account.balance_cents} cents)"
        )

    return dataclasses.replace(account, status=target)
