"""
Authorization guard — may this customer act on this account?

Ownership is the only rule: a customer may operate on an account iff they
own it. The guard is called explicitly by AccountService for every operation
on an existing account, once per attempt and before the transaction engine
runs, so no mutation path reaches the engine without passing through here.

The guard reads its arguments and nothing else. Repeated calls with the same
inputs return the same decision.
"""

import uuid
from dataclasses import dataclass

from banking.domain.account import Account
from banking.exceptions import UnauthorizedError

REASON_OWNER = "owner"
REASON_NOT_OWNER = "not_owner"


@dataclass(frozen=True)
class AuthorizationDecision:
    granted: bool
    reason: str


def authorize(requesting_customer_id: uuid.UUID, account: Account) -> AuthorizationDecision:
    """Decide whether the requesting customer owns the account."""
    if account.customer_id == requesting_customer_id:
        return AuthorizationDecision(granted=True, reason=REASON_OWNER)
    return AuthorizationDecision(granted=False, reason=REASON_NOT_OWNER)


def require_owner(requesting_customer_id: uuid.UUID, account: Account) -> AuthorizationDecision:
    """
    Like authorize(), but a denial raises.

    Raises:
        UnauthorizedError: The requesting customer does not own the account.
    """
    decision = authorize(requesting_customer_id, account)
    if not decision.granted:
        raise UnauthorizedError("You do not have access to this account")
    return decision
