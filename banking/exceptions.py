"""
Domain exception taxonomy.

Every failure the service can report belongs to exactly one of five kinds:

    ErrorKind.VALIDATION    — the input is malformed or not allowed
    ErrorKind.NOT_FOUND     — the account or customer does not exist
    ErrorKind.UNAUTHORIZED  — the caller may not act on the resource
    ErrorKind.CONFLICT      — business state rejects the request (insufficient
                              funds, inactive account, concurrent update)
    ErrorKind.STORAGE       — the persistence layer failed; not the caller's fault

Exceptions carry only the kind and a human-readable message. Nothing here
knows about HTTP; banking/error_handlers.py translates kinds to status codes,
so the domain and service layers stay testable without a web server.

Exception hierarchy:
    BankingError (base)
    ├── ValidationError
    ├── NotFoundError
    │   ├── AccountNotFoundError
    │   └── CustomerNotFoundError
    ├── UnauthorizedError
    │   └── InvalidCredentialsError
    ├── ConflictError
    │   ├── InsufficientFundsError
    │   ├── AccountNotActiveError
    │   ├── StaleBalanceError
    │   ├── InvalidStatusTransitionError
    │   └── DuplicateEmailError
    └── StorageError
"""

import enum
import uuid


class ErrorKind(str, enum.Enum):
    """The five failure categories a caller can observe."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    CONFLICT = "conflict"
    STORAGE = "storage"


# ---------------------------------------------------------------------------
# Base exception and the five kinds
# ---------------------------------------------------------------------------

class BankingError(Exception):
    """Base exception for all Banking API domain errors."""

    kind: ErrorKind = ErrorKind.STORAGE

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(self.detail)


class ValidationError(BankingError):
    """Raised when input is malformed or violates a business rule on its own."""

    kind = ErrorKind.VALIDATION


class NotFoundError(BankingError):
    """Raised when a referenced entity does not exist."""

    kind = ErrorKind.NOT_FOUND


class UnauthorizedError(BankingError):
    """Raised when the caller is not permitted to act on a resource."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, detail: str = "You do not have access to this resource"):
        super().__init__(detail)


class ConflictError(BankingError):
    """Raised when the current state of a resource rejects the request."""

    kind = ErrorKind.CONFLICT


class StorageError(BankingError):
    """Raised when the persistence layer fails for reasons unrelated to the caller."""

    kind = ErrorKind.STORAGE

    def __init__(self, detail: str = "Unexpected storage error"):
        super().__init__(detail)


# ---------------------------------------------------------------------------
# Specific errors
# ---------------------------------------------------------------------------

class AccountNotFoundError(NotFoundError):
    """Raised when a requested account does not exist."""

    def __init__(self, account_id: uuid.UUID):
        self.account_id = account_id
        super().__init__(f"Account {account_id} not found")


class CustomerNotFoundError(NotFoundError):
    """Raised when a requested customer does not exist."""

    def __init__(self, customer_id: uuid.UUID):
        self.customer_id = customer_id
        super().__init__(f"Customer {customer_id} not found")


class InvalidCredentialsError(UnauthorizedError):
    """Raised when login credentials are incorrect."""

    def __init__(self):
        super().__init__("Invalid email or password")


class InsufficientFundsError(ConflictError):
    """
    Raised when a withdrawal would cause a negative balance.

    Attributes:
        account_id: The account that lacks sufficient funds.
        requested_cents: The amount the caller tried to withdraw.
        available_cents: The balance at the time of the check.
    """

    def __init__(
        self,
        account_id: uuid.UUID | None,
        requested_cents: int,
        available_cents: int,
    ):
        self.account_id = account_id
        self.requested_cents = requested_cents
        self.available_cents = available_cents
        super().__init__(
            f"Insufficient funds: requested {requested_cents} cents, "
            f"available {available_cents} cents"
        )


class AccountNotActiveError(ConflictError):
    """Raised when a transaction targets a blocked or closed account."""

    def __init__(self, account_id: uuid.UUID | None, status: str):
        self.account_id = account_id
        self.status = status
        super().__init__(f"Account not active (status: {status})")


class StaleBalanceError(ConflictError):
    """
    Raised when a conditional balance update finds the stored balance changed
    since it was read. The account service retries on this error; anything
    else that sees it should treat it as a plain conflict.
    """

    def __init__(self, account_id: uuid.UUID):
        self.account_id = account_id
        super().__init__(f"Account {account_id} was modified concurrently")


class InvalidStatusTransitionError(ConflictError):
    """Raised when an account status change is not allowed."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change account status from {current} to {requested}")


class DuplicateEmailError(ConflictError):
    """Raised when attempting to register with an email that's already in use."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email {email} is already registered")
