"""
Account service — orchestrates every account operation.

THIS IS WHERE THE BALANCE RULES MEET STORAGE. A deposit or withdrawal runs:

  1. account = repository.find_by_id(account_id)        NotFoundError
  2. guard.require_owner(customer_id, account)          UnauthorizedError
  3. new_balance = apply_transaction(account, amount)   ValidationError / ConflictError
  4. repository.compare_and_update_balance(
         account_id, account.balance_cents, new_balance)
  5. ledger.record(...) and return the updated view

If step 4 raises StaleBalanceError another request changed the balance, or
blocked or closed the account, between our read and our write. The retry
re-reads, so a status change is then reported by the engine as
AccountNotActiveError. The whole sequence is repeated from step 1,
up to max_retries attempts in total; after that the caller gets a
ConflictError. Nothing else is retried: validation, authorization and
insufficient-funds rejections are deterministic and would fail again.

The service holds no state between calls. It is built per request around
repositories bound to that request's database session.

Ownership enforcement:
  Every operation on an existing account goes through guard.require_owner()
  exactly once per attempt, before the engine or any write.
"""

import dataclasses
import uuid
from dataclasses import dataclass

import structlog

from banking.domain import guard
from banking.domain.account import (
    AccountStatus,
    AccountType,
    AccountView,
    change_status,
    new_account,
    to_public_view,
)
from banking.domain.ledger import LedgerEntry, TransactionType, apply_transaction
from banking.exceptions import ConflictError, StaleBalanceError, ValidationError
from banking.repositories.account_repository import AccountRepository
from banking.repositories.ledger_repository import LedgerRepository

logger = structlog.get_logger()

DEFAULT_MAX_RETRIES = 3


def _is_cents(amount) -> bool:
    # bool is an int subclass but never a valid amount
    return isinstance(amount, int) and not isinstance(amount, bool)


@dataclass(frozen=True)
class TransactionResult:
    """Outcome of a committed deposit or withdrawal."""
    transaction_id: uuid.UUID | None
    transaction_type: TransactionType
    amount_cents: int
    account: AccountView


class AccountService:
    def __init__(
        self,
        accounts: AccountRepository,
        ledger: LedgerRepository | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        minimum_opening_cents: int = 0,
    ) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.accounts = accounts
        self.ledger = ledger
        self.max_retries = max_retries
        self.minimum_opening_cents = minimum_opening_cents

    async def open_account(
        self,
        customer_id: uuid.UUID,
        account_type: AccountType | str,
        opening_amount_cents: int,
    ) -> AccountView:
        """
        Open a new ACTIVE account for the customer.

        Raises:
            ValidationError: Bad account type or opening amount.
            StorageError: The account could not be saved.
        """
        account = new_account(
            customer_id,
            account_type,
            opening_amount_cents,
            minimum_opening_cents=self.minimum_opening_cents,
        )
        saved = await self.accounts.save_new(account)
        logger.info(
            "account_opened",
            account_id=str(saved.account_id),
            customer_id=str(customer_id),
            account_type=saved.account_type.value,
            opening_amount_cents=opening_amount_cents,
        )
        return to_public_view(saved)

    async def get_account(self, account_id: uuid.UUID, customer_id: uuid.UUID) -> AccountView:
        """
        Return the account view if the customer owns the account.

        Raises:
            AccountNotFoundError: The account doesn't exist.
            UnauthorizedError: The account belongs to someone else.
        """
        account = await self.accounts.find_by_id(account_id)
        guard.require_owner(customer_id, account)
        return to_public_view(account)

    async def list_accounts(self, customer_id: uuid.UUID) -> list[AccountView]:
        """Views of every account the customer owns."""
        return [to_public_view(a) for a in await self.accounts.find_by_customer(customer_id)]

    async def deposit(
        self,
        account_id: uuid.UUID,
        customer_id: uuid.UUID,
        amount_cents: int,
    ) -> TransactionResult:
        """
        Add money to an account. amount_cents must be positive; zero is
        rejected by the engine.
        """
        if _is_cents(amount_cents) and amount_cents < 0:
            raise ValidationError("Deposit amount must be positive")
        return await self._apply(account_id, customer_id, amount_cents)

    async def withdraw(
        self,
        account_id: uuid.UUID,
        customer_id: uuid.UUID,
        amount_cents: int,
    ) -> TransactionResult:
        """
        Take money out of an account. amount_cents must be positive; zero is
        rejected by the engine, an overdraft with InsufficientFundsError.
        """
        if not _is_cents(amount_cents):
            # The engine rejects non-integer amounts
            return await self._apply(account_id, customer_id, amount_cents)
        if amount_cents < 0:
            raise ValidationError("Withdrawal amount must be positive")
        return await self._apply(account_id, customer_id, -amount_cents)

    async def _apply(
        self,
        account_id: uuid.UUID,
        customer_id: uuid.UUID,
        signed_amount_cents: int,
    ) -> TransactionResult:
        log = logger.bind(
            account_id=str(account_id),
            customer_id=str(customer_id),
            amount_cents=signed_amount_cents,
        )

        for attempt in range(1, self.max_retries + 1):
            account = await self.accounts.find_by_id(account_id)
            guard.require_owner(customer_id, account)
            new_balance = apply_transaction(account, signed_amount_cents)

            try:
                await self.accounts.compare_and_update_balance(
                    account_id, account.balance_cents, new_balance
                )
            except StaleBalanceError:
                log.warning("stale_balance_retry", attempt=attempt, max_retries=self.max_retries)
                continue

            entry: LedgerEntry | None = None
            if self.ledger is not None:
                entry = await self.ledger.record(account_id, signed_amount_cents, new_balance)

            log.info(
                "transaction_applied",
                attempt=attempt,
                balance_before_cents=account.balance_cents,
                balance_after_cents=new_balance,
            )
            return TransactionResult(
                transaction_id=entry.transaction_id if entry else None,
                transaction_type=TransactionType.for_amount(signed_amount_cents),
                amount_cents=abs(signed_amount_cents),
                account=dataclasses.replace(to_public_view(account), balance_cents=new_balance),
            )

        log.warning("transaction_conflict", attempts=self.max_retries)
        raise ConflictError(
            f"Account {account_id} is being modified concurrently; "
            f"gave up after {self.max_retries} attempts"
        )

    async def change_status(
        self,
        account_id: uuid.UUID,
        customer_id: uuid.UUID,
        new_status: AccountStatus | str,
    ) -> AccountView:
        """
        Block, reactivate or close an account the customer owns.

        The write is conditional on the status (and, for a close, the zero
        balance) that was read, so a transaction committing in between
        causes a re-read rather than a close over a non-zero balance.

        Raises:
            AccountNotFoundError, UnauthorizedError,
            InvalidStatusTransitionError, ConflictError (closing with money left,
            or still contended after max_retries attempts)
        """
        log = logger.bind(account_id=str(account_id), customer_id=str(customer_id))

        for attempt in range(1, self.max_retries + 1):
            account = await self.accounts.find_by_id(account_id)
            guard.require_owner(customer_id, account)
            changed = change_status(account, new_status)

            try:
                await self.accounts.update_status(account_id, account.status, changed.status)
            except StaleBalanceError:
                log.warning("stale_status_retry", attempt=attempt, max_retries=self.max_retries)
                continue

            log.info(
                "account_status_changed",
                old_status=account.status.value,
                new_status=changed.status.value,
            )
            return to_public_view(changed)

        log.warning("status_change_conflict", attempts=self.max_retries)
        raise ConflictError(
            f"Account {account_id} is being modified concurrently; "
            f"gave up after {self.max_retries} attempts"
        )

    async def list_transactions(
        self,
        account_id: uuid.UUID,
        customer_id: uuid.UUID,
        limit: int = 50,
        offset: int = 0,
    ) -> list[LedgerEntry]:
        """Transaction history of an account the customer owns, newest first."""
        account = await self.accounts.find_by_id(account_id)
        guard.require_owner(customer_id, account)
        if self.ledger is None:
            return []
        return await self.ledger.list_for_account(account_id, limit=limit, offset=offset)
