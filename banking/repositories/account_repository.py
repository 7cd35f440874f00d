"""
Account repository — the persistence contract the account service depends on.

AccountRepository is a Protocol, so the service only needs "something with
these coroutines". SqlAlchemyAccountRepository is the implementation used by
the API; tests can hand the service any object with the same methods.

Concurrency:
  compare_and_update_balance() is the only way a balance changes. It issues

      UPDATE accounts SET balance_cents = :new
      WHERE id = :id AND balance_cents = :expected AND status = 'active'

  which the database evaluates atomically. When another request committed a
  different balance, or blocked or closed the account, after ours was read,
  zero rows match and StaleBalanceError is raised so the service can re-read
  and retry. No in-process lock is involved, so this works across workers
  and hosts.

  update_status() is conditional the same way: it only matches while the
  status is still the one that was read, and a close only matches while the
  balance is zero. A deposit and a close racing each other can therefore
  never leave money in a closed account.

  Reads use populate_existing so a retry inside the same session sees the
  row as it is now, not the copy cached in the session's identity map.

Storage failures:
  Any SQLAlchemyError is logged and re-raised as StorageError. The request
  session then rolls back (see banking.database.get_db), leaving no partial
  effect.
"""

import dataclasses
import uuid
from datetime import datetime, timezone
from typing import Protocol

import structlog
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from banking.domain.account import Account, AccountStatus, AccountType
from banking.exceptions import AccountNotFoundError, StaleBalanceError, StorageError
from banking.models.account import AccountRecord

logger = structlog.get_logger()


class AccountRepository(Protocol):
    """Interface for account persistence."""

    async def find_by_id(self, account_id: uuid.UUID) -> Account:
        """Return the account, or raise AccountNotFoundError."""
        ...

    async def find_by_customer(self, customer_id: uuid.UUID) -> list[Account]:
        """Return every account owned by the customer, oldest first."""
        ...

    async def save_new(self, account: Account) -> Account:
        """Persist a new account and return it with its assigned account_id."""
        ...

    async def compare_and_update_balance(
        self,
        account_id: uuid.UUID,
        expected_old_balance: int,
        new_balance: int,
    ) -> None:
        """
        Set the balance only if it still equals expected_old_balance and the
        account is still ACTIVE; StaleBalanceError otherwise.
        """
        ...

    async def update_status(
        self,
        account_id: uuid.UUID,
        expected_old_status: AccountStatus,
        new_status: AccountStatus,
    ) -> None:
        """
        Persist a lifecycle change only if the status still equals
        expected_old_status (and, for a close, the balance is still zero);
        StaleBalanceError otherwise.
        """
        ...


def _to_domain(record: AccountRecord) -> Account:
    return Account(
        account_id=record.id,
        customer_id=record.customer_id,
        account_type=AccountType(record.account_type),
        balance_cents=record.balance_cents,
        status=AccountStatus(record.status),
        opened_at=record.opened_at,
    )


class SqlAlchemyAccountRepository:
    """AccountRepository backed by an AsyncSession (one per request)."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _storage_failure(
        self, operation: str, exc: SQLAlchemyError, account_id: uuid.UUID | None = None
    ) -> StorageError:
        logger.error(
            "storage_failure",
            operation=operation,
            account_id=str(account_id) if account_id else None,
            error=str(exc),
        )
        return StorageError(f"Storage failure during {operation}")

    async def find_by_id(self, account_id: uuid.UUID) -> Account:
        try:
            result = await self._session.execute(
                select(AccountRecord)
                .where(AccountRecord.id == account_id)
                .execution_options(populate_existing=True)
            )
            record = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise self._storage_failure("find_by_id", exc, account_id) from exc

        if record is None:
            raise AccountNotFoundError(account_id)
        return _to_domain(record)

    async def find_by_customer(self, customer_id: uuid.UUID) -> list[Account]:
        try:
            result = await self._session.execute(
                select(AccountRecord)
                .where(AccountRecord.customer_id == customer_id)
                .order_by(AccountRecord.opened_at)
                .execution_options(populate_existing=True)
            )
            records = list(result.scalars().all())
        except SQLAlchemyError as exc:
            raise self._storage_failure("find_by_customer", exc) from exc
        return [_to_domain(record) for record in records]

    async def save_new(self, account: Account) -> Account:
        record = AccountRecord(
            customer_id=account.customer_id,
            account_type=account.account_type.value,
            balance_cents=account.balance_cents,
            status=account.status.value,
            opened_at=account.opened_at,
        )
        try:
            self._session.add(record)
            # Flush to get the id assigned without ending the transaction
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise self._storage_failure("save_new", exc) from exc

        logger.info(
            "account_saved",
            account_id=str(record.id),
            customer_id=str(account.customer_id),
        )
        return dataclasses.replace(account, account_id=record.id)

    async def _conditional_update(
        self,
        operation: str,
        account_id: uuid.UUID,
        conditions: list,
        values: dict,
    ) -> None:
        """
        UPDATE the row only if every condition still holds.

        Raises:
            AccountNotFoundError: The row does not exist.
            StaleBalanceError: The row exists but no longer matches.
        """
        try:
            result = await self._session.execute(
                update(AccountRecord)
                .where(AccountRecord.id == account_id, *conditions)
                .values(**values, updated_at=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
            updated = result.rowcount or 0

            if updated == 0:
                # Tell "row is gone" apart from "row changed under us"
                existing = await self._session.scalar(
                    select(AccountRecord.id).where(AccountRecord.id == account_id)
                )
        except SQLAlchemyError as exc:
            raise self._storage_failure(operation, exc, account_id) from exc

        if updated == 0:
            if existing is None:
                raise AccountNotFoundError(account_id)
            raise StaleBalanceError(account_id)

    async def compare_and_update_balance(
        self,
        account_id: uuid.UUID,
        expected_old_balance: int,
        new_balance: int,
    ) -> None:
        await self._conditional_update(
            "compare_and_update_balance",
            account_id,
            [
                AccountRecord.balance_cents == expected_old_balance,
                AccountRecord.status == AccountStatus.ACTIVE.value,
            ],
            {"balance_cents": new_balance},
        )

    async def update_status(
        self,
        account_id: uuid.UUID,
        expected_old_status: AccountStatus,
        new_status: AccountStatus,
    ) -> None:
        conditions = [AccountRecord.status == expected_old_status.value]
        if new_status == AccountStatus.CLOSED:
            conditions.append(AccountRecord.balance_cents == 0)
        await self._conditional_update(
            "update_status",
            account_id,
            conditions,
            {"status": new_status.value},
        )
