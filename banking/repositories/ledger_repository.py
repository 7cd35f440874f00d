"""
Ledger repository — history of committed deposits and withdrawals.

The account service records an entry right after a successful
compare-and-update, inside the same session, so an entry exists exactly
when its balance change is committed.
"""

import uuid
from typing import Protocol

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from banking.domain.ledger import LedgerEntry, TransactionType
from banking.exceptions import StorageError
from banking.models.transaction import TransactionRecord

logger = structlog.get_logger()


class LedgerRepository(Protocol):
    """Interface for transaction history persistence."""

    async def record(
        self,
        account_id: uuid.UUID,
        signed_amount_cents: int,
        balance_after_cents: int,
    ) -> LedgerEntry:
        ...

    async def list_for_account(
        self,
        account_id: uuid.UUID,
        limit: int = 50,
        offset: int = 0,
    ) -> list[LedgerEntry]:
        ...


def _to_entry(record: TransactionRecord) -> LedgerEntry:
    return LedgerEntry(
        transaction_id=record.id,
        account_id=record.account_id,
        transaction_type=TransactionType(record.transaction_type),
        amount_cents=record.amount_cents,
        balance_after_cents=record.balance_after_cents,
        created_at=record.created_at,
    )


class SqlAlchemyLedgerRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def record(
        self,
        account_id: uuid.UUID,
        signed_amount_cents: int,
        balance_after_cents: int,
    ) -> LedgerEntry:
        """
        Store one transaction. The sign of the amount picks the type;
        the stored amount is always positive.
        """
        record = TransactionRecord(
            account_id=account_id,
            transaction_type=TransactionType.for_amount(signed_amount_cents).value,
            amount_cents=abs(signed_amount_cents),
            balance_after_cents=balance_after_cents,
        )
        try:
            self._session.add(record)
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.error(
                "storage_failure",
                operation="ledger_record",
                account_id=str(account_id),
                error=str(exc),
            )
            raise StorageError("Storage failure during ledger_record") from exc
        return _to_entry(record)

    async def list_for_account(
        self,
        account_id: uuid.UUID,
        limit: int = 50,
        offset: int = 0,
    ) -> list[LedgerEntry]:
        """Entries for one account, newest first."""
        try:
            result = await self._session.execute(
                select(TransactionRecord)
                .where(TransactionRecord.account_id == account_id)
                .order_by(TransactionRecord.created_at.desc())
                .limit(limit)
                .offset(offset)
            )
            records = list(result.scalars().all())
        except SQLAlchemyError as exc:
            logger.error(
                "storage_failure",
                operation="ledger_list",
                account_id=str(account_id),
                error=str(exc),
            )
            raise StorageError("Storage failure during ledger_list") from exc
        return [_to_entry(record) for record in records]
