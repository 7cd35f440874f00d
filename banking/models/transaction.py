"""
Transaction table — history of applied deposits and withdrawals.

One row is written per committed transaction, in the same database
transaction as the balance update it describes. If the balance update
fails (stale read, storage error) the session rolls back and no row
exists; if the row cannot be written the balance update rolls back too.

Key fields:
  - transaction_type: "deposit" or "withdrawal"
  - amount_cents: Always positive (the direction is the type)
  - balance_after_cents: The account balance right after this transaction
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from banking.database import Base


class TransactionRecord(Base):
    __tablename__ = "transactions"

    __table_args__ = (
        CheckConstraint("amount_cents > 0", name="ck_transactions_positive_amount"),
        CheckConstraint("balance_after_cents >= 0", name="ck_transactions_non_negative_balance"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
    )

    account_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("accounts.id"),
        nullable=False,
        index=True,
    )

    transaction_type: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
    )

    amount_cents: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    balance_after_cents: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    # Indexed for newest-first history queries
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )
