"""
Account table — persisted state of a bank account.

The domain works with banking.domain.account.Account; this ORM class is
only touched by SqlAlchemyAccountRepository, which converts between the two.

Balance management:
  balance_cents is changed exclusively by a conditional UPDATE
  (compare-and-update on the previous balance) issued by the repository.
  A concurrent writer that read a stale balance updates zero rows and is
  told to retry, so no update is ever lost.

  A CHECK constraint enforces a non-negative balance at the database level
  as well. The transaction engine rejects overdrafts first; the constraint
  catches anything that bypasses it.

Immutable columns:
  id, customer_id, account_type and opened_at are written once by
  save_new() and never appear in an UPDATE.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from banking.database import Base


class AccountRecord(Base):
    __tablename__ = "accounts"

    __table_args__ = (
        CheckConstraint(
            "balance_cents >= 0",
            name="ck_accounts_non_negative_balance",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
    )

    # Owner of this account
    customer_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("customers.id"),
        nullable=False,
        index=True,
    )

    # "saving" or "checking"
    account_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )

    balance_cents: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    # "active", "blocked" or "closed"
    status: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default="active",
    )

    opened_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # --- Relationships ---
    customer: Mapped["Customer"] = relationship(
        back_populates="accounts",
    )
