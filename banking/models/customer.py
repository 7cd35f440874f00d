"""
Customer model — the banking identity and login credential.

A Customer owns zero or more accounts and authenticates with email and
password. The password is stored as an Argon2id hash, never in plaintext.

Customer roles:
  - MEMBER: A bank customer. Can only see and operate on their own data.
  - ADMIN: Operator with read-only oversight of all customers. Admins never
    pass the account ownership guard, so they cannot move money.

Status:
  is_active is the customer's status. Inactive customers cannot log in but
  their data is preserved; GET /customers can filter on it.
"""

import enum
import uuid
from datetime import date, datetime, timezone

from sqlalchemy import String, Boolean, Date, DateTime, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from banking.database import Base


class CustomerRole(str, enum.Enum):
    """
    Defines the role a customer holds within the banking system.

    Inherits from str so the enum value serializes naturally to JSON.
    """
    ADMIN = "admin"
    MEMBER = "member"


class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
    )

    # Login identifier, unique and indexed
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    city: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    zipcode: Mapped[str | None] = mapped_column(
        String(10),
        nullable=True,
    )

    date_of_birth: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )

    role: Mapped[CustomerRole] = mapped_column(
        Enum(CustomerRole),
        default=CustomerRole.MEMBER,
        nullable=False,
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    # Audit timestamps
    created_at: Mapped[datetime] = mapped_column(
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
    accounts: Mapped[list["AccountRecord"]] = relationship(
        back_populates="customer",
    )
