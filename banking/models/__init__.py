"""
SQLAlchemy ORM models package.

All models are imported here so that:
  1. Base.metadata knows every table before create_all() runs
  2. String relationship targets ("Customer", "AccountRecord") resolve
"""

from banking.models.customer import Customer, CustomerRole  # noqa: F401
from banking.models.account import AccountRecord  # noqa: F401
from banking.models.transaction import TransactionRecord  # noqa: F401
