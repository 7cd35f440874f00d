"""
Pydantic schemas for Customer responses.

hashed_password is never part of a response schema.
"""

import uuid
from datetime import date, datetime

from pydantic import BaseModel

from banking.models.customer import CustomerRole


class CustomerResponse(BaseModel):
    """Public representation of a Customer."""
    id: uuid.UUID
    email: str
    name: str
    city: str | None
    zipcode: str | None
    date_of_birth: date | None
    role: CustomerRole
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}
