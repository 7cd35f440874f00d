"""
Tests for customer endpoints and role enforcement.

These tests verify:
  - A customer can read their own record, never the password hash
  - A member cannot read another customer's record (403)
  - Only admins can list customers, optionally filtered by status
"""

import uuid

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from banking.models.customer import Customer


class TestGetCustomer:
    """Tests for GET /customers/{customer_id}."""

    async def test_get_own_record(self, client, customer):
        response = await client.get(
            f"/customers/{customer['customer_id']}", headers=customer["headers"]
        )
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == customer["customer_id"]
        assert data["email"] == "testuser@example.com"
        assert data["name"] == "Test Customer"
        assert data["city"] == "Dhaka"
        assert data["zipcode"] == "1207"
        assert data["date_of_birth"] == "1990-05-17"
        assert data["role"] == "member"
        assert data["is_active"] is True
        assert "hashed_password" not in data

    async def test_cannot_read_other_customer(self, client, customer, second_customer):
        response = await client.get(
            f"/customers/{second_customer['customer_id']}", headers=customer["headers"]
        )
        assert response.status_code == 403

    async def test_admin_can_read_any_customer(self, client, customer, admin):
        response = await client.get(
            f"/customers/{customer['customer_id']}", headers=admin["headers"]
        )
        assert response.status_code == 200
        assert response.json()["email"] == "testuser@example.com"

    async def test_admin_gets_404_for_unknown_customer(self, client, admin):
        response = await client.get(f"/customers/{uuid.uuid4()}", headers=admin["headers"])
        assert response.status_code == 404
        assert response.json()["error_type"] == "not_found"

    async def test_requires_token(self, client, customer):
        response = await client.get(f"/customers/{customer['customer_id']}")
        assert response.status_code == 401


class TestListCustomers:
    """Tests for GET /customers (admin only)."""

    async def test_member_cannot_list(self, client, customer):
        response = await client.get("/customers", headers=customer["headers"])
        assert response.status_code == 403

    async def test_admin_lists_everyone(self, client, customer, second_customer, admin):
        response = await client.get("/customers", headers=admin["headers"])
        assert response.status_code == 200
        emails = {c["email"] for c in response.json()}
        assert emails == {"testuser@example.com", "seconduser@example.com", "admin@example.com"}

    async def test_filter_by_status(self, client, db_engine, customer, second_customer, admin):
        async_session = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
        async with async_session() as session:
            await session.execute(
                update(Customer)
                .where(Customer.id == uuid.UUID(second_customer["customer_id"]))
                .values(is_active=False)
            )
            await session.commit()

        active = await client.get("/customers", params={"status": "active"}, headers=admin["headers"])
        inactive = await client.get("/customers", params={"status": "inactive"}, headers=admin["headers"])

        assert {c["email"] for c in active.json()} == {"testuser@example.com", "admin@example.com"}
        assert [c["email"] for c in inactive.json()] == ["seconduser@example.com"]

    async def test_unknown_status_filter(self, client, admin):
        response = await client.get("/customers", params={"status": "frozen"}, headers=admin["headers"])
        assert response.status_code == 400

    async def test_deactivated_customer_cannot_log_in(self, client, db_engine, customer):
        async_session = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
        async with async_session() as session:
            await session.execute(
                update(Customer)
                .where(Customer.id == uuid.UUID(customer["customer_id"]))
                .values(is_active=False)
            )
            await session.commit()

        login = await client.post(
            "/auth/login",
            json={"email": "testuser@example.com", "password": "SecurePass123!"},
        )
        assert login.status_code == 401

        # Tokens issued before deactivation stop working too
        response = await client.get(
            f"/customers/{customer['customer_id']}", headers=customer["headers"]
        )
        assert response.status_code == 401
