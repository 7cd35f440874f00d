"""
Tests for integer-cent precision — no floating point anywhere.

Floating point representations of money cause rounding errors
(e.g., 0.1 + 0.2 = 0.30000000000000004). By storing everything in
integer cents, arithmetic is exact.

Tests verify:
  - All amounts are integers in responses
  - Large cent values work correctly
  - Repeated small transactions don't accumulate rounding errors
  - Fractional amounts are refused rather than rounded
"""

import pytest

from helpers import balance_of, open_account, transact


class TestIntegerCentPrecision:
    """Tests that all monetary operations use integer cents exactly."""

    async def test_all_amounts_are_integers(self, client, customer):
        account_id = await open_account(client, customer, 1)

        data = (await transact(client, customer, account_id, "deposit", 1050)).json()

        assert isinstance(data["amount_cents"], int)
        assert isinstance(data["account"]["balance_cents"], int)

    async def test_large_values(self, client, customer):
        """$1,000,000.00 in and $999,999.99 out leaves exactly one cent."""
        account_id = await open_account(client, customer)

        await transact(client, customer, account_id, "deposit", 100_000_000)
        assert await balance_of(client, customer, account_id) == 100_000_000

        await transact(client, customer, account_id, "withdrawal", 99_999_999)
        assert await balance_of(client, customer, account_id) == 1

    async def test_no_rounding_errors_with_repeated_small_transactions(self, client, customer):
        account_id = await open_account(client, customer)

        for _ in range(100):
            await transact(client, customer, account_id, "deposit", 1)

        assert await balance_of(client, customer, account_id) == 100

    async def test_sum_after_mixed_operations(self, client, customer):
        """$33.33 + $66.67 - $16.66 - $8.34 is exactly $75.00."""
        account_id = await open_account(client, customer)

        await transact(client, customer, account_id, "deposit", 3333)
        await transact(client, customer, account_id, "deposit", 6667)
        await transact(client, customer, account_id, "withdrawal", 1666)
        await transact(client, customer, account_id, "withdrawal", 834)

        assert await balance_of(client, customer, account_id) == 7500

    @pytest.mark.parametrize("amount", [10.5, "12.34"])
    async def test_fractional_amounts_are_refused(self, client, customer, amount):
        account_id = await open_account(client, customer, 100)

        response = await transact(client, customer, account_id, "deposit", amount)

        assert response.status_code == 422
        assert await balance_of(client, customer, account_id) == 100
