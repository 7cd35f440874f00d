"""Tests for the Account entity: opening, public view and status changes."""

import dataclasses
import uuid

import pytest

from banking.domain.account import (
    AccountStatus,
    AccountType,
    change_status,
    new_account,
    to_public_view,
)
from banking.exceptions import ConflictError, InvalidStatusTransitionError, ValidationError


class TestNewAccount:

    def test_new_account_is_active_with_opening_balance(self):
        owner = uuid.uuid4()
        account = new_account(owner, AccountType.SAVING, 10000)

        assert account.status == AccountStatus.ACTIVE
        assert account.balance_cents == 10000
        assert account.customer_id == owner
        assert account.account_type == AccountType.SAVING
        assert account.account_id is None
        assert account.opened_at.tzinfo is not None

    @pytest.mark.parametrize("raw, expected", [("saving", AccountType.SAVING), ("checking", AccountType.CHECKING)])
    def test_account_type_accepts_strings(self, raw, expected):
        assert new_account(uuid.uuid4(), raw, 0).account_type == expected

    def test_zero_opening_amount_allowed(self):
        assert new_account(uuid.uuid4(), "checking", 0).balance_cents == 0

    def test_negative_opening_amount_rejected(self):
        with pytest.raises(ValidationError, match="negative"):
            new_account(uuid.uuid4(), "checking", -1)

    @pytest.mark.parametrize("account_type", ["savings", "credit", ""])
    def test_unknown_account_type_rejected(self, account_type):
        with pytest.raises(ValidationError, match="Unknown account type"):
            new_account(uuid.uuid4(), account_type, 100)

    def test_float_opening_amount_rejected(self):
        with pytest.raises(ValidationError):
            new_account(uuid.uuid4(), "checking", 10.5)

    def test_minimum_opening_deposit(self):
        with pytest.raises(ValidationError, match="at least 500000"):
            new_account(uuid.uuid4(), "saving", 499999, minimum_opening_cents=500000)
        assert new_account(uuid.uuid4(), "saving", 500000, minimum_opening_cents=500000).balance_cents == 500000

    def test_identity_is_immutable(self):
        account = new_account(uuid.uuid4(), "checking", 0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            account.customer_id = uuid.uuid4()


class TestPublicView:

    def test_view_hides_owner(self):
        account = dataclasses.replace(new_account(uuid.uuid4(), "saving", 700), account_id=uuid.uuid4())
        view = to_public_view(account)

        assert view.account_id == account.account_id
        assert view.account_type == AccountType.SAVING
        assert view.status == AccountStatus.ACTIVE
        assert view.balance_cents == 700
        assert not hasattr(view, "customer_id")


class TestChangeStatus:

    @pytest.fixture
    def account(self):
        return new_account(uuid.uuid4(), "checking", 0)

    def test_block_and_reactivate(self, account):
        blocked = change_status(account, AccountStatus.BLOCKED)
        assert blocked.status == AccountStatus.BLOCKED
        assert change_status(blocked, "active").status == AccountStatus.ACTIVE

    def test_original_is_not_modified(self, account):
        change_status(account, "blocked")
        assert account.status == AccountStatus.ACTIVE

    @pytest.mark.parametrize("target", ["active", "blocked", "closed"])
    def test_closed_is_terminal(self, account, target):
        closed = change_status(account, "closed")
        with pytest.raises(InvalidStatusTransitionError):
            change_status(closed, target)

    def test_same_status_rejected(self, account):
        with pytest.raises(InvalidStatusTransitionError):
            change_status(account, "active")

    def test_close_requires_zero_balance(self):
        funded = new_account(uuid.uuid4(), "checking", 100)
        with pytest.raises(ConflictError, match="zero to close"):
            change_status(funded, "closed")

    def test_blocked_account_can_be_closed(self, account):
        blocked = change_status(account, "blocked")
        assert change_status(blocked, "closed").status == AccountStatus.CLOSED

    def test_unknown_status_rejected(self, account):
        with pytest.raises(ValidationError):
            change_status(account, "frozen")
