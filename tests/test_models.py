"""Tests for model serialization and typed store errors."""

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from inkind_app.models import (
    ConflictError,
    Donation,
    Individual,
    Ministry,
    Organization,
    Permission,
    ReferenceViolationError,
    RolePermission,
    StoreError,
    User,
    WishListItem,
    db,
    translate_integrity_error,
)


class _DriverError(Exception):
    def __init__(self, message, pgcode=None):
        super().__init__(message)
        self.pgcode = pgcode


def _integrity_error(message, pgcode=None):
    return IntegrityError("INSERT ...", {}, _DriverError(message, pgcode))


class TestTranslateIntegrityError:
    def test_postgres_codes(self):
        assert isinstance(translate_integrity_error(_integrity_error("dup", "23505")), ConflictError)
        assert isinstance(translate_integrity_error(_integrity_error("fk", "23503")), ReferenceViolationError)

    def test_sqlite_messages(self):
        unique = _integrity_error("UNIQUE constraint failed: ministry.ministry_name")
        foreign = _integrity_error("FOREIGN KEY constraint failed")
        assert isinstance(translate_integrity_error(unique), ConflictError)
        assert isinstance(translate_integrity_error(foreign), ReferenceViolationError)

    def test_other_failures_stay_generic(self):
        error = translate_integrity_error(_integrity_error("NOT NULL constraint failed: donation.gl_acct"))
        assert type(error) is StoreError
        assert "NOT NULL" in str(error)


class TestDonation:
    def test_total_fair_market_value_is_derived(self, test_ministry):
        donation = Donation.insert(
            date_received=date(2024, 1, 15),
            gl_acct="7601",
            quantity=3,
            amount=2.5,
            ministry_code="FOOD_PANTRY",
        )

        data = donation.to_dict()
        assert data["total_fair_market_value"] == 7.5
        assert data["date_received"] == "2024-01-15"
        assert data["ministry_code"] == "FOOD_PANTRY"
        assert data["created_at"] is not None

    def test_missing_reference_raises_reference_violation(self):
        with pytest.raises(ReferenceViolationError):
            Donation.insert(date_received=date(2024, 1, 15), gl_acct="7601", quantity=1, amount=0, ministry_code="NOPE")
        assert Donation.query.count() == 0


class TestWriteHelpers:
    def test_duplicate_unique_value_raises_conflict(self, test_ministry):
        with pytest.raises(ConflictError):
            Ministry.insert(ministry_code="PANTRY_TWO", ministry_name="Food Pantry")

    def test_safe_create_returns_error_message(self, test_ministry):
        ministry, error = Ministry.safe_create(ministry_code="PANTRY_TWO", ministry_name="Food Pantry")
        assert ministry is None
        assert error

    def test_safe_update_and_delete(self, test_organization):
        updated, error = test_organization.safe_update(city="Shelbyville")
        assert error is None
        assert updated.city == "Shelbyville"

        deleted, error = test_organization.safe_delete()
        assert (deleted, error) == (True, None)
        assert db.session.get(Organization, "ACME_FOOD_BANK") is None

    def test_delete_of_referenced_row_fails(self, test_individual):
        Donation.insert(
            date_received=date(2024, 1, 15),
            gl_acct="7601",
            quantity=1,
            amount=0,
            individual_id=test_individual.individual_id,
        )

        deleted, error = test_individual.safe_delete()

        assert deleted is False
        assert error
        assert db.session.get(Individual, test_individual.individual_id) is not None


class TestSerialization:
    def test_wish_list_item_includes_ministry_name(self, test_ministry):
        item = WishListItem.insert(item_name="Pallet jack", ministry_code="FOOD_PANTRY", type="In-kind Item")

        data = item.to_dict()
        assert data["status"] == "Open Request"
        assert data["ministry_name"] == "Food Pantry"

    def test_user_context(self, test_user):
        data = test_user.to_dict()
        assert data["user_id"] == test_user.id
        assert data["role_name"] == "STAFF"
        assert test_user.permission_names() == ["import_donations", "view_donations"]

    def test_find_active_ignores_inactive_users(self, test_user, inactive_user):
        assert User.find_active(test_user.id) is test_user
        assert User.find_active(inactive_user.id) is None
        assert User.find_active(9999) is None


class TestRoles:
    def test_role_serializes_permission_grants(self, test_role):
        data = test_role.to_dict()

        assert data["role_id"] == test_role.id
        assert data["role_name"] == "STAFF"
        assert data["default_route"] is None
        assert [p["permission"] for p in data["permissions"]] == ["import_donations", "view_donations"]

    def test_replace_permissions_keeps_surviving_grants(self, test_role):
        view = Permission.query.filter_by(name="view_donations").one()
        kept_grant = next(rp for rp in test_role.permissions if rp.permission_id == view.id)
        manage = Permission(name="manage_donations", display_name="Manage Donations")
        db.session.add(manage)
        db.session.commit()

        test_role.replace_permissions([view, manage])
        db.session.commit()

        assert test_role.permission_names() == ["manage_donations", "view_donations"]
        assert kept_grant in test_role.permissions
        assert RolePermission.query.count() == 2

    def test_inactive_status_is_not_active(self, inactive_user):
        assert inactive_user.status == "inactive"
        assert inactive_user.is_active is False
