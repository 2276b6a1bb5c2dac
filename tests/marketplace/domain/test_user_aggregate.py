"""Tests for the User aggregate."""

import pytest
from marketplace.exceptions import ForbiddenError
from marketplace.user.events import ProfileUpdated, UserRegistered
from marketplace.user.user import User, UserRole
from protean.exceptions import ValidationError


def _register(**overrides):
    defaults = {
        "name": "Alice Buyer",
        "email": "alice@example.com",
        "password_hash": "hashed",
        "role": "buyer",
    }
    defaults.update(overrides)
    return User.register(**defaults)


class TestRegistration:
    def test_email_and_role_are_lower_cased(self):
        user = _register(email="  Alice@Example.COM ", role="Seller")
        assert user.email == "alice@example.com"
        assert user.role == UserRole.SELLER.value

    def test_timestamps_are_set(self):
        user = _register()
        assert user.created_at is not None
        assert user.updated_at == user.created_at

    def test_raises_user_registered_event(self):
        user = _register()
        events = [e for e in user._events if isinstance(e, UserRegistered)]
        assert len(events) == 1
        assert events[0].user_id == str(user.id)
        assert events[0].role == "buyer"

    def test_unknown_role_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _register(role="admin")
        assert "role" in exc.value.messages

    def test_malformed_email_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _register(email="not-an-email")
        assert "email" in exc.value.messages

    def test_name_is_required(self):
        with pytest.raises(ValidationError):
            _register(name=None)


class TestRoles:
    def test_seller_passes_seller_check(self):
        _register(role="seller").ensure_seller()

    def test_buyer_fails_seller_check(self):
        with pytest.raises(ForbiddenError) as exc:
            _register(role="buyer").ensure_seller("create products")
        assert exc.value.message == "Forbidden: Only sellers can create products."


class TestProfileUpdate:
    def test_name_change_is_reported(self):
        user = _register()
        changed = user.update_profile(name="Alice B.")
        assert changed == ["name"]
        assert user.name == "Alice B."

    def test_email_is_normalized(self):
        user = _register()
        user.update_profile(email="NEW@example.com")
        assert user.email == "new@example.com"

    def test_same_values_change_nothing(self):
        user = _register()
        user._events.clear()
        assert user.update_profile(name="Alice Buyer", email="ALICE@example.com") == []
        assert user._events == []

    def test_update_raises_profile_updated(self):
        user = _register()
        user.update_profile(name="Alice B.", password_hash="new-hash")
        events = [e for e in user._events if isinstance(e, ProfileUpdated)]
        assert len(events) == 1
        assert events[0].changed_fields == "name,password"

    def test_invalid_email_is_rejected(self):
        user = _register()
        with pytest.raises(ValidationError):
            user.update_profile(email="alice@")
