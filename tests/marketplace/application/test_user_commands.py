"""Application tests for registration and profile updates via domain.process()."""

import pytest
from marketplace.auth.login import authenticate
from marketplace.exceptions import AuthenticationError
from marketplace.user.profile import UpdateProfile
from marketplace.user.registration import RegisterUser
from marketplace.user.user import User
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


class TestRegisterUser:
    def test_user_is_persisted(self, register_user):
        user_id = register_user(email="Carol@Example.com", role="SELLER")
        user = current_domain.repository_for(User).get(user_id)
        assert user.email == "carol@example.com"
        assert user.role == "seller"

    def test_duplicate_email_is_rejected_case_insensitively(self, register_user, password_hash):
        register_user(email="alice@example.com")
        with pytest.raises(ValidationError) as exc:
            current_domain.process(
                RegisterUser(name="Other", email="ALICE@example.com", password_hash=password_hash, role="buyer"),
                asynchronous=False,
            )
        assert exc.value.messages["email"] == ["User with this email already exists."]

    def test_missing_fields_are_rejected(self):
        with pytest.raises(ValidationError):
            RegisterUser(name="Alice", email="alice@example.com", role="buyer")


class TestLogin:
    def test_valid_credentials(self, buyer_id):
        user = authenticate("ALICE@example.com", "password123")
        assert str(user.id) == buyer_id

    def test_wrong_password(self, buyer_id):
        with pytest.raises(AuthenticationError):
            authenticate("alice@example.com", "wrong")

    def test_unknown_email(self):
        with pytest.raises(AuthenticationError):
            authenticate("nobody@example.com", "password123")


class TestUpdateProfile:
    def test_change_name_and_email(self, buyer_id):
        changed = current_domain.process(
            UpdateProfile(user_id=buyer_id, name="Alice B.", email="alice.b@example.com"),
            asynchronous=False,
        )
        assert changed == ["name", "email"]
        user = current_domain.repository_for(User).get(buyer_id)
        assert user.email == "alice.b@example.com"

    def test_nothing_supplied(self, buyer_id):
        with pytest.raises(ValidationError) as exc:
            current_domain.process(UpdateProfile(user_id=buyer_id), asynchronous=False)
        assert exc.value.messages["profile"] == ["No update information provided."]

    def test_email_of_another_user(self, buyer_id, seller_id):
        with pytest.raises(ValidationError) as exc:
            current_domain.process(UpdateProfile(user_id=buyer_id, email="bob@example.com"), asynchronous=False)
        assert "email" in exc.value.messages

    def test_own_email_is_no_change(self, buyer_id):
        changed = current_domain.process(UpdateProfile(user_id=buyer_id, email="alice@example.com"), asynchronous=False)
        assert changed == []

    def test_unknown_user(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateProfile(user_id="missing", name="X"), asynchronous=False)
