"""User aggregate: buyers and sellers of the marketplace."""

import re
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from marketplace.domain import marketplace
from marketplace.exceptions import ForbiddenError
from marketplace.user.events import ProfileUpdated, UserRegistered

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class UserRole(Enum):
    BUYER = "buyer"
    SELLER = "seller"


def normalize_email(email):
    return email.strip().lower() if email else email


def validate_email(email):
    if not email or not _EMAIL_PATTERN.match(email):
        raise ValidationError({"email": ["Invalid email format."]})


@marketplace.aggregate
class User:
    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254, unique=True)
    password_hash = String(required=True, max_length=255)
    role = String(required=True, max_length=10, choices=UserRole)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, name, email, password_hash, role):
        """Create an account. Email and role are stored lower-cased."""
        role = (role or "").strip().lower()
        if role not in {r.value for r in UserRole}:
            raise ValidationError({"role": ['Invalid role. Must be either "buyer" or "seller".']})

        email = normalize_email(email)
        validate_email(email)

        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_seller(self) -> bool:
        return self.role == UserRole.SELLER.value

    def ensure_seller(self, action="manage products"):
        if not self.is_seller:
            raise ForbiddenError(f"Forbidden: Only sellers can {action}.")

    # -------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------
    def update_profile(self, name=None, email=None, password_hash=None):
        """Apply the supplied changes and return the names of fields that changed.

        Fields passed as ``None`` are left untouched. Email uniqueness across
        users is the caller's concern; the format is checked here.
        """
        changed = []

        if name is not None and name != self.name:
            self.name = name
            changed.append("name")

        if email is not None:
            email = normalize_email(email)
            validate_email(email)
            if email != self.email:
                self.email = email
                changed.append("email")

        if password_hash is not None:
            self.password_hash = password_hash
            changed.append("password")

        if changed:
            self.updated_at = datetime.now(UTC)
            self.raise_(ProfileUpdated(user_id=str(self.id), changed_fields=",".join(changed)))

        return changed
