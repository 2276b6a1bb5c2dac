"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="User")
class UserRegistered:
    """A buyer or seller account was created."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True)
    role = String(required=True)
    registered_at = DateTime(required=True)


@marketplace.event(part_of="User")
class ProfileUpdated:
    """A user changed their name, email or password."""

    __version__ = 1

    user_id = Identifier(required=True)
    changed_fields = String(required=True)  # Comma-separated field names
