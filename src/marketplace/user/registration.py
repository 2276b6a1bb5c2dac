"""User registration: command and handler.

The command carries a password hash, never the plaintext password.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.user.user import User
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="User")
class RegisterUser:
    """Create a buyer or seller account."""

    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    password_hash = String(required=True, max_length=255)
    role = String(required=True, max_length=10)


@marketplace.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["User with this email already exists."]})

        user = User.register(
            name=command.name,
            email=command.email,
            password_hash=command.password_hash,
            role=command.role,
        )
        repo.add(user)

        logger.info("user_registered", user_id=str(user.id), role=user.role)
        return str(user.id)
