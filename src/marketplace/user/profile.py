"""Profile updates: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.user.user import User, normalize_email


@marketplace.command(part_of="User")
class UpdateProfile:
    """Change any of name, email or password. At least one must be supplied."""

    user_id = Identifier(required=True)
    name = String(max_length=100)
    email = String(max_length=254)
    password_hash = String(max_length=255)


@marketplace.command_handler(part_of=User)
class UpdateProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        if not (command.name or command.email or command.password_hash):
            raise ValidationError({"profile": ["No update information provided."]})

        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        if command.email:
            holder = repo.find_by_email(command.email)
            if holder is not None and str(holder.id) != str(user.id):
                raise ValidationError({"email": ["Email already in use by another account."]})

        changed = user.update_profile(
            name=command.name or None,
            email=normalize_email(command.email) or None,
            password_hash=command.password_hash or None,
        )
        if changed:
            repo.add(user)

        return changed
