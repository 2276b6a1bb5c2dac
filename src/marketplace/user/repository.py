"""Repository for the User aggregate."""

from marketplace.domain import marketplace
from marketplace.user.user import User, normalize_email


@marketplace.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        """Case-insensitive lookup; emails are stored lower-cased."""
        return self._dao.query.filter(email=normalize_email(email)).all().first
