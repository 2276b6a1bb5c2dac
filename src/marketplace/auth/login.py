"""Credential checks for login."""

from protean.utils.globals import current_domain

from marketplace.auth.passwords import verify_password
from marketplace.auth.tokens import create_access_token
from marketplace.exceptions import AuthenticationError
from marketplace.user.user import User
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


def authenticate(email: str, password: str) -> User:
    """Return the user owning these credentials or raise ``AuthenticationError``."""
    user = current_domain.repository_for(User).find_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("login_rejected", email=email)
        raise AuthenticationError("Invalid credentials.")
    return user


def issue_token(user: User) -> str:
    return create_access_token(str(user.id), user.role)
