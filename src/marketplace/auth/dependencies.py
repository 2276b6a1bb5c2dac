"""FastAPI dependencies that resolve the caller from a bearer token."""

from fastapi import Header
from pydantic import BaseModel

from marketplace.auth.tokens import decode_access_token
from marketplace.exceptions import AuthenticationError


class Principal(BaseModel):
    user_id: str
    role: str

    @property
    def is_seller(self) -> bool:
        return self.role == "seller"


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def current_principal(authorization: str | None = Header(default=None)) -> Principal:
    token = _bearer_token(authorization)
    if token is None:
        raise AuthenticationError("Authentication token required.")

    claims = decode_access_token(token)
    return Principal(user_id=claims["sub"], role=claims["role"])
