"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass
class TokenUser:
    """Represents a user extracted from an auth token."""

    id: UUID
    email: str
    display_name: Optional[str] = None
    role: Optional[str] = None


class TokenError(Exception):
    """A bearer token could not be turned into a user."""


class TokenExpiredError(TokenError):
    """The token's signature is valid but it has expired."""


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def authenticate(self, token: str) -> TokenUser:
        """
        Resolve a bearer token to a user.

        Raises:
            TokenExpiredError: If the token has expired
            TokenError: If the token is malformed or its signature is invalid
        """
        ...

    def create_token(self, user: TokenUser) -> str:
        """
        Create an authentication token for a user.

        Args:
            user: The user to create a token for

        Returns:
            The generated token string
        """
        ...
