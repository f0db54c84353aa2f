"""Authentication dependencies for FastAPI."""

from typing import Annotated

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies.services import get_profile_service
from core.exceptions import AuthenticationError, ErrorCode
from domain.services.profile_service import ProfileService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenExpiredError, TokenError, TokenUser

logger = structlog.get_logger()

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)

# Singleton auth provider
_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    Dependency to get the current authenticated user.

    Missing, malformed, invalid and expired tokens all yield 401.

    Raises:
        AuthenticationError: If no token provided or token is invalid
    """
    if not credentials:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    try:
        return await auth_provider.authenticate(credentials.credentials)
    except TokenExpiredError:
        raise AuthenticationError(
            message="Token has expired",
            error_code=ErrorCode.TOKEN_EXPIRED,
        ) from None
    except TokenError:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        ) from None


async def get_provisioned_user(
    user: Annotated[TokenUser, Depends(get_current_user)],
    profile_service: ProfileService = Depends(get_profile_service),
) -> TokenUser:
    """
    Authenticated user whose profile row is created on first sight.

    A failure to provision is logged and tolerated; the next request retries.
    """
    try:
        await profile_service.ensure_profile(
            user.id,
            email=user.email,
            display_name=user.display_name,
        )
    except Exception:
        logger.warning("profile_provisioning_failed", user_id=str(user.id), exc_info=True)
    return user


# Type alias for convenience in route handlers
CurrentUser = Annotated[TokenUser, Depends(get_provisioned_user)]