"""JWT authentication provider implementation.

Accepts Supabase-issued access tokens (ES256, verified against the project's
JWKS) and locally minted tokens (HS256 with the shared secret, used by tests
and scripts).

Supabase access token payload:
    {
        "sub": "user-uuid",
        "email": "user@example.com",
        "role": "authenticated",
        "aud": "authenticated",
        "user_metadata": { "name": "Jane" },
        "exp": 1234567890
    }
"""

from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

import httpx
import structlog
from jose import ExpiredSignatureError, JOSEError, jwt
from jose.backends import ECKey

from core.config import settings
from infrastructure.auth.provider import TokenError, TokenExpiredError, TokenUser

logger = structlog.get_logger()

# kid -> JWK, fetched lazily and refreshed when an unknown kid shows up
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys(refresh: bool = False) -> dict[str, Any]:
    """Fetch and cache JWKS keys from Supabase."""
    global _jwks_cache
    if _jwks_cache is not None and not refresh:
        return _jwks_cache

    jwks_url = settings.supabase_jwks_url
    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
            keys = response.json().get("keys", [])
    except (httpx.HTTPError, ValueError):
        logger.exception("jwks_fetch_failed", url=jwks_url)
        return _jwks_cache or {}

    _jwks_cache = {k["kid"]: k for k in keys if k.get("kid")}
    logger.info("jwks_fetched", key_count=len(_jwks_cache))
    return _jwks_cache


class JWTAuthProvider:
    """JWT-based authentication provider."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def authenticate(self, token: str) -> TokenUser:
        """
        Verify a JWT and extract the user it was issued to.

        The signing algorithm is read from the token header: ES256 tokens are
        checked against the Supabase JWKS, anything else against the shared
        secret with the configured algorithm.

        Raises:
            TokenExpiredError: If the token has expired
            TokenError: For any other verification failure
        """
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") == "ES256":
                payload = await self._decode_es256(token, header)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except JOSEError as e:
            # Also covers malformed JWKS entries rejected by ECKey
            raise TokenError("Invalid token") from e

        return self._user_from_claims(payload)

    def create_token(self, user: TokenUser) -> str:
        """
        Create an HS256 JWT for a user (tests and local tooling).

        Args:
            user: The user to create a token for

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": str(user.id),
            "email": user.email,
            "aud": "authenticated",
            "role": user.role or "authenticated",
            "exp": expire,
            "user_metadata": {
                "name": user.display_name,
            },
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    async def _decode_es256(self, token: str, header: dict) -> dict:
        kid = header.get("kid")
        if not kid:
            raise TokenError("ES256 token without key id")

        key_data = (await _get_jwks_keys()).get(kid)
        if not key_data:
            # Possibly rotated keys
            key_data = (await _get_jwks_keys(refresh=True)).get(kid)
        if not key_data:
            logger.warning("jwks_key_not_found", kid=kid)
            raise TokenError("Unknown signing key")

        ec_key = ECKey(key_data, algorithm="ES256")
        return jwt.decode(
            token,
            ec_key,
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    @staticmethod
    def _user_from_claims(payload: dict) -> TokenUser:
        user_id = payload.get("sub")
        email = payload.get("email")
        if not user_id or not email:
            raise TokenError("Token is missing subject or email")

        try:
            uid = UUID(str(user_id))
        except ValueError as e:
            raise TokenError("Token subject is not a UUID") from e

        # Supabase keeps the display name in user_metadata
        user_metadata = payload.get("user_metadata") or {}
        display_name = (
            user_metadata.get("name")
            or user_metadata.get("display_name")
            or user_metadata.get("full_name")
            or payload.get("name")
        )

        return TokenUser(
            id=uid,
            email=email,
            display_name=display_name,
            role=payload.get("role"),
        )
