"""
EduPro Backend: Identity Verification (Supabase Auth)
========================================================

What:  Concrete identity verifiers and the factory that picks one at startup.
Why:   Every record-store operation is scoped to the caller's email, so the
       email must come from a verified token and never from the request body.
How:   SupabaseIdentityVerifier sends the bearer token to Supabase's
       `GET /auth/v1/user` endpoint through the shared httpx client and reads
       the email from the returned user. BypassIdentityVerifier skips all of
       that for local development.
Who:   Built once in the lifespan via build_identity_verifier(); used by the
       `require_identity` dependency on every protected request.

Deadline:
    The Supabase lookup is wrapped in asyncio.wait_for(). If the timer fires
    first, the in-flight HTTP request is cancelled and the request fails with
    AuthenticationFailed, even if Supabase would have answered later.

Failure collapsing:
    Unauthenticated and AuthenticationFailed both end up as the same generic
    401 "Authentication failed." response. The specific cause is logged here.
"""

import asyncio
import logging
import time
from typing import Optional

import httpx

from edupro.config import Settings
from edupro.exceptions import AuthenticationFailed, Unauthenticated
from edupro.services.auth_base import IdentityVerifier

logger = logging.getLogger(__name__)

# Identity returned for every request when BYPASS_AUTH=true
BYPASS_IDENTITY = "test@dev.com"


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Pull the token out of an `Authorization: Bearer <token>` header.

    Raises:
        Unauthenticated: Header missing, empty, wrong scheme, or no token part.
    """
    if not authorization:
        raise Unauthenticated("No token provided")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise Unauthenticated("Malformed authorization header")

    return parts[1]


class BypassIdentityVerifier(IdentityVerifier):
    """
    Development strategy: every caller is the sentinel identity.

    No header parsing and no network call. Only selected when BYPASS_AUTH=true.
    """

    mode = "bypass"

    def __init__(self, identity: str = BYPASS_IDENTITY):
        self.identity = identity

    async def verify(self, authorization: Optional[str]) -> str:
        logger.debug("Auth bypass active, using identity %s", self.identity)
        return self.identity


class SupabaseIdentityVerifier(IdentityVerifier):
    """
    Production strategy: resolve the bearer token with Supabase Auth.

    Args:
        http_client: Shared AsyncClient (owned by the app lifespan, not closed here)
        supabase_url: Project URL, e.g. "https://xyz.supabase.co"
        anon_key: Project anon key, sent as the `apikey` header
        timeout: Deadline in seconds for the whole lookup (default 5)
    """

    mode = "supabase"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        supabase_url: str,
        anon_key: str,
        timeout: float = 5.0,
    ):
        self.http_client = http_client
        self.user_endpoint = f"{supabase_url.rstrip('/')}/auth/v1/user"
        self.anon_key = anon_key
        self.timeout = timeout

    async def verify(self, authorization: Optional[str]) -> str:
        """
        Verify the bearer token and return the user's email.

        Flow:
            1. Extract token → Unauthenticated if absent (no provider call)
            2. Race the Supabase lookup against the deadline
            3. Deadline first → AuthenticationFailed("Supabase timeout")
            4. Lookup error / no email → AuthenticationFailed("Invalid token")
        """
        token = extract_bearer_token(authorization)

        start_time = time.perf_counter()
        try:
            email = await asyncio.wait_for(self._lookup_email(token), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Auth error: Supabase did not answer within %.1fs", self.timeout)
            raise AuthenticationFailed(
                "Supabase timeout",
                context={"timeout_seconds": self.timeout},
            )

        logger.debug(
            "Token verified for %s in %.0fms",
            email,
            (time.perf_counter() - start_time) * 1000,
        )
        return email

    async def _lookup_email(self, token: str) -> str:
        """Ask Supabase who owns `token`. Raises AuthenticationFailed on any rejection."""
        try:
            response = await self.http_client.get(
                self.user_endpoint,
                headers={
                    "apikey": self.anon_key,
                    "Authorization": f"Bearer {token}",
                },
            )
        except httpx.HTTPError as e:
            logger.warning("Auth error: Supabase request failed: %s", str(e))
            raise AuthenticationFailed(
                "Invalid token",
                context={"error_type": type(e).__name__},
            )

        if response.status_code != 200:
            logger.warning("Auth error: Supabase rejected token (HTTP %d)", response.status_code)
            raise AuthenticationFailed(
                "Invalid token",
                context={"status_code": response.status_code},
            )

        try:
            user = response.json()
        except ValueError:
            logger.warning("Auth error: Supabase returned a non-JSON body")
            raise AuthenticationFailed("Invalid token")

        email = user.get("email") if isinstance(user, dict) else None
        if not email:
            logger.warning("Auth error: Supabase user has no email")
            raise AuthenticationFailed("Invalid token")

        return email


def build_identity_verifier(
    settings: Settings,
    http_client: httpx.AsyncClient,
) -> IdentityVerifier:
    """
    Pick the verification strategy for this process.

    Called once at startup. The choice is fixed for the process lifetime.
    """
    if settings.bypass_auth:
        logger.warning("DEV MODE: BYPASS_AUTH is enabled, all requests act as %s", BYPASS_IDENTITY)
        return BypassIdentityVerifier()

    return SupabaseIdentityVerifier(
        http_client=http_client,
        supabase_url=settings.supabase_url,
        anon_key=settings.supabase_anon_key,
        timeout=settings.auth_timeout_seconds,
    )
