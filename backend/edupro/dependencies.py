"""
EduPro Backend: FastAPI Dependencies
=======================================

What:  Hands the process-wide collaborators to route handlers and runs the
       identity gate.
Why:   The httpx client, identity verifier and search service are built once in
       the lifespan and stored on `app.state`. Routes receive them through
       Depends() instead of importing globals, so tests can swap any of them
       with `app.dependency_overrides`.

Identity gate:
    require_identity() is declared before the database session in every
    protected route, so a request that fails verification never opens a
    session or touches the record store.
"""

from typing import Optional

from fastapi import Depends, Header, Request

from edupro.services.auth_base import IdentityVerifier
from edupro.services.search_service import SearchService


def get_identity_verifier(request: Request) -> IdentityVerifier:
    """The verification strategy selected at startup."""
    return request.app.state.identity_verifier


def get_search_service(request: Request) -> SearchService:
    return request.app.state.search_service


async def require_identity(
    authorization: Optional[str] = Header(default=None),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> str:
    """
    Resolve the caller's identity or abort the request.

    Returns:
        The verified owner email.

    Raises:
        Unauthenticated / AuthenticationFailed → generic 401 via the global handler
    """
    return await verifier.verify(authorization)
