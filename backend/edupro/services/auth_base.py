"""
EduPro Backend: Abstract Identity Verifier Interface
=======================================================

What:  Abstract base class defining the contract for resolving a bearer
       credential into an owner identity (the user's email).
Why:   Bypass mode and real Supabase verification are two strategies for the
       same capability. Selecting one at startup (instead of branching on a
       flag inside every request) lets tests inject either one directly.
How:   Concrete implementations inherit from IdentityVerifier and implement verify().
Who:   Called by the `require_identity` dependency before any record-store access.

Implementations (see auth_service.py):
    - BypassIdentityVerifier:   fixed dev identity, no network
    - SupabaseIdentityVerifier: Supabase Auth user lookup under a deadline
"""

from abc import ABC, abstractmethod
from typing import Optional


class IdentityVerifier(ABC):
    """
    Abstract interface for request authentication.

    Contract:
        - verify() accepts the raw Authorization header value (may be None)
        - returns the owner identity (email) on success
        - raises Unauthenticated when no usable credential is present
        - raises AuthenticationFailed for every other failure
        - never caches: every request is verified again
    """

    #: Short label reported by /health and logged at startup
    mode: str = "unknown"

    @abstractmethod
    async def verify(self, authorization: Optional[str]) -> str:
        """
        Resolve a credential to an identity.

        Args:
            authorization: Value of the Authorization header, e.g. "Bearer eyJ...".

        Returns:
            str: The authenticated user's email address.

        Raises:
            Unauthenticated: No bearer credential was supplied.
            AuthenticationFailed: Credential rejected, provider error, or deadline exceeded.
        """
        ...
