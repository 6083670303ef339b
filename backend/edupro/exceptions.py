"""
EduPro Backend: Custom Exception Hierarchy
=============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and dependencies; caught by global handlers.

Exception Hierarchy:
    EduProError (base)
    ├── AuthError                    → 401 Unauthorized (generic body)
    │   ├── Unauthenticated          → no bearer credential supplied
    │   └── AuthenticationFailed     → token rejected, provider error or timeout
    ├── DatabaseError                → 500 Internal Server Error
    └── SearchError                  → never reaches HTTP
        ├── SearchTimeoutError       → search deadline exceeded
        └── SearchProviderError      → non-success status or bad payload

Auth failures:
    Both auth subclasses collapse to the same 401 body ("Authentication failed.").
    The precise cause is kept in `message`/`context` for the server log only.

Search failures:
    SearchService raises these internally and converts them into a
    SnippetResult(ok=False, ...) before returning. Callers branch on `ok`.
"""

from typing import Any, Dict, Optional


class EduProError(Exception):
    """
    Base exception for all EduPro application errors.

    Attributes:
        message:  Error description
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class AuthError(EduProError):
    """
    Base for identity verification failures.

    HTTP:    401 Unauthorized, always with the generic "Authentication failed." body.
    """

    def __init__(
        self,
        message: str = "Authentication failed.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class Unauthenticated(AuthError):
    """
    Raised when the request carries no usable bearer credential.

    When:    Authorization header missing, empty, or not `Bearer <token>`.
    The identity provider is never contacted in this case.
    """

    def __init__(
        self,
        message: str = "No token provided",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthenticationFailed(AuthError):
    """
    Raised when a credential was supplied but could not be resolved.

    When:    Provider rejected the token, returned no user/email, errored,
             or did not answer within the deadline.
    """

    def __init__(
        self,
        message: str = "Invalid token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(EduProError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        Detailed error info is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class SearchError(EduProError):
    """Base for failures talking to a public search endpoint."""


class SearchTimeoutError(SearchError):
    """The search request did not complete before its deadline and was cancelled."""

    def __init__(
        self,
        message: str = "Search timed out",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class SearchProviderError(SearchError):
    """
    The search endpoint answered with a non-success status.

    Attributes:
        status_code: HTTP status returned by the provider
    """

    def __init__(
        self,
        message: str = "Search provider error",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code
