"""
EduPro Backend: Web Search Schemas
=====================================

What:  Result shapes returned by SearchService and the /api/search routes.
Why:   Search never raises to its caller. Every outcome (hit, empty, failure)
       is expressed as data, so callers branch on `ok` instead of catching.

Outcomes:
    ok=True,  snippets="[1] ...\\n\\n[2] ..."     → results found
    ok=True,  snippets=None, message="No ..."     → nothing found (not an error)
    ok=False, snippets=None, error="..."          → timeout / provider failure
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

NO_RESULTS_MESSAGE = "No search results found"


class SnippetResult(BaseModel):
    """
    What:  Outcome of a single web search call.

    Invariant:
        ok=False always carries snippets=None. The validator enforces it so a
        failure can never leak partial results.
    """
    ok: bool = Field(description="False only when the search itself failed")
    snippets: Optional[str] = Field(
        default=None,
        description="Indexed snippets ('[1] ...') separated by a blank line",
    )
    error: Optional[str] = Field(default=None, description="Failure reason when ok is false")
    message: Optional[str] = Field(default=None, description="Informational note, e.g. no results")

    @model_validator(mode="after")
    def failures_carry_no_snippets(self) -> "SnippetResult":
        if not self.ok and self.snippets is not None:
            raise ValueError("A failed search result cannot carry snippets")
        return self

    @classmethod
    def found(cls, snippets: str) -> "SnippetResult":
        return cls(ok=True, snippets=snippets)

    @classmethod
    def empty(cls) -> "SnippetResult":
        return cls(ok=True, snippets=None, message=NO_RESULTS_MESSAGE)

    @classmethod
    def failed(cls, error: str) -> "SnippetResult":
        return cls(ok=False, snippets=None, error=error)


class SearchHealth(BaseModel):
    """Liveness of the external search dependency, from a real probe query."""
    ok: bool
    error: Optional[str] = None
