"""
EduPro Backend: Application Package Initializer
================================================

What: Marks the `edupro` directory as a Python package.
Why:  Enables module imports like `from edupro.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows the same layered shape for every feature:

    ┌─────────────────────────────────────┐
    │      Routes (API Layer)             │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Dependencies (Identity gate)   │  ← Bearer token → owner email
    ├─────────────────────────────────────┤
    │      Services (Business Logic)      │  ← Notes, career reports, search
    ├─────────────────────────────────────┤
    │      Models & Schemas (Data)        │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │      Database (Persistence)         │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    The identity gate and the search client talk to third parties (Supabase,
    DuckDuckGo, Wikipedia) through one shared httpx client that is built at
    startup and injected, so both can be tested without a network.
"""

__version__ = "1.0.0"
