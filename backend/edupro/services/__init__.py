# Services package init
"""
EduPro Backend: Services Layer
=================================

What:  Business logic layer sitting between routes (HTTP) and database/third parties.
Why:   Separation of concerns: routes handle HTTP, services handle business rules.

Service Inventory:
    - IdentityVerifier (abstract): Bearer credential → owner email
    - BypassIdentityVerifier / SupabaseIdentityVerifier: the two strategies
    - SearchService: DuckDuckGo + Wikipedia snippet lookup, never raises
    - NoteService: Owner-scoped study notes (create, list newest first)
    - CareerReportService: Owner-scoped career reports (create, list newest first)

Why services are separate from routes:
    1. Testability: Services can be unit-tested without HTTP overhead
    2. Replaceability: The identity strategy is chosen at startup, not in handlers
"""
