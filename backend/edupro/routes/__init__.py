# Routes package init
"""
EduPro Backend: API Routes Package
=====================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - notes.py:   POST /api/notes, GET /api/notes         (identity required)
    - career.py:  POST /api/career, GET /api/career       (identity required)
    - search.py:  GET /api/search, /api/search/wikipedia, /api/search/health
    - health.py:  GET /, GET /health

Design Principle:
    Routes are THIN: they extract request data, call a service, and return
    its result. Identity verification lives in edupro.dependencies.
"""
