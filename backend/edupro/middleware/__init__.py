# Middleware package init
"""
EduPro Backend: Middleware Package
=====================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first so every later log line can be correlated
    2. Logging records status and duration once the response is built
    3. CORS is FastAPI's CORSMiddleware (handles preflight for the Vite frontend)
"""
