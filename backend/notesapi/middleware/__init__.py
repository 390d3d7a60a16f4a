# Middleware package init
"""
Notes API — Middleware Package
================================

Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID first: every later log line can carry it
    2. Logging: captures response status and duration
    3. CORS: FastAPI's CORSMiddleware (handles preflight)
"""
