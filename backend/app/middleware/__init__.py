"""
Showcase Backend — Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Access log] → [GZip] → [CORS] → Route Handler

    1. Request ID first: every later log record is stamped with it
    2. Access log: status, duration and request size once the response is built
    3. CORS: Starlette's CORSMiddleware (any origin, handles preflight)
"""
