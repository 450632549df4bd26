"""
SVGboard Backend — Middleware Package
=======================================

Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID runs first so every later log line can carry it
    - Logging measures the full handling time and records the final status
"""
