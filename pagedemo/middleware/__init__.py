# Middleware package init
"""
pagedemo — Middleware Package
==============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [CORS] → [Logging] → [Rate Limit] → [GZip] → Route Handler

    1. Request ID first: every response, 429s and preflights included, carries it
    2. Logging: method, path, status, duration with the request ID
    3. Rate Limit: reject abusive clients before the route runs; rejections are logged
"""
