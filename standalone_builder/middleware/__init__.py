# Middleware package init
"""
Standalone Builder - Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Preflight] → [CORS] → [GZip]
            → [Unhandled Error] → Route

    1. Request ID: correlation id for logs and the X-Request-ID header
    2. Logging:    method, path, status, duration, authenticated user id
    3. Preflight:  answers every OPTIONS request itself, empty 200
    4. CORS:       Starlette's CORSMiddleware adds allow-origin headers to
                   regular responses
    5. Unhandled Error: 500 {"error": ...} for exceptions escaping a route,
                   built inside CORS so the response still gets its headers
"""
