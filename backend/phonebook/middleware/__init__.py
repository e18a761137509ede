# Middleware package init
"""
Phonebook Backend — Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [CORS] → [Request ID] → [Logging] → [Static Files] → Route Handler

    1. CORS: Applied by FastAPI's CORSMiddleware (any origin by default)
    2. Request ID: Correlation ID for every log line of the request
    3. Logging: One access line per request, including static hits
    4. Static Files: Serves files from the build directory before routing
"""
