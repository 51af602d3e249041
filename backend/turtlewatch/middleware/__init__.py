# Middleware package init
"""
TurtleWatch Backend - Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID + access log] → [GZip] → [CORS] → Route Handler

    logging.py assigns the correlation ID before anything else runs, so
    service and exception-handler log lines of the same request carry it,
    and writes the access line once the response status is known.
    CORS is FastAPI's CORSMiddleware (handles preflight).
"""
