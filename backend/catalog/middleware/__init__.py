# Middleware package init
"""
Product Catalog Backend — Middleware Package
==============================================

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → [Unhandled Error]
            → Route Handler

Request ID runs first so the access log line and any error log carry the
same correlation ID. Unhandled Error runs last so even a generic 500 passes
back through the others.
"""
