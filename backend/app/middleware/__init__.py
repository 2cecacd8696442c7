# Middleware package init
"""
PhotoStash Backend - Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Access Logging] → [CORS] → Route Handler

    RequestIDMiddleware runs first so the access log line and every log
    record emitted while handling the request share one correlation id.
"""
