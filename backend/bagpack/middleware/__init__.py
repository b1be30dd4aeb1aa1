# Middleware package init
"""
BagPack Backend: Middleware Package
====================================

Middleware Chain (order matters):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route

    1. Rate Limit first: reject abusive clients before any database work
    2. Request ID: correlation id for logs, error bodies and X-Request-ID
    3. Logging: method, path, status and duration with the request id
"""
