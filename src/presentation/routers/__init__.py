"""HTTP routers.

Versioned API routers live under ``api/v1``; request dependencies (bearer
authentication, admin guard) under ``api/middleware``.
"""
