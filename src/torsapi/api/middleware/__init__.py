"""
Middleware for the torsapi Starlette application
"""

from torsapi.api.middleware.api_key import APIKeyMiddleware

__all__ = ["APIKeyMiddleware"]
