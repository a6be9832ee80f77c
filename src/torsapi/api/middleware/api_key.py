"""
Shared-secret authentication middleware

Every request must carry an `api-key` header equal to the server's
configured key. The check runs before any route handler, so a rejected
request never reaches the Store.
"""

import hmac
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from torsapi.core.errors import AuthError, ServerMisconfiguration
from torsapi.core.utils.logger import get_logger

logger = get_logger(__name__)

API_KEY_HEADER = "api-key"


def verify_api_key(client_key: Optional[str], server_key: Optional[str]) -> None:
    """
    Check a client-supplied key against the server key

    Raises:
        ServerMisconfiguration: If the server key is not configured
        AuthError: If the client key is missing or does not match
    """
    if not server_key:
        raise ServerMisconfiguration("Server configuration error.")
    if client_key is None or not hmac.compare_digest(
        client_key.encode("utf-8"), server_key.encode("utf-8")
    ):
        raise AuthError("Forbidden: Invalid API Key.")


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Middleware to verify the api-key header on every request"""

    def __init__(self, app, api_key: Optional[str] = None):
        """
        Initialize API key middleware

        Args:
            app: Starlette application
            api_key: Expected value of the api-key header. If None or empty,
                     every request is answered with 500 until it is configured.
        """
        super().__init__(app)
        self.api_key = api_key

    async def dispatch(self, request: Request, call_next):
        """Reject the request unless its api-key header matches"""
        try:
            verify_api_key(request.headers.get(API_KEY_HEADER), self.api_key)
        except ServerMisconfiguration as e:
            logger.error(
                "Server API key is not set. Please configure TORSAPI_API_KEY in the environment."
            )
            return JSONResponse(status_code=e.status_code, content={"message": e.message})
        except AuthError as e:
            logger.warning(f"Rejected request to {request.url.path}: invalid API key")
            return JSONResponse(status_code=e.status_code, content={"message": e.message})

        return await call_next(request)
