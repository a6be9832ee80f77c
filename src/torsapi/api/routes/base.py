"""
Base route handler with shared functionality

Holds the Store, parses JSON bodies, and maps Store outcomes to
responses: NotFoundError -> 404, ValidationError -> 400, anything
unexpected -> 500.
"""

import json
from functools import wraps
from typing import Any, Awaitable, Callable, Dict

from starlette.requests import Request
from starlette.responses import JSONResponse

from torsapi.core.errors import TorsAPIError, ValidationError
from torsapi.core.store import Store
from torsapi.core.utils.logger import get_logger

logger = get_logger(__name__)

INVALID_JSON_BODY = "Invalid JSON body."
INTERNAL_ERROR = "Internal server error."

Handler = Callable[[Any, Request], Awaitable[JSONResponse]]


def message_response(message: str, status_code: int = 200, **extra: Any) -> JSONResponse:
    """Build a {"message": ...} JSON response with optional extra keys"""
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


def handle_errors(handler: Handler) -> Handler:
    """
    Turn exceptions raised by a route handler into JSON error responses

    Domain errors use their own status code and message. Anything else is
    logged with its traceback and answered with 500.
    """

    @wraps(handler)
    async def wrapper(self: "BaseRouteHandler", request: Request) -> JSONResponse:
        try:
            return await handler(self, request)
        except TorsAPIError as e:
            logger.warning(
                f"{request.method} {request.url.path} failed with {e.status_code}: {e.message}"
            )
            return message_response(e.message, status_code=e.status_code)
        except Exception as e:
            logger.error(
                f"Error handling {request.method} {request.url.path}: {str(e)}", exc_info=True
            )
            return message_response(INTERNAL_ERROR, status_code=500)

    return wrapper


class BaseRouteHandler:
    """
    Base class for route handlers

    Each handler method serves one endpoint and calls exactly one Store
    operation.
    """

    def __init__(self, store: Store):
        """
        Initialize base route handler

        Args:
            store: Store instance shared by all handlers
        """
        self.store = store

    async def _read_json_object(self, request: Request) -> Dict[str, Any]:
        """
        Parse the request body as a JSON object

        An empty body is treated as {}.

        Raises:
            ValidationError: If the body is not valid JSON or not an object
        """
        raw = await request.body()
        if not raw.strip():
            return {}
        try:
            body = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise ValidationError(INVALID_JSON_BODY)
        if not isinstance(body, dict):
            raise ValidationError(INVALID_JSON_BODY)
        return body

    @staticmethod
    def _missing_fields(body: Dict[str, Any], *field_names: str) -> list:
        """Return the names of fields that are absent from body or null"""
        return [name for name in field_names if body.get(name) is None]
