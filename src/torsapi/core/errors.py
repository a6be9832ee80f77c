"""
Exception hierarchy for torsapi

Store operations raise ValidationError and NotFoundError; the API-key
check raises AuthError and ServerMisconfiguration. The API layer maps
each of them to an HTTP status code.
"""


class TorsAPIError(Exception):
    """Base class for all torsapi errors"""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TorsAPIError, ValueError):
    """A required field is missing or empty, or a value is outside its allowed set"""

    status_code = 400


class NotFoundError(TorsAPIError, LookupError):
    """A referenced task or category does not exist"""

    status_code = 404


class AuthError(TorsAPIError):
    """The api-key header is absent or does not match the server secret"""

    status_code = 403


class ServerMisconfiguration(TorsAPIError):
    """The server secret is not configured"""

    status_code = 500
