# vidtube/errors.py

from fastapi import status


# -------------------------------
# Service error kinds
# -------------------------------

class ServiceError(Exception):
    """
    Base for every failure the core reports to its caller.
    Each kind carries the HTTP status the request layer maps it to.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Something went wrong"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Unauthorized(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized request"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Already exists"


class InternalError(ServiceError):
    pass


# -------------------------------
# Token errors
# -------------------------------

class TokenError(Exception):
    pass


class InvalidToken(TokenError):
    pass


class ExpiredToken(TokenError):
    pass
