"""Domain errors raised by the service layer.

Every error carries the HTTP status it maps to; the app turns them into
``{"error": message}`` responses.
"""


class SignageError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str = "Internal server error"):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message}


class ValidationError(SignageError):
    status_code = 400
    code = "VALIDATION_ERROR"


class InvalidOrExpiredCode(ValidationError):
    code = "INVALID_OR_EXPIRED_CODE"

    def __init__(self, message: str = "Invalid or expired pairingCode"):
        super().__init__(message)


class NotFound(SignageError):
    status_code = 404
    code = "NOT_FOUND"


class PlayerNotFound(NotFound):
    code = "PLAYER_NOT_FOUND"

    def __init__(self, message: str = "Player not found"):
        super().__init__(message)


class Unauthorized(SignageError):
    status_code = 401
    code = "UNAUTHORIZED"


class InternalError(SignageError):
    pass
