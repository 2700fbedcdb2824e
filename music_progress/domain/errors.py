class MusicProgressError(Exception):
    """Base error; every subclass maps to a single HTTP status."""
    status_code = 500
    detail = "Internal error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class DuplicateAccount(MusicProgressError):
    status_code = 400
    detail = "Email already registered"


class InvalidCredentials(MusicProgressError):
    # одинаковое сообщение для неизвестного email и неверного пароля
    status_code = 401
    detail = "Invalid credentials"


class Unauthenticated(MusicProgressError):
    status_code = 401
    detail = "Token not provided"


class InvalidToken(MusicProgressError):
    status_code = 403
    detail = "Invalid token"


class Forbidden(MusicProgressError):
    status_code = 403
    detail = "Access denied"


class NotFound(MusicProgressError):
    status_code = 404
    detail = "Not found"


class RateLimited(MusicProgressError):
    status_code = 429
    detail = "Too many requests"
