"""
Failure taxonomy for the progress ledger. Services raise these; app.main maps
them to HTTP responses via `status_code` and `detail`.
Forbidden and NotFound are raised by neighbouring features (content access,
result lookup), not by the ledger itself; they share the same mapping.
"""
from fastapi import status


class ProgressError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(ProgressError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class InvalidInput(ProgressError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Missing required fields"


class Forbidden(ProgressError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class NotFound(ProgressError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class DailyLimitReached(ProgressError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Daily limit reached ({limit} games per day). Try again tomorrow.")


class StorageError(ProgressError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"
