"""Error types raised by the students endpoint and its repository.

Each error carries the HTTP status it is reported with; the blueprint turns
them into the ``{"success": false, "error": ...}`` envelope.
"""


class ApiError(Exception):
    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    """Missing/invalid field, malformed body or duplicate unique value."""
    status_code = 400


class NotFoundError(ApiError):
    status_code = 404


class MethodNotAllowedError(ApiError):
    status_code = 405


class StorageError(ApiError):
    """Connection or query failure in the database."""
    status_code = 500
