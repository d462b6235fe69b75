# Overview: Error taxonomy shared by services and routes.
"""
Every user-visible failure carries a status code plus a human-readable
message. The message is either a single string or a list of strings; lists
keep one entry per violated rule so clients can show all of them.
"""

from __future__ import annotations

from http import HTTPStatus


class ApiError(Exception):
    """Base class for errors rendered as JSON by the app's error handler."""
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str | list[str]):
        super().__init__(message if isinstance(message, str) else "; ".join(message))
        self.message = message

    @property
    def error(self) -> str:
        return HTTPStatus(self.status_code).phrase

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "error": self.error,
            "statusCode": int(self.status_code),
        }


class BadRequestError(ApiError):
    """400: malformed id, payload shape, date filter, or insufficient inventory."""
    status_code = HTTPStatus.BAD_REQUEST


class NotFoundError(ApiError):
    """404: referenced product, category, coupon or transaction does not exist."""
    status_code = HTTPStatus.NOT_FOUND


class ConflictError(ApiError):
    """409: unique constraint violation (e.g., duplicate coupon name)."""
    status_code = HTTPStatus.CONFLICT


class UnprocessableError(ApiError):
    """422: request is well-formed but cannot be honoured (expired coupon)."""
    status_code = HTTPStatus.UNPROCESSABLE_ENTITY
