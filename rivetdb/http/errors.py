"""API errors carrying an HTTP status and a machine-readable code."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any


class ApiError(Exception):
    """An error reported to API clients as a JSON body with a status code."""

    def __init__(self, status: HTTPStatus, message: str, code: str) -> None:
        super().__init__(message)
        self.status = HTTPStatus(status)
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        return (
            f"ApiError(status={int(self.status)}, "
            f"message={self.message!r}, code={self.code!r})"
        )

    @classmethod
    def bad_request(cls, message: str) -> "ApiError":
        return cls(HTTPStatus.BAD_REQUEST, str(message), "BAD_REQUEST")

    @classmethod
    def not_found(cls, message: str) -> "ApiError":
        return cls(HTTPStatus.NOT_FOUND, str(message), "NOT_FOUND")

    @classmethod
    def internal_error(cls, message: str) -> "ApiError":
        return cls(HTTPStatus.INTERNAL_SERVER_ERROR, str(message), "INTERNAL_SERVER_ERROR")

    @classmethod
    def conflict(cls, message: str) -> "ApiError":
        return cls(HTTPStatus.CONFLICT, str(message), "CONFLICT")

    @classmethod
    def bad_gateway(cls, message: str) -> "ApiError":
        return cls(HTTPStatus.BAD_GATEWAY, str(message), "BAD_GATEWAY")

    @classmethod
    def from_exception(cls, err: BaseException) -> "ApiError":
        """Wrap an arbitrary exception; API errors pass through unchanged."""
        if isinstance(err, ApiError):
            return err
        return cls.internal_error(str(err))

    def to_response(self) -> tuple[int, dict[str, Any]]:
        """The status code and JSON body sent to the client."""
        body = {"error": {"message": self.message, "code": self.code}}
        return int(self.status), body