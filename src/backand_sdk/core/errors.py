from __future__ import annotations

from typing import Any, Optional


class BackandClientError(Exception):
    """Base error for client failures."""


class BackandTransportError(BackandClientError):
    """Network, timeout or TLS failure while talking to the backend."""


class BackandHTTPError(BackandTransportError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        message: str,
        response_json: Optional[Any] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(f"{status_code} {method} {url}: {message}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.response_json = response_json
        self.response_text = response_text


class BackandParseError(BackandClientError):
    pass


class BackandEncodingError(ValueError):
    """
    Structured input could not be encoded for the wire.
    Not a BackandClientError, so as_result() never folds it into a Failure.
    """


__all__ = [
    "BackandClientError",
    "BackandTransportError",
    "BackandHTTPError",
    "BackandParseError",
    "BackandEncodingError",
]
