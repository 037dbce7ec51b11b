from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Union

from .errors import BackandClientError


@dataclass(frozen=True)
class Success:
    value: Any = None


@dataclass(frozen=True)
class Failure:
    error: BackandClientError


Result = Union[Success, Failure]


async def as_result(call: Awaitable[Any]) -> Result:
    """
    Await a client call and wrap its outcome.
    Only BackandClientError becomes a Failure; encoding errors and other
    programming errors still raise.
    """
    try:
        value = await call
    except BackandClientError as exc:
        return Failure(exc)
    return Success(value)


__all__ = ["Success", "Failure", "Result", "as_result"]
