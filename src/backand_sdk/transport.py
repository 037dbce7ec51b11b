import time
from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from .core.config import DEFAULT_TIMEOUT_SECONDS
from .core.errors import (
    BackandHTTPError,
    BackandParseError,
    BackandTransportError,
)
from .core.observability import log_event
from .core.router import RequestDescriptor


@runtime_checkable
class Transport(Protocol):
    async def send(
        self, request: RequestDescriptor, *, operation: Optional[str] = None
    ) -> Any:
        ...

    async def aclose(self) -> None:
        ...


class HttpxTransport:
    """
    Sends RequestDescriptors over an httpx.AsyncClient.
    - Exactly one attempt per request; no retries
    - Raises BackandHTTPError on non-2xx HTTP responses
    - Raises BackandTransportError on network/timeout errors
    - Raises BackandParseError if response isn't valid JSON
    - Returns parsed JSON (any shape), or None for an empty body
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.timeout_seconds = timeout_seconds
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=timeout_seconds)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def send(
        self, request: RequestDescriptor, *, operation: Optional[str] = None
    ) -> Any:
        start = time.perf_counter()
        endpoint = request.path.split("?", 1)[0]

        try:
            resp = await self.http.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.HTTPError as exc:
            log_event(
                "op_call",
                operation=operation,
                method=request.method,
                endpoint=endpoint,
                status="exception",
                error_type=type(exc).__name__,
                duration_ms=int((time.perf_counter() - start) * 1000),
            )
            raise BackandTransportError(
                f"Network/timeout error calling {request.method} {endpoint}: {exc}"
            ) from exc

        duration_ms = int((time.perf_counter() - start) * 1000)
        log_event(
            "op_call",
            operation=operation,
            method=request.method,
            endpoint=endpoint,
            status=resp.status_code,
            duration_ms=duration_ms,
        )

        if resp.status_code < 200 or resp.status_code >= 300:
            raise self._to_http_error(resp, method=request.method)

        return self._safe_json(resp)

    def _safe_json(self, resp: httpx.Response) -> Any:
        # Handle empty responses (204 No Content, etc.)
        if not resp.content:
            return None

        try:
            return resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise BackandParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}"
            ) from exc

    def _to_http_error(self, resp: httpx.Response, *, method: str) -> BackandHTTPError:
        url = str(resp.request.url)
        # Try JSON first; fall back to text snippet.
        response_json: Optional[Any] = None
        response_text: Optional[str] = None
        message = "request failed"

        try:
            parsed = resp.json()
        except ValueError:
            response_text = (resp.text or "")[:500]
        else:
            response_json = parsed
            if isinstance(parsed, dict):
                # Backand uses "Message"; the token endpoint uses OAuth fields
                message = (
                    parsed.get("Message")
                    or parsed.get("message")
                    or parsed.get("error_description")
                    or parsed.get("error")
                    or message
                )
            elif isinstance(parsed, str) and parsed:
                message = parsed

        return BackandHTTPError(
            status_code=resp.status_code,
            method=method,
            url=url,
            message=message,
            response_json=response_json,
            response_text=response_text,
        )


__all__ = ["Transport", "HttpxTransport"]
