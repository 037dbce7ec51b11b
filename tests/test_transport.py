import httpx
import pytest
import respx
from backand_sdk.core.errors import (
    BackandClientError,
    BackandHTTPError,
    BackandParseError,
    BackandTransportError,
)
from backand_sdk.core.router import RequestDescriptor
from backand_sdk.transport import HttpxTransport, Transport
from httpx import Response

URL = "https://mock-backand.com/1/objects/cats"


def _request(method: str = "GET", body: bytes | None = None) -> RequestDescriptor:
    return RequestDescriptor(
        method=method,
        url=URL,
        headers={"AppName": "zoo", "AnonymousToken": "anon"},
        body=body,
    )


def test_httpx_transport_satisfies_protocol():
    assert isinstance(HttpxTransport(), Transport)


@pytest.mark.asyncio
@respx.mock
async def test_send_passes_descriptor_through():
    route = respx.post(URL).mock(return_value=Response(200, json={"ok": True}))

    async with HttpxTransport() as transport:
        data = await transport.send(_request("POST", b'{"a":1}'))

    assert data == {"ok": True}
    request = route.calls[0].request
    assert request.method == "POST"
    assert request.content == b'{"a":1}'
    assert request.headers["AnonymousToken"] == "anon"


@pytest.mark.asyncio
@respx.mock
async def test_top_level_array_is_returned():
    respx.get(URL).mock(return_value=Response(200, json=[1, 2]))

    async with HttpxTransport() as transport:
        assert await transport.send(_request()) == [1, 2]


@pytest.mark.asyncio
@respx.mock
async def test_empty_response_returns_none():
    respx.get(URL).mock(return_value=Response(204))

    async with HttpxTransport() as transport:
        assert await transport.send(_request()) is None


@pytest.mark.asyncio
@respx.mock
async def test_non_json_response_raises_parse_error():
    respx.get(URL).mock(return_value=Response(200, text="<html>Not JSON</html>"))

    async with HttpxTransport() as transport:
        with pytest.raises(BackandParseError) as exc:
            await transport.send(_request())

    assert "Expected JSON" in str(exc.value)


@pytest.mark.asyncio
@respx.mock
async def test_401_raises_typed_error():
    respx.get(URL).mock(return_value=Response(401, json={"Message": "Invalid token"}))

    async with HttpxTransport() as transport:
        with pytest.raises(BackandHTTPError) as exc:
            await transport.send(_request())

    assert exc.value.status_code == 401
    assert exc.value.method == "GET"
    assert exc.value.response_json == {"Message": "Invalid token"}
    assert "Invalid token" in str(exc.value)
    assert isinstance(exc.value, BackandTransportError)


@pytest.mark.asyncio
@respx.mock
async def test_http_error_with_text_body():
    respx.get(URL).mock(return_value=Response(500, text="oops"))

    async with HttpxTransport() as transport:
        with pytest.raises(BackandHTTPError) as exc:
            await transport.send(_request())

    assert exc.value.response_text == "oops"
    assert exc.value.response_json is None


@pytest.mark.asyncio
@respx.mock
async def test_redirect_status_is_a_failure():
    respx.get(URL).mock(return_value=Response(302, headers={"Location": "/elsewhere"}))

    async with HttpxTransport() as transport:
        with pytest.raises(BackandHTTPError):
            await transport.send(_request())


@pytest.mark.asyncio
@respx.mock
async def test_timeout_raises_client_error():
    route = respx.get(URL).mock(side_effect=httpx.ReadTimeout("slow"))

    async with HttpxTransport(timeout_seconds=0.1) as transport:
        with pytest.raises(BackandClientError) as exc:
            await transport.send(_request())

    assert isinstance(exc.value, BackandTransportError)
    assert isinstance(exc.value.__cause__, httpx.ReadTimeout)
    assert route.call_count == 1
