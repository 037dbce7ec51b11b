import logging

import httpx
import pytest
import respx
from backand_sdk.client import BackandClient
from backand_sdk.core.errors import BackandTransportError
from backand_sdk.core.logging import LogfmtFormatter
from backand_sdk.core.observability import log_event
from httpx import Response

BASE = "https://api.backand.com"


@pytest.mark.asyncio
@respx.mock
async def test_op_call_logged_on_success(caplog):
    caplog.set_level(logging.INFO, logger="backand_sdk.observability")
    respx.get(f"{BASE}/1/objects/cats").mock(return_value=Response(200, json={}))

    async with BackandClient() as client:
        await client.get_items_with_name("cats")

    record = next(r for r in caplog.records if r.getMessage() == "op_call")
    assert record.operation == "get_items_with_name"
    assert record.method == "GET"
    assert record.endpoint == "/1/objects/cats"
    assert record.status == 200
    assert record.duration_ms >= 0


@pytest.mark.asyncio
@respx.mock
async def test_op_call_logged_on_exception(caplog):
    caplog.set_level(logging.INFO, logger="backand_sdk.observability")
    respx.delete(f"{BASE}/1/objects/cats/3").mock(side_effect=httpx.ConnectTimeout("boom"))

    async with BackandClient() as client:
        with pytest.raises(BackandTransportError):
            await client.delete_item_with_id("3", "cats")

    record = next(r for r in caplog.records if r.getMessage() == "op_call")
    assert record.status == "exception"
    assert record.error_type == "ConnectTimeout"
    assert record.endpoint == "/1/objects/cats/3"


@pytest.mark.asyncio
@respx.mock
async def test_auth_transitions_logged_without_secrets(caplog):
    caplog.set_level(logging.INFO, logger="backand_sdk.client")
    respx.post(f"{BASE}/token").mock(
        return_value=Response(200, json={"access_token": "sekrit"})
    )

    async with BackandClient() as client:
        await client.sign_in("bob", "hunter2")
        client.sign_out()

    changes = [r for r in caplog.records if r.getMessage() == "auth_mode_changed"]
    assert [(r.from_mode, r.to_mode) for r in changes] == [
        ("anonymous", "user"),
        ("user", "anonymous"),
    ]
    assert changes[0].operation == "sign_in"
    assert "sekrit" not in caplog.text
    assert "hunter2" not in caplog.text


def test_log_event_drops_secret_fields(caplog):
    caplog.set_level(logging.INFO, logger="backand_sdk.observability")
    log_event("custom", password="x", token="y", method="GET")

    record = next(r for r in caplog.records if r.getMessage() == "custom")
    assert record.method == "GET"
    assert not hasattr(record, "password")
    assert not hasattr(record, "token")


def test_logfmt_formatter_renders_extras():
    record = logging.LogRecord(
        "backand_sdk.transport", logging.INFO, __file__, 1, "op_call", None, None
    )
    record.method = "GET"
    record.endpoint = "/1/objects/cats"
    record.status = 200

    line = LogfmtFormatter().format(record)
    assert line == (
        "level=info logger=backand_sdk.transport event=op_call "
        "method=GET endpoint=/1/objects/cats status=200"
    )
