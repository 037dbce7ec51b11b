from __future__ import annotations

import asyncio
import os
import sys
from datetime import datetime, timezone
from typing import Optional

from backand_sdk import (
    Action,
    ActionMethod,
    BackandClient,
    BackandClientError,
    Deep,
    ExcludeArray,
    ExcludeOption,
    Filter,
    FilterArray,
    OperatorType,
    PageSize,
)


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.getenv(name)
    return val if val else default


def _print_step(title: str) -> None:
    print(f"\n== {title}")


def _fail(msg: str) -> int:
    print(f"FAILED: {msg}")
    return 1


async def run_smoke_test() -> int:
    # --- Config ---
    app_name = _env("BACKAND_APP_NAME")
    anonymous_token = _env("BACKAND_ANONYMOUS_TOKEN")
    if not app_name or not anonymous_token:
        return _fail("Missing BACKAND_APP_NAME or BACKAND_ANONYMOUS_TOKEN.")

    object_name = _env("TEST_OBJECT_NAME", "items")
    field_name = _env("TEST_FIELD_NAME", "name")
    username = _env("TEST_USERNAME")
    password = _env("TEST_PASSWORD")
    cleanup = _env("SMOKE_TEST_CLEANUP", "1") == "1"

    print("Config:")
    print(f"  app_name: {app_name}")
    print(f"  object: {object_name}")
    print(f"  field: {field_name}")
    print(f"  sign_in: {'yes' if username and password else 'no'}")
    print(f"  cleanup: {cleanup}")

    client = BackandClient.from_env()

    async with client:
        # --- Optional sign in ---
        if username and password:
            _print_step("Sign in")
            try:
                await client.sign_in(username, password)
            except BackandClientError as exc:
                return _fail(f"Sign in failed: {exc}")
            print(f"Auth mode: {client.auth_mode.value}")

        # --- List ---
        _print_step("List items")
        try:
            listing = await client.get_items_with_name(
                object_name,
                options=[PageSize(5), ExcludeArray([ExcludeOption.METADATA])],
            )
        except BackandClientError as exc:
            return _fail(f"List failed: {exc}")
        print(f"totalRows: {listing.get('totalRows') if isinstance(listing, dict) else '?'}")

        # --- Create ---
        _print_step("Create item")
        marker = f"smoke-{datetime.now(timezone.utc).isoformat(timespec='seconds')}"
        try:
            created = await client.create_item(
                {field_name: marker}, object_name, options=[]
            )
        except BackandClientError as exc:
            return _fail(f"Create failed: {exc}")

        item_id = created.get("__metadata", {}).get("id") if isinstance(created, dict) else None
        if item_id is None:
            return _fail("Create did not return an id.")
        print(f"Created item id={item_id}")

        # --- Filtered read ---
        _print_step("Filtered read")
        found = await client.get_items_with_name(
            object_name,
            options=[
                FilterArray([Filter(field_name=field_name, operator_type=OperatorType.EQUALS, value=marker)]),
                Deep(False),
            ],
        )
        rows = found.get("data", []) if isinstance(found, dict) else []
        if not rows:
            return _fail("Filtered read did not return the new item.")
        print(f"Found {len(rows)} row(s)")

        # --- Cleanup ---
        _print_step("Cleanup")
        if cleanup:
            await client.perform_actions(
                [Action(method=ActionMethod.DELETE, url=f"/1/objects/{object_name}/{item_id}")]
            )
            print("Deleted via bulk action")
        else:
            print("Cleanup skipped (SMOKE_TEST_CLEANUP=0). Item left in place.")

        client.sign_out()

    print("\nPASSED smoke test.")
    return 0


def main() -> None:
    exit_code = asyncio.run(run_smoke_test())
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
