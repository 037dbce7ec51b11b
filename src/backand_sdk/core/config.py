from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .router import DEFAULT_API_URL

DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class BackandConfig:
    api_url: str = DEFAULT_API_URL
    app_name: Optional[str] = None
    anonymous_token: Optional[str] = None
    sign_up_token: Optional[str] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


def _env(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


def load_env_config(*, use_dotenv: bool = True) -> BackandConfig:
    """Load Backand settings from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    timeout = _env("BACKAND_TIMEOUT_SECONDS")
    return BackandConfig(
        api_url=_env("BACKAND_API_URL") or DEFAULT_API_URL,
        app_name=_env("BACKAND_APP_NAME"),
        anonymous_token=_env("BACKAND_ANONYMOUS_TOKEN"),
        sign_up_token=_env("BACKAND_SIGNUP_TOKEN"),
        timeout_seconds=float(timeout) if timeout else DEFAULT_TIMEOUT_SECONDS,
    )


__all__ = ["BackandConfig", "DEFAULT_TIMEOUT_SECONDS", "load_env_config"]
