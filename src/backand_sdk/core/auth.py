"""Authentication mode and credentials shared by every outgoing request."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Protocol, Tuple, runtime_checkable

APP_NAME_HEADER = "AppName"
ANONYMOUS_TOKEN_HEADER = "AnonymousToken"
AUTHORIZATION_HEADER = "Authorization"
SIGN_UP_TOKEN_HEADER = "SignUpToken"


class AuthMode(str, Enum):
    ANONYMOUS = "anonymous"
    USER = "user"
    SIGN_UP = "signup"


@runtime_checkable
class SessionStore(Protocol):
    """Durable home of the user session token (keychain, keyring, file...)."""

    def get(self) -> Optional[str]:
        ...

    def set(self, token: str) -> None:
        ...

    def remove(self) -> None:
        ...


class InMemorySessionStore:
    def __init__(self, token: Optional[str] = None):
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def remove(self) -> None:
        self._token = None


@dataclass(frozen=True)
class AuthSnapshot:
    """Immutable view of the auth state used to build one request."""

    mode: AuthMode = AuthMode.ANONYMOUS
    app_name: Optional[str] = None
    anonymous_token: Optional[str] = None
    sign_up_token: Optional[str] = None
    user_token: Optional[str] = None

    def header_for(self, mode: Optional[AuthMode] = None) -> Tuple[str, str]:
        return header_for(mode or self.mode, self)

    def headers(self, mode: Optional[AuthMode] = None) -> Dict[str, str]:
        name, value = self.header_for(mode)
        return {APP_NAME_HEADER: self.app_name or "", name: value}


def header_for(mode: AuthMode, snapshot: AuthSnapshot) -> Tuple[str, str]:
    """
    Auth header for a mode. Only the slot belonging to the mode is read;
    an unset slot still yields the header, with an empty value.
    """
    if mode is AuthMode.ANONYMOUS:
        return ANONYMOUS_TOKEN_HEADER, snapshot.anonymous_token or ""
    if mode is AuthMode.USER:
        return AUTHORIZATION_HEADER, f"Bearer {snapshot.user_token or ''}"
    if mode is AuthMode.SIGN_UP:
        return SIGN_UP_TOKEN_HEADER, snapshot.sign_up_token or ""
    raise ValueError(f"Unknown auth mode: {mode!r}")


class AuthState:
    """
    Process-wide auth state: current mode plus three credential slots.
    - anonymous/sign-up tokens and the app name live in memory
    - the user session token lives in the injected SessionStore
    - all reads and writes are serialized by one lock
    """

    def __init__(
        self,
        *,
        store: Optional[SessionStore] = None,
        app_name: Optional[str] = None,
        anonymous_token: Optional[str] = None,
        sign_up_token: Optional[str] = None,
        mode: AuthMode = AuthMode.ANONYMOUS,
    ):
        self.store: SessionStore = store if store is not None else InMemorySessionStore()
        self._lock = threading.RLock()
        self._mode = AuthMode(mode)
        self._app_name = app_name
        self._anonymous_token = anonymous_token
        self._sign_up_token = sign_up_token

    @property
    def mode(self) -> AuthMode:
        with self._lock:
            return self._mode

    @property
    def app_name(self) -> Optional[str]:
        with self._lock:
            return self._app_name

    def set_mode(self, mode: AuthMode) -> AuthMode:
        """Set the mode and return the previous one."""
        with self._lock:
            previous = self._mode
            self._mode = AuthMode(mode)
            return previous

    def set_app_name(self, name: Optional[str]) -> None:
        with self._lock:
            self._app_name = name

    def set_anonymous_token(self, token: Optional[str]) -> None:
        with self._lock:
            self._anonymous_token = token

    def set_sign_up_token(self, token: Optional[str]) -> None:
        with self._lock:
            self._sign_up_token = token

    def user_token(self) -> Optional[str]:
        with self._lock:
            return self.store.get()

    def has_user_session(self) -> bool:
        return self.user_token() is not None

    def install_user_session(self, token: str) -> AuthMode:
        """Persist the session token and switch to User mode; returns the old mode."""
        with self._lock:
            self.store.set(token)
            return self.set_mode(AuthMode.USER)

    def clear_user_session(self) -> AuthMode:
        """Drop the session token and fall back to Anonymous; safe to repeat."""
        with self._lock:
            if self.store.get() is not None:
                self.store.remove()
            return self.set_mode(AuthMode.ANONYMOUS)

    def snapshot(self) -> AuthSnapshot:
        with self._lock:
            return AuthSnapshot(
                mode=self._mode,
                app_name=self._app_name,
                anonymous_token=self._anonymous_token,
                sign_up_token=self._sign_up_token,
                user_token=self.store.get(),
            )

    def enter_mode(self, mode: AuthMode) -> Tuple[AuthMode, AuthSnapshot]:
        """Switch mode and snapshot under one lock; returns (previous, snapshot)."""
        with self._lock:
            previous = self.set_mode(mode)
            return previous, self.snapshot()

    def header_for(self, mode: Optional[AuthMode] = None) -> Tuple[str, str]:
        return self.snapshot().header_for(mode)


__all__ = [
    "APP_NAME_HEADER",
    "ANONYMOUS_TOKEN_HEADER",
    "AUTHORIZATION_HEADER",
    "SIGN_UP_TOKEN_HEADER",
    "AuthMode",
    "SessionStore",
    "InMemorySessionStore",
    "AuthSnapshot",
    "AuthState",
    "header_for",
]
