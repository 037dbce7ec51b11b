import logging
from typing import Any, Mapping, Optional, Sequence, Union

import httpx

from .core.auth import AuthMode, AuthSnapshot, AuthState, SessionStore
from .core.config import DEFAULT_TIMEOUT_SECONDS, load_env_config
from .core.observability import log_event
from .core.options import QueryOption, encode_options
from .core.router import (
    DEFAULT_API_URL,
    CreateItem,
    DeleteItem,
    Operation,
    PerformActions,
    ReadItem,
    ReadItems,
    RequestDescriptor,
    RunQuery,
    SignIn,
    SignUp,
    UpdateItem,
    route,
)
from .models import Action
from .transport import HttpxTransport, Transport

ItemId = Union[str, int]

SIGN_UP_TOKEN_FIELD = "token"
SIGN_IN_TOKEN_FIELD = "access_token"


class BackandClient:
    """
    Async client for the Backand REST API.
    - One network round trip per call, no retries
    - Returns the parsed JSON body (None when empty) or raises
      BackandClientError subclasses
    - Sign-up/sign-in/sign-out drive the shared AuthState
    """

    def __init__(
        self,
        *,
        api_url: str = DEFAULT_API_URL,
        app_name: Optional[str] = None,
        anonymous_token: Optional[str] = None,
        sign_up_token: Optional[str] = None,
        store: Optional[SessionStore] = None,
        auth: Optional[AuthState] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[Transport] = None,
        http: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.api_url = (api_url or DEFAULT_API_URL).rstrip("/")
        self.log = logger or logging.getLogger("backand_sdk.client")
        self.auth = auth or AuthState(
            store=store,
            app_name=app_name,
            anonymous_token=anonymous_token,
            sign_up_token=sign_up_token,
        )

        self._owns_transport = transport is None
        self.transport: Transport = transport or HttpxTransport(
            timeout_seconds=timeout_seconds, http=http
        )

    @classmethod
    def from_env(cls, **kwargs) -> "BackandClient":
        config = load_env_config()
        return cls(
            api_url=config.api_url,
            app_name=config.app_name,
            anonymous_token=config.anonymous_token,
            sign_up_token=config.sign_up_token,
            timeout_seconds=config.timeout_seconds,
            **kwargs,
        )

    async def aclose(self) -> None:
        if self._owns_transport:
            await self.transport.aclose()

    async def __aenter__(self) -> "BackandClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # --- Configuration ---

    def set_app_name(self, name: str) -> None:
        self.auth.set_app_name(name)

    def set_anonymous_token(self, token: str) -> None:
        self.auth.set_anonymous_token(token)

    def set_sign_up_token(self, token: str) -> None:
        self.auth.set_sign_up_token(token)

    def set_api_url(self, url: str) -> None:
        self.api_url = url.rstrip("/")

    def get_api_url(self) -> str:
        return self.api_url

    @property
    def auth_mode(self) -> AuthMode:
        return self.auth.mode

    def set_auth_mode(self, mode: AuthMode) -> None:
        self._transition(self.auth.set_mode(mode), AuthMode(mode), "set_auth_mode")

    def user_signed_in(self) -> bool:
        return self.auth.has_user_session()

    # --- Plumbing ---

    def build_request(
        self, operation: Operation, snapshot: Optional[AuthSnapshot] = None
    ) -> RequestDescriptor:
        return route(
            operation,
            snapshot if snapshot is not None else self.auth.snapshot(),
            base_url=self.api_url,
        )

    async def _send(self, request: RequestDescriptor, *, operation: str) -> Any:
        return await self.transport.send(request, operation=operation)

    async def _execute(self, operation: Operation, *, name: str) -> Any:
        return await self._send(self.build_request(operation), operation=name)

    def _transition(self, previous: AuthMode, current: AuthMode, operation: str) -> None:
        if previous is current:
            return
        log_event(
            "auth_mode_changed",
            logger=self.log,
            operation=operation,
            from_mode=previous.value,
            to_mode=current.value,
        )

    @staticmethod
    def _query(options: Optional[Sequence[QueryOption]]) -> Optional[str]:
        return encode_options(options) if options is not None else None

    # --- GET ---

    async def get_item_with_id(
        self,
        id: ItemId,
        name: str,
        options: Optional[Sequence[QueryOption]] = None,
    ) -> Any:
        """Return a single item of object `name`."""
        op = ReadItem(name=name, id=str(id), query=self._query(options))
        return await self._execute(op, name="get_item_with_id")

    async def get_items_with_name(
        self, name: str, options: Optional[Sequence[QueryOption]] = None
    ) -> Any:
        """List items with filter, exclude and paging options."""
        op = ReadItems(name=name, query=self._query(options))
        return await self._execute(op, name="get_items_with_name")

    async def run_query_with_name(
        self, name: str, parameters: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """Execute a query predefined in the Backand dashboard."""
        op = RunQuery(name=name, parameters=parameters)
        return await self._execute(op, name="run_query_with_name")

    # --- POST ---

    async def create_item(
        self,
        item: Mapping[str, Any],
        name: str,
        options: Optional[Sequence[QueryOption]] = None,
    ) -> Any:
        op = CreateItem(name=name, parameters=item, query=self._query(options))
        return await self._execute(op, name="create_item")

    async def perform_actions(self, actions: Sequence[Action]) -> Any:
        """Send several POST/PUT/DELETE actions as one bulk request."""
        return await self._execute(PerformActions(actions), name="perform_actions")

    # --- PUT ---

    async def update_item_with_id(
        self,
        id: ItemId,
        item: Mapping[str, Any],
        name: str,
        options: Optional[Sequence[QueryOption]] = None,
    ) -> Any:
        op = UpdateItem(
            name=name, id=str(id), parameters=item, query=self._query(options)
        )
        return await self._execute(op, name="update_item_with_id")

    # --- DELETE ---

    async def delete_item_with_id(self, id: ItemId, name: str) -> Any:
        return await self._execute(
            DeleteItem(name=name, id=str(id)), name="delete_item_with_id"
        )

    # --- Authentication ---

    async def sign_up(
        self, user: Mapping[str, Any], signin_after_signup: bool = True
    ) -> Any:
        """
        Register a user.
        The request is always sent in SignUp mode, and the client stays in
        SignUp mode afterwards unless the response carries a session token
        and `signin_after_signup` is set, in which case it moves to User.
        """
        previous, snapshot = self.auth.enter_mode(AuthMode.SIGN_UP)
        self._transition(previous, AuthMode.SIGN_UP, "sign_up")

        payload = await self._send(
            self.build_request(SignUp(user=user), snapshot), operation="sign_up"
        )
        if signin_after_signup:
            self._install_token(payload, SIGN_UP_TOKEN_FIELD, "sign_up")
        return payload

    async def sign_in(self, username: str, password: str) -> Any:
        """Sign a user in; on success later requests carry the bearer token."""
        payload = await self._execute(
            SignIn(username=username, password=password), name="sign_in"
        )
        self._install_token(payload, SIGN_IN_TOKEN_FIELD, "sign_in")
        return payload

    def sign_out(self) -> None:
        """Forget the session token and go back to Anonymous mode."""
        previous = self.auth.clear_user_session()
        self._transition(previous, AuthMode.ANONYMOUS, "sign_out")

    def _install_token(self, payload: Any, field: str, operation: str) -> None:
        if not isinstance(payload, dict):
            return
        token = payload.get(field)
        if not isinstance(token, str):
            return
        previous = self.auth.install_user_session(token)
        self._transition(previous, AuthMode.USER, operation)


def create_client_from_env(**kwargs) -> BackandClient:
    """Create a BackandClient from BACKAND_* environment variables."""
    return BackandClient.from_env(**kwargs)


__all__ = ["BackandClient", "create_client_from_env"]
