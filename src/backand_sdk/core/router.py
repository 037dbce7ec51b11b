"""
Maps an operation onto a fully specified HTTP request.

route() is pure: given the same operation, auth snapshot and base URL it
builds an identical RequestDescriptor and never touches the network.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from ..models import Action
from .auth import AuthSnapshot, AuthState
from .encoding import dumps_compact, form_urlencode

DEFAULT_API_URL = "https://api.backand.com"
API_VERSION = "1"

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"


@dataclass(frozen=True)
class CreateItem:
    name: str
    parameters: Mapping[str, Any]
    query: Optional[str] = None


@dataclass(frozen=True)
class UpdateItem:
    name: str
    id: str
    parameters: Mapping[str, Any]
    query: Optional[str] = None


@dataclass(frozen=True)
class ReadItem:
    name: str
    id: str
    query: Optional[str] = None


@dataclass(frozen=True)
class ReadItems:
    name: str
    query: Optional[str] = None


@dataclass(frozen=True)
class DeleteItem:
    name: str
    id: str


@dataclass(frozen=True)
class RunQuery:
    name: str
    parameters: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class PerformActions:
    actions: Tuple[Action, ...]

    def __init__(self, actions: Sequence[Action]):
        object.__setattr__(self, "actions", tuple(actions))


@dataclass(frozen=True)
class SignUp:
    user: Mapping[str, Any]


@dataclass(frozen=True)
class SignIn:
    username: str
    password: str


Operation = Union[
    CreateItem,
    UpdateItem,
    ReadItem,
    ReadItems,
    DeleteItem,
    RunQuery,
    PerformActions,
    SignUp,
    SignIn,
]


@dataclass(frozen=True)
class RequestDescriptor:
    method: str
    url: str
    headers: Dict[str, str]
    body: Optional[bytes] = None

    @property
    def path(self) -> str:
        """URL without scheme and host, query included."""
        rest = self.url.split("://", 1)[-1]
        slash = rest.find("/")
        return rest[slash:] if slash >= 0 else "/"

    def json(self) -> Any:
        """Decoded JSON body (test/debug helper)."""
        return json.loads(self.body) if self.body else None


def method_for(operation: Operation) -> str:
    if isinstance(operation, (CreateItem, PerformActions, SignUp, SignIn)):
        return "POST"
    if isinstance(operation, (ReadItem, ReadItems, RunQuery)):
        return "GET"
    if isinstance(operation, UpdateItem):
        return "PUT"
    if isinstance(operation, DeleteItem):
        return "DELETE"
    raise TypeError(f"Unsupported operation: {operation!r}")


def path_for(operation: Operation) -> str:
    prefix = f"/{API_VERSION}"
    if isinstance(operation, (CreateItem, ReadItems)):
        return f"{prefix}/objects/{operation.name}{operation.query or ''}"
    if isinstance(operation, (ReadItem, UpdateItem)):
        return f"{prefix}/objects/{operation.name}/{operation.id}{operation.query or ''}"
    if isinstance(operation, DeleteItem):
        return f"{prefix}/objects/{operation.name}/{operation.id}"
    if isinstance(operation, RunQuery):
        return f"{prefix}/query/data/{operation.name}"
    if isinstance(operation, PerformActions):
        return f"{prefix}/bulk"
    if isinstance(operation, SignUp):
        return f"{prefix}/user/signup"
    if isinstance(operation, SignIn):
        return "/token"
    raise TypeError(f"Unsupported operation: {operation!r}")


def _json_body(value: Any) -> bytes:
    return dumps_compact(value).encode("utf-8")


def route(
    operation: Operation,
    auth: Union[AuthSnapshot, AuthState],
    *,
    base_url: str = DEFAULT_API_URL,
) -> RequestDescriptor:
    """
    Build the request for an operation.
    - Headers: AppName plus the auth header of the snapshot's mode
    - CreateItem/UpdateItem/SignUp/PerformActions: JSON body
    - RunQuery: form-encoded parameters in the query string
    - SignIn: form-encoded body
    """
    snapshot = auth.snapshot() if isinstance(auth, AuthState) else auth
    method = method_for(operation)
    url = base_url.rstrip("/") + path_for(operation)
    headers = snapshot.headers()
    body: Optional[bytes] = None

    if isinstance(operation, (CreateItem, UpdateItem)):
        body = _json_body(dict(operation.parameters))
        headers["Content-Type"] = JSON_CONTENT_TYPE
    elif isinstance(operation, SignUp):
        body = _json_body(dict(operation.user))
        headers["Content-Type"] = JSON_CONTENT_TYPE
    elif isinstance(operation, PerformActions):
        body = _json_body([action.to_document() for action in operation.actions])
        headers["Content-Type"] = JSON_CONTENT_TYPE
    elif isinstance(operation, RunQuery):
        if operation.parameters:
            url = f"{url}?{form_urlencode(operation.parameters)}"
    elif isinstance(operation, SignIn):
        params = {
            "username": operation.username,
            "password": operation.password,
            "grant_type": "password",
            "appName": snapshot.app_name or "",
        }
        body = form_urlencode(params).encode("utf-8")
        headers["Content-Type"] = FORM_CONTENT_TYPE

    return RequestDescriptor(method=method, url=url, headers=headers, body=body)


__all__ = [
    "DEFAULT_API_URL",
    "API_VERSION",
    "JSON_CONTENT_TYPE",
    "FORM_CONTENT_TYPE",
    "CreateItem",
    "UpdateItem",
    "ReadItem",
    "ReadItems",
    "DeleteItem",
    "RunQuery",
    "PerformActions",
    "SignUp",
    "SignIn",
    "Operation",
    "RequestDescriptor",
    "method_for",
    "path_for",
    "route",
]
