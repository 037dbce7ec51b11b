"""backand_sdk package exports."""

from .client import BackandClient, create_client_from_env
from .core import (
    AuthMode,
    AuthSnapshot,
    AuthState,
    BackandClientError,
    BackandConfig,
    BackandEncodingError,
    BackandHTTPError,
    BackandParseError,
    BackandTransportError,
    Deep,
    ExcludeArray,
    Failure,
    FilterArray,
    InMemorySessionStore,
    PageNumber,
    PageSize,
    QueryOption,
    RelatedObjects,
    RequestDescriptor,
    Result,
    ReturnObject,
    Search,
    SessionStore,
    Success,
    as_result,
    encode_options,
    load_env_config,
    route,
)
from .models import Action, ActionMethod, ExcludeOption, Filter, OperatorType
from .transport import HttpxTransport, Transport

__all__ = [
    # Client
    "BackandClient",
    "create_client_from_env",
    "BackandConfig",
    "load_env_config",
    # Transport
    "Transport",
    "HttpxTransport",
    # Auth
    "AuthMode",
    "AuthSnapshot",
    "AuthState",
    "SessionStore",
    "InMemorySessionStore",
    # Exceptions
    "BackandClientError",
    "BackandTransportError",
    "BackandHTTPError",
    "BackandParseError",
    "BackandEncodingError",
    # Models
    "Filter",
    "OperatorType",
    "Action",
    "ActionMethod",
    "ExcludeOption",
    # Query options
    "QueryOption",
    "PageSize",
    "PageNumber",
    "FilterArray",
    "ExcludeArray",
    "Deep",
    "RelatedObjects",
    "ReturnObject",
    "Search",
    "encode_options",
    # Routing and results
    "RequestDescriptor",
    "route",
    "Success",
    "Failure",
    "Result",
    "as_result",
]
