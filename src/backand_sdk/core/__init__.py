"""Transport-agnostic core of backand-sdk: encoding, auth state and routing."""

from .auth import (
    AuthMode,
    AuthSnapshot,
    AuthState,
    InMemorySessionStore,
    SessionStore,
    header_for,
)
from .config import BackandConfig, load_env_config
from .errors import (
    BackandClientError,
    BackandEncodingError,
    BackandHTTPError,
    BackandParseError,
    BackandTransportError,
)
from .options import (
    Deep,
    ExcludeArray,
    FilterArray,
    PageNumber,
    PageSize,
    QueryOption,
    RelatedObjects,
    ReturnObject,
    Search,
    encode_options,
)
from .result import Failure, Result, Success, as_result
from .router import (
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

__all__ = [
    # Auth
    "AuthMode",
    "AuthSnapshot",
    "AuthState",
    "SessionStore",
    "InMemorySessionStore",
    "header_for",
    # Config
    "BackandConfig",
    "load_env_config",
    # Exceptions
    "BackandClientError",
    "BackandTransportError",
    "BackandHTTPError",
    "BackandParseError",
    "BackandEncodingError",
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
    # Results
    "Success",
    "Failure",
    "Result",
    "as_result",
    # Routing
    "Operation",
    "CreateItem",
    "UpdateItem",
    "ReadItem",
    "ReadItems",
    "DeleteItem",
    "RunQuery",
    "PerformActions",
    "SignUp",
    "SignIn",
    "RequestDescriptor",
    "route",
]
