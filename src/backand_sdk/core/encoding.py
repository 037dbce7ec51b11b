from __future__ import annotations

import json
from typing import Any, Iterator, List, Mapping, Tuple
from urllib.parse import quote

from .errors import BackandEncodingError

# Characters a URL query component may carry unescaped (besides unreserved).
QUERY_SAFE = "!$&'()*+,;=:@/?"

# Form encoding escapes general and sub delimiters, leaving only these.
FORM_SAFE = "/?"


def dumps_compact(value: Any) -> str:
    """Serialize to compact JSON; non-serializable input is a caller bug."""
    try:
        return json.dumps(value, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise BackandEncodingError(f"Value is not JSON serializable: {exc}") from exc


def quote_query_component(text: str) -> str:
    return quote(text, safe=QUERY_SAFE)


def _scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _form_pairs(key: str, value: Any) -> Iterator[Tuple[str, str]]:
    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            yield from _form_pairs(f"{key}[{sub_key}]", sub_value)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _form_pairs(f"{key}[]", item)
    else:
        yield key, _scalar(value)


def form_urlencode(params: Mapping[str, Any]) -> str:
    """
    Encode parameters as application/x-www-form-urlencoded text.
    - Keeps insertion order
    - Nested mappings become key[sub]=v, sequences key[]=v
    - Spaces are %20, never '+'
    """
    parts: List[str] = []
    for key, value in params.items():
        for name, text in _form_pairs(str(key), value):
            parts.append(f"{quote(name, safe=FORM_SAFE)}={quote(text, safe=FORM_SAFE)}")
    return "&".join(parts)


__all__ = [
    "QUERY_SAFE",
    "FORM_SAFE",
    "dumps_compact",
    "quote_query_component",
    "form_urlencode",
]
