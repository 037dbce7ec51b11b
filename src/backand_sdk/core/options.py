"""Query options and their canonical query-string rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

from ..models import ExcludeOption, Filter
from .encoding import dumps_compact, quote_query_component


@dataclass(frozen=True)
class PageSize:
    size: int


@dataclass(frozen=True)
class PageNumber:
    number: int


@dataclass(frozen=True)
class FilterArray:
    filters: Tuple[Filter, ...]

    def __init__(self, filters: Sequence[Filter]):
        object.__setattr__(self, "filters", tuple(filters))


@dataclass(frozen=True)
class ExcludeArray:
    excludes: Tuple[ExcludeOption, ...]

    def __init__(self, excludes: Sequence[ExcludeOption]):
        object.__setattr__(self, "excludes", tuple(excludes))


@dataclass(frozen=True)
class Deep:
    enabled: bool


@dataclass(frozen=True)
class RelatedObjects:
    enabled: bool


@dataclass(frozen=True)
class ReturnObject:
    enabled: bool


@dataclass(frozen=True)
class Search:
    # Sent verbatim; callers must pre-escape anything unsafe in a query.
    text: str


QueryOption = Union[
    PageSize,
    PageNumber,
    FilterArray,
    ExcludeArray,
    Deep,
    RelatedObjects,
    ReturnObject,
    Search,
]


def _flag(value: bool) -> str:
    return "true" if value else "false"


def encode_filters(filters: Sequence[Filter]) -> str:
    """JSON array of filter documents, percent-encoded for a query component."""
    return quote_query_component(dumps_compact([f.to_document() for f in filters]))


def encode_excludes(excludes: Sequence[ExcludeOption]) -> str:
    return ",".join(ExcludeOption(e).value for e in excludes)


def encode_option(option: QueryOption) -> str:
    if isinstance(option, PageSize):
        return f"pageSize={option.size}"
    if isinstance(option, PageNumber):
        return f"pageNumber={option.number}"
    if isinstance(option, FilterArray):
        return f"filter={encode_filters(option.filters)}"
    if isinstance(option, ExcludeArray):
        return f"exclude={encode_excludes(option.excludes)}"
    if isinstance(option, Deep):
        return f"deep={_flag(option.enabled)}"
    if isinstance(option, RelatedObjects):
        return f"relatedObjects={_flag(option.enabled)}"
    if isinstance(option, ReturnObject):
        return f"returnObject={_flag(option.enabled)}"
    if isinstance(option, Search):
        return f"search={option.text}"
    raise TypeError(f"Unsupported query option: {option!r}")


def encode_options(options: Sequence[QueryOption]) -> str:
    """
    Render options as a query string in the order given.
    Always starts with '?'; an empty sequence yields just '?'.
    Duplicates are kept, so a repeated key appears twice.
    """
    return "?" + "&".join(encode_option(option) for option in options)


__all__ = [
    "PageSize",
    "PageNumber",
    "FilterArray",
    "ExcludeArray",
    "Deep",
    "RelatedObjects",
    "ReturnObject",
    "Search",
    "QueryOption",
    "encode_filters",
    "encode_excludes",
    "encode_option",
    "encode_options",
]
