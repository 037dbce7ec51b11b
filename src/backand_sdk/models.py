from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class OperatorType(str, Enum):
    EQUALS = "equals"
    NOT_EQUALS = "notEquals"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    CONTAINS = "contains"
    NOT_CONTAINS = "notContains"
    EMPTY = "empty"
    NOT_EMPTY = "notEmpty"


class ExcludeOption(str, Enum):
    METADATA = "__metadata"
    TOTAL_ROWS = "totalRows"


class ActionMethod(str, Enum):
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class Filter(BaseModel):
    """
    Constraint applied to the rows a read returns.
    Nothing is validated against the object schema; the server decides
    whether the field, operator and value make sense together.
    """

    field_name: str = Field(alias="fieldName")
    operator_type: OperatorType = Field(alias="operator")
    value: Any = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_document(self) -> Dict[str, Any]:
        return {
            "fieldName": self.field_name,
            "operator": self.operator_type.value,
            "value": self.value,
        }


class Action(BaseModel):
    """One entry of a bulk request."""

    method: ActionMethod
    url: str
    data: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(frozen=True)

    def to_document(self) -> Dict[str, Any]:
        document: Dict[str, Any] = {"method": self.method.value, "url": self.url}
        if self.data is not None:
            document["data"] = self.data
        return document
