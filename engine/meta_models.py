from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field

class LogicalType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    DECIMAL = "decimal"
    JSON = "json"
    TEXT = "text"
    UUID = "uuid"

class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

class Column(_Frozen):
    # Unrecognized type names are kept as plain strings; emitters fall back.
    name: str = Field(min_length=1)
    type: Union[LogicalType, str] = Field(union_mode="left_to_right")
    nullable: bool
    isPrimaryKey: bool
    isForeignKey: bool = False
    foreignKeyTable: Optional[str] = None
    id: Optional[str] = None

class Table(_Frozen):
    name: str = Field(min_length=1)
    columns: Tuple[Column, ...]
    id: Optional[str] = None

class Schema(_Frozen):
    tables: Tuple[Table, ...]
    description: str = ""
    explanation: Optional[str] = None
    timestamp: Optional[datetime] = None
