# engine/type_mapping.py
from __future__ import annotations
from enum import Enum
from typing import Dict, Union

from engine.meta_models import LogicalType

class Dialect(str, Enum):
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    SQLITE = "sqlite"

SQL_TYPE_MAP: Dict[Dialect, Dict[LogicalType, str]] = {
    Dialect.POSTGRESQL: {
        LogicalType.STRING: "VARCHAR(255)",
        LogicalType.INTEGER: "INTEGER",
        LogicalType.BOOLEAN: "BOOLEAN",
        LogicalType.TIMESTAMP: "TIMESTAMP DEFAULT CURRENT_TIMESTAMP",
        LogicalType.DECIMAL: "DECIMAL(10,2)",
        LogicalType.JSON: "JSONB",
        LogicalType.TEXT: "TEXT",
        LogicalType.UUID: "UUID",
    },
    Dialect.MYSQL: {
        LogicalType.STRING: "VARCHAR(255)",
        LogicalType.INTEGER: "INT",
        LogicalType.BOOLEAN: "BOOLEAN",
        LogicalType.TIMESTAMP: "TIMESTAMP DEFAULT CURRENT_TIMESTAMP",
        LogicalType.DECIMAL: "DECIMAL(10,2)",
        LogicalType.JSON: "JSON",
        LogicalType.TEXT: "LONGTEXT",
        LogicalType.UUID: "CHAR(36)",
    },
    # sqlite has no native boolean/uuid/json
    Dialect.SQLITE: {
        LogicalType.STRING: "TEXT",
        LogicalType.INTEGER: "INTEGER",
        LogicalType.BOOLEAN: "INTEGER",
        LogicalType.TIMESTAMP: "DATETIME DEFAULT CURRENT_TIMESTAMP",
        LogicalType.DECIMAL: "REAL",
        LogicalType.JSON: "TEXT",
        LogicalType.TEXT: "TEXT",
        LogicalType.UUID: "TEXT",
    },
}

SQL_FALLBACK_TYPE = "TEXT"

PRISMA_TYPE_MAP: Dict[LogicalType, str] = {
    LogicalType.STRING: "String",
    LogicalType.INTEGER: "Int",
    LogicalType.BOOLEAN: "Boolean",
    LogicalType.TIMESTAMP: "DateTime",
    LogicalType.DECIMAL: "Decimal",
    LogicalType.JSON: "Json",
    LogicalType.TEXT: "String",
    LogicalType.UUID: "String",
}

PRISMA_FALLBACK_TYPE = "String"

def resolve_dialect(dialect: Union[Dialect, str]) -> Dialect:
    """
    Accept a Dialect or its name ('PostgreSQL', 'sqlite', ...).
    Raises ValueError for anything else.
    """
    if isinstance(dialect, Dialect):
        return dialect
    try:
        return Dialect((dialect or "").strip().lower())
    except ValueError:
        supported = ", ".join(d.value for d in Dialect)
        raise ValueError(f"Unknown dialect {dialect!r}. Use one of: {supported}") from None

def sql_type(logical_type: Union[LogicalType, str], dialect: Union[Dialect, str]) -> str:
    """Map a logical column type -> physical SQL type for `dialect` (miss -> TEXT)."""
    return SQL_TYPE_MAP[resolve_dialect(dialect)].get(logical_type, SQL_FALLBACK_TYPE)

def prisma_type(logical_type: Union[LogicalType, str], nullable: bool) -> str:
    base = PRISMA_TYPE_MAP.get(logical_type, PRISMA_FALLBACK_TYPE)
    return f"{base}?" if nullable else base
