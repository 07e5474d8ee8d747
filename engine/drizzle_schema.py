# engine/drizzle_schema.py
from __future__ import annotations
from typing import Union

from engine.meta_models import Column, LogicalType, Schema, Table

DRIZZLE_IMPORT = (
    "import { pgTable, serial, varchar, integer, boolean, timestamp, decimal, jsonb } "
    "from 'drizzle-orm/pg-core';\n\n"
)

def column_builder(logical_type: Union[LogicalType, str]) -> str:
    """
    Column-builder call for a logical type.
    Every integer becomes serial(), primary key or not.
    text, uuid and unknown types fall through to varchar(255).
    """
    if logical_type == LogicalType.STRING:
        return "varchar(255)"
    if logical_type == LogicalType.INTEGER:
        return "serial()"
    if logical_type == LogicalType.BOOLEAN:
        return "boolean()"
    if logical_type == LogicalType.TIMESTAMP:
        return "timestamp().defaultNow()"
    if logical_type == LogicalType.DECIMAL:
        return "decimal('10,2')"
    if logical_type == LogicalType.JSON:
        return "jsonb()"
    return "varchar(255)"

def _field_line(col: Column) -> str:
    field = f"  {col.name}: {column_builder(col.type)}"
    if col.isPrimaryKey:
        field += ".primaryKey()"
    if not col.nullable:
        field += ".notNull()"
    return field + ",\n"

def _table_block(table: Table) -> str:
    fields = "".join(_field_line(col) for col in table.columns)
    return f"export const {table.name} = pgTable('{table.name}', {{\n{fields}}});\n"

def generate_drizzle_schema(schema: Schema) -> str:
    return DRIZZLE_IMPORT + "\n".join(_table_block(table) for table in schema.tables)
