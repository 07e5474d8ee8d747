# engine/prisma_schema.py
from __future__ import annotations

from engine.meta_models import Column, LogicalType, Schema, Table
from engine.type_mapping import prisma_type

# The datasource is always postgresql, whatever dialect the SQL export uses.
PRISMA_PREAMBLE = (
    "// Prisma Schema\n"
    "\n"
    "generator client {\n"
    '  provider = "prisma-client-js"\n'
    "}\n"
    "\n"
    "datasource db {\n"
    '  provider = "postgresql"\n'
    '  url      = env("DATABASE_URL")\n'
    "}\n"
    "\n"
)

def model_name(table_name: str) -> str:
    """Upper-case the first character only: 'user_accounts' -> 'User_accounts'."""
    return table_name[:1].upper() + table_name[1:]

def _field_line(col: Column) -> str:
    field = f"  {col.name} {prisma_type(col.type, col.nullable)}"
    if col.isPrimaryKey:
        field += " @id"
    if col.type == LogicalType.TIMESTAMP:
        field += " @default(now())"
    return field + "\n"

def _model_block(table: Table) -> str:
    fields = "".join(_field_line(col) for col in table.columns)
    return f"model {model_name(table.name)} {{\n{fields}}}\n"

def generate_prisma_schema(schema: Schema) -> str:
    return PRISMA_PREAMBLE + "\n".join(_model_block(table) for table in schema.tables)
