from __future__ import annotations
from typing import Union

from engine.meta_models import Column, Schema, Table
from engine.type_mapping import Dialect, resolve_dialect, sql_type

def column_ddl(col: Column, dialect: Union[Dialect, str]) -> str:
    # clause order is fixed: type, PRIMARY KEY, NOT NULL, REFERENCES
    col_def = f"  {col.name} {sql_type(col.type, dialect)}"
    if col.isPrimaryKey:
        col_def += " PRIMARY KEY"
    if not col.nullable:
        col_def += " NOT NULL"
    if col.isForeignKey and col.foreignKeyTable:
        col_def += f" REFERENCES {col.foreignKeyTable}(id)"
    return col_def

def table_ddl(table: Table, dialect: Union[Dialect, str]) -> str:
    columns = ",\n".join(column_ddl(col, dialect) for col in table.columns)
    return f"CREATE TABLE {table.name} (\n{columns}\n);"

def generate_sql(schema: Schema, dialect: Union[Dialect, str]) -> str:
    """
    One CREATE TABLE statement per table, blank-line separated, in schema order.
    An empty schema yields "".
    """
    di = resolve_dialect(dialect)
    return "\n\n".join(table_ddl(table, di) for table in schema.tables)
