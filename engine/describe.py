"""Compact, prompt-friendly text view of a schema."""
from __future__ import annotations

from engine.meta_models import Column, Schema

def _column_label(col: Column) -> str:
    if col.isPrimaryKey:
        return f"{col.name}(pk)"
    if col.isForeignKey:
        return f"{col.name}(fk->{col.foreignKeyTable or '?'})"
    return col.name

def summarize_tables(schema: Schema) -> str:
    """
    One line per table, e.g.:
      - orders: id(pk), user_id(fk->users), total
    """
    return "\n".join(
        f"- {table.name}: " + ", ".join(_column_label(c) for c in table.columns)
        for table in schema.tables
    )
