# engine/schema_guard.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError

from engine.db import make_engine
from engine.generate_ddl import generate_sql
from engine.meta_models import Schema
from engine.type_mapping import Dialect

logger = logging.getLogger(__name__)

@dataclass
class SchemaDiff:
    missing_tables: List[str] = field(default_factory=list)
    missing_columns: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def has_changes(self) -> bool:
        return bool(self.missing_tables or self.missing_columns)

    def format_plan(self) -> str:
        lines: List[str] = []
        if self.missing_tables:
            lines.append("Missing tables:")
            for t in sorted(self.missing_tables):
                lines.append(f"  - {t}")
        if self.missing_columns:
            lines.append("Missing columns:")
            for t, cols in sorted(self.missing_columns.items()):
                for c in sorted(cols):
                    lines.append(f"  - {t}.{c}")
        return "\n".join(lines) if lines else "No schema differences detected."

def split_statements(ddl: str) -> List[str]:
    # generated scripts separate statements with exactly one blank line
    return [s.strip() for s in ddl.split("\n\n") if s.strip()]

def apply_ddl(engine: Engine, ddl: str) -> int:
    """Run a generated script statement by statement in one transaction."""
    statements = split_statements(ddl)
    with engine.begin() as conn:
        for stmt in statements:
            try:
                conn.exec_driver_sql(stmt)
            except DBAPIError as e:
                logger.error("DDL statement failed: %s\n%s", e.orig, stmt)
                raise
    logger.info("Applied %d DDL statements on %s", len(statements), engine.url.get_backend_name())
    return len(statements)

def diff_schema(engine: Engine, schema: Schema) -> SchemaDiff:
    """
    Compare the live catalog with the schema:
      - tables in the schema that don't exist in the DB
      - columns in the schema missing from DB tables
    Types and FKs are not compared.
    """
    insp = sa_inspect(engine)
    existing_tables = set(insp.get_table_names())
    diff = SchemaDiff()

    for t in schema.tables:
        if t.name not in existing_tables:
            diff.missing_tables.append(t.name)
            continue
        db_cols = {c["name"] for c in insp.get_columns(t.name)}
        missing = sorted({c.name for c in t.columns} - db_cols)
        if missing:
            diff.missing_columns[t.name] = missing

    return diff

class DDLVerificationError(Exception):
    pass

def drop_tables(engine: Engine, names: List[str]) -> None:
    """Drop `names` in reverse order so referencing tables go before their targets."""
    quote = engine.dialect.identifier_preparer.quote
    with engine.begin() as conn:
        for name in reversed(names):
            conn.exec_driver_sql(f"DROP TABLE {quote(name)}")
    logger.info("Dropped %d verification tables", len(names))

def verify_ddl(
    schema: Schema,
    dialect: Union[Dialect, str] = Dialect.SQLITE,
    database_url: Optional[str] = None,
) -> SchemaDiff:
    """
    Execute the generated DDL for `dialect` against a real database and diff the result.
    The database must speak that dialect; the default URL is in-memory sqlite.
    Tables created here are dropped again before returning, also on failure.
    Raises DDLVerificationError if any schema table already exists in the target.
    """
    ddl = generate_sql(schema, dialect)
    engine = make_engine(database_url)
    try:
        existing = set(sa_inspect(engine).get_table_names())
        clashes = [t.name for t in schema.tables if t.name in existing]
        if clashes:
            raise DDLVerificationError(
                "Refusing to verify: tables already exist in target database: " + ", ".join(clashes)
            )

        try:
            apply_ddl(engine, ddl)
            diff = diff_schema(engine, schema)
        finally:
            # sqlite commits DDL eagerly, so clean up whatever got created
            present = set(sa_inspect(engine).get_table_names()) - existing
            created = list(dict.fromkeys(t.name for t in schema.tables if t.name in present))
            if created:
                drop_tables(engine, created)
    finally:
        engine.dispose()

    if diff.has_changes:
        logger.warning("Generated DDL does not match schema:\n%s", diff.format_plan())
    return diff
