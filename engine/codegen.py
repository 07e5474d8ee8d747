# engine/codegen.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict

from engine.drizzle_schema import generate_drizzle_schema
from engine.generate_ddl import generate_sql
from engine.meta_models import Schema
from engine.prisma_schema import generate_prisma_schema
from engine.type_mapping import Dialect, resolve_dialect

logger = logging.getLogger(__name__)

FORMATS = ("sql", "prisma", "drizzle")
EXTENSIONS = {"sql": "sql", "prisma": "prisma", "drizzle": "ts"}

class SqlFormats(BaseModel):
    model_config = ConfigDict(frozen=True)

    postgresql: str
    mysql: str
    sqlite: str

class CodeFormats(BaseModel):
    model_config = ConfigDict(frozen=True)

    sql: SqlFormats
    prisma: str
    drizzle: str

def generate_all_code_formats(schema: Schema) -> CodeFormats:
    """
    Every artifact for one schema. The five emissions are independent of each other.
    """
    formats = CodeFormats(
        sql=SqlFormats(
            postgresql=generate_sql(schema, Dialect.POSTGRESQL),
            mysql=generate_sql(schema, Dialect.MYSQL),
            sqlite=generate_sql(schema, Dialect.SQLITE),
        ),
        prisma=generate_prisma_schema(schema),
        drizzle=generate_drizzle_schema(schema),
    )
    logger.debug(
        "Generated code formats for %d tables (%d columns)",
        len(schema.tables), sum(len(t.columns) for t in schema.tables),
    )
    return formats

def _check_kind(kind: str) -> str:
    k = (kind or "").strip().lower()
    if k not in FORMATS:
        raise ValueError(f"Unknown format {kind!r}. Use one of: {', '.join(FORMATS)}")
    return k

def export_filename(kind: str, dialect: Union[Dialect, str, None] = None, stem: str = "schema") -> str:
    """
    schema.postgresql.sql / schema.prisma / schema.ts
    SQL needs a dialect so the three variants don't collide on disk.
    """
    k = _check_kind(kind)
    if k == "sql":
        di = resolve_dialect(dialect if dialect is not None else Dialect.POSTGRESQL)
        return f"{stem}.{di.value}.{EXTENSIONS[k]}"
    return f"{stem}.{EXTENSIONS[k]}"

def artifact_text(formats: CodeFormats, kind: str, dialect: Union[Dialect, str, None] = None) -> str:
    k = _check_kind(kind)
    if k == "prisma":
        return formats.prisma
    if k == "drizzle":
        return formats.drizzle
    di = resolve_dialect(dialect if dialect is not None else Dialect.POSTGRESQL)
    return getattr(formats.sql, di.value)

def write_exports(formats: CodeFormats, out_dir: Union[str, Path], stem: str = "schema") -> List[Path]:
    """Write all five artifacts as UTF-8 files under out_dir. Returns the paths written."""
    target = Path(out_dir)
    target.mkdir(parents=True, exist_ok=True)

    jobs: List[tuple[str, Optional[Dialect]]] = [("sql", d) for d in Dialect]
    jobs += [("prisma", None), ("drizzle", None)]

    written: List[Path] = []
    for kind, dialect in jobs:
        path = target / export_filename(kind, dialect, stem=stem)
        path.write_text(artifact_text(formats, kind, dialect), encoding="utf-8")
        written.append(path)
    logger.info("Exported %d files to %s", len(written), str(target))
    return written
