# generate/loader.py
import json
import logging
from collections import Counter
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jsonschema import ValidationError
from jsonschema.validators import Draft7Validator
from pydantic import ValidationError as ModelValidationError

from engine.meta_models import Schema

logger = logging.getLogger(__name__)

DEFINITIONS_DIR = Path(__file__).resolve().parent / "schema_definitions"
SCHEMA_DEFINITION = "generatedSchema.json"
PAYLOAD_DEFINITION = "generationPayload.json"

class InvalidSchemaError(Exception):
    pass

@lru_cache
def _validator(name: str = SCHEMA_DEFINITION) -> Draft7Validator:
    path = DEFINITIONS_DIR / name
    try:
        definition = json.loads(path.read_text(encoding="utf-8"))
    except Exception as e:
        raise InvalidSchemaError(f"Failed to read JSON-Schema at {path}: {e}") from e
    Draft7Validator.check_schema(definition)
    return Draft7Validator(definition)

def _where(e: ValidationError) -> str:
    path = "/".join(str(p) for p in e.absolute_path)
    return f" (at {path})" if path else ""

def validate_schema_dict(data: Any) -> Schema:
    """
    Validate raw JSON data against the Draft-7 JSON-Schema, then build the pydantic Schema.
    Raises InvalidSchemaError on the first problem found.
    """
    try:
        _validator().validate(data)
    except ValidationError as e:
        raise InvalidSchemaError(f"Schema validation failed: {e.message}{_where(e)}") from e

    try:
        return Schema.model_validate(data)
    except ModelValidationError as e:
        first = e.errors()[0]
        loc = "/".join(str(p) for p in first["loc"])
        raise InvalidSchemaError(f"Schema validation failed: {first['msg']} (at {loc})") from e

def load_schema(path: Union[str, Path] = "schema.json") -> Schema:
    schema_path = Path(path)
    if not schema_path.exists():
        raise InvalidSchemaError(f"Schema file not found at {path}")

    try:
        data = json.loads(schema_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidSchemaError(f"Invalid JSON in {path}: {e}") from e

    schema = validate_schema_dict(data)
    logger.info("Loaded schema from %s with %d tables", str(schema_path), len(schema.tables))
    return schema

def coerce_generated(
    payload: Dict[str, Any],
    explanation: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Schema:
    """
    Turn structured model output ({tables, summary, explanation?}) into a Schema.

    - summary -> description
    - an explicit `explanation` wins over the payload's own (chat updates keep the old one)
    - tables/columns get opaque ids: table-<i>-<ms>, col-<i>-<j>-<ms>
    """
    try:
        _validator(PAYLOAD_DEFINITION).validate(payload)
    except ValidationError as e:
        raise InvalidSchemaError(f"Generated payload is malformed: {e.message}{_where(e)}") from e

    now = now or datetime.now(timezone.utc)
    stamp = int(now.timestamp() * 1000)

    tables = []
    for ti, table in enumerate(payload["tables"]):
        columns = []
        for ci, col in enumerate(table["columns"]):
            columns.append({
                "id": f"col-{ti}-{ci}-{stamp}",
                "name": col.get("name"),
                "type": col.get("type"),
                "nullable": col.get("nullable"),
                "isPrimaryKey": col.get("isPrimaryKey"),
                "isForeignKey": col.get("isForeignKey", False),
                "foreignKeyTable": col.get("foreignKeyTable"),
            })
        tables.append({"id": f"table-{ti}-{stamp}", "name": table.get("name"), "columns": columns})

    data = {
        "tables": tables,
        "description": payload.get("summary") or "",
        "explanation": explanation if explanation is not None else payload.get("explanation"),
        "timestamp": now.isoformat(),
    }
    return validate_schema_dict(data)

def find_integrity_issues(schema: Schema) -> List[str]:
    """
    Advisory checks the emitters never make: duplicate names and dangling foreign keys.
    """
    issues: List[str] = []
    counts = Counter(t.name for t in schema.tables)
    for name, n in counts.items():
        if n > 1:
            issues.append(f"Duplicate table name: {name} ({n}x)")

    known = set(counts)
    for t in schema.tables:
        col_counts = Counter(c.name for c in t.columns)
        for name, n in col_counts.items():
            if n > 1:
                issues.append(f"Duplicate column name: {t.name}.{name} ({n}x)")
        for c in t.columns:
            if not c.isForeignKey:
                continue
            if not c.foreignKeyTable:
                issues.append(f"Foreign key without target table: {t.name}.{c.name}")
            elif c.foreignKeyTable not in known:
                issues.append(f"Foreign key to unknown table: {t.name}.{c.name} -> {c.foreignKeyTable}")
    return issues
