# engine/routes.py
"""
Code-generation endpoints for the UI/export layer.

- POST /codegen          all five artifacts as JSON
- POST /codegen/{kind}   one artifact as a downloadable text file
- POST /summary          prompt-friendly table summary + advisory issues
- GET  /dialects         supported SQL dialects
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import PlainTextResponse

from engine.codegen import CodeFormats, artifact_text, export_filename, generate_all_code_formats
from engine.db import get_settings
from engine.describe import summarize_tables
from engine.meta_models import Schema
from engine.type_mapping import Dialect
from generate.loader import find_integrity_issues

logger = logging.getLogger(__name__)

router = APIRouter(tags=["codegen"])

@router.post("/codegen", response_model=CodeFormats)
def generate_code(schema: Schema) -> CodeFormats:
    logger.info("codegen: %d tables", len(schema.tables))
    return generate_all_code_formats(schema)

@router.post("/codegen/{kind}", response_class=PlainTextResponse)
def download_code(
    kind: str,
    schema: Schema,
    dialect: Optional[str] = Query(None, description="postgresql | mysql | sqlite (sql only)"),
):
    # dialect is only resolved for sql; prisma/drizzle ignore it
    di = dialect or get_settings().DIALECT
    try:
        text = artifact_text(generate_all_code_formats(schema), kind, di)
        filename = export_filename(kind, di)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return PlainTextResponse(
        text,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

@router.post("/summary")
def summary(schema: Schema) -> Dict[str, Any]:
    return {"summary": summarize_tables(schema), "issues": find_integrity_issues(schema)}

@router.get("/dialects")
def list_dialects() -> Dict[str, Any]:
    return {"dialects": [d.value for d in Dialect], "default": get_settings().DIALECT}
