# generate/cli.py
import logging

import typer
import uvicorn
from sqlalchemy.exc import DBAPIError

from engine.codegen import artifact_text, generate_all_code_formats, write_exports
from engine.db import get_settings
from engine.describe import summarize_tables
from engine.meta_models import Schema
from engine.schema_guard import DDLVerificationError, verify_ddl
from engine.type_mapping import Dialect, resolve_dialect
from generate.loader import InvalidSchemaError, find_integrity_issues, load_schema

app = typer.Typer(help="Schema code generator CLI")

# ---------------------------
# Core utilities
# ---------------------------
def _require_valid_schema(path: str) -> Schema:
    try:
        return load_schema(path)  # raises InvalidSchemaError if invalid
    except InvalidSchemaError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)

def _require_dialect(dialect: str) -> Dialect:
    try:
        return resolve_dialect(dialect)
    except ValueError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=2)

@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    level = logging.DEBUG if verbose else getattr(logging, get_settings().LOG_LEVEL, logging.INFO)
    logging.basicConfig(level=level)

# ---------------------------
# Commands
# ---------------------------
@app.command(help="Validate a schema JSON file and report integrity issues.")
def validate(
    path: str = typer.Argument("schema.json"),
    strict: bool = typer.Option(False, help="Fail on duplicate names and dangling foreign keys"),
):
    schema = _require_valid_schema(path)
    issues = find_integrity_issues(schema)
    for issue in issues:
        typer.echo(f"⚠️  {issue}")
    if issues and strict:
        raise typer.Exit(code=1)
    typer.echo(f"✅ {path} is valid ({len(schema.tables)} tables).")

@app.command(help="Write SQL (3 dialects), Prisma and Drizzle files for a schema.")
def export(
    path: str = typer.Argument("schema.json"),
    out: str = typer.Option(".", help="Output directory"),
    stem: str = typer.Option("schema", help="Base file name"),
):
    schema = _require_valid_schema(path)
    written = write_exports(generate_all_code_formats(schema), out, stem=stem)
    for p in written:
        typer.echo(f"✅ {p}")

@app.command(help="Print one generated artifact.")
def show(
    path: str = typer.Argument("schema.json"),
    fmt: str = typer.Option("sql", "--format", "-f", help="sql | prisma | drizzle"),
    dialect: str = typer.Option(None, help="postgresql | mysql | sqlite (sql only)"),
):
    schema = _require_valid_schema(path)
    # dialect only matters for sql
    di = dialect or get_settings().DIALECT
    try:
        text = artifact_text(generate_all_code_formats(schema), fmt, di)
    except ValueError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=2)
    typer.echo(text)

@app.command(help="Print a one-line-per-table summary of a schema.")
def describe(path: str = typer.Argument("schema.json")):
    schema = _require_valid_schema(path)
    typer.echo(summarize_tables(schema))

@app.command("verify-ddl", help="Run the generated DDL against a database and diff the result.")
def verify_ddl_cmd(
    path: str = typer.Argument("schema.json"),
    dialect: str = typer.Option("sqlite", help="postgresql | mysql | sqlite"),
    database_url: str = typer.Option(None, help="Defaults to DATABASE_URL (in-memory sqlite)"),
):
    schema = _require_valid_schema(path)
    di = _require_dialect(dialect)
    try:
        diff = verify_ddl(schema, di, database_url=database_url)
    except DDLVerificationError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)
    except DBAPIError as e:
        typer.echo(f"❌ DDL failed: {e.orig}")
        raise typer.Exit(code=1)
    typer.echo(diff.format_plan())
    if diff.has_changes:
        raise typer.Exit(code=1)
    typer.echo(f"✅ DDL applied cleanly (dialect={di.value})")

@app.command(help="Serve the codegen HTTP API with uvicorn.")
def serve(
    host: str = typer.Option("127.0.0.1"),
    port: int = typer.Option(8000),
    reload: bool = typer.Option(False, help="Auto-reload on code changes (dev only)"),
):
    uvicorn.run("engine.main:app", host=host, port=port, reload=reload, log_level=get_settings().LOG_LEVEL.lower())

if __name__ == "__main__":
    app()
