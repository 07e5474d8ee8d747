import sys
from pathlib import Path
from subprocess import run, PIPE

from sqlalchemy import create_engine
from typer.testing import CliRunner

from engine.db import get_settings
from generate.cli import app

ROOT = Path(__file__).resolve().parents[1]
runner = CliRunner()

def test_export_generates_files(tmp_path, shop_schema_path):
    # Run CLI via the same interpreter
    cmd = [sys.executable, "-m", "generate.cli", "export", str(shop_schema_path), f"--out={tmp_path}"]
    proc = run(cmd, stdout=PIPE, stderr=PIPE, text=True, cwd=ROOT)
    assert proc.returncode == 0, f"CLI failed: {proc.stderr}"
    out = tmp_path / "schema.sqlite.sql"
    assert out.exists(), "schema.sqlite.sql not created"
    content = out.read_text(encoding="utf-8")
    assert "CREATE TABLE" in content
    assert (tmp_path / "schema.prisma").exists()
    assert (tmp_path / "schema.ts").exists()

def test_validate(shop_schema_path):
    result = runner.invoke(app, ["validate", str(shop_schema_path)])
    assert result.exit_code == 0
    assert "is valid (2 tables)" in result.output

def test_validate_invalid(tmp_path):
    p = tmp_path / "bad.json"
    p.write_text('{"tables": [{"name": "t"}]}', encoding="utf-8")
    result = runner.invoke(app, ["validate", str(p)])
    assert result.exit_code == 1
    assert "Schema validation failed" in result.output

def test_validate_strict_fails_on_dangling_fk(tmp_path):
    p = tmp_path / "dangling.json"
    p.write_text(
        '{"tables": [{"name": "orders", "columns": [{"name": "user_id", "type": "integer", '
        '"nullable": false, "isPrimaryKey": false, "isForeignKey": true, "foreignKeyTable": "users"}]}]}',
        encoding="utf-8",
    )
    assert runner.invoke(app, ["validate", str(p)]).exit_code == 0
    result = runner.invoke(app, ["validate", str(p), "--strict"])
    assert result.exit_code == 1
    assert "Foreign key to unknown table: orders.user_id -> users" in result.output

def test_show_prisma(shop_schema_path):
    result = runner.invoke(app, ["show", str(shop_schema_path), "--format", "prisma"])
    assert result.exit_code == 0
    assert "model Order_items {" in result.output

def test_show_unknown_dialect(shop_schema_path):
    result = runner.invoke(app, ["show", str(shop_schema_path), "--dialect", "oracle"])
    assert result.exit_code == 2

def test_describe(shop_schema_path):
    result = runner.invoke(app, ["describe", str(shop_schema_path)])
    assert result.exit_code == 0
    assert "- users: id(pk), email, is_active, created_at" in result.output

def test_verify_ddl(shop_schema_path):
    result = runner.invoke(app, ["verify-ddl", str(shop_schema_path), "--database-url", "sqlite://"])
    assert result.exit_code == 0, result.output
    assert "DDL applied cleanly (dialect=sqlite)" in result.output

def test_verify_ddl_reports_failed_statement(tmp_path):
    p = tmp_path / "reserved.json"
    p.write_text(
        '{"tables": [{"name": "order", "columns": [{"name": "id", "type": "integer", '
        '"nullable": false, "isPrimaryKey": true}]}]}',
        encoding="utf-8",
    )
    result = runner.invoke(app, ["verify-ddl", str(p), "--database-url", "sqlite://"])
    assert result.exit_code == 1
    assert "❌ DDL failed:" in result.output
    assert "syntax error" in result.output

def test_verify_ddl_reports_existing_tables(tmp_path, shop_schema_path):
    db = tmp_path / "taken.db"
    url = f"sqlite:///{db}"
    assert runner.invoke(app, ["verify-ddl", str(shop_schema_path), "--database-url", url]).exit_code == 0
    # a clean run leaves nothing behind, so it can be repeated
    assert runner.invoke(app, ["verify-ddl", str(shop_schema_path), "--database-url", url]).exit_code == 0

    engine = create_engine(url)
    with engine.begin() as conn:
        conn.exec_driver_sql("CREATE TABLE users (id INTEGER)")
    engine.dispose()
    result = runner.invoke(app, ["verify-ddl", str(shop_schema_path), "--database-url", url])
    assert result.exit_code == 1
    assert "❌ Refusing to verify: tables already exist in target database: users" in result.output

def test_show_prisma_ignores_dialect(shop_schema_path, monkeypatch):
    monkeypatch.setattr(get_settings(), "DIALECT", "oracle")
    result = runner.invoke(app, ["show", str(shop_schema_path), "--format", "prisma"])
    assert result.exit_code == 0
    result = runner.invoke(app, ["show", str(shop_schema_path), "--format", "drizzle", "--dialect", "oracle"])
    assert result.exit_code == 0
    assert "pgTable('users'" in result.output

def test_serve_runs_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr("generate.cli.uvicorn.run", lambda *a, **kw: calls.append((a, kw)))
    result = runner.invoke(app, ["serve", "--port", "9001"])
    assert result.exit_code == 0
    assert calls[0][0] == ("engine.main:app",)
    assert calls[0][1]["port"] == 9001
    assert calls[0][1]["host"] == "127.0.0.1"
