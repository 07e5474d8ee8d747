from pathlib import Path

import pytest

from engine.meta_models import Column, Schema, Table

FIXTURES = Path(__file__).resolve().parent / "fixtures"

def col(name, type_, nullable=False, pk=False, fk=False, fk_table=None) -> Column:
    return Column(
        name=name,
        type=type_,
        nullable=nullable,
        isPrimaryKey=pk,
        isForeignKey=fk,
        foreignKeyTable=fk_table,
    )

@pytest.fixture
def shop_schema_path() -> Path:
    return FIXTURES / "shop_schema.json"

@pytest.fixture
def shop_schema() -> Schema:
    return Schema(
        tables=[
            Table(name="users", columns=[
                col("id", "integer", pk=True),
                col("email", "string"),
                col("is_active", "boolean", nullable=True),
                col("created_at", "timestamp"),
            ]),
            Table(name="order_items", columns=[
                col("id", "uuid", pk=True),
                col("user_id", "integer", fk=True, fk_table="users"),
                col("price", "decimal"),
                col("notes", "text", nullable=True),
                col("attributes", "json", nullable=True),
            ]),
        ],
        description="A tiny shop",
    )

@pytest.fixture
def empty_schema() -> Schema:
    return Schema(tables=[])
