from engine.drizzle_schema import DRIZZLE_IMPORT, generate_drizzle_schema
from engine.meta_models import Schema, Table
from engine.prisma_schema import generate_prisma_schema

from conftest import col

def test_empty_schema_is_import_line_only(empty_schema):
    assert generate_drizzle_schema(empty_schema) == DRIZZLE_IMPORT
    assert DRIZZLE_IMPORT.startswith("import { pgTable, serial, varchar")

def test_table_block():
    schema = Schema(tables=[
        Table(name="users", columns=[
            col("id", "integer", pk=True),
            col("age", "integer", nullable=True),
            col("email", "string"),
            col("created_at", "timestamp"),
        ]),
    ])
    assert generate_drizzle_schema(schema) == DRIZZLE_IMPORT + (
        "export const users = pgTable('users', {\n"
        "  id: serial().primaryKey().notNull(),\n"
        "  age: serial(),\n"
        "  email: varchar(255).notNull(),\n"
        "  created_at: timestamp().defaultNow().notNull(),\n"
        "});\n"
    )

def test_builders_for_remaining_types(shop_schema):
    out = generate_drizzle_schema(shop_schema)
    assert "  is_active: boolean(),\n" in out
    assert "  price: decimal('10,2').notNull(),\n" in out
    assert "  attributes: jsonb(),\n" in out
    assert "  id: varchar(255).primaryKey().notNull(),\n" in out
    assert "  notes: varchar(255),\n" in out

def test_text_falls_back_differently_per_orm():
    schema = Schema(tables=[Table(name="posts", columns=[col("body", "text")])])
    assert "  body String\n" in generate_prisma_schema(schema)
    assert "  body: varchar(255).notNull(),\n" in generate_drizzle_schema(schema)

def test_unknown_type_uses_varchar():
    schema = Schema(tables=[Table(name="places", columns=[col("shape", "geometry", nullable=True)])])
    assert "  shape: varchar(255),\n" in generate_drizzle_schema(schema)

def test_tables_in_order(shop_schema):
    out = generate_drizzle_schema(shop_schema)
    assert out.index("export const users") < out.index("export const order_items")
    assert "});\n\nexport const order_items = pgTable('order_items', {\n" in out
