"""Reading enums and tables from a Postgres catalogue."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from sqlalchemy import text

from sqlgen.models import CustomEnum, CustomEnumVariant, Table, TableColumn

_TYPE_MAP = {
    "bool": "bool",
    "boolean": "bool",
    "bytea": "u8",
    "char": "String",
    "bpchar": "String",
    "character": "String",
    "date": "chrono::NaiveDate",
    "float4": "f32",
    "real": "f32",
    "float8": "f64",
    "double precision": "f64",
    "int2": "i16",
    "smallint": "i16",
    "smallserial": "i16",
    "int4": "i32",
    "int": "i32",
    "serial": "i32",
    "int8": "i64",
    "bigint": "i64",
    "bigserial": "i64",
    "void": "()",
    "jsonb": "serde_json::Value",
    "json": "serde_json::Value",
    "text": "String",
    "varchar": "String",
    "name": "String",
    "time": "chrono::NaiveTime",
    "timestamp": "chrono::NaiveDateTime",
    "timestamptz": "chrono::DateTime<chrono::Utc>",
    "uuid": "uuid::Uuid",
    "cube": "sqlx::postgres::types::PgCube",
    "point": "sqlx::postgres::types::PgPoint",
    "line": "sqlx::postgres::types::PgLine",
    "money": "sqlx::postgres::types::PgMoney",
    "interval": "sqlx::postgres::types::PgInterval",
    "ltree": "sqlx::postgres::types::PgLTree",
    "lquery": "sqlx::postgres::types::PgLQuery",
    "citext": "sqlx::postgres::types::PgCiText",
    "hstore": "sqlx::postgres::types::PgHstore",
    "bit": "bit_vec::BitVec",
    "varbit": "bit_vec::BitVec",
    "macaddr": "mac_address::MacAddress",
}

ENUMS_QUERY = """
SELECT
    n.nspname AS schema,
    t.typname AS enum_type,
    e.enumlabel AS enum_value,
    d.description AS enum_type_comment
FROM
    pg_type t
    JOIN pg_enum e ON t.oid = e.enumtypid
    JOIN pg_catalog.pg_namespace n ON n.oid = t.typnamespace
    LEFT JOIN pg_description d
        ON d.objoid = t.oid AND d.objsubid = 0
WHERE
    n.nspname NOT IN ('pg_catalog', 'information_schema')
ORDER BY
    schema, enum_type, e.enumsortorder
"""

TABLES_QUERY = """
SELECT
    c.table_name,
    c.column_name,
    c.udt_name,
    c.data_type,
    c.table_schema,
    c.is_nullable = 'YES' AS is_nullable,
    CASE WHEN kcu.column_name IS NOT NULL THEN TRUE ELSE FALSE END AS is_primary_key,
    CASE WHEN u.column_name IS NOT NULL THEN TRUE ELSE FALSE END AS is_unique,
    f.foreign_table_name AS foreign_key_table,
    f.foreign_column_name AS foreign_key_id,
    col_description(cls.oid, c.ordinal_position) AS column_comment,
    obj_description(cls.oid) AS table_comment,
    CASE
         WHEN c.column_default IS NOT NULL
              OR c.is_identity = 'YES'
              OR c.is_generated = 'ALWAYS'
         THEN TRUE
         ELSE FALSE
    END AS is_auto_populated,
    a.attndims AS array_depth
FROM
    information_schema.columns c
    JOIN pg_catalog.pg_namespace n ON n.nspname = c.table_schema
    JOIN pg_catalog.pg_class cls ON cls.relname = c.table_name
        AND cls.relnamespace = n.oid
    LEFT JOIN pg_catalog.pg_attribute a
        ON a.attrelid = cls.oid
        AND a.attnum = c.ordinal_position
LEFT JOIN
    (
        SELECT tc.table_schema, tc.table_name, kcu.column_name
        FROM information_schema.table_constraints AS tc
        JOIN information_schema.key_column_usage AS kcu
            ON tc.constraint_schema = kcu.constraint_schema
            AND tc.constraint_name = kcu.constraint_name
        WHERE tc.constraint_type = 'PRIMARY KEY'
    ) AS kcu
        ON c.table_schema = kcu.table_schema
        AND c.table_name = kcu.table_name
        AND c.column_name = kcu.column_name
LEFT JOIN
    (
        SELECT tc.table_schema, tc.table_name, kcu.column_name
        FROM information_schema.table_constraints AS tc
        JOIN information_schema.key_column_usage AS kcu
            ON tc.constraint_schema = kcu.constraint_schema
            AND tc.constraint_name = kcu.constraint_name
        WHERE tc.constraint_type = 'UNIQUE'
    ) AS u
        ON c.table_schema = u.table_schema
        AND c.table_name = u.table_name
        AND c.column_name = u.column_name
LEFT JOIN
    (
        SELECT
            tc.table_schema,
            tc.table_name,
            kcu.column_name,
            ccu.table_name AS foreign_table_name,
            ccu.column_name AS foreign_column_name
        FROM information_schema.table_constraints AS tc
        JOIN information_schema.key_column_usage AS kcu
            ON tc.constraint_schema = kcu.constraint_schema
            AND tc.constraint_name = kcu.constraint_name
        JOIN information_schema.constraint_column_usage AS ccu
            ON ccu.constraint_schema = tc.constraint_schema
            AND ccu.constraint_name = tc.constraint_name
        WHERE tc.constraint_type = 'FOREIGN KEY'
    ) AS f
        ON c.table_schema = f.table_schema
        AND c.table_name = f.table_name
        AND c.column_name = f.column_name
WHERE
    c.table_schema = ANY(CAST(:schemas AS text[]))
    AND c.table_name != '_sqlx_migrations'
    AND (CAST(:table_names AS text[]) IS NULL
         OR c.table_name = ANY(CAST(:table_names AS text[])))
ORDER BY
    c.table_name,
    c.ordinal_position
"""


def convert_data_type(udt_type: str) -> str | None:
    """Return the recommended Rust type for a Postgres type, or None if unknown.

    Array types (prefixed with ``_``) map to their element type.
    """
    if "char(" in udt_type.lower():
        return "String"
    if udt_type.startswith("_"):
        return convert_data_type(udt_type[1:])
    return _TYPE_MAP.get(udt_type)


def column_from_row(row: Mapping[str, Any]) -> TableColumn:
    """Build a column from one row of the tables query."""
    return TableColumn(
        column_name=row["column_name"],
        udt_name=row["udt_name"],
        data_type=row["data_type"],
        recommended_rust_type=convert_data_type(row["udt_name"]),
        column_comment=row.get("column_comment"),
        is_nullable=bool(row["is_nullable"]),
        array_depth=int(row.get("array_depth") or 0),
        is_unique=bool(row["is_unique"]),
        is_primary_key=bool(row["is_primary_key"]),
        foreign_key_table=row.get("foreign_key_table"),
        foreign_key_id=row.get("foreign_key_id"),
        is_auto_populated=bool(row["is_auto_populated"]),
    )


def group_enum_rows(rows: Iterable[Mapping[str, Any]]) -> list[CustomEnum]:
    """Gather enum label rows into one enum per schema, type and comment."""
    grouped: dict[tuple[str, str, str | None], list[str]] = {}
    for row in rows:
        key = (row["schema"], row["enum_type"], row.get("enum_type_comment"))
        grouped.setdefault(key, []).append(row["enum_value"])
    return [
        CustomEnum(
            name=name,
            type_name=name,
            schema=schema,
            child_of_table=None,
            comments=comment,
            variants=[CustomEnumVariant(value) for value in values],
        )
        for (schema, name, comment), values in grouped.items()
    ]


def group_table_rows(rows: Iterable[Mapping[str, Any]]) -> list[Table]:
    """Gather column rows into one table per name, schema and comment."""
    grouped: dict[tuple[str, str, str | None], list[TableColumn]] = {}
    for row in rows:
        key = (row["table_name"], row["table_schema"], row.get("table_comment"))
        grouped.setdefault(key, []).append(column_from_row(row))
    return [
        Table(
            table_name=table_name,
            table_schema=table_schema,
            table_comment=table_comment,
            columns=columns,
        )
        for (table_name, table_schema, table_comment), columns in grouped.items()
    ]


def get_enums(connection: Any) -> list[CustomEnum]:
    """Read every user enum type through a SQLAlchemy connection."""
    result = connection.execute(text(ENUMS_QUERY))
    return group_enum_rows(result.mappings().all())


def get_tables(
    connection: Any, schemas: Sequence[str], table_names: Sequence[str] | None
) -> list[Table]:
    """Read the tables of the given schemas, limited to ``table_names`` if given."""
    parameters = {
        "schemas": list(schemas),
        "table_names": None if table_names is None else list(table_names),
    }
    result = connection.execute(text(TABLES_QUERY), parameters)
    return group_table_rows(result.mappings().all())