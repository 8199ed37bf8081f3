"""Data models describing database schemas and the generated Rust items."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Mode(Enum):
    """Flavour of code generation."""

    SQLX = "sqlx"
    DBSET = "dbset"


class DatabaseType(Enum):
    """Supported database back ends."""

    POSTGRES = "postgres"
    MYSQL = "mysql"


@dataclass
class TableColumn:
    """A column as read from the database catalogue."""

    column_name: str
    udt_name: str
    data_type: str
    recommended_rust_type: str | None = None
    column_comment: str | None = None
    is_nullable: bool = False
    array_depth: int = 0
    is_unique: bool = False
    is_primary_key: bool = False
    foreign_key_table: str | None = None
    foreign_key_id: str | None = None
    is_auto_populated: bool = False


@dataclass
class Table:
    """A table and its columns in declaration order."""

    table_name: str
    table_comment: str | None = None
    table_schema: str | None = None
    columns: list[TableColumn] = field(default_factory=list)


@dataclass
class CustomEnumVariant:
    """One label of a database enum."""

    name: str = ""


@dataclass
class CustomEnum:
    """A database enum type.

    ``type_name`` is only set for Postgres enums; ``child_of_table`` only for
    MySQL column enums, which belong to the table they are declared in.
    """

    name: str = ""
    type_name: str | None = None
    child_of_table: str | None = None
    schema: str | None = None
    variants: list[CustomEnumVariant] = field(default_factory=list)
    comments: str | None = None


@dataclass
class RustAttributeArg:
    """An argument inside an attribute, either ``name`` or ``name = "value"``."""

    name: str = ""
    value: str | None = None


@dataclass
class RustAttribute:
    """An outer attribute such as ``#[sqlx(rename = "x")]``."""

    attribute_name: str = ""
    attribute_args: list[RustAttributeArg] = field(default_factory=list)


@dataclass
class RustField:
    """A field of a generated struct."""

    field_name: str = ""
    field_type: str = ""
    is_optional: bool = False
    array_depth: int = 0
    attributes: list[RustAttribute] = field(default_factory=list)
    comment: str | None = None


@dataclass
class RustStruct:
    """A generated struct."""

    name: str = ""
    derives: list[str] = field(default_factory=list)
    attributes: list[RustAttribute] = field(default_factory=list)
    fields: list[RustField] = field(default_factory=list)
    comment: str | None = None


@dataclass
class RustEnumVariant:
    """A variant of a generated enum."""

    name: str = ""
    attributes: list[RustAttribute] = field(default_factory=list)


@dataclass
class RustEnum:
    """A generated enum."""

    name: str = ""
    comment: str | None = None
    derives: list[str] = field(default_factory=list)
    attributes: list[RustAttribute] = field(default_factory=list)
    variants: list[RustEnumVariant] = field(default_factory=list)


def dbset_attribute_with_table_name(table_name: str) -> RustAttribute:
    """``#[dbset(table_name = "...")]``."""
    return RustAttribute("dbset", [RustAttributeArg("table_name", table_name)])


def auto_attribute() -> RustAttribute:
    """``#[auto]``."""
    return RustAttribute("auto")


def unique_attribute() -> RustAttribute:
    """``#[unique]``."""
    return RustAttribute("unique")


def key_attribute() -> RustAttribute:
    """``#[key]``."""
    return RustAttribute("key")


def enum_typename_attribute(type_name: str) -> RustAttribute:
    """``#[sqlx(type_name = "...")]``."""
    return RustAttribute("sqlx", [RustAttributeArg("type_name", type_name)])


def enum_variant_rename_attribute(rename_name: str) -> RustAttribute:
    """``#[sqlx(rename = "...")]``."""
    return RustAttribute("sqlx", [RustAttributeArg("rename", rename_name)])