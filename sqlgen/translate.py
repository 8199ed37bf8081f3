"""Translation of database schema models into Rust item models."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from sqlgen.casing import singularize, to_pascal_case, to_snake_case
from sqlgen.models import (
    CustomEnum,
    Mode,
    RustEnum,
    RustEnumVariant,
    RustField,
    RustStruct,
    Table,
    TableColumn,
    auto_attribute,
    dbset_attribute_with_table_name,
    enum_typename_attribute,
    enum_variant_rename_attribute,
    key_attribute,
    unique_attribute,
)

_MODE_MODEL_DERIVE = {
    Mode.SQLX: "sqlx::FromRow",
    Mode.DBSET: "db_set_macros::DbSet",
}

_DEFAULT_ENUM_DERIVES = ("Debug", "Clone", "PartialEq", "sqlx::Type")


def _warn(message: str) -> None:
    print(message, file=sys.stderr)


@dataclass
class ColumnToFieldOptions:
    """Overrides applied when turning one column into a field."""

    override_name: str | None = None
    override_type: str | None = None
    mode: Mode = Mode.SQLX


@dataclass
class CodegenOptions:
    """Settings that steer the whole code generation run."""

    mode: Mode = Mode.SQLX
    override_name: dict[str, str] = field(default_factory=dict)
    struct_derives: list[str] = field(default_factory=list)
    enum_derives: list[str] = field(default_factory=list)
    table_column_overrides: dict[tuple[str, str], ColumnToFieldOptions] = field(
        default_factory=dict
    )
    column_overrides: dict[str, ColumnToFieldOptions] = field(default_factory=dict)
    type_overrides: dict[str, ColumnToFieldOptions] = field(default_factory=dict)

    def add_table_column_override(
        self, table_name: str, column_name: str, options: ColumnToFieldOptions
    ) -> None:
        """Override one column of one table."""
        self.table_column_overrides[(table_name, column_name)] = options

    def add_column_override(self, column_name: str, options: ColumnToFieldOptions) -> None:
        """Override every column of this name, in any table."""
        self.column_overrides[column_name] = options

    def add_type_override(self, type_name: str, options: ColumnToFieldOptions) -> None:
        """Override every column of this database type."""
        self.type_overrides[type_name] = options

    def _type_option(self, override_type: str) -> ColumnToFieldOptions:
        return ColumnToFieldOptions(override_type=override_type, mode=self.mode)

    def set_type_overrides_from_arg(self, type_overrides: Iterable[str]) -> None:
        """Read ``type=RustType`` entries."""
        for entry in type_overrides:
            parts = entry.split("=")
            if len(parts) < 2:
                continue
            qualifier, override_type = parts[0], parts[1]
            if "." in qualifier:
                _warn("Warning: no support for <schema>.<type> syntax just yet")
            else:
                self.add_type_override(qualifier, self._type_option(override_type))

    def set_table_column_overrides_from_arg(self, table_overrides: Iterable[str]) -> None:
        """Read ``column=RustType`` and ``table.column=RustType`` entries."""
        for entry in table_overrides:
            parts = entry.split("=")
            if len(parts) < 2:
                continue
            qualifier, override_type = parts[0], parts[1]
            if "." in qualifier:
                table_name, column_name = qualifier.split(".")[:2]
                self.add_table_column_override(
                    table_name, column_name, self._type_option(override_type)
                )
            else:
                self.add_column_override(qualifier, self._type_option(override_type))

    def set_model_derives(self, derives: Iterable[str] | None) -> None:
        """Use the given struct derives, or the defaults for the current mode."""
        if derives is None:
            self.struct_derives = ["Debug", "Clone", _MODE_MODEL_DERIVE[self.mode]]
        else:
            self.struct_derives = list(derives)

    def set_enum_derives(self, derives: Iterable[str] | None) -> None:
        """Use the given enum derives, or the defaults."""
        self.enum_derives = list(_DEFAULT_ENUM_DERIVES if derives is None else derives)

    def add_enums(self, enums: Iterable[CustomEnum]) -> None:
        """Map each enum's database type to its generated Rust enum name.

        Types the user has already overridden are left alone.
        """
        for custom_enum in enums:
            if custom_enum.name in self.type_overrides:
                continue
            rust_enum = convert_db_enum_to_rust_enum(custom_enum, self)
            self.type_overrides[custom_enum.name] = self._type_option(rust_enum.name)


def convert_column_to_field(
    column: TableColumn, options: ColumnToFieldOptions
) -> RustField | None:
    """Build a field for a column, or None when no Rust type is known for it."""
    field_name = (
        options.override_name
        if options.override_name is not None
        else to_snake_case(column.column_name)
    )
    field_type = (
        options.override_type
        if options.override_type is not None
        else column.recommended_rust_type
    )
    if field_type is None:
        return None

    attributes = []
    if options.mode is Mode.DBSET:
        if column.is_auto_populated:
            attributes.append(auto_attribute())
        if column.is_primary_key:
            attributes.append(key_attribute())
        elif column.is_unique:
            attributes.append(unique_attribute())

    return RustField(
        field_name=field_name,
        field_type=field_type,
        is_optional=column.is_nullable,
        array_depth=column.array_depth,
        attributes=attributes,
        comment=column.column_comment,
    )


def convert_db_enum_to_rust_enum(custom_enum: CustomEnum, options: CodegenOptions) -> RustEnum:
    """Build the Rust enum for a database enum."""
    if custom_enum.child_of_table is not None:
        parent = to_pascal_case(singularize(custom_enum.child_of_table))
        name = parent + to_pascal_case(custom_enum.name)
    else:
        name = to_pascal_case(custom_enum.name)

    attributes = (
        [enum_typename_attribute(custom_enum.type_name)]
        if custom_enum.type_name is not None
        else []
    )
    variants = [
        RustEnumVariant(
            name=to_pascal_case(variant.name),
            attributes=[enum_variant_rename_attribute(variant.name)],
        )
        for variant in custom_enum.variants
    ]
    derives = list(options.enum_derives) if options.enum_derives else ["sqlx::Type"]

    return RustEnum(
        name=name,
        comment=custom_enum.comments,
        derives=derives,
        attributes=attributes,
        variants=variants,
    )


def convert_db_enums_to_rust_enums(
    custom_enums: Iterable[CustomEnum], options: CodegenOptions
) -> list[RustEnum]:
    """Build the Rust enums for several database enums."""
    return [convert_db_enum_to_rust_enum(e, options) for e in custom_enums]


def _column_options(
    table: Table, column: TableColumn, options: CodegenOptions
) -> ColumnToFieldOptions:
    chosen = (
        options.table_column_overrides.get((table.table_name, column.column_name))
        or options.column_overrides.get(column.column_name)
        or options.type_overrides.get(column.udt_name)
    )
    if chosen is None:
        return ColumnToFieldOptions(mode=options.mode)
    return replace(chosen, mode=options.mode)


def convert_table_to_struct(table: Table, options: CodegenOptions) -> RustStruct:
    """Build the Rust struct for a table, dropping columns of unknown type."""
    default_name = singularize(to_pascal_case(table.table_name))
    struct_name = options.override_name.get(table.table_name, default_name)

    fields = []
    for column in table.columns:
        rust_field = convert_column_to_field(column, _column_options(table, column, options))
        if rust_field is None:
            _warn(
                f"WARNING: field {column.column_name} in table {table.table_name} "
                f"has no user-defined type or recommended type for {column.udt_name}"
            )
        else:
            fields.append(rust_field)

    attributes = (
        [dbset_attribute_with_table_name(table.table_name)]
        if options.mode is Mode.DBSET
        else []
    )
    return RustStruct(
        name=struct_name,
        derives=list(options.struct_derives),
        attributes=attributes,
        fields=fields,
        comment=table.table_comment,
    )


def convert_tables_to_structs(
    tables: Iterable[Table], options: CodegenOptions
) -> list[RustStruct]:
    """Build the Rust structs for several tables."""
    return [convert_table_to_struct(table, options) for table in tables]