import pytest

from sqlgen.models import (
    CustomEnum,
    CustomEnumVariant,
    DatabaseType,
    Mode,
    RustAttribute,
    RustAttributeArg,
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


def test_mode_lookup_by_value():
    assert Mode("dbset") is Mode.DBSET
    assert Mode("sqlx") is Mode.SQLX


def test_mode_rejects_unknown_value():
    with pytest.raises(ValueError):
        Mode("orm")


def test_database_type_rejects_unknown_value():
    with pytest.raises(ValueError):
        DatabaseType("oracle")


def test_table_column_defaults():
    column = TableColumn("title", "text", "text", "String")
    assert column.recommended_rust_type == "String"
    assert column.is_nullable is False
    assert column.is_unique is False
    assert column.is_primary_key is False
    assert column.is_auto_populated is False
    assert column.array_depth == 0
    assert column.foreign_key_table is None
    assert column.foreign_key_id is None
    assert column.column_comment is None


def test_table_column_equality_depends_on_flags():
    plain = TableColumn("id", "int4", "integer", "i32")
    keyed = TableColumn("id", "int4", "integer", "i32", is_primary_key=True)
    assert plain == TableColumn("id", "int4", "integer", "i32")
    assert not plain == keyed


def test_tables_do_not_share_column_lists():
    first = Table("products")
    second = Table("orders")
    first.columns.append(TableColumn("id", "int4", "integer"))
    assert second.columns == []
    assert len(first.columns) == 1


def test_custom_enum_holds_variants_in_order():
    custom = CustomEnum(
        name="mood",
        type_name="mood",
        schema="public",
        variants=[CustomEnumVariant("sad"), CustomEnumVariant("ok"), CustomEnumVariant("happy")],
    )
    assert [v.name for v in custom.variants] == ["sad", "ok", "happy"]
    assert custom.child_of_table is None
    assert custom.comments is None


def test_dbset_attribute():
    attr = dbset_attribute_with_table_name("users")
    assert attr == RustAttribute(
        attribute_name="dbset",
        attribute_args=[RustAttributeArg(name="table_name", value="users")],
    )


@pytest.mark.parametrize(
    "factory, name",
    [(auto_attribute, "auto"), (key_attribute, "key"), (unique_attribute, "unique")],
)
def test_flag_attributes_have_no_args(factory, name):
    attr = factory()
    assert attr.attribute_name == name
    assert attr.attribute_args == []


def test_flag_attributes_are_fresh_objects():
    first = key_attribute()
    first.attribute_args.append(RustAttributeArg("x"))
    assert key_attribute().attribute_args == []


def test_enum_typename_attribute():
    attr = enum_typename_attribute("weather")
    assert attr.attribute_name == "sqlx"
    assert attr.attribute_args == [RustAttributeArg("type_name", "weather")]


def test_enum_variant_rename_attribute():
    attr = enum_variant_rename_attribute("happy")
    assert attr.attribute_name == "sqlx"
    assert attr.attribute_args == [RustAttributeArg("rename", "happy")]


def test_rust_struct_defaults_compare_equal():
    assert RustStruct(name="Customer") == RustStruct(name="Customer", derives=[], fields=[])
    assert RustStruct(name="Customer").comment is None


def test_rust_field_defaults():
    rust_field = RustField(field_name="id", field_type="Uuid")
    assert rust_field.is_optional is False
    assert rust_field.array_depth == 0
    assert rust_field.attributes == []


def test_rust_enum_with_variants():
    rust_enum = RustEnum(
        name="Mood",
        variants=[RustEnumVariant("Happy"), RustEnumVariant("Sadge")],
    )
    assert [v.name for v in rust_enum.variants] == ["Happy", "Sadge"]
    assert rust_enum.derives == []
    assert rust_enum.attributes == []