import pytest

from sqlgen.models import RustEnum, RustEnumVariant, RustField, RustStruct
from sqlgen.writer import EnumFile, ModelWriter, StructFile


@pytest.fixture
def mood():
    return RustEnum(
        name="Mood",
        variants=[RustEnumVariant(name="Happy"), RustEnumVariant(name="Sadge")],
    )


@pytest.fixture
def product():
    return RustStruct(
        name="Product", fields=[RustField(field_name="id", field_type="Uuid")]
    )


def test_should_store_enums_and_structs(mood, product):
    writer = ModelWriter()
    writer.add_enum(mood)
    writer.add_struct(product)
    assert writer == ModelWriter(
        enum_files=[EnumFile(name="mood", content=mood)],
        struct_files=[StructFile(name="product", content=product)],
    )


def test_structs_are_sorted_by_module_name():
    writer = ModelWriter()
    writer.add_struct(RustStruct(name="Zebra")).add_struct(RustStruct(name="TestTable"))
    assert [f.name for f in writer.struct_files] == ["test_table", "zebra"]


def test_unused_enum_is_left_out(mood, product):
    writer = ModelWriter().add_enum(mood).add_struct(product)
    assert writer.write_to_string() == "\npub struct Product {\n    id: Uuid,\n}\n"


def _writer_with_used_enum():
    writer = ModelWriter()
    writer.add_enum(RustEnum(name="Mood", variants=[RustEnumVariant(name="Happy")]))
    writer.add_struct(
        RustStruct(name="Product", fields=[RustField(field_name="mood", field_type="Mood")])
    )
    return writer


def test_used_enum_comes_first():
    assert _writer_with_used_enum().write_to_string() == (
        "\npub enum Mood {\n    Happy,\n}\n"
        "\npub struct Product {\n    mood: Mood,\n}\n"
    )


def test_write_to_stdout(capsys):
    _writer_with_used_enum().write_to_stdout()
    output = capsys.readouterr().out
    assert output.strip().startswith("pub enum Mood {")
    assert output.strip().endswith("}")


def test_write_to_file(tmp_path):
    target = tmp_path / "models.rs"
    writer = _writer_with_used_enum()
    writer.write_to_file(target)
    assert target.read_text(encoding="utf-8") == writer.write_to_string()


def test_write_to_directory(tmp_path):
    output = tmp_path / "models"
    _writer_with_used_enum().write_to_directory(output)

    assert (output / "product.rs").read_text(encoding="utf-8") == (
        "use super::Mood;\n\npub struct Product {\n    mood: Mood,\n}\n"
    )
    assert (output / "mood.rs").read_text(encoding="utf-8") == (
        "pub enum Mood {\n    Happy,\n}\n"
    )
    assert (output / "mod.rs").read_text(encoding="utf-8") == (
        "pub mod product;\npub use product::*;\npub mod mood;\npub use mood::*;\n"
    )


def test_optional_dependency_is_imported(tmp_path):
    writer = ModelWriter()
    writer.add_struct(RustStruct(name="Customer"))
    writer.add_struct(
        RustStruct(
            name="Order",
            fields=[RustField(field_name="buyer", field_type="Customer", is_optional=True)],
        )
    )
    writer.write_to_directory(tmp_path)
    assert (tmp_path / "order.rs").read_text(encoding="utf-8").startswith(
        "use super::Customer;\n\n"
    )
    assert (tmp_path / "customer.rs").read_text(encoding="utf-8") == "pub struct Customer {}\n"