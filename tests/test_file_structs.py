import pytest

from sqlgen.file_structs import get_file_structs
from sqlgen.models import (
    RustAttribute,
    RustAttributeArg,
    RustStruct,
    dbset_attribute_with_table_name,
)


def test_should_parse_simple_struct():
    result = get_file_structs(
        """
    pub struct Customer {
        id: String,
        first_name: String,
        last_name: String
    }
    """
    )
    assert result == [RustStruct(name="Customer")]


def test_should_parse_struct_with_db_set_macro():
    result = get_file_structs(
        """
        #[dbset(table_name = "users")]
        pub struct Customer {
        id: String,
        first_name: String,
        last_name: String
    }
    """
    )
    assert result == [
        RustStruct(name="Customer", attributes=[dbset_attribute_with_table_name("users")])
    ]


def test_other_items_are_ignored_and_do_not_leak_attributes():
    source = """
    use std::collections::{HashMap, HashSet};

    #[dbset(table_name = "orders")]
    fn helper() -> u32 { 1 }

    enum Colour { Red, Blue }

    struct Order {
        id: u32,
    }
    """
    assert get_file_structs(source) == [RustStruct(name="Order")]


def test_tuple_struct_and_following_struct():
    source = """
    pub struct Id(u32);
    #[key]
    struct Thing { a: u8 }
    """
    assert get_file_structs(source) == [
        RustStruct(name="Id"),
        RustStruct(name="Thing", attributes=[RustAttribute("key")]),
    ]


def test_single_derive_argument_is_kept():
    result = get_file_structs("#[derive(Debug)] struct A {}")
    assert result[0].attributes == [RustAttribute("derive", [RustAttributeArg("Debug")])]


def test_comma_separated_tokens_are_skipped_in_pairs():
    result = get_file_structs("#[derive(Debug, Clone)] struct A {}")
    assert result[0].attributes == [RustAttribute("derive", [])]


def test_doc_comments_become_doc_attributes():
    source = """
    //! crate docs
    /// A documented struct
    // an ordinary comment
    /* a block comment */
    pub struct Documented {}
    """
    assert get_file_structs(source) == [
        RustStruct(name="Documented", attributes=[RustAttribute("doc")])
    ]


def test_name_value_attribute_has_no_args():
    result = get_file_structs('#[doc = "hello"] struct A;')
    assert result == [RustStruct(name="A", attributes=[RustAttribute("doc")])]


def test_generic_struct_with_strings_and_lifetimes():
    source = """
    struct Borrowed<'a, T> where T: Clone { name: &'a str, value: T, tag: char }
    const S: &str = "struct Fake {}";
    struct After {}
    """
    assert [s.name for s in get_file_structs(source)] == ["Borrowed", "After"]


def test_multi_segment_attribute_path_raises():
    with pytest.raises(ValueError):
        get_file_structs("#[serde::rename(x)] struct A {}")


@pytest.mark.parametrize(
    "source",
    ["struct A {", "struct A { ) }", 'const S: &str = "open;', "/* never closed"],
)
def test_invalid_source_raises(source):
    with pytest.raises(ValueError):
        get_file_structs(source)