import pytest

from sqlgen.casing import singularize, to_pascal_case, to_snake_case


@pytest.mark.parametrize(
    "text, expected",
    [
        ("test_table_0", "TestTable0"),
        ("todo_status", "TodoStatus"),
        ("in_progress", "InProgress"),
        ("my_custom_enum", "MyCustomEnum"),
        ("first_variant", "FirstVariant"),
        ("other_todos_table", "OtherTodosTable"),
        ("examples", "Examples"),
        ("red", "Red"),
    ],
)
def test_to_pascal_case(text, expected):
    assert to_pascal_case(text) == expected


@pytest.mark.parametrize("text, expected", [("Mood", "mood"), ("Product", "product")])
def test_to_snake_case_single_word(text, expected):
    assert to_snake_case(text) == expected


@pytest.mark.parametrize(
    "text", ["TodoStatus", "OtherTodosTable", "MyCustomEnum", "InProgress"]
)
def test_pascal_snake_round_trip(text):
    assert to_pascal_case(to_snake_case(text)) == text


@pytest.mark.parametrize("text", ["parent_id", "order_status", "description"])
def test_snake_case_is_stable(text):
    assert to_snake_case(text) == text
    assert to_snake_case(to_pascal_case(text)) == text


def test_snake_case_has_no_uppercase():
    result = to_snake_case("OtherTodosTable")
    assert result == result.lower()
    assert result.count("_") == 2


@pytest.mark.parametrize(
    "word, expected",
    [
        ("Products", "Product"),
        ("Inventories", "Inventory"),
        ("Todos", "Todo"),
        ("products", "product"),
        ("Orders", "Order"),
    ],
)
def test_singularize_plurals(word, expected):
    assert singularize(word) == expected


@pytest.mark.parametrize(
    "word",
    ["TestTable0", "OtherTodosTable", "Simple", "Palette", "TableOne", "status", "Customer"],
)
def test_singularize_leaves_singulars(word):
    assert singularize(word) == word


def test_singularize_uncountable():
    assert singularize("news") == "news"


def test_singularize_empty():
    assert singularize("") == ""


def test_singularize_keeps_leading_capital():
    result = singularize("Categories")
    assert result[0].isupper()
    assert result[1:] == result[1:].lower()
    assert singularize("categories") == result.lower()