"""Rendering of Rust item models as formatted Rust source text."""

from __future__ import annotations

import re
from collections import deque
from collections.abc import Iterable

from sqlgen.models import RustAttribute, RustAttributeArg, RustEnum, RustField, RustStruct

_INDENT = "    "

_IDENT = re.compile(r"(?:r#)?[^\W\d]\w*")
_PATH_PIECE = re.compile(r"\s*(?:(::|[<>,])|((?:r#)?[^\W\d]\w*))")
_PUNCTUATION = ("::", "<", ">", ",")

_RESERVED_KEYWORDS = frozenset(
    """
    as break const continue crate else enum extern false fn for if impl in let
    loop match mod move mut pub ref return self Self static struct super trait
    true type unsafe use where while async await dyn
    """.split()
)

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def _identifier(name: str) -> str:
    if not _IDENT.fullmatch(name):
        raise ValueError(f"invalid Rust identifier: {name!r}")
    return name


def _string_literal(value: str) -> str:
    def escape(ch: str) -> str:
        if ch in _ESCAPES:
            return _ESCAPES[ch]
        if not ch.isprintable():
            return f"\\u{{{ord(ch):x}}}"
        return ch

    return '"' + "".join(escape(ch) for ch in value) + '"'


def _peek(pieces: deque[str]) -> str | None:
    return pieces[0] if pieces else None


def _take_ident(pieces: deque[str], source: str) -> str:
    piece = _peek(pieces)
    if piece is None or piece in _PUNCTUATION:
        raise ValueError(f"invalid Rust path: {source!r}")
    return pieces.popleft()


def _parse_path(pieces: deque[str], source: str) -> str:
    leading = ""
    if _peek(pieces) == "::":
        pieces.popleft()
        leading = "::"
    segments = []
    while True:
        segment = _take_ident(pieces, source)
        if _peek(pieces) == "::" and len(pieces) > 1 and pieces[1] == "<":
            pieces.popleft()
        if _peek(pieces) == "<":
            pieces.popleft()
            args = []
            while _peek(pieces) != ">":
                args.append(_parse_path(pieces, source))
                if _peek(pieces) == ",":
                    pieces.popleft()
                elif _peek(pieces) != ">":
                    raise ValueError(f"invalid Rust path: {source!r}")
            pieces.popleft()
            segment += "<" + ", ".join(args) + ">"
        segments.append(segment)
        if _peek(pieces) == "::":
            pieces.popleft()
            continue
        return leading + "::".join(segments)


def _normalize_path(text: str) -> str:
    """Check that ``text`` is a Rust path and return it in canonical spacing."""
    stripped = text.strip()
    pieces: deque[str] = deque()
    pos = 0
    while pos < len(stripped):
        match = _PATH_PIECE.match(stripped, pos)
        if match is None:
            raise ValueError(f"invalid Rust path: {text!r}")
        pieces.append(match.group(1) or match.group(2))
        pos = match.end()
    path = _parse_path(pieces, text)
    if pieces:
        raise ValueError(f"invalid Rust path: {text!r}")
    return path


def _render_arg(arg: RustAttributeArg) -> str:
    name = _identifier(arg.name)
    if arg.value is None:
        return name
    return f"{name} = {_string_literal(arg.value)}"


def _render_attribute(attribute: RustAttribute) -> str:
    name = _identifier(attribute.attribute_name)
    if not attribute.attribute_args:
        return f"#[{name}]"
    args = ", ".join(_render_arg(arg) for arg in attribute.attribute_args)
    return f"#[{name}({args})]"


def render_attributes(attributes: Iterable[RustAttribute]) -> str:
    """Render attributes one per line; empty when there are none."""
    return "\n".join(_render_attribute(attribute) for attribute in attributes)


def render_derives(derives: Iterable[str]) -> str:
    """Render a ``#[derive(...)]`` line; empty when there are no derives."""
    paths = [_normalize_path(derive) for derive in derives]
    if not paths:
        return ""
    return f"#[derive({', '.join(paths)})]"


def sanitize_field_name(name: str) -> str:
    """Return the field name, as a raw identifier if it is a keyword."""
    if name in _RESERVED_KEYWORDS:
        return f"r#{name}"
    return _identifier(name)


def _doc_comment(comment: str) -> str:
    doc = f" {comment}"
    if "\n" in doc:
        return f"/**{doc}*/"
    return f"///{doc}"


def _header_lines(comment: str | None, derives: list[str], attributes: list[RustAttribute]) -> list[str]:
    lines = []
    if comment is not None:
        lines.append(_doc_comment(comment))
    derive_line = render_derives(derives)
    if derive_line:
        lines.append(derive_line)
    lines.extend(render_attributes(attributes).splitlines())
    return lines


def _field_type(rust_field: RustField) -> str:
    field_type = _normalize_path(rust_field.field_type)
    for _ in range(rust_field.array_depth):
        field_type = f"Vec<{field_type}>"
    if rust_field.is_optional:
        field_type = f"Option<{field_type}>"
    return field_type


def _body(keyword: str, name: str, member_lines: list[list[str]]) -> list[str]:
    name = _identifier(name)
    if not member_lines:
        return [f"pub {keyword} {name} {{}}"]
    lines = [f"pub {keyword} {name} {{"]
    for member in member_lines:
        lines.extend(_INDENT + line for line in member)
    lines.append("}")
    return lines


def render_struct(rust_struct: RustStruct) -> str:
    """Render a struct definition, ending with a newline."""
    members = [
        [
            *render_attributes(rust_field.attributes).splitlines(),
            f"{sanitize_field_name(rust_field.field_name)}: {_field_type(rust_field)},",
        ]
        for rust_field in rust_struct.fields
    ]
    lines = _header_lines(rust_struct.comment, rust_struct.derives, rust_struct.attributes)
    lines.extend(_body("struct", rust_struct.name, members))
    return "\n".join(lines) + "\n"


def render_enum(rust_enum: RustEnum) -> str:
    """Render an enum definition, ending with a newline."""
    members = [
        [
            *render_attributes(variant.attributes).splitlines(),
            f"{_identifier(variant.name)},",
        ]
        for variant in rust_enum.variants
    ]
    lines = _header_lines(rust_enum.comment, rust_enum.derives, rust_enum.attributes)
    lines.extend(_body("enum", rust_enum.name, members))
    return "\n".join(lines) + "\n"