"""Reading struct declarations and their attributes out of Rust source text."""

from __future__ import annotations

import re
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass

from sqlgen.models import RustAttribute, RustAttributeArg, RustStruct

_LEXEME = re.compile(
    r"""
    (?P<space>\s+)
  | (?P<line_comment>//[^\n]*)
  | (?P<literal>
        [bc]?r(?P<hashes>\#*)".*?"(?P=hashes)
      | [bc]?"(?:[^"\\]|\\.)*"
      | b?'(?:[^'\\\n]|\\(?:x[0-9a-fA-F]{2}|u\{[0-9a-fA-F]{1,6}\}|.))'
      | \d\w*(?:\.\d\w*)?
    )
  | (?P<ident>(?:r\#)?[^\W\d]\w*)
  | (?P<punct>[^\w\s])
    """,
    re.VERBOSE | re.DOTALL,
)
_KINDS = ("space", "line_comment", "literal", "ident", "punct")
_BLOCK_DELIMITERS = re.compile(r"/\*|\*/")
_CLOSERS = {"(": ")", "[": "]", "{": "}"}


@dataclass(frozen=True)
class _Tree:
    kind: str
    text: str
    children: tuple[_Tree, ...] = ()

    def is_punct(self, char: str) -> bool:
        return self.kind == "punct" and self.text == char

    def is_group(self, opener: str) -> bool:
        return self.kind == "group" and self.text == opener

    def __str__(self) -> str:
        if self.kind == "group":
            inner = " ".join(str(child) for child in self.children)
            return f"{self.text}{inner}{_CLOSERS[self.text]}"
        return self.text


def _parse_error(detail: str) -> ValueError:
    return ValueError(f"Failed to parse rust code: {detail}")


def _block_comment_end(text: str, start: int) -> int:
    depth = 0
    for match in _BLOCK_DELIMITERS.finditer(text, start):
        depth += 1 if match.group() == "/*" else -1
        if depth == 0:
            return match.end()
    raise _parse_error("unterminated block comment")


def _is_outer_line_doc(comment: str) -> bool:
    return comment.startswith("///") and not comment.startswith("////")


def _is_outer_block_doc(comment: str) -> bool:
    return comment.startswith("/**") and not comment.startswith("/***") and comment != "/**/"


def _lex(text: str) -> Iterator[tuple[str, str]]:
    pos = 0
    while pos < len(text):
        if text.startswith("/*", pos):
            end = _block_comment_end(text, pos)
            if _is_outer_block_doc(text[pos:end]):
                yield "doc", text[pos:end]
            pos = end
            continue
        match = _LEXEME.match(text, pos)
        if match is None:
            raise _parse_error(f"unexpected input at offset {pos}")
        kind = next(name for name in _KINDS if match.group(name) is not None)
        lexeme = match.group()
        pos = match.end()
        if kind == "space":
            continue
        if kind == "line_comment":
            if _is_outer_line_doc(lexeme):
                yield "doc", lexeme
            continue
        yield kind, lexeme


def _parse_trees(text: str) -> list[_Tree]:
    stack: list[tuple[str, list[_Tree]]] = [("", [])]
    for kind, lexeme in _lex(text):
        if kind == "punct" and lexeme in _CLOSERS:
            stack.append((lexeme, []))
        elif kind == "punct" and lexeme in _CLOSERS.values():
            if len(stack) == 1:
                raise _parse_error(f"unexpected {lexeme!r}")
            opener, children = stack.pop()
            if _CLOSERS[opener] != lexeme:
                raise _parse_error(f"mismatched {lexeme!r}")
            stack[-1][1].append(_Tree("group", opener, tuple(children)))
        else:
            stack[-1][1].append(_Tree(kind, lexeme))
    if len(stack) != 1:
        raise _parse_error("unclosed delimiter")
    return stack[0][1]


def _attribute_args(tokens: list[str]) -> list[RustAttributeArg]:
    args = []
    remaining = iter(tokens)
    for token in remaining:
        eq = next(remaining, None)
        value = next(remaining, None)
        if eq is not None and value is not None:
            if eq == "=":
                args.append(RustAttributeArg(token, value.replace('"', "", 2)))
        else:
            args.append(RustAttributeArg(token))
    return args


def _attribute(contents: tuple[_Tree, ...]) -> RustAttribute:
    tokens = deque(contents)
    path = []
    while tokens and (tokens[0].kind == "ident" or tokens[0].is_punct(":")):
        path.append(tokens.popleft())
    if len(path) != 1 or path[0].kind != "ident":
        raise ValueError(
            "attribute path is not a single identifier: "
            + "".join(str(token) for token in path)
        )
    name = path[0].text
    if len(tokens) == 1 and tokens[0].kind == "group":
        return RustAttribute(name, _attribute_args([str(t) for t in tokens[0].children]))
    if not tokens or tokens[0].is_punct("="):
        return RustAttribute(name)
    raise _parse_error(f"malformed attribute {name!r}")


def _skip_item(tokens: deque[_Tree]) -> None:
    while tokens:
        token = tokens.popleft()
        if token.is_punct(";") or token.is_group("{"):
            return


def get_file_structs(text: str) -> list[RustStruct]:
    """Return every top-level struct in ``text`` with its name and outer attributes."""
    tokens = deque(_parse_trees(text))
    structs = []
    pending: list[RustAttribute] = []
    while tokens:
        token = tokens.popleft()
        if token.kind == "doc":
            pending.append(RustAttribute("doc"))
        elif token.is_punct("#"):
            if tokens and tokens[0].is_punct("!"):
                tokens.popleft()
                if not (tokens and tokens[0].is_group("[")):
                    raise _parse_error("malformed inner attribute")
                tokens.popleft()
                continue
            if not (tokens and tokens[0].is_group("[")):
                raise _parse_error("malformed attribute")
            pending.append(_attribute(tokens.popleft().children))
        elif token.kind == "ident" and token.text == "struct" and tokens and tokens[0].kind == "ident":
            structs.append(RustStruct(name=tokens.popleft().text, attributes=pending))
            pending = []
            _skip_item(tokens)
        elif token.is_punct(";") or token.is_group("{"):
            pending = []
    return structs