"""Collecting generated items and writing them out as Rust source."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from itertools import chain
from pathlib import Path

from sqlgen.casing import to_snake_case
from sqlgen.models import RustEnum, RustStruct
from sqlgen.render import render_enum, render_struct


@dataclass
class StructFile:
    """A struct and the module name it is written under."""

    name: str
    content: RustStruct


@dataclass
class EnumFile:
    """An enum and the module name it is written under."""

    name: str
    content: RustEnum


def _dependencies(own_name: str, content: str, known_types: Iterable[str]) -> list[str]:
    return sorted(
        type_name
        for type_name in known_types
        if type_name != own_name
        and (f": {type_name}" in content or f": Option<{type_name}>" in content)
    )


@dataclass
class ModelWriter:
    """Holds generated enums and structs and writes them out."""

    enum_files: list[EnumFile] = field(default_factory=list)
    struct_files: list[StructFile] = field(default_factory=list)

    def add_enum(self, rust_enum: RustEnum) -> ModelWriter:
        """Add an enum."""
        self.enum_files.append(EnumFile(to_snake_case(rust_enum.name), rust_enum))
        return self

    def add_struct(self, rust_struct: RustStruct) -> ModelWriter:
        """Add a struct, keeping structs ordered by module name."""
        self.struct_files.append(StructFile(to_snake_case(rust_struct.name), rust_struct))
        self.struct_files.sort(key=lambda struct_file: struct_file.name)
        return self

    def write_to_string(self) -> str:
        """Render the enums used by some struct, then all structs, as one text."""
        used_types = {
            rust_field.field_type
            for struct_file in self.struct_files
            for rust_field in struct_file.content.fields
        }
        items = [
            render_enum(enum_file.content)
            for enum_file in self.enum_files
            if enum_file.content.name in used_types
        ]
        items.extend(render_struct(struct_file.content) for struct_file in self.struct_files)
        return "".join(f"\n{item}" for item in items)

    def write_to_stdout(self) -> str:
        """Write the rendered text and a newline to standard output and return the text."""
        rendered = self.write_to_string()
        sys.stdout.write(f"{rendered}\n")
        sys.stdout.flush()
        return rendered

    def write_to_file(self, filename: str | Path) -> None:
        """Write the rendered text to a single file."""
        Path(filename).write_text(self.write_to_string(), encoding="utf-8")

    def write_to_directory(self, output_dir: str | Path) -> None:
        """Write one file per item plus a ``mod.rs`` that re-exports them all."""
        directory = Path(output_dir)
        directory.mkdir(parents=True, exist_ok=True)

        known_types = {f.content.name for f in self.struct_files}
        known_types.update(f.content.name for f in self.enum_files)

        entries = chain(
            ((f.name, f.content.name, render_struct(f.content)) for f in self.struct_files),
            ((f.name, f.content.name, render_enum(f.content)) for f in self.enum_files),
        )
        module_lines = []
        for module_name, item_name, content in entries:
            dependencies = _dependencies(item_name, content, known_types)
            imports = "".join(f"use super::{dep};\n" for dep in dependencies)
            if dependencies:
                imports += "\n"
            (directory / f"{module_name}.rs").write_text(imports + content, encoding="utf-8")
            module_lines.append(f"pub mod {module_name};\n")
            module_lines.append(f"pub use {module_name}::*;\n")

        (directory / "mod.rs").write_text("".join(module_lines), encoding="utf-8")