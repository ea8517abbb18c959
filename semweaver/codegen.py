"""Combine generated source files into a single file of nested modules."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from semweaver.loggers import InMemoryLogger, LogKind

GENERATED_MARKER = "DO NOT EDIT, THIS FILE HAS BEEN GENERATED BY WEAVER"
GENERATED_FILE_NAME = "generated.rs"
SOURCE_SUFFIX = ".rs"
_ROOT_CONTENT_NAMES = frozenset({"mod", "lib"})


@dataclass
class Module:
    """A module with its own content and nested sub-modules."""

    name: str = ""
    content: str = ""
    sub_modules: dict[str, Module] = field(default_factory=dict)

    def generate(self) -> str:
        """Render the module content followed by its nested sub-modules."""
        parts = [self.content]
        for module in self.sub_modules.values():
            parts.append(f"\npub mod {module.name} {{\n")
            parts.append(module.generate())
            parts.append("\n}\n")
        return "".join(parts)


def add_modules(
    root_module: Module,
    parent_modules: list[str],
    module_name: str,
    module_content: str,
) -> None:
    """Place a module in the hierarchy under ``root_module``.

    Missing parent modules are created. A module named ``mod`` or ``lib``
    becomes the content of its parent instead of a sub-module.
    """
    current = root_module
    for parent in parent_modules:
        current = current.sub_modules.setdefault(parent, Module(name=parent))

    if module_name in _ROOT_CONTENT_NAMES:
        current.content = module_content
    else:
        current.sub_modules[module_name] = Module(name=module_name, content=module_content)


def _lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _prepare_content(text: str) -> str:
    # Nested modules do not accept inner doc comments, and module
    # declarations are replaced by the explicit nesting.
    text = text.replace("//!", "//")
    return "\n".join(line for line in _lines(text) if not line.startswith("pub mod"))


def _source_files(root: Path):
    for directory, dirs, names in os.walk(root):
        dirs.sort()
        for name in sorted(names):
            path = Path(directory, name)
            if path.is_file() and path.suffix == SOURCE_SUFFIX:
                yield path


def create_single_generated_file(root: str | os.PathLike[str]) -> Path:
    """Merge every generated source file under ``root`` into ``generated.rs``.

    Only files holding the generation marker are taken; the result is
    written in ``root`` and its path returned.
    """
    root_path = Path(root)
    root_module = Module()

    for path in _source_files(root_path):
        text = path.read_text(encoding="utf-8")
        if GENERATED_MARKER not in text:
            continue
        file_name = path.stem
        if file_name == "generated":
            continue
        relative = path.relative_to(root_path)
        parents = [part for part in relative.parent.parts if part not in ("", ".")]
        add_modules(root_module, parents, file_name, _prepare_content(text))

    output = root_path / GENERATED_FILE_NAME
    output.write_text(root_module.generate(), encoding="utf-8")
    return output


def build_log_lines(logger: InMemoryLogger) -> list[str]:
    """Warnings and errors of ``logger`` as build-script warning lines."""
    lines: list[str] = []
    for message in logger.messages():
        if message.kind is LogKind.WARN:
            lines.append(f"cargo:warning={message.text}")
        elif message.kind is LogKind.ERROR:
            lines.append(f"cargo:warning=Error: {message.text}")
    return lines