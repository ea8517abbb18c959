"""Colourised line differences between strings and directories."""

from __future__ import annotations

import difflib
import os
import sys
from pathlib import Path

GREEN = "\x1b[32m"
RED = "\x1b[31m"
RESET = "\x1b[0m"


def _line(colour: str, sign: str, text: str) -> str:
    if not text.endswith("\n"):
        text += "\n"
    return f"{colour}{sign} {text}"


def diff_output(original: str, updated: str) -> str:
    """Return an ANSI-coloured line diff: ``-`` removals, ``+`` additions."""
    old_lines = original.splitlines(keepends=True)
    new_lines = updated.splitlines(keepends=True)
    matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)
    parts: list[str] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            parts.extend(_line(RESET, " ", line) for line in old_lines[i1:i2])
            continue
        parts.extend(_line(RED, "-", line) for line in old_lines[i1:i2])
        parts.extend(_line(GREEN, "+", line) for line in new_lines[j1:j2])
    parts.append(RESET)
    return "".join(parts)


def _relative_files(root: Path) -> set[Path]:
    files: set[Path] = set()
    for directory, _dirs, names in os.walk(root):
        for name in names:
            path = Path(directory, name)
            if path.is_file():
                files.add(path.relative_to(root))
    return files


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8").replace("\r\n", "\n")


def diff_dir(expected_dir: str | os.PathLike[str], observed_dir: str | os.PathLike[str]) -> bool:
    """Report on stderr how two directories differ; True if they are identical."""
    expected_root = Path(expected_dir)
    observed_root = Path(observed_dir)
    expected_files = _relative_files(expected_root)
    observed_files = _relative_files(observed_root)
    identical = True

    for file in sorted(expected_files & observed_files):
        expected_content = _read(expected_root / file)
        observed_content = _read(observed_root / file)
        if expected_content != observed_content:
            identical = False
            print(
                f"Files {str(expected_root / file)!r} and {str(observed_root / file)!r} "
                "are different",
                file=sys.stderr,
            )
            print(
                f"Found differences:\n{diff_output(expected_content, observed_content)}",
                file=sys.stderr,
            )
            break

    not_in_observed = sorted(str(path) for path in expected_files - observed_files)
    if not_in_observed:
        identical = False
        print(f"Observed output is missing files: {not_in_observed}", file=sys.stderr)

    not_in_expected = sorted(str(path) for path in observed_files - expected_files)
    if not_in_expected:
        identical = False
        print(f"Observed output has unexpected files: {not_in_expected}", file=sys.stderr)

    return identical