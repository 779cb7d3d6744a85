"""
Go-specific naming utilities.

Handles Go reserved words, import aliases and package names.
"""

import re
from typing import Iterable

from ...core.imports import ImportTracker, default_alias_candidates


# Go reserved words
GO_RESERVED_WORDS = {
    "break",
    "case",
    "chan",
    "const",
    "continue",
    "default",
    "defer",
    "else",
    "fallthrough",
    "for",
    "func",
    "go",
    "goto",
    "if",
    "import",
    "interface",
    "map",
    "package",
    "range",
    "return",
    "select",
    "struct",
    "switch",
    "type",
    "var",
}


def go_alias_candidates(path: str, reserved: Iterable[str] = ()) -> list[str]:
    """
    Import alias candidates for a Go package path.

    Same joins as the default candidates; keywords get an underscore
    prefix so ``example.com/pkg/go`` can be imported as ``_go``. Candidates
    starting with a digit, and names in reserved (identifiers the generated
    file declares itself), are skipped.
    """
    reserved = set(reserved)
    candidates = []
    for name in default_alias_candidates(path):
        if name[0].isdigit() or name in reserved:
            continue
        candidates.append(f"_{name}" if name in GO_RESERVED_WORDS else name)
    return candidates


def go_import_line(alias: str, path: str) -> str:
    return f'{alias} "{path}"'


def create_go_import_tracker(
    local_package: str, reserved: Iterable[str] = ()
) -> ImportTracker:
    """
    Create an import tracker configured for Go.

    Args:
        local_package: Package the generated file belongs to
        reserved: Identifiers the generated file declares, never used as aliases
    """
    reserved = frozenset(reserved)
    return ImportTracker(
        local_package=local_package,
        alias_candidates=lambda path: go_alias_candidates(path, reserved),
        import_line=go_import_line,
    )


def go_package_name(path: str) -> str:
    """Package clause name for an import path: its last segment, sanitized."""
    last = path.rstrip("/").rsplit("/", 1)[-1]
    name = re.sub(r"[^a-zA-Z0-9_]", "", last).lower()
    if name in GO_RESERVED_WORDS:
        name = f"_{name}"
    return name or "main"


def validate_go_package_name(name: str) -> list[str]:
    """
    Validate Go package name according to Go naming rules.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not name:
        errors.append("Package name cannot be empty")
        return errors

    # Check basic identifier rules
    if not name.isidentifier():
        errors.append(f"'{name}' is not a valid Go identifier")

    # Go-specific rules
    if name[0].isupper():
        errors.append("Package names should be lowercase")

    if "-" in name:
        errors.append("Package names should not contain hyphens")

    # Check against reserved words
    if name.lower() in GO_RESERVED_WORDS:
        errors.append(f"'{name}' is a Go reserved word")

    return errors
