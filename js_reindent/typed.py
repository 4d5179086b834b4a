"""Spacing normalization for type annotations."""

from __future__ import annotations

from .braces import format_javascript
from .config import FormatterConfig
from .constants import TYPE_SPACING_RULES


def apply_type_spacing(text: str) -> str:
    """Normalize spacing around annotation colons, arrows, unions and intersections.

    Runs a fixed, ordered list of substitutions over each line after its
    indentation. The text is not re-scanned for strings or comments, so a
    colon inside a string literal is respaced as well. Logical operators
    (``||``, ``&&``) and compound assignments (``|=``, ``&=``) are left alone.

    Args:
        text: Already re-indented source text.

    Returns:
        str: Text with annotation spacing normalized.

    Examples:
        apply_type_spacing("let x:number=1;")  # "let x: number=1;"
        apply_type_spacing("type T = A|B&C;")  # "type T = A | B & C;"
    """
    lines = text.split("\n")
    for line_number, line in enumerate(lines):
        body = line.lstrip(" \t")
        if not body:
            continue
        indent = line[: len(line) - len(body)]

        updated = body
        for pattern, replacement in TYPE_SPACING_RULES:
            updated = pattern.sub(replacement, updated)

        if updated != body:
            lines[line_number] = indent + updated.strip(" \t")

    return "\n".join(lines)


def format_typescript(code: str, config: FormatterConfig | None = None) -> str:
    """Re-indent annotated code, then normalize its annotation spacing."""
    return apply_type_spacing(format_javascript(code, config))
