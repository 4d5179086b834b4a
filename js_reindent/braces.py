"""Brace, semicolon and comma driven re-indentation."""

from __future__ import annotations

from .config import FormatterConfig
from .constants import BLANK_CHARS, BRACE_TRAILERS, NEWLINE_CHARS
from .models import ScanContext
from .scanner import OutputBuffer, consume_lexical


def emit_open_brace(
    ctx: ScanContext, out: OutputBuffer, char: str, next_char: str, closers: str = "}"
):
    """Write an opening bracket and start a deeper line unless the block is empty."""
    out.write(char)
    ctx.indent()
    if not next_char or next_char not in closers:
        out.break_line(ctx.depth)


def emit_close_brace(
    ctx: ScanContext,
    out: OutputBuffer,
    char: str,
    next_char: str,
    openers: str = "{",
    trailers: frozenset[str] = BRACE_TRAILERS,
):
    """Write a closing bracket on its own line at the reduced depth.

    An empty block (``{}``) stays on one line. Content other than a trailer
    (``;``, ``,``, ``)`` or ``}``) after the bracket is moved to a new line.

    Args:
        ctx: Scan context holding the indentation depth.
        out: Output buffer.
        char: The closing bracket being written.
        next_char: Input character after the bracket, or ``""`` at the end.
        openers: Brackets that make the block empty when emitted just before.
        trailers: Characters allowed to follow the bracket on the same line.
    """
    out.rstrip()
    last_char = out.last_char()
    ctx.dedent()
    if not last_char or last_char not in openers:
        out.break_line(ctx.depth)
    out.write(char)
    if next_char and next_char not in trailers:
        out.break_line(ctx.depth)


def emit_semicolon(ctx: ScanContext, out: OutputBuffer, next_char: str):
    out.write(";")
    if next_char and next_char != "\n" and next_char != "}":
        out.break_line(ctx.depth)


def emit_comma(out: OutputBuffer, next_char: str):
    out.write(",")
    if next_char != " " and next_char != "\n":
        out.write(" ")


def emit_newline(out: OutputBuffer, depth: int):
    """Collapse an input line break into at most one output line break."""
    if not out.has_content or out.at_line_start():
        return
    out.rstrip(" \t")
    out.break_line(depth)


def emit_blank(out: OutputBuffer):
    """Collapse a run of spaces and tabs into a single space."""
    if out.last_char() == " " or out.at_line_start():
        return
    out.write(" ")


def emit_structural(ctx: ScanContext, out: OutputBuffer, char: str, next_char: str):
    """Apply the brace-indentation rules to one character outside strings and comments."""
    if char == "{":
        emit_open_brace(ctx, out, char, next_char)
    elif char == "}":
        emit_close_brace(ctx, out, char, next_char)
    elif char == ";":
        emit_semicolon(ctx, out, next_char)
    elif char == ",":
        emit_comma(out, next_char)
    elif char in NEWLINE_CHARS:
        emit_newline(out, ctx.depth)
    elif char in BLANK_CHARS:
        emit_blank(out)
    else:
        out.write(char)


def format_javascript(code: str, config: FormatterConfig | None = None) -> str:
    """Re-indent brace-delimited code in a single pass.

    Strings and comments are copied verbatim. Outside them, ``{`` and ``}``
    open and close indentation levels, ``;`` ends a line, ``,`` is followed by
    one space, line breaks collapse and runs of blanks shrink to one space.
    Excess closing braces never push the depth below zero.

    Args:
        code: Source text to reformat.
        config: Indentation settings. Defaults to a new `FormatterConfig`.

    Returns:
        str: Reformatted text with surrounding whitespace removed.

    Examples:
        format_javascript("function f(){let x=1;return x;}")
        # 'function f(){\\n  let x=1;\\n  return x;\\n}'
    """
    config = config or FormatterConfig()
    ctx = ScanContext()
    out = OutputBuffer(config.indent_unit)

    index = 0
    length = len(code)
    while index < length:
        consumed = consume_lexical(ctx, out, code, index)
        if consumed:
            index += consumed
            continue

        next_char = code[index + 1] if index + 1 < length else ""
        emit_structural(ctx, out, code[index], next_char)
        index += 1

    return out.getvalue()
