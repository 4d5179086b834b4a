"""Formatting for structured key/value data (JSON)."""

from __future__ import annotations

import json
import logging

from .braces import emit_blank, emit_close_brace, emit_open_brace
from .config import FormatterConfig
from .constants import BLANK_CHARS, DATA_QUOTE_CHARS, NEWLINE_CHARS
from .models import ScanContext, ScannerState
from .scanner import OutputBuffer, _try_enter_string, _try_exit_string

logger = logging.getLogger(__name__)

_OPENERS = "{["
_CLOSERS = "}]"
_CLOSER_TRAILERS = frozenset(",}]")


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not valid JSON")


def format_json(code: str, config: FormatterConfig | None = None) -> str:
    """Pretty-print JSON, falling back to heuristic re-indentation.

    Valid input is parsed and serialized with the configured indentation, so
    the output is guaranteed to be valid JSON. Input that does not parse, or
    that holds a number too large for a float, is handed to
    `format_invalid_json`, which never raises.

    Args:
        code: Text to format.
        config: Indentation settings. Defaults to a new `FormatterConfig`.

    Returns:
        str: Formatted text.

    Examples:
        format_json('{"a":1,"b":[1,2]}')
        format_json("{a:1,}")  # heuristic path
    """
    config = config or FormatterConfig()
    indent = config.indent_width if config.use_spaces else "\t"
    try:
        parsed = json.loads(code, parse_constant=_reject_constant)
        # Numbers beyond float range parse to inf and have no JSON spelling.
        return json.dumps(parsed, indent=indent, ensure_ascii=False, allow_nan=False)
    except ValueError as error:
        logger.debug("Input is not valid JSON (%s); using heuristic formatting", error)
        return format_invalid_json(code, config)


def format_invalid_json(code: str, config: FormatterConfig | None = None) -> str:
    """Re-indent JSON-like text that does not parse.

    Tracks quoted strings and the ``{}``/``[]`` brackets only; comments are not
    recognized. Each comma ends a line, each colon is followed by exactly one
    space, and input line breaks are discarded. Runs of blanks between other
    tokens shrink to one space so bare words are not fused together.

    Args:
        code: Text to format.
        config: Indentation settings. Defaults to a new `FormatterConfig`.

    Returns:
        str: Best-effort formatted text.

    Examples:
        format_invalid_json("{a:1,}")  # '{\\n  a: 1,\\n}'
    """
    config = config or FormatterConfig()
    ctx = ScanContext()
    out = OutputBuffer(config.indent_unit)

    length = len(code)
    for index, char in enumerate(code):
        prev_char = code[index - 1] if index > 0 else ""
        next_char = code[index + 1] if index + 1 < length else ""

        if ctx.state is ScannerState.IN_STRING:
            out.write(char)
            _try_exit_string(ctx, char, prev_char)
            continue
        if prev_char != "\\" and _try_enter_string(ctx, char, DATA_QUOTE_CHARS):
            out.write(char)
            continue

        if char in _OPENERS:
            closer = _CLOSERS[_OPENERS.index(char)]
            emit_open_brace(ctx, out, char, next_char, closers=closer)
        elif char in _CLOSERS:
            following = _peek_significant(code, index + 1)
            emit_close_brace(
                ctx, out, char, following, openers=_OPENERS, trailers=_CLOSER_TRAILERS
            )
        elif char == ",":
            out.rstrip(" \t")
            out.write(char)
            if _peek_significant(code, index + 1):
                out.break_line(ctx.depth)
        elif char == ":":
            out.rstrip(" \t")
            out.write(": ")
        elif char in NEWLINE_CHARS:
            continue
        elif char in BLANK_CHARS:
            emit_blank(out)
        else:
            out.write(char)

    return out.getvalue()


def _peek_significant(code: str, start: int) -> str:
    """Return the next non-whitespace character at or after `start`, or an empty string."""
    index = start
    while index < len(code) and code[index].isspace():
        index += 1
    return code[index] if index < len(code) else ""
