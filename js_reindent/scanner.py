"""Lexical scanning primitives shared by every formatting engine."""

from __future__ import annotations

from collections.abc import Collection

from .constants import QUOTE_CHARS
from .models import ScanContext, ScannerState


class OutputBuffer:
    """Append-only text sink with the few look-behind queries the engines need.

    Pieces are kept in a list and joined once at the end, so trimming trailing
    whitespace only touches the tail of the buffer.

    Args:
        indent_unit: Text emitted for one level of indentation.
    """

    def __init__(self, indent_unit: str):
        self.indent_unit = indent_unit
        self._parts: list[str] = []
        self._has_content = False

    @property
    def has_content(self) -> bool:
        """True once any non-whitespace character has been written."""
        return self._has_content

    def write(self, text: str) -> None:
        if not text:
            return
        self._parts.append(text)
        if not self._has_content and not text.isspace():
            self._has_content = True

    def last_char(self) -> str:
        return self._parts[-1][-1] if self._parts else ""

    def rstrip(self, chars: str | None = None) -> None:
        """Remove trailing characters in `chars` (any whitespace by default)."""
        while self._parts:
            stripped = self._parts[-1].rstrip(chars)
            if stripped:
                self._parts[-1] = stripped
                return
            self._parts.pop()

    def at_line_start(self) -> bool:
        """Return True when only indentation follows the last newline."""
        for part in reversed(self._parts):
            newline_index = part.rfind("\n")
            tail = part[newline_index + 1 :]
            if tail.strip(" \t"):
                return False
            if newline_index >= 0:
                return True
        return True

    def break_line(self, depth: int) -> None:
        self.write("\n" + self.indent_unit * max(depth, 0))

    def getvalue(self) -> str:
        return "".join(self._parts).strip()


def _try_enter_string(
    ctx: ScanContext, char: str, quote_chars: Collection[str] = QUOTE_CHARS
) -> bool:
    """Open a string region when `char` is a quote outside any region.

    Args:
        ctx: Scan context to update.
        char: Current input character.
        quote_chars: Characters that may delimit a string.

    Returns:
        bool: True when a string region starts at `char`.

    Examples:
        _try_enter_string(ScanContext(), "`")  # True
    """
    if ctx.state is not ScannerState.NORMAL or char not in quote_chars:
        return False

    ctx.state = ScannerState.IN_STRING
    ctx.quote_char = char
    return True


def _try_exit_string(ctx: ScanContext, char: str, prev_char: str) -> bool:
    """Close the active string on an unescaped matching quote.

    Only the single preceding character is checked, so a string whose last
    content character is an escaped backslash (``"a\\\\"``) is not closed.

    Args:
        ctx: Scan context describing the active string.
        char: Current input character.
        prev_char: Input character immediately before `char`.

    Returns:
        bool: True when the string region ends at `char`.
    """
    if ctx.state is not ScannerState.IN_STRING:
        return False
    if char != ctx.quote_char or prev_char == "\\":
        return False

    ctx.state = ScannerState.NORMAL
    ctx.quote_char = None
    return True


def _try_enter_comment(ctx: ScanContext, char: str, next_char: str) -> bool:
    """Open a line or block comment on ``//`` or ``/*`` outside any region."""
    if ctx.state is not ScannerState.NORMAL or char != "/":
        return False

    if next_char == "/":
        ctx.state = ScannerState.IN_LINE_COMMENT
        return True
    if next_char == "*":
        ctx.state = ScannerState.IN_BLOCK_COMMENT
        return True
    return False


def _try_exit_comment(ctx: ScanContext, char: str, next_char: str) -> bool:
    """Close the active comment.

    A line comment ends at its newline; a block comment ends at ``*/``.
    """
    if ctx.state is ScannerState.IN_LINE_COMMENT and char == "\n":
        ctx.state = ScannerState.NORMAL
        return True
    if ctx.state is ScannerState.IN_BLOCK_COMMENT and char == "*" and next_char == "/":
        ctx.state = ScannerState.NORMAL
        return True
    return False


def consume_lexical(
    ctx: ScanContext,
    out: OutputBuffer,
    code: str,
    index: int,
    line_depth: int | None = None,
    quote_chars: Collection[str] = QUOTE_CHARS,
    comments: bool = True,
) -> int:
    """Copy string and comment text verbatim, tracking region boundaries.

    Args:
        ctx: Scan context holding the lexical mode.
        out: Output buffer receiving the copied text.
        code: Full input text.
        index: Position of the current character.
        line_depth: Indentation depth written after a line comment's newline.
            Defaults to `ctx.depth`.
        quote_chars: Characters that may open a string.
        comments: Whether ``//`` and ``/*`` open comments.

    Returns:
        int: Number of input characters consumed; zero when the character is
            structural and must be handled by the calling engine.

    Examples:
        consume_lexical(ScanContext(), OutputBuffer("  "), '"a{b"', 0)  # 1
    """
    char = code[index]
    next_char = code[index + 1] if index + 1 < len(code) else ""
    prev_char = code[index - 1] if index > 0 else ""

    if ctx.state is ScannerState.IN_BLOCK_COMMENT:
        if _try_exit_comment(ctx, char, next_char):
            out.write("*/")
            return 2
        out.write(char)
        return 1

    if ctx.state is ScannerState.IN_LINE_COMMENT:
        out.write(char)
        if _try_exit_comment(ctx, char, next_char):
            depth = ctx.depth if line_depth is None else line_depth
            out.write(out.indent_unit * depth)
        return 1

    if ctx.state is ScannerState.IN_STRING:
        out.write(char)
        _try_exit_string(ctx, char, prev_char)
        return 1

    if comments and _try_enter_comment(ctx, char, next_char):
        out.write(char + next_char)
        return 2

    if _try_enter_string(ctx, char, quote_chars):
        out.write(char)
        return 1

    return 0
