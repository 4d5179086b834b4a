"""Re-indentation for code with embedded markup tags (JSX and TSX)."""

from __future__ import annotations

from .braces import emit_blank, emit_comma, emit_newline, emit_structural
from .config import FormatterConfig
from .constants import BLANK_CHARS, NEWLINE_CHARS, QUOTE_CHARS, TAG_PATTERN
from .models import MarkupContext
from .scanner import OutputBuffer, consume_lexical
from .typed import apply_type_spacing


def _in_markup_content(ctx: MarkupContext) -> bool:
    return bool(ctx.tag_stack) and not ctx.in_tag and not ctx.in_expression


def _line_depth(ctx: MarkupContext) -> int:
    # Attributes continued on a new line sit one level under their tag.
    return ctx.depth + 1 if ctx.in_tag else ctx.depth


def _is_identifier_char(char: str) -> bool:
    return char.isalnum() or char in "_$"


def _try_open_tag(ctx: MarkupContext, out: OutputBuffer, code: str, index: int) -> int:
    """Start scanning a ``<name`` or ``</name`` tag.

    Outside markup content, a ``<`` glued to an identifier (``Array<T>``,
    ``i<n``) is a comparison or type argument rather than a tag.

    A closing tag whose name matches the innermost open element pops it and
    dedents; a mismatched closing tag leaves the stack and depth untouched. An
    opening tag always starts on a fresh line.

    Args:
        ctx: Markup context to update.
        out: Output buffer.
        code: Full input text.
        index: Position of the ``<`` character.

    Returns:
        int: Number of characters consumed, or zero when no tag starts here.
    """
    if ctx.in_tag or ctx.in_expression or code[index] != "<":
        return 0

    match = TAG_PATTERN.match(code, index)
    if not match:
        return 0

    closing = bool(match.group("closing"))
    name = match.group("name") or ""
    if not closing and not ctx.tag_stack and index > 0 and _is_identifier_char(code[index - 1]):
        return 0

    if closing:
        if ctx.tag_stack and ctx.tag_stack[-1] == name:
            ctx.tag_stack.pop()
            ctx.dedent()
            out.rstrip()
            out.break_line(ctx.depth)
    else:
        out.rstrip()
        if out.has_content:
            out.break_line(ctx.depth)

    ctx.in_tag = True
    ctx.closing_tag = closing
    ctx.tag_name = name
    ctx.attribute_depth = 0
    out.write(match.group(0))
    return len(match.group(0))


def _try_close_tag(
    ctx: MarkupContext, out: OutputBuffer, char: str, prev_char: str, next_char: str
) -> bool:
    """Finish the current tag on its ``>``.

    Opening tags are pushed and indent their content; self-closing and
    closing tags leave the stack alone. Text directly after an opening tag
    starts on its own line.
    """
    if not ctx.in_tag or ctx.attribute_depth or char != ">":
        return False

    out.write(char)
    ctx.in_tag = False
    name = ctx.tag_name
    ctx.tag_name = None

    if ctx.closing_tag or prev_char == "/":
        ctx.closing_tag = False
        return True

    ctx.tag_stack.append(name or "")
    ctx.indent()
    if next_char and next_char != "<" and not next_char.isspace():
        out.break_line(ctx.depth)
    return True


def _emit_tag_char(ctx: MarkupContext, out: OutputBuffer, char: str):
    if char == "{":
        ctx.attribute_depth += 1
        out.write(char)
    elif char == "}":
        ctx.attribute_depth = max(ctx.attribute_depth - 1, 0)
        out.write(char)
    elif char in NEWLINE_CHARS:
        emit_newline(out, _line_depth(ctx))
    elif char in BLANK_CHARS:
        emit_blank(out)
    else:
        out.write(char)


def _try_enter_expression(ctx: MarkupContext, out: OutputBuffer, char: str) -> bool:
    """Open or nest a ``{...}`` expression embedded in markup content."""
    if char != "{" or ctx.in_tag:
        return False
    if not ctx.in_expression and not ctx.tag_stack:
        return False

    ctx.expression_depth += 1
    out.write(char)
    return True


def _try_exit_expression(ctx: MarkupContext, out: OutputBuffer, char: str) -> bool:
    if char != "}" or not ctx.in_expression:
        return False

    ctx.expression_depth -= 1
    out.write(char)
    return True


def _emit_expression_char(ctx: MarkupContext, out: OutputBuffer, char: str, next_char: str):
    # Expression interiors keep their own braces and semicolons.
    if char == ",":
        emit_comma(out, next_char)
    elif char in NEWLINE_CHARS:
        emit_newline(out, ctx.depth)
    elif char in BLANK_CHARS:
        emit_blank(out)
    else:
        out.write(char)


def format_markup(code: str, config: FormatterConfig | None = None, typed: bool = False) -> str:
    """Re-indent code that embeds markup tags.

    Code outside markup follows the brace-indentation rules. Each opening tag
    starts a line and indents its content one level; the matching closing tag
    dedents. Braces inside markup content delimit embedded expressions that
    are copied without re-indentation. Quotes and slashes in markup text are
    plain text, not strings or comments.

    Args:
        code: Source text to reformat.
        config: Indentation settings. Defaults to a new `FormatterConfig`.
        typed: Normalize annotation spacing after the markup pass.

    Returns:
        str: Reformatted text with surrounding whitespace removed.

    Examples:
        format_markup("<div><span>hi</span></div>")
        # '<div>\\n  <span>\\n    hi\\n  </span>\\n</div>'
    """
    config = config or FormatterConfig()
    ctx = MarkupContext()
    out = OutputBuffer(config.indent_unit)

    index = 0
    length = len(code)
    while index < length:
        in_content = _in_markup_content(ctx)
        consumed = consume_lexical(
            ctx,
            out,
            code,
            index,
            line_depth=_line_depth(ctx),
            quote_chars=() if in_content else QUOTE_CHARS,
            comments=not in_content,
        )
        if not consumed:
            consumed = _try_open_tag(ctx, out, code, index)
        if consumed:
            index += consumed
            continue

        char = code[index]
        prev_char = code[index - 1] if index > 0 else ""
        next_char = code[index + 1] if index + 1 < length else ""
        index += 1

        if _try_close_tag(ctx, out, char, prev_char, next_char):
            continue
        if ctx.in_tag:
            _emit_tag_char(ctx, out, char)
            continue
        if _try_enter_expression(ctx, out, char) or _try_exit_expression(ctx, out, char):
            continue
        if ctx.in_expression:
            _emit_expression_char(ctx, out, char, next_char)
            continue
        emit_structural(ctx, out, char, next_char)

    formatted = out.getvalue()
    return apply_type_spacing(formatted) if typed else formatted


def format_jsx(code: str, config: FormatterConfig | None = None) -> str:
    return format_markup(code, config, typed=False)


def format_tsx(code: str, config: FormatterConfig | None = None) -> str:
    return format_markup(code, config, typed=True)
