"""Data models for js-reindent."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class ScannerState(Enum):
    """Lexical modes used while scanning source text.

    Attributes:
        NORMAL: Structural code where indentation rules apply.
        IN_STRING: Inside a quoted string; see `ScanContext.quote_char`.
        IN_LINE_COMMENT: Inside a ``//`` comment, up to the next newline.
        IN_BLOCK_COMMENT: Inside a ``/* ... */`` comment.
    """

    NORMAL = auto()
    IN_STRING = auto()
    IN_LINE_COMMENT = auto()
    IN_BLOCK_COMMENT = auto()


@dataclass
class ScanContext:
    """Per-call cursor state shared by every engine.

    Attributes:
        state: Current lexical mode.
        quote_char: Quote character that opened the active string, if any.
        depth: Current indentation depth; never negative.
    """

    state: ScannerState = ScannerState.NORMAL
    quote_char: str | None = None
    depth: int = 0

    def indent(self) -> None:
        self.depth += 1

    def dedent(self) -> None:
        self.depth = max(self.depth - 1, 0)


@dataclass
class MarkupContext(ScanContext):
    """Cursor state for the markup-aware engine.

    Attributes:
        in_tag: True between a tag's ``<`` and its closing ``>``.
        closing_tag: True when the tag being scanned is a ``</name>`` tag.
        tag_name: Name of the tag being scanned.
        attribute_depth: Brace nesting inside the current tag's attributes.
        tag_stack: Names of open markup elements, innermost last.
        expression_depth: Brace nesting of the active markup expression; zero
            when no expression is open.
    """

    in_tag: bool = False
    closing_tag: bool = False
    tag_name: str | None = None
    attribute_depth: int = 0
    tag_stack: list[str] = field(default_factory=list)
    expression_depth: int = 0

    @property
    def in_expression(self) -> bool:
        return self.expression_depth > 0


@dataclass(frozen=True)
class FormatResult:
    """Outcome of a formatting call: either text or an error message, never both.

    Attributes:
        code: Reformatted text; empty on failure.
        error: Human-readable failure description, or None on success.
    """

    code: str = ""
    error: str | None = None

    def __post_init__(self):
        if self.error is not None and self.code:
            raise ValueError("A failed FormatResult cannot carry formatted code")

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, code: str) -> FormatResult:
        return cls(code=code)

    @classmethod
    def failure(cls, message: str) -> FormatResult:
        return cls(error=message)
