"""Constants used across the js-reindent package."""

from __future__ import annotations

import re

from .config import FormatterConfig, Variant

DEFAULT_CONFIG = FormatterConfig()
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
MAX_FILE_SIZE_ENV_VAR = "JS_REINDENT_MAX_FILE_SIZE"

# Lexical markers
QUOTE_CHARS = frozenset("\"'`")
DATA_QUOTE_CHARS = frozenset("\"'")
NEWLINE_CHARS = frozenset("\n\r")
BLANK_CHARS = frozenset(" \t")

# A closing brace keeps the following character on its own line unless it is one of these
BRACE_TRAILERS = frozenset(";,)}")

# Markup tag opener: `<name`, `</name`, or a fragment `<>` / `</>`
TAG_PATTERN = re.compile(r"<(?P<closing>/?)(?:(?P<name>[A-Za-z][A-Za-z0-9._:-]*)|(?=>))")

# Annotation spacing, applied in order to each line after its indentation
TYPE_SPACING_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r":[ \t]*([^,\s)]+)"), r": \1"),
    (re.compile(r"[ \t]*=>[ \t]*"), " => "),
    (re.compile(r"[ \t]*(?<![|])\|(?![|=])[ \t]*"), " | "),
    (re.compile(r"[ \t]*(?<![&])&(?![&=])[ \t]*"), " & "),
)

VARIANT_DISPLAY_NAMES = {
    Variant.JAVASCRIPT: "JavaScript",
    Variant.TYPESCRIPT: "TypeScript",
    Variant.REACT: "JSX",
    Variant.TSX: "TSX",
    Variant.JSON: "JSON",
}

VARIANT_EXTENSIONS = {
    ".js": Variant.JAVASCRIPT,
    ".mjs": Variant.JAVASCRIPT,
    ".cjs": Variant.JAVASCRIPT,
    ".ts": Variant.TYPESCRIPT,
    ".mts": Variant.TYPESCRIPT,
    ".cts": Variant.TYPESCRIPT,
    ".jsx": Variant.REACT,
    ".tsx": Variant.TSX,
    ".json": Variant.JSON,
}
