"""Entry point that dispatches a text buffer to the matching formatting engine."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from .braces import format_javascript
from .config import FormatterConfig, Variant, normalize_config, validate_config
from .constants import VARIANT_DISPLAY_NAMES, VARIANT_EXTENSIONS
from .data import format_json
from .markup import format_jsx, format_tsx
from .models import FormatResult
from .typed import format_typescript

logger = logging.getLogger(__name__)

Engine = Callable[[str, FormatterConfig], str]

ENGINES: dict[Variant, Engine] = {
    Variant.JAVASCRIPT: format_javascript,
    Variant.TYPESCRIPT: format_typescript,
    Variant.REACT: format_jsx,
    Variant.TSX: format_tsx,
    Variant.JSON: format_json,
}

SUPPORTED_VARIANTS = list(ENGINES)


def get_variant_display_name(variant: Variant | str) -> str:
    """Return the human-readable name of a variant, e.g. ``"TSX"``."""
    return VARIANT_DISPLAY_NAMES[Variant.parse(variant)]


def detect_variant(filepath: Path | str) -> Variant | None:
    """Guess the variant from a file extension; None when the extension is unknown."""
    return VARIANT_EXTENSIONS.get(Path(filepath).suffix.lower())


def format_code(code: str, config: FormatterConfig | None = None) -> FormatResult:
    """Reformat a text buffer with the engine selected by `config.variant`.

    Whitespace-only input yields an empty success. Unrecognized variants fall
    back to plain brace-indentation. Any error raised while validating the
    configuration or running the engine is reported as a failure result naming
    the variant and the cause; this function does not raise.

    Args:
        code: Raw source text.
        config: Variant and indentation settings. Defaults to a new
            `FormatterConfig`.

    Returns:
        FormatResult: The reformatted text, or an error message.

    Examples:
        format_code("foo(1,2,3)").code  # "foo(1, 2, 3)"
        format_code('{"a":1}', FormatterConfig(variant=Variant.JSON)).success  # True
    """
    config = config or FormatterConfig()
    variant = Variant.parse(config.variant)

    try:
        if not code.strip():
            return FormatResult.ok("")

        config = normalize_config(config)
        validate_config(config)
        engine = ENGINES[variant]
        logger.debug("Formatting %d characters with the %s engine", len(code), variant.value)
        formatted = engine(code, config)
    except Exception as error:
        logger.debug("Formatting failed for variant %s", variant.value, exc_info=True)
        display_name = get_variant_display_name(variant)
        return FormatResult.failure(f"Error formatting {display_name}: {error}")

    return FormatResult.ok(formatted)
