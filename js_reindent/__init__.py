"""
js-reindent: heuristic re-indenter for JavaScript, TypeScript, JSX, TSX and JSON.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    js-reindent src/App.tsx --indent 4

Library Usage:
    from js_reindent import FormatterConfig, Variant, format_code

    result = format_code("function f(){return 1;}", FormatterConfig(variant=Variant.JAVASCRIPT))
    if result.success:
        print(result.code)
    else:
        print(result.error)
"""

from .braces import format_javascript
from .config import ConfigError, FormatterConfig, Variant
from .data import format_invalid_json, format_json
from .exceptions import FormatterError, InputTooLargeError
from .formatter import SUPPORTED_VARIANTS, detect_variant, format_code, get_variant_display_name
from .markup import format_jsx, format_markup, format_tsx
from .models import FormatResult
from .typed import apply_type_spacing, format_typescript

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "format_code",
    "format_javascript",
    "format_typescript",
    "format_markup",
    "format_jsx",
    "format_tsx",
    "format_json",
    "format_invalid_json",
    "apply_type_spacing",
    # Data models
    "FormatterConfig",
    "FormatResult",
    "Variant",
    # Utilities
    "SUPPORTED_VARIANTS",
    "detect_variant",
    "get_variant_display_name",
    # Exceptions
    "ConfigError",
    "FormatterError",
    "InputTooLargeError",
    # Version
    "__version__",
]
