"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
import tomllib


class Variant(str, Enum):
    """Syntax variants understood by the formatter.

    Attributes:
        JAVASCRIPT: Plain brace-delimited code.
        TYPESCRIPT: Code with type annotations.
        REACT: Code with embedded markup tags (JSX).
        TSX: Typed code with embedded markup tags.
        JSON: Structured key/value data.
    """

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    REACT = "react"
    TSX = "tsx"
    JSON = "json"

    @classmethod
    def parse(cls, value: object) -> Variant:
        """Resolve a selector to a `Variant`, falling back to `JAVASCRIPT`.

        Accepts members, canonical names, and the aliases ``js``, ``ts`` and
        ``jsx`` (case-insensitive). Unknown selectors never raise.

        Examples:
            Variant.parse("jsx")  # Variant.REACT
            Variant.parse("cobol")  # Variant.JAVASCRIPT
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.JAVASCRIPT
        key = value.strip().lower()
        key = _VARIANT_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return cls.JAVASCRIPT


_VARIANT_ALIASES = {
    "js": "javascript",
    "ts": "typescript",
    "jsx": "react",
}

VARIANT_CHOICES = [variant.value for variant in Variant] + list(_VARIANT_ALIASES)


@dataclass(frozen=True)
class FormatterConfig:
    """Configuration for reformatting a text buffer.

    Attributes:
        variant: Syntax variant selecting the formatting engine.
        indent_width: Number of spaces per indentation level. Ignored when
            `use_spaces` is False.
        use_spaces: Indent with spaces when True, with a single tab per level
            otherwise.
        max_file_size: Maximum input size in bytes accepted by the CLI.

    Examples:
        FormatterConfig(variant=Variant.TSX, indent_width=4)
    """

    variant: Variant = Variant.JAVASCRIPT
    indent_width: int = 2
    use_spaces: bool = True

    # Limits
    max_file_size: int = 10 * 1024 * 1024

    @property
    def indent_unit(self) -> str:
        """Text emitted for one level of indentation."""
        return " " * self.indent_width if self.use_spaces else "\t"


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`indent_width` must be a positive integer")
    """


def load_config(search_path: Path) -> FormatterConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.js-reindent]`` table from `pyproject.toml` and the
    ``[js-reindent]`` or ``[tool.js-reindent]`` table from `.js-reindent.toml`
    when present. Returns default values when no configuration is found. TOML
    files that cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        FormatterConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a matching table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("src"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "js-reindent")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".js-reindent.toml",
            table_paths=[("js-reindent",), ("tool", "js-reindent")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return FormatterConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> FormatterConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> FormatterConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return FormatterConfig()

    try:
        return FormatterConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: FormatterConfig) -> FormatterConfig:
    variant = Variant.parse(config.variant)
    if variant is config.variant:
        return config
    return replace(config, variant=variant)


def validate_config(config: FormatterConfig) -> None:
    """Validate a `FormatterConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If `use_spaces` is not a boolean, the size limit is not a
            positive integer, or the indentation width is not one while
            indenting with spaces.

    Examples:
        validate_config(FormatterConfig(indent_width=4))
    """
    if not isinstance(config.use_spaces, bool):
        raise ConfigError("`use_spaces` must be a boolean")

    # Tabs ignore the width.
    limits = {"indent_width": config.indent_width} if config.use_spaces else {}
    limits["max_file_size"] = config.max_file_size

    _ensure_integers(limits)
    _ensure_positive(limits)


def apply_overrides(config: FormatterConfig, **overrides: object) -> FormatterConfig:
    """Apply override values to a `FormatterConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        FormatterConfig: New configuration with the provided overrides applied.
        The original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `FormatterConfig`.

    Examples:
        updated = apply_overrides(config, variant="tsx", indent_width=4)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> FormatterConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        FormatterConfig: Validated configuration ready for formatting.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), variant="typescript", use_spaces=False)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
