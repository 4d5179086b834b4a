from __future__ import annotations

import textwrap
import pytest
from pathlib import Path

from js_reindent.config import (
    ConfigError,
    FormatterConfig,
    Variant,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".js-reindent.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.js-reindent]
        variant = "tsx"
        indent_width = 4
        use_spaces = false
        max_file_size = 2048
        """,
    )

    config = load_config(tmp_path)

    assert config == FormatterConfig(
        variant=Variant.TSX,
        indent_width=4,
        use_spaces=False,
        max_file_size=2048,
    )


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [js-reindent]
        variant = "ts"
        indent_width = 8
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.variant is Variant.TYPESCRIPT
    assert config.indent_width == 8


def test_dotfile_accepts_tool_table(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.js-reindent]
        variant = "json"
        """,
    )

    assert load_config(tmp_path).variant is Variant.JSON


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.js-reindent]
        indent_width = 3
        """,
    )
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)

    config = load_config(nested)

    assert config.indent_width == 3


def test_empty_config_table_stops_inheritance(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.js-reindent]
        indent_width = 3
        """,
    )
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(
        child,
        """
        [tool.js-reindent]
        """,
    )

    config = load_config(child)

    assert config.indent_width == FormatterConfig().indent_width


def test_pyproject_without_table_is_ignored(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.js-reindent]
        indent_width = 6
        """,
    )
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(
        child,
        """
        [project]
        name = "unrelated"
        """,
    )

    assert load_config(child).indent_width == 6


def test_load_config_returns_defaults_when_missing(tmp_path: Path):
    config = load_config(tmp_path)

    assert config == FormatterConfig()


def test_load_config_skips_invalid_toml(tmp_path: Path):
    invalid_dir = tmp_path / "invalid"
    invalid_dir.mkdir()
    _write_pyproject(invalid_dir, "not = {valid")
    _write_pyproject(
        tmp_path,
        """
        [tool.js-reindent]
        use_spaces = false
        """,
    )

    nested = invalid_dir / "child"
    nested.mkdir()
    config = load_config(nested)

    assert config.use_spaces is False


def test_load_config_errors_on_unknown_key(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.js-reindent]
        indent_width = 2
        unexpected = true
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_errors_on_non_table(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool]
        js-reindent = "spaces"
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_variant_in_config_falls_back_to_javascript(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.js-reindent]
        variant = "cobol"
        """,
    )

    assert load_config(tmp_path).variant is Variant.JAVASCRIPT


@pytest.mark.parametrize(
    ("selector", "expected"),
    [
        ("javascript", Variant.JAVASCRIPT),
        ("js", Variant.JAVASCRIPT),
        ("TypeScript", Variant.TYPESCRIPT),
        ("ts", Variant.TYPESCRIPT),
        ("react", Variant.REACT),
        ("jsx", Variant.REACT),
        (" tsx ", Variant.TSX),
        ("json", Variant.JSON),
        (Variant.TSX, Variant.TSX),
        ("unknown", Variant.JAVASCRIPT),
        ("", Variant.JAVASCRIPT),
        (None, Variant.JAVASCRIPT),
        (42, Variant.JAVASCRIPT),
    ],
)
def test_variant_parse(selector: object, expected: Variant):
    assert Variant.parse(selector) is expected


def test_indent_unit_uses_width_only_with_spaces():
    assert FormatterConfig(indent_width=4).indent_unit == "    "
    assert FormatterConfig(indent_width=4, use_spaces=False).indent_unit == "\t"
    assert FormatterConfig(indent_width=1, use_spaces=False).indent_unit == "\t"


def test_config_is_immutable():
    config = FormatterConfig()

    with pytest.raises(AttributeError):
        config.indent_width = 8  # type: ignore[misc]


@pytest.mark.parametrize(
    "config",
    [
        FormatterConfig(indent_width=0),
        FormatterConfig(indent_width=-2),
        FormatterConfig(max_file_size=0),
    ],
)
def test_validate_config_rejects_invalid_values(config: FormatterConfig):
    with pytest.raises(ConfigError):
        validate_config(config)


@pytest.mark.parametrize(
    "config",
    [
        FormatterConfig(indent_width="2"),  # type: ignore[arg-type]
        FormatterConfig(indent_width=2.0),  # type: ignore[arg-type]
        FormatterConfig(indent_width=True),  # type: ignore[arg-type]
        FormatterConfig(max_file_size="big"),  # type: ignore[arg-type]
        FormatterConfig(use_spaces="yes"),  # type: ignore[arg-type]
    ],
)
def test_validate_config_rejects_wrong_types(config: FormatterConfig):
    with pytest.raises(ConfigError):
        validate_config(config)


def test_apply_overrides_ignores_none():
    config = FormatterConfig(indent_width=4)

    assert apply_overrides(config, indent_width=None, use_spaces=None) is config
    assert apply_overrides(config, use_spaces=False) == FormatterConfig(
        indent_width=4, use_spaces=False
    )


def test_apply_overrides_rejects_unknown_field():
    with pytest.raises(TypeError):
        apply_overrides(FormatterConfig(), colour="blue")


def test_build_config_prefers_overrides(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.js-reindent]
        variant = "typescript"
        indent_width = 4
        """,
    )

    config = build_config(tmp_path, variant="jsx", indent_width=None)

    assert config.variant is Variant.REACT
    assert config.indent_width == 4


def test_build_config_validates(tmp_path: Path):
    with pytest.raises(ConfigError, match="indent_width"):
        build_config(tmp_path, indent_width=0)


@pytest.mark.parametrize("indent_width", [0, -3, "wide"])
def test_validate_config_ignores_width_with_tabs(indent_width):
    config = FormatterConfig(indent_width=indent_width, use_spaces=False)  # type: ignore[arg-type]

    validate_config(config)
    assert config.indent_unit == "\t"


def test_build_config_accepts_zero_width_with_tabs(tmp_path):
    config = build_config(tmp_path, indent_width=0, use_spaces=False)

    assert config.use_spaces is False
    assert config.indent_unit == "\t"
