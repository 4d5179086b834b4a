from __future__ import annotations

import json
import re

import pytest
from hypothesis import given
from hypothesis import strategies as st

from js_reindent.braces import format_javascript
from js_reindent.config import FormatterConfig, Variant
from js_reindent.data import format_invalid_json, format_json
from js_reindent.formatter import format_code
from js_reindent.markup import format_markup
from js_reindent.models import ScanContext, ScannerState
from js_reindent.scanner import _try_enter_string, _try_exit_string
from js_reindent.typed import format_typescript

variant_strategy = st.sampled_from(list(Variant))

# No quotes, slashes or carriage returns: nothing is copied verbatim.
structural_code = st.text(alphabet="ab(){};, \t\n", max_size=120)
# Slashes are kept apart so closing tags appear but comments never do.
markup_code = st.text(alphabet="<>/=abiv(){};, \t\n", max_size=120).map(
    lambda code: re.sub("/(?=/)", "/ ", code)
)
typed_code = st.text(alphabet="ab:|&=>(){};, \t\n", max_size=120)
data_code = st.text(alphabet="{}[],:ab1 \t\n", max_size=120)

engines = {
    "markup": (format_markup, markup_code),
    "typed": (format_typescript, typed_code),
    "data": (format_invalid_json, data_code),
}


@given(st.text(max_size=200), variant_strategy)
def test_format_code_is_deterministic(code: str, variant: Variant):
    config = FormatterConfig(variant=variant)

    assert format_code(code, config) == format_code(code, config)


@given(st.text(max_size=200), variant_strategy)
def test_format_code_never_fails_on_text(code: str, variant: Variant):
    result = format_code(code, FormatterConfig(variant=variant))

    assert result.success
    assert result.error is None
    assert result.code == result.code.strip()


@given(st.text(alphabet=" \t\n\r", max_size=40), variant_strategy)
def test_whitespace_only_input_formats_to_empty(code: str, variant: Variant):
    assert format_code(code, FormatterConfig(variant=variant)).code == ""


@given(structural_code, st.integers(min_value=1, max_value=8))
def test_leading_whitespace_is_whole_indent_units(code: str, width: int):
    formatted = format_javascript(code, FormatterConfig(indent_width=width))

    for line in formatted.split("\n"):
        leading = line[: len(line) - len(line.lstrip(" \t"))]
        assert "\t" not in leading
        assert len(leading) % width == 0


@given(structural_code)
def test_tab_indentation_uses_only_tabs(code: str):
    formatted = format_javascript(code, FormatterConfig(use_spaces=False))

    for line in formatted.split("\n"):
        leading = line[: len(line) - len(line.lstrip(" \t"))]
        assert " " not in leading


@given(st.text(alphabet="}); \n", max_size=60))
def test_unbalanced_closers_never_indent(code: str):
    formatted = format_javascript(code)

    for line in formatted.split("\n"):
        assert line == line.lstrip()


@given(structural_code)
def test_formatted_code_is_stable(code: str):
    formatted = format_javascript(code)

    assert format_javascript(formatted) == formatted


json_values = st.recursive(
    st.none()
    | st.booleans()
    | st.integers()
    | st.text(max_size=10),
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(max_size=6), children, max_size=4),
    max_leaves=12,
)


@given(json_values)
def test_valid_json_round_trips_through_formatter(value):
    formatted = format_json(json.dumps(value, separators=(",", ":")))

    assert json.loads(formatted) == value


@given(st.sampled_from(["'", '"', "`"]), st.text(alphabet="abc{};", max_size=20))
def test_string_context_resets_after_closing_quote(quote: str, body: str):
    ctx = ScanContext()

    assert _try_enter_string(ctx, quote) is True
    assert ctx.state is ScannerState.IN_STRING
    for char in body:
        assert _try_exit_string(ctx, char, "") is False

    assert _try_exit_string(ctx, quote, "a") is True
    assert ctx.state is ScannerState.NORMAL
    assert ctx.quote_char is None


@pytest.mark.parametrize("engine_name", sorted(engines))
@given(data=st.data(), width=st.integers(min_value=1, max_value=8))
def test_engines_indent_in_whole_units(engine_name: str, data, width: int):
    engine, strategy = engines[engine_name]
    code = data.draw(strategy)

    formatted = engine(code, FormatterConfig(indent_width=width))

    for line in formatted.split("\n"):
        leading = line[: len(line) - len(line.lstrip(" \t"))]
        assert "\t" not in leading
        assert len(leading) % width == 0


@pytest.mark.parametrize("engine_name", sorted(engines))
@given(data=st.data())
def test_engines_indent_with_tabs_only(engine_name: str, data):
    engine, strategy = engines[engine_name]
    code = data.draw(strategy)

    formatted = engine(code, FormatterConfig(use_spaces=False))

    for line in formatted.split("\n"):
        leading = line[: len(line) - len(line.lstrip(" \t"))]
        assert " " not in leading


@pytest.mark.parametrize("engine_name", sorted(engines))
@given(data=st.data())
def test_engines_reach_fixed_point_after_one_extra_pass(engine_name: str, data):
    engine, strategy = engines[engine_name]
    code = data.draw(strategy)

    second = engine(engine(code))

    assert engine(second) == second
