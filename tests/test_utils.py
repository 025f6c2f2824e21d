"""Tests for svgr_tools.utils module."""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svgr_tools.utils import (
    ATTRIBUTE_MAP,
    NATIVE_ELEMENT_MAP,
    attr_pattern,
    camel_case,
    collect_references,
    find_closing_tag,
    find_root,
    format_number,
    get_attr,
    iter_children,
    iter_elements,
    parse_attrs,
    parse_length,
    remove_attrs,
)


class TestTables:
    """Tests for lookup tables."""

    def test_attribute_map_samples(self):
        assert ATTRIBUTE_MAP["class"] == "className"
        assert ATTRIBUTE_MAP["stroke-width"] == "strokeWidth"
        assert ATTRIBUTE_MAP["xlink:href"] == "xlinkHref"

    def test_native_map_starts_with_root(self):
        assert next(iter(NATIVE_ELEMENT_MAP)) == "svg"
        assert NATIVE_ELEMENT_MAP["svg"] == "Svg"
        assert NATIVE_ELEMENT_MAP["tspan"] == "TSpan"


class TestAttributes:
    """Tests for attribute helpers."""

    def test_get_attr(self):
        attrs = ' fill="red" fill-rule="evenodd"'
        assert get_attr(attrs, "fill") == "red"
        assert get_attr(attrs, "fill-rule") == "evenodd"

    def test_get_attr_missing(self):
        assert get_attr(' stroke="red"', "fill") is None

    def test_get_attr_does_not_match_suffix(self):
        assert get_attr(' data-fill="x"', "fill") is None

    def test_attr_pattern_escapes_name(self):
        assert attr_pattern("xlink:href").search(' xlink:href="#a"').group(1) == "#a"

    def test_remove_attrs(self):
        assert remove_attrs(' x="1" y="2" width="3"', ("x", "y")) == ' width="3"'

    def test_parse_attrs(self):
        assert parse_attrs(' a="1" b:c="2"') == {"a": "1", "b:c": "2"}

    def test_parse_attrs_keeps_order(self):
        assert list(parse_attrs(' z="1" a="2"')) == ["z", "a"]


class TestFindClosingTag:
    """Tests for find_closing_tag function."""

    def test_nested(self):
        svg = "<g><g></g></g>"
        assert find_closing_tag(svg, "g", 3) == (10, 14)

    def test_self_closing_does_not_nest(self):
        svg = "<g><g/></g>"
        assert find_closing_tag(svg, "g", 3) == (7, 11)

    def test_unbalanced(self):
        assert find_closing_tag("<g><g></g>", "g", 3) is None

    def test_prefix_names_ignored(self):
        svg = "<text><textPath></textPath></text>"
        assert find_closing_tag(svg, "text", 6) == (27, 34)


class TestIterElements:
    """Tests for iter_elements and iter_children functions."""

    def test_iter_by_name(self):
        svg = '<svg><rect id="a"/><g><rect id="b"></rect></g></svg>'
        ids = [get_attr(e.attrs, "id") for e in iter_elements(svg, "rect")]
        assert ids == ["a", "b"]

    def test_content_span(self):
        svg = "<g><path/></g>"
        element = next(iter_elements(svg, "g"))
        start, end = element.content_span
        assert svg[start:end] == "<path/>"

    def test_self_closing_content_span(self):
        element = next(iter_elements("<path/>", "path"))
        assert element.self_closing
        start, end = element.content_span
        assert start == end

    def test_direct_children(self):
        svg = "<g><rect/><g><circle/></g></g>"
        group = next(iter_elements(svg, "g"))
        start, end = group.content_span
        assert [c.name for c in iter_children(svg, start, end)] == ["rect", "g"]

    def test_unbalanced_skipped(self):
        assert list(iter_elements("<svg><g></svg>", "g")) == []


class TestReferences:
    """Tests for find_root and collect_references functions."""

    def test_find_root(self):
        root = find_root('<?xml version="1.0"?><svg width="1"><path/></svg>')
        assert root.group(1) == ' width="1"'

    def test_find_root_missing(self):
        assert find_root("<path/>") is None

    def test_collect_references(self):
        svg = '<use href="#a"/><use xlink:href="#b"/><rect fill="url(#c)"/>'
        assert collect_references(svg) == {"a", "b", "c"}


class TestNumbers:
    """Tests for parse_length and format_number functions."""

    def test_parse_plain(self):
        assert parse_length("10") == 10.0
        assert parse_length("-2.5") == -2.5
        assert parse_length(".5") == 0.5

    def test_parse_px(self):
        assert parse_length("10px") == 10.0

    def test_parse_other_units(self):
        assert parse_length("1em") is None
        assert parse_length("50%") is None
        assert parse_length("abc") is None

    def test_parse_missing(self):
        assert parse_length(None) == 0.0
        assert parse_length(None, default=3.0) == 3.0

    def test_format_number(self):
        assert format_number(10.0) == "10"
        assert format_number(2.5) == "2.5"
        assert format_number(-0.0) == "0"
        assert format_number(1 / 3) == "0.333333"


class TestCamelCase:
    """Tests for camel_case function."""

    def test_hyphenated(self):
        assert camel_case("stroke-width") == "strokeWidth"

    def test_vendor_prefix(self):
        assert camel_case("-webkit-mask") == "WebkitMask"

    def test_ms_prefix(self):
        assert camel_case("-ms-transform") == "msTransform"

    @pytest.mark.parametrize("name", ["fill", "opacity"])
    def test_single_word(self, name):
        assert camel_case(name) == name
