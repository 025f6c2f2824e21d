"""Tests for svgr_tools.inject module."""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svgr_tools.inject import (
    add_aria_attributes,
    add_fill_current_color,
    add_props_spread,
    add_ref,
    add_svg_props,
    add_title_desc_elements,
    inject_structure,
    replace_attr_values,
)
from svgr_tools.transform import TransformConfig


TITLE = "{title ? <title id={titleId}>{title}</title> : null}"
DESC = "{desc ? <desc id={descId}>{desc}</desc> : null}"


class TestReplaceAttrValues:
    """Tests for replace_attr_values function."""

    def test_replace_everywhere(self):
        svg = '<svg><path fill="#000" stroke="#000"/></svg>'
        result = replace_attr_values(svg, {"#000": "currentColor"})
        assert result == '<svg><path fill="currentColor" stroke="currentColor"/></svg>'

    def test_whole_value_only(self):
        svg = '<path fill="#0000ff"/>'
        assert replace_attr_values(svg, {"#000": "currentColor"}) == svg

    def test_regex_special_key(self):
        result = replace_attr_values('<path fill="url(#a)"/>', {"url(#a)": "none"})
        assert result == '<path fill="none"/>'

    def test_single_pass(self):
        result = replace_attr_values('<x p="a" q="b"/>', {"a": "b", "b": "c"})
        assert result == '<x p="b" q="c"/>'

    def test_empty_table(self):
        assert replace_attr_values('<x p="a"/>', {}) == '<x p="a"/>'


class TestAddFillCurrentColor:
    """Tests for add_fill_current_color function."""

    def test_override(self):
        svg = '<svg fill="none"><path fill="#000"/></svg>'
        assert add_fill_current_color(svg) == '<svg fill="currentColor"><path/></svg>'

    def test_no_root(self):
        assert add_fill_current_color('<path fill="#000"/>') == '<path fill="#000"/>'


class TestAddSvgProps:
    """Tests for add_svg_props function."""

    def test_append(self):
        svg = '<svg viewBox="0 0 1 1"><path/></svg>'
        result = add_svg_props(svg, {"role": "img", "aria-label": 'say "hi"'})
        assert result == (
            '<svg viewBox="0 0 1 1" role="img" aria-label="say &quot;hi&quot;"><path/></svg>'
        )

    def test_empty(self):
        assert add_svg_props("<svg></svg>", {}) == "<svg></svg>"


class TestAddAriaAttributes:
    """Tests for add_aria_attributes function."""

    def test_both(self):
        result = add_aria_attributes("<svg></svg>", True, True)
        assert result == "<svg aria-labelledby={titleId} aria-describedby={descId}></svg>"

    def test_desc_only(self):
        result = add_aria_attributes("<svg></svg>", False, True)
        assert result == "<svg aria-describedby={descId}></svg>"

    def test_none(self):
        assert add_aria_attributes("<svg></svg>", False, False) == "<svg></svg>"


class TestAddPropsSpread:
    """Tests for add_props_spread function."""

    def test_end(self):
        result = add_props_spread('<svg viewBox="0 0 1 1"><path/></svg>')
        assert result == '<svg viewBox="0 0 1 1" {...props}><path/></svg>'

    def test_end_self_closing(self):
        result = add_props_spread('<svg viewBox="0 0 1 1"/>', "end")
        assert result == '<svg viewBox="0 0 1 1" {...props}/>'

    def test_start(self):
        result = add_props_spread('<svg viewBox="0 0 1 1"></svg>', "start")
        assert result == '<svg {...props} viewBox="0 0 1 1"></svg>'

    @pytest.mark.parametrize("placement", ["none", False, None, ""])
    def test_none(self, placement):
        assert add_props_spread("<svg></svg>", placement) == "<svg></svg>"

    @pytest.mark.parametrize("placement", ["start", "end"])
    def test_already_present(self, placement):
        svg = "<svg {...props}></svg>"
        assert add_props_spread(svg, placement).count("{...props}") == 1


class TestAddRef:
    """Tests for add_ref function."""

    def test_add(self):
        assert add_ref("<svg {...props}></svg>") == "<svg {...props} ref={ref}></svg>"

    def test_no_root(self):
        assert add_ref("<path/>") == "<path/>"


class TestAddTitleDescElements:
    """Tests for add_title_desc_elements function."""

    def test_title_then_desc(self):
        result = add_title_desc_elements("<svg><path/></svg>", True, True)
        assert result == f"<svg>{TITLE}{DESC}<path/></svg>"

    def test_self_closing_root(self):
        result = add_title_desc_elements('<svg viewBox="0 0 1 1" />', True, False)
        assert result == f'<svg viewBox="0 0 1 1">{TITLE}</svg>'

    def test_disabled(self):
        assert add_title_desc_elements("<svg></svg>", False, False) == "<svg></svg>"


class TestInjectStructure:
    """Tests for inject_structure function."""

    def test_order(self):
        config = TransformConfig(title_prop=True, ref=True, svg_props={"role": "img"})
        result = inject_structure("<svg><path/></svg>", config)
        assert result == (
            '<svg role="img" aria-labelledby={titleId} {...props} ref={ref}>'
            f"{TITLE}<path/></svg>"
        )

    def test_replacement_before_fill(self):
        config = TransformConfig(
            replace_attr_values={"#000": "currentColor"}, add_fill_current_color=True
        )
        result = inject_structure('<svg><path fill="#000" stroke="#000"/></svg>', config)
        assert result == (
            '<svg fill="currentColor" {...props}><path stroke="currentColor"/></svg>'
        )

    def test_native_skips_accessibility(self):
        config = TransformConfig(native=True, title_prop=True, desc_prop=True)
        result = inject_structure("<svg><path/></svg>", config)
        assert result == "<svg {...props}><path/></svg>"
