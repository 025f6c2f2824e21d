"""Tests for svgr_tools.formatter module."""

from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svgr_tools.formatter import format_code


class TestFormatCode:
    """Tests for format_code function."""

    def test_disabled(self):
        code = "a\n\n  b"
        assert format_code(code, enabled=False) == code

    def test_drop_blank_lines(self):
        assert format_code("a\n\n   \nb") == "a\nb"

    def test_nested_jsx(self):
        code = "\n".join(
            [
                "const A = (props) => (",
                "<svg {...props}>",
                "<g>",
                "<path/>",
                "</g>",
                "</svg>",
                ");",
            ]
        )
        assert format_code(code) == "\n".join(
            [
                "const A = (props) => (",
                "  <svg {...props}>",
                "    <g>",
                "      <path/>",
                "    </g>",
                "  </svg>",
                ");",
            ]
        )

    def test_open_and_close_on_one_line(self):
        code = "const A = (props) => (\n<g><path/></g>\n<path/>\n);"
        assert format_code(code) == "const A = (props) => (\n  <g><path/></g>\n  <path/>\n);"

    def test_braces(self):
        code = "interface P {\ntitle?: string;\n}"
        assert format_code(code) == "interface P {\n  title?: string;\n}"

    def test_arrow_body(self):
        code = "const f = () => { return (\nx\n)\n};"
        assert format_code(code) == "const f = () => { return (\n  x\n)\n};"

    def test_never_negative(self):
        assert format_code(")\n}\n</g>\nx") == ")\n}\n</g>\nx"

    def test_indent_size(self):
        assert format_code("a(\nb\n)", indent_size=4) == "a(\n    b\n)"

    def test_existing_indent_replaced(self):
        assert format_code("a(\n        b\n)") == "a(\n  b\n)"
