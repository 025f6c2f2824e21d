"""Tests for svgr_tools.batch module."""

import json

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svgr_tools.batch import (
    BatchReport,
    ItemError,
    ItemResult,
    SvgrGenerationError,
    SvgrItem,
    SvgrValidationError,
    build_item_config,
    format_batch_report,
    run_items,
)


SVG = '<svg><path d="M1 1"/></svg>'


class TestBuildItemConfig:
    """Tests for build_item_config function."""

    def test_defaults(self):
        config = build_item_config(SvgrItem(svg_code=SVG))
        assert config.component_name == "SvgComponent"
        assert config.icon is True

    def test_empty_component_name(self):
        config = build_item_config(SvgrItem(svg_code=SVG, component_name=""))
        assert config.component_name == "SvgComponent"

    def test_entries_with_blanks_dropped(self):
        item = SvgrItem(
            svg_code=SVG,
            replace_attr_values=[
                {"from": "#000", "to": "currentColor"},
                {"from": "", "to": "x"},
                {"from": "#fff", "to": ""},
            ],
            svg_props=[{"name": "role", "value": "img"}, {"name": "", "value": "x"}],
        )
        config = build_item_config(item)
        assert config.replace_attr_values == {"#000": "currentColor"}
        assert config.svg_props == {"role": "img"}

    def test_options(self):
        item = SvgrItem(svg_code=SVG, options={"typescript": True, "export_type": "named"})
        config = build_item_config(item)
        assert config.typescript is True
        assert config.export_type == "named"


class TestRunItems:
    """Tests for run_items function."""

    def test_success(self):
        report = run_items([SvgrItem(svg_code=SVG, component_name="Icon")])

        assert len(report.entries) == 1
        result = report.entries[0]
        assert isinstance(result, ItemResult)
        assert result.paired_item == 0
        assert result.component_name == "Icon"
        assert result.svg_code == SVG
        assert result.options.component_name == "Icon"
        assert "export default Icon;" in result.react_code
        assert not report.has_errors

    @pytest.mark.parametrize("svg_code", ["", "   \n"])
    def test_blank_svg(self, svg_code):
        items = [SvgrItem(svg_code=SVG), SvgrItem(svg_code=svg_code)]
        with pytest.raises(SvgrValidationError, match="cannot be empty") as exc_info:
            run_items(items)
        assert exc_info.value.item_index == 1

    def test_generation_error_wraps_cause(self):
        item = SvgrItem(svg_code=SVG, options={"jsx_runtime": "modern"})
        with pytest.raises(SvgrGenerationError) as exc_info:
            run_items([item])
        assert exc_info.value.item_index == 0
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_continue_on_fail(self):
        items = [
            SvgrItem(svg_code=SVG, component_name="A"),
            SvgrItem(svg_code=""),
            SvgrItem(svg_code=SVG, component_name="C"),
        ]
        report = run_items(items, continue_on_fail=True)

        assert [type(e) for e in report.entries] == [ItemResult, ItemError, ItemResult]
        assert [e.paired_item for e in report.entries] == [0, 1, 2]
        assert report.errors[0].error == "SVG Code is required and cannot be empty"
        assert report.has_errors

    def test_empty_batch(self):
        report = run_items([])
        assert report.entries == []
        assert not report.has_errors


class TestBatchReport:
    """Tests for BatchReport output."""

    @pytest.fixture
    def report(self) -> BatchReport:
        return run_items(
            [SvgrItem(svg_code=SVG, component_name="Icon"), SvgrItem(svg_code=" ")],
            continue_on_fail=True,
        )

    def test_to_dict(self, report):
        data = json.loads(json.dumps(report.to_dict()))
        assert data["total"] == 2
        assert data["succeeded"] == 1
        assert data["failed"] == 1
        assert data["items"][0]["component_name"] == "Icon"
        assert data["items"][0]["options"]["icon"] is True
        assert data["items"][1] == {
            "paired_item": 1,
            "error": "SVG Code is required and cannot be empty",
        }

    def test_format_with_errors(self, report):
        text = format_batch_report(report)
        assert "[OK] Item 0: Icon" in text
        assert "[ERROR] Item 1: SVG Code is required and cannot be empty" in text
        assert "Succeeded: 1" in text
        assert "*** ERRORS DETECTED ***" in text

    def test_format_success(self):
        text = format_batch_report(run_items([SvgrItem(svg_code=SVG)]))
        assert "All items converted successfully." in text
