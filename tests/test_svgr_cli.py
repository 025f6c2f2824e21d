"""Tests for the svgr command line script."""

import json

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

import svgr


SVG = '<svg width="24" height="24"><path d="M1 1"/></svg>'


@pytest.fixture
def svg_files(tmp_path) -> list[Path]:
    """Create two SVG input files."""
    paths = [tmp_path / "arrow-left.svg", tmp_path / "2x.svg"]
    for path in paths:
        path.write_text(SVG)
    return paths


def run(monkeypatch, *args) -> int:
    monkeypatch.setattr(sys, "argv", ["svgr.py", *map(str, args)])
    return svgr.main()


class TestComponentNameFromPath:
    """Tests for component_name_from_path function."""

    @pytest.mark.parametrize(
        "name,expected",
        [("arrow-left.svg", "ArrowLeft"), ("2x.svg", "Svg2x"), ("---.svg", "Svg")],
    )
    def test_names(self, name, expected):
        assert svgr.component_name_from_path(Path(name)) == expected


class TestMain:
    """Tests for main function."""

    def test_single_file(self, monkeypatch, capsys, svg_files):
        assert run(monkeypatch, svg_files[0]) == 0
        out = capsys.readouterr().out
        assert "const ArrowLeft = (props) => (" in out
        assert "All items converted successfully." in out

    def test_name_with_several_files(self, monkeypatch, capsys, svg_files):
        assert run(monkeypatch, *svg_files, "--name", "Icon") == 4
        assert "--name" in capsys.readouterr().err

    def test_missing_file(self, monkeypatch, tmp_path):
        assert run(monkeypatch, tmp_path / "missing.svg") == 1

    def test_bad_rule_file(self, monkeypatch, tmp_path, svg_files):
        rule_file = tmp_path / "svgr.yaml"
        rule_file.write_text("transform:\n  jsx_runtime: modern\n")
        assert run(monkeypatch, svg_files[0], "--rule", rule_file) == 2

    def test_output_directory(self, monkeypatch, tmp_path, svg_files):
        out_dir = tmp_path / "components"
        assert run(monkeypatch, *svg_files, "--typescript", "--output", out_dir) == 0
        assert (out_dir / "ArrowLeft.tsx").exists()
        assert (out_dir / "Svg2x.tsx").exists()

    def test_json_report(self, monkeypatch, capsys, svg_files):
        assert run(monkeypatch, svg_files[0], "--format", "json") == 0
        data = json.loads(capsys.readouterr().out)
        assert data["succeeded"] == 1
        assert data["items"][0]["component_name"] == "ArrowLeft"
