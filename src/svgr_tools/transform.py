"""SVG to React component pipeline.

This module ties the stages together:
- optimize: markup cleanup (full or basic preset)
- inject: props spread, ref, fill override, accessibility
- translate: JSX attribute names, React Native elements
- generate: component source
- format: re-indentation

It also reads transform rules from YAML files.
"""

import logging
import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Literal

import yaml

from .formatter import format_code
from .generate import generate_component
from .inject import inject_structure
from .optimize import (
    BasicOptimizeOptions,
    OptimizeConfig,
    optimize_svg,
    optimize_svg_basic,
    parse_optimize_section,
    remove_comments,
    remove_xml_proc_inst,
)
from .translate import translate

logger = logging.getLogger(__name__)

JsxRuntime = Literal["classic", "automatic"]
ExpandProps = Literal["start", "end", "none"]
ExportType = Literal["default", "named"]

CHOICES: dict[str, tuple[str, ...]] = {
    "jsx_runtime": ("classic", "automatic"),
    "expand_props": ("start", "end", "none"),
    "export_type": ("default", "named"),
}
COMPONENT_NAME_RE = re.compile(r"^[A-Za-z_$][\w$]*$")


@dataclass
class TransformConfig:
    """Options for one SVG to component transformation.

    ``svgo_options`` selects the full optimizer with those rules; when None
    the basic preset (driven by icon/dimensions/remove_view_box/
    add_fill_current_color) is used. icon/dimensions/remove_view_box can
    only add root attribute removal to custom rules, never turn it off.
    """

    component_name: str = "SvgComponent"
    icon: bool = True
    dimensions: bool = False
    typescript: bool = False
    prettier: bool = True
    add_fill_current_color: bool = False
    svgo: bool = True
    remove_view_box: bool = False
    jsx_runtime: JsxRuntime = "classic"
    ref: bool = False
    memo: bool = False
    replace_attr_values: dict[str, str] = field(default_factory=dict)
    svg_props: dict[str, str] = field(default_factory=dict)
    expand_props: ExpandProps = "end"
    title_prop: bool = False
    desc_prop: bool = False
    native: bool = False
    export_type: ExportType = "default"
    svgo_options: OptimizeConfig | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {f.name: getattr(self, f.name) for f in fields(self)}
        result["replace_attr_values"] = dict(self.replace_attr_values)
        result["svg_props"] = dict(self.svg_props)
        result["svgo_options"] = self.svgo_options.to_dict() if self.svgo_options else None
        return result


def transform_svg(svg_code: str, config: TransformConfig | None = None) -> str:
    """Transform SVG markup into React component source.

    Args:
        svg_code: SVG text. Any string is accepted; malformed markup yields
            best-effort output.
        config: Transformation options (default: TransformConfig()).

    Returns:
        Component source code.
    """
    if config is None:
        config = TransformConfig()

    svg = remove_comments(remove_xml_proc_inst(svg_code.strip()))

    if config.svgo:
        if config.svgo_options is not None:
            logger.debug("Optimizing with custom rules")
            custom = config.svgo_options
            rules = replace(
                custom,
                remove_dimensions=custom.remove_dimensions
                or config.icon
                or not config.dimensions,
                remove_view_box=custom.remove_view_box or config.remove_view_box,
            )
            svg = optimize_svg(svg, rules)
        else:
            logger.debug("Optimizing with basic preset")
            svg = optimize_svg_basic(
                svg,
                BasicOptimizeOptions(
                    icon=config.icon,
                    dimensions=config.dimensions,
                    remove_view_box=config.remove_view_box,
                    add_fill_current_color=config.add_fill_current_color,
                ),
            )

    svg = inject_structure(svg, config)
    svg, native_components = translate(svg, native=config.native)
    code = generate_component(svg, config, native_components)
    return format_code(code, enabled=config.prettier)


def _parse_pairs(value, key_field: str, value_field: str, option: str) -> dict[str, str]:
    """Parse a mapping, or a list of {key_field, value_field} entries.

    List entries with an empty key or value are skipped.
    """
    if value is None:
        return {}
    if isinstance(value, dict):
        return {str(k): str(v) for k, v in value.items()}
    if not isinstance(value, list):
        raise ValueError(f"'{option}' must be a mapping or a list")

    result: dict[str, str] = {}
    for entry in value:
        if not isinstance(entry, dict):
            raise ValueError(
                f"Each '{option}' entry must have '{key_field}' and '{value_field}' fields"
            )
        key = entry.get(key_field)
        mapped = entry.get(value_field)
        if key in (None, "") or mapped in (None, ""):
            continue
        result[str(key)] = str(mapped)
    return result


def parse_transform_section(data: dict) -> TransformConfig:
    """Parse the transform section from YAML data.

    Args:
        data: Mapping of TransformConfig field names to values.

    Returns:
        Parsed TransformConfig.

    Raises:
        ValueError: If an option is unknown or has an invalid value.
    """
    if not isinstance(data, dict):
        raise ValueError("transform section must be a mapping")

    known = {f.name for f in fields(TransformConfig)}
    config = TransformConfig()

    for name, value in data.items():
        if name not in known:
            raise ValueError(f"Unknown transform option: {name}")

        if name == "svgo_options":
            value = parse_optimize_section(value) if value is not None else None
        elif name == "replace_attr_values":
            value = _parse_pairs(value, "from", "to", name)
        elif name == "svg_props":
            value = _parse_pairs(value, "name", "value", name)
        elif name == "component_name":
            if not isinstance(value, str) or not COMPONENT_NAME_RE.match(value):
                raise ValueError(f"Invalid component name: {value!r}")
        elif name == "expand_props" and value is False:
            value = "none"
        elif name in CHOICES:
            if value not in CHOICES[name]:
                raise ValueError(
                    f"'{name}' must be one of {', '.join(CHOICES[name])}, got {value!r}"
                )
        elif not isinstance(value, bool):
            raise ValueError(f"'{name}' must be a boolean")

        setattr(config, name, value)

    return config


def parse_transform_rule_file(rule_path: Path) -> TransformConfig:
    """Parse a YAML transform rule file.

    The file can contain a ``transform`` section (TransformConfig options)
    and an ``optimize`` section (optimizer rules, same as a nested
    ``svgo_options``). Missing sections keep their defaults.

    Args:
        rule_path: Path to the YAML rule file.

    Returns:
        Parsed TransformConfig.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the rule format is invalid.
    """
    with open(rule_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError("Rule file must be a YAML dictionary")

    unknown = set(data) - {"transform", "optimize"}
    if unknown:
        raise ValueError(f"Unknown rule file sections: {', '.join(sorted(unknown))}")

    result = TransformConfig()
    if "transform" in data:
        result = parse_transform_section(data["transform"])

    if "optimize" in data:
        if result.svgo_options is not None:
            raise ValueError("Optimizer rules given both in 'optimize' and 'svgo_options'")
        result.svgo_options = parse_optimize_section(data["optimize"])

    return result
