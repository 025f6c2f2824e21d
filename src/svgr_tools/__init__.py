"""SVGR Tools - Convert SVG markup into React and React Native components."""

__version__ = "0.1.0"

from .optimize import (
    BasicOptimizeOptions,
    OptimizeConfig,
    optimize_svg,
    optimize_svg_basic,
    parse_optimize_section,
)
from .transform import (
    TransformConfig,
    parse_transform_rule_file,
    parse_transform_section,
    transform_svg,
)
from .batch import (
    BatchReport,
    ItemError,
    ItemResult,
    SvgrError,
    SvgrGenerationError,
    SvgrItem,
    SvgrValidationError,
    format_batch_report,
    run_items,
)

__all__ = [
    # Optimize
    "BasicOptimizeOptions",
    "OptimizeConfig",
    "optimize_svg",
    "optimize_svg_basic",
    "parse_optimize_section",
    # Transform
    "TransformConfig",
    "parse_transform_rule_file",
    "parse_transform_section",
    "transform_svg",
    # Batch
    "BatchReport",
    "ItemError",
    "ItemResult",
    "SvgrError",
    "SvgrGenerationError",
    "SvgrItem",
    "SvgrValidationError",
    "format_batch_report",
    "run_items",
]
