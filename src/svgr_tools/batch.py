"""Batch conversion of SVG items.

Each item carries its own SVG text and options. Items are converted in
order; a failing item either stops the run or is recorded as an error,
depending on ``continue_on_fail``.
"""

import logging
from dataclasses import dataclass, field

from .transform import TransformConfig, parse_transform_section, transform_svg

logger = logging.getLogger(__name__)

DEFAULT_COMPONENT_NAME = "SvgComponent"


class SvgrError(Exception):
    """Base error for a failed item."""

    def __init__(self, message: str, item_index: int):
        super().__init__(message)
        self.item_index = item_index


class SvgrValidationError(SvgrError):
    """Item input is invalid (e.g. blank SVG text)."""


class SvgrGenerationError(SvgrError):
    """Unexpected failure while generating code for an item."""


@dataclass
class SvgrItem:
    """One conversion request.

    ``options`` holds TransformConfig fields other than the component name
    and the two tables. ``replace_attr_values`` entries are ``{from, to}``
    mappings and ``svg_props`` entries are ``{name, value}`` mappings.
    """

    svg_code: str
    component_name: str = DEFAULT_COMPONENT_NAME
    options: dict = field(default_factory=dict)
    replace_attr_values: list[dict] = field(default_factory=list)
    svg_props: list[dict] = field(default_factory=list)


@dataclass
class ItemResult:
    """Generated code for one item."""

    paired_item: int
    react_code: str
    svg_code: str
    component_name: str
    options: TransformConfig

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "paired_item": self.paired_item,
            "react_code": self.react_code,
            "svg_code": self.svg_code,
            "component_name": self.component_name,
            "options": self.options.to_dict(),
        }


@dataclass
class ItemError:
    """Error recorded for one item when continuing on failure."""

    paired_item: int
    error: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"paired_item": self.paired_item, "error": self.error}


@dataclass
class BatchReport:
    """Results of a batch run, one entry per item in input order."""

    entries: list[ItemResult | ItemError] = field(default_factory=list)

    @property
    def results(self) -> list[ItemResult]:
        return [e for e in self.entries if isinstance(e, ItemResult)]

    @property
    def errors(self) -> list[ItemError]:
        return [e for e in self.entries if isinstance(e, ItemError)]

    @property
    def has_errors(self) -> bool:
        """Check if any item failed."""
        return bool(self.errors)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "total": len(self.entries),
            "succeeded": len(self.results),
            "failed": len(self.errors),
            "items": [entry.to_dict() for entry in self.entries],
        }


def build_item_config(item: SvgrItem) -> TransformConfig:
    """Resolve the TransformConfig of an item.

    Raises:
        ValueError: If an option is unknown or invalid.
    """
    data = dict(item.options)
    data["component_name"] = item.component_name or DEFAULT_COMPONENT_NAME
    data["replace_attr_values"] = item.replace_attr_values
    data["svg_props"] = item.svg_props
    return parse_transform_section(data)


def convert_item(item: SvgrItem, index: int) -> ItemResult:
    """Convert one item.

    Raises:
        SvgrValidationError: If the SVG text is blank.
        SvgrGenerationError: If anything else fails.
    """
    if not item.svg_code or not item.svg_code.strip():
        raise SvgrValidationError("SVG Code is required and cannot be empty", index)

    try:
        config = build_item_config(item)
        react_code = transform_svg(item.svg_code, config)
    except Exception as e:
        raise SvgrGenerationError(str(e), index) from e

    return ItemResult(
        paired_item=index,
        react_code=react_code,
        svg_code=item.svg_code,
        component_name=config.component_name,
        options=config,
    )


def run_items(items: list[SvgrItem], continue_on_fail: bool = False) -> BatchReport:
    """Convert items in order.

    Args:
        items: Items to convert.
        continue_on_fail: Record failures as ItemError and keep going instead
            of raising.

    Returns:
        BatchReport with one entry per item.

    Raises:
        SvgrError: On the first failing item, unless continue_on_fail.
    """
    report = BatchReport()
    for index, item in enumerate(items):
        try:
            report.entries.append(convert_item(item, index))
        except SvgrError as e:
            if not continue_on_fail:
                raise
            logger.warning("Item %d failed: %s", index, e)
            report.entries.append(ItemError(paired_item=index, error=str(e)))
    return report


def format_batch_report(report: BatchReport) -> str:
    """Format batch report as text.

    Args:
        report: Batch report.

    Returns:
        Formatted text.
    """
    lines: list[str] = []
    for entry in report.entries:
        if isinstance(entry, ItemResult):
            lines.append(f"[OK] Item {entry.paired_item}: {entry.component_name}")
        else:
            lines.append(f"[ERROR] Item {entry.paired_item}: {entry.error}")
    lines.append("")

    lines.append("=" * 60)
    lines.append("SUMMARY")
    lines.append("=" * 60)
    lines.append(f"Total items: {len(report.entries)}")
    lines.append(f"Succeeded: {len(report.results)}")
    lines.append(f"Failed: {len(report.errors)}")

    if report.has_errors:
        lines.append("")
        lines.append("*** ERRORS DETECTED ***")
    else:
        lines.append("All items converted successfully.")

    return "\n".join(lines)
