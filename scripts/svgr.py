#!/usr/bin/env python3
"""Convert SVG files into React components."""

import argparse
import json
import logging
import re
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svgr_tools.batch import (
    SvgrError,
    SvgrItem,
    format_batch_report,
    run_items,
)
from svgr_tools.transform import TransformConfig, parse_transform_rule_file


def component_name_from_path(path: Path) -> str:
    """Derive a PascalCase component name from a file name.

    Example:
        >>> component_name_from_path(Path("icons/arrow-left.svg"))
        'ArrowLeft'
    """
    words = [w for w in re.split(r"[^A-Za-z0-9]+", path.stem) if w]
    name = "".join(w[0].upper() + w[1:] for w in words)
    if not name or name[0].isdigit():
        name = f"Svg{name}"
    return name


def build_item(svg_code: str, name: str, config: TransformConfig) -> SvgrItem:
    """Build a batch item from resolved options."""
    options = config.to_dict()
    for key in ("component_name", "replace_attr_values", "svg_props"):
        options.pop(key)
    return SvgrItem(
        svg_code=svg_code,
        component_name=name,
        options=options,
        replace_attr_values=[
            {"from": k, "to": v} for k, v in config.replace_attr_values.items()
        ],
        svg_props=[{"name": k, "value": v} for k, v in config.svg_props.items()],
    )


def main() -> int:
    """Main entry point.

    Returns:
        Exit code:
        - 0: Success
        - 1: I/O error
        - 2: Rule file error
        - 3: Conversion errors detected
        - 4: Invalid option combination
    """
    parser = argparse.ArgumentParser(
        description="Convert SVG files into React (or React Native) components.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print a component to stdout
  %(prog)s icon.svg

  # TypeScript component with options from a rule file
  %(prog)s icon.svg --rule svgr.yaml --typescript --output Icon.tsx

  # Convert several files into a directory, skipping failures
  %(prog)s icons/*.svg --output components/ --continue-on-fail

  # JSON report
  %(prog)s icon.svg --format json
""",
    )
    parser.add_argument("svg_files", type=Path, nargs="+", help="SVG files to convert")
    parser.add_argument("--rule", "-r", type=Path, help="YAML transform rule file")
    parser.add_argument(
        "--name", "-n", type=str, help="Component name (single input only)"
    )
    parser.add_argument("--typescript", action="store_true", help="Generate TypeScript")
    parser.add_argument(
        "--native", action="store_true", help="Generate react-native-svg components"
    )
    parser.add_argument(
        "--no-prettier", action="store_true", help="Skip re-indentation of the output"
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Output file (single input) or directory (several inputs)",
    )
    parser.add_argument(
        "--continue-on-fail",
        action="store_true",
        help="Report failing files and keep converting the others",
    )
    parser.add_argument(
        "--format",
        "-f",
        choices=["text", "json"],
        default="text",
        help="Report format (default: text)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.name and len(args.svg_files) > 1:
        print("Error: --name can only be used with a single SVG file", file=sys.stderr)
        return 4

    # Parse rule file
    config = TransformConfig()
    if args.rule is not None:
        if not args.rule.exists():
            print(f"Error: Rule file not found: {args.rule}", file=sys.stderr)
            return 1
        try:
            config = parse_transform_rule_file(args.rule)
        except Exception as e:
            print(f"Error: Failed to parse rule file: {e}", file=sys.stderr)
            return 2

    if args.typescript:
        config.typescript = True
    if args.native:
        config.native = True
    if args.no_prettier:
        config.prettier = False

    # Read input files
    items = []
    for svg_file in args.svg_files:
        if not svg_file.exists():
            print(f"Error: SVG file not found: {svg_file}", file=sys.stderr)
            return 1
        try:
            svg_code = svg_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: Failed to read {svg_file}: {e}", file=sys.stderr)
            return 1
        name = args.name or component_name_from_path(svg_file)
        items.append(build_item(svg_code, name, config))

    # Convert
    try:
        report = run_items(items, continue_on_fail=args.continue_on_fail)
    except SvgrError as e:
        print(
            f"Error: Failed to convert {args.svg_files[e.item_index]}: {e}",
            file=sys.stderr,
        )
        return 3

    # Write output
    extension = ".tsx" if config.typescript else ".jsx"
    written: list[Path] = []
    if args.output is not None:
        try:
            if len(items) == 1:
                targets = [args.output]
            else:
                args.output.mkdir(parents=True, exist_ok=True)
                targets = [
                    args.output / f"{result.component_name}{extension}"
                    for result in report.results
                ]
            for target, result in zip(targets, report.results):
                target.write_text(result.react_code + "\n", encoding="utf-8")
                written.append(target)
        except OSError as e:
            print(f"Error: Failed to write output: {e}", file=sys.stderr)
            return 1

    # Print report
    if args.format == "json":
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        if args.output is None:
            for result in report.results:
                print(result.react_code)
                print()
        print(format_batch_report(report))
        for target in written:
            print(f"Output written to: {target}")

    if report.has_errors:
        return 3

    return 0


if __name__ == "__main__":
    sys.exit(main())
