"""React component source generation.

Wraps translated markup in a component definition:
imports, optional props interface, component body, export.
"""

import logging

logger = logging.getLogger(__name__)

WEB_PROPS_TYPE = "SVGProps<SVGSVGElement>"
NATIVE_PROPS_TYPE = "SvgProps"


def _react_import(helpers: list[str], jsx_runtime: str) -> str:
    """Value import from "react" (empty when the automatic runtime needs none)."""
    if helpers:
        return 'import {{ {} }} from "react";'.format(", ".join(helpers))
    if jsx_runtime == "classic":
        return 'import * as React from "react";'
    return ""


def build_imports(config, native_components: list[str] | None = None) -> list[str]:
    """Build the import statements for a component.

    Args:
        config: TransformConfig of the component.
        native_components: react-native-svg components used by the markup.

    Returns:
        Import lines in output order.
    """
    helpers = sorted(
        name for name, enabled in (("forwardRef", config.ref), ("memo", config.memo)) if enabled
    )
    lines = [_react_import(helpers, config.jsx_runtime)]

    if config.native:
        if config.typescript and config.ref:
            lines.append('import type { Ref } from "react";')
        components = native_components or ["Svg"]
        lines.append('import {{ {} }} from "react-native-svg";'.format(", ".join(components)))
        if config.typescript:
            lines.append('import type { SvgProps } from "react-native-svg";')
    elif config.typescript:
        types = ["SVGProps", "Ref"] if config.ref else ["SVGProps"]
        lines.append('import type {{ {} }} from "react";'.format(", ".join(types)))

    return [line for line in lines if line]


def build_props_interface(config) -> str:
    """Props interface for typed components with title/desc props."""
    if not config.typescript or not (config.title_prop or config.desc_prop):
        return ""

    base = NATIVE_PROPS_TYPE if config.native else WEB_PROPS_TYPE
    lines = [f"interface {config.component_name}Props extends {base} {{"]
    if config.title_prop:
        lines.append("  title?: string;")
        lines.append("  titleId?: string;")
    if config.desc_prop:
        lines.append("  desc?: string;")
        lines.append("  descId?: string;")
    lines.append("}")
    return "\n".join(lines)


def build_params(config) -> str:
    """Parameter list of the component function, parentheses included."""
    names = []
    if config.title_prop:
        names.extend(["title", "titleId"])
    if config.desc_prop:
        names.extend(["desc", "descId"])

    if names:
        params = "{{ {}, ...props }}".format(", ".join(names))
        if config.typescript:
            params += f": {config.component_name}Props"
    else:
        params = "props"
        if config.typescript:
            params += ": " + (NATIVE_PROPS_TYPE if config.native else WEB_PROPS_TYPE)

    if config.ref:
        params += ", ref"
        if config.typescript:
            params += ": Ref<Svg>" if config.native else ": Ref<SVGSVGElement>"
    return f"({params})"


def build_component(markup: str, config) -> str:
    """Component definition wrapping the markup.

    The ref wrapper is innermost and memo outermost.
    """
    params = build_params(config)
    if config.memo and config.ref:
        opening, closing = f"memo(forwardRef({params} => (", ")));"
    elif config.ref:
        opening, closing = f"forwardRef({params} => (", "));"
    elif config.memo:
        opening, closing = f"memo({params} => (", "));"
    else:
        opening, closing = f"{params} => (", ");"

    body = "\n".join(f"  {line.strip()}" for line in markup.split("\n") if line.strip())
    return f"const {config.component_name} = {opening}\n{body}\n{closing}"


def build_export(config) -> str:
    if config.export_type == "named":
        return f"export {{ {config.component_name} }};"
    return f"export default {config.component_name};"


def generate_component(markup: str, config, native_components: list[str] | None = None) -> str:
    """Generate component source code.

    Args:
        markup: Translated JSX markup.
        config: TransformConfig.
        native_components: react-native-svg components used by the markup
            (native output only).

    Returns:
        Unformatted component source.
    """
    segments = [
        "\n".join(build_imports(config, native_components)),
        build_props_interface(config),
        build_component(markup, config),
        build_export(config),
    ]
    logger.debug(
        "Generating %s (typescript=%s, native=%s, ref=%s, memo=%s)",
        config.component_name,
        config.typescript,
        config.native,
        config.ref,
        config.memo,
    )
    return "\n".join(segment for segment in segments if segment)
