"""Markup to JSX translation.

Renames hyphenated/prefixed attributes to their JSX names, turns inline
``style`` strings into object literals and, for React Native output, renames
elements to react-native-svg components.
"""

import logging
import re

from .utils import ATTRIBUTE_MAP, NATIVE_ELEMENT_MAP, camel_case

logger = logging.getLogger(__name__)

# Attribute names only match right after whitespace and right before "="
ATTRIBUTE_RES = [
    (re.compile(rf"(?<=\s){re.escape(name)}="), f"{jsx_name}=")
    for name, jsx_name in ATTRIBUTE_MAP.items()
]
STYLE_ATTR_RE = re.compile(r"(?<=\s)style=\"([^\"]*)\"")
LOWER_OPEN_TAG_RE = re.compile(r"<([a-z][\w:.-]*)(?=[\s/>])")
COMPONENT_TAG_RE = re.compile(r"<([A-Z][A-Za-z]*)(?=[\s/>])")
NATIVE_COMPONENTS = frozenset(NATIVE_ELEMENT_MAP.values())


def style_to_object(style: str) -> str:
    """Convert a CSS declaration list to a JSX ``style={{ ... }}`` expression.

    Example:
        >>> style_to_object("fill:red;stroke-width:2")
        'style={{ fill: "red", strokeWidth: "2" }}'
    """
    entries = []
    for declaration in style.split(";"):
        name, _, value = declaration.partition(":")
        name = name.strip()
        if not name:
            continue
        # Custom properties are not valid identifiers
        key = f'"{name}"' if name.startswith("--") else camel_case(name)
        value = value.strip().replace('"', '\\"')
        entries.append(f'{key}: "{value}"')
    if not entries:
        return "style={{}}"
    return "style={{ %s }}" % ", ".join(entries)


def translate_attributes(svg: str) -> str:
    """Rename attributes to JSX names and convert inline styles."""
    for pattern, replacement in ATTRIBUTE_RES:
        svg = pattern.sub(replacement, svg)
    return STYLE_ATTR_RE.sub(lambda m: style_to_object(m.group(1)), svg)


def remap_native_elements(svg: str) -> str:
    """Rename SVG elements to react-native-svg components.

    Elements without a counterpart are kept and reported as warnings.
    """
    for name, component in NATIVE_ELEMENT_MAP.items():
        svg = re.sub(rf"<{re.escape(name)}(?=[\s/>])", f"<{component}", svg)
        svg = re.sub(rf"</{re.escape(name)}\s*>", f"</{component}>", svg)

    for name in sorted(set(LOWER_OPEN_TAG_RE.findall(svg))):
        logger.warning("Element <%s> has no react-native-svg counterpart", name)
    return svg


def collect_native_components(svg: str) -> list[str]:
    """Sorted react-native-svg component names used in the markup."""
    return sorted(set(COMPONENT_TAG_RE.findall(svg)) & NATIVE_COMPONENTS)


def translate(svg: str, native: bool = False) -> tuple[str, list[str]]:
    """Translate markup for code generation.

    Args:
        svg: Markup text after structural injection.
        native: Whether to target react-native-svg.

    Returns:
        Tuple of (translated markup, used native components). The component
        list is empty for web output.
    """
    svg = translate_attributes(svg)
    if not native:
        return svg, []
    svg = remap_native_elements(svg)
    components = collect_native_components(svg)
    logger.debug("Native components: %s", ", ".join(components) or "none")
    return svg, components
