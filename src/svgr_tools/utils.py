"""Lookup tables and tag/attribute scanning helpers shared by the pipeline."""

import re
from dataclasses import dataclass
from typing import Iterator

# Markup attribute names and their JSX equivalents
ATTRIBUTE_MAP = {
    "class": "className",
    "for": "htmlFor",
    "stroke-width": "strokeWidth",
    "stroke-linecap": "strokeLinecap",
    "stroke-linejoin": "strokeLinejoin",
    "stroke-miterlimit": "strokeMiterlimit",
    "stroke-dasharray": "strokeDasharray",
    "stroke-dashoffset": "strokeDashoffset",
    "stroke-opacity": "strokeOpacity",
    "fill-rule": "fillRule",
    "fill-opacity": "fillOpacity",
    "clip-path": "clipPath",
    "clip-rule": "clipRule",
    "font-family": "fontFamily",
    "font-size": "fontSize",
    "font-style": "fontStyle",
    "font-variant": "fontVariant",
    "font-weight": "fontWeight",
    "letter-spacing": "letterSpacing",
    "word-spacing": "wordSpacing",
    "text-anchor": "textAnchor",
    "text-decoration": "textDecoration",
    "text-rendering": "textRendering",
    "dominant-baseline": "dominantBaseline",
    "alignment-baseline": "alignmentBaseline",
    "baseline-shift": "baselineShift",
    "stop-color": "stopColor",
    "stop-opacity": "stopOpacity",
    "flood-color": "floodColor",
    "flood-opacity": "floodOpacity",
    "lighting-color": "lightingColor",
    "color-interpolation": "colorInterpolation",
    "color-interpolation-filters": "colorInterpolationFilters",
    "marker-start": "markerStart",
    "marker-mid": "markerMid",
    "marker-end": "markerEnd",
    "paint-order": "paintOrder",
    "vector-effect": "vectorEffect",
    "image-rendering": "imageRendering",
    "shape-rendering": "shapeRendering",
    "enable-background": "enableBackground",
    "xlink:href": "xlinkHref",
    "xlink:title": "xlinkTitle",
    "xml:space": "xmlSpace",
    "xmlns:xlink": "xmlnsXlink",
}

# SVG element names and their react-native-svg components (order is significant)
NATIVE_ELEMENT_MAP = {
    "svg": "Svg",
    "circle": "Circle",
    "ellipse": "Ellipse",
    "g": "G",
    "text": "Text",
    "tspan": "TSpan",
    "textPath": "TextPath",
    "path": "Path",
    "polygon": "Polygon",
    "polyline": "Polyline",
    "line": "Line",
    "rect": "Rect",
    "use": "Use",
    "image": "Image",
    "symbol": "Symbol",
    "defs": "Defs",
    "linearGradient": "LinearGradient",
    "radialGradient": "RadialGradient",
    "stop": "Stop",
    "clipPath": "ClipPath",
    "pattern": "Pattern",
    "mask": "Mask",
    "marker": "Marker",
    "foreignObject": "ForeignObject",
}

# Inheritable presentation attributes moved between groups and their children
PRESENTATION_ATTRS = (
    "fill",
    "stroke",
    "stroke-width",
    "stroke-linecap",
    "stroke-linejoin",
    "stroke-dasharray",
    "stroke-dashoffset",
    "stroke-miterlimit",
    "stroke-opacity",
    "fill-opacity",
    "fill-rule",
    "opacity",
    "font-family",
    "font-size",
    "font-weight",
    "text-anchor",
    "dominant-baseline",
)

# Namespace prefixes written by design tools (Inkscape, Sketch, Illustrator, Affinity)
EDITOR_NAMESPACES = ("inkscape", "sodipodi", "sketch", "i", "x", "serif")

CONTAINER_ELEMENTS = ("g", "defs", "pattern", "clipPath", "mask", "symbol")

# Longest hex forms first so that the three-digit collapse never sees them
COLOR_KEYWORDS = {
    "#000000": "#000",
    "#ffffff": "#fff",
    "#ff0000": "red",
    "#00ff00": "lime",
    "#0000ff": "blue",
    "#ffff00": "yellow",
    "#00ffff": "cyan",
    "#ff00ff": "magenta",
}

# <name attrs> or <name attrs/>; group 3 is set for self-closing tags
OPEN_TAG_RE = re.compile(r"<([A-Za-z][\w:.-]*)([^>]*?)(\s*/)?>")
ATTR_RE = re.compile(r"([^\s=/>\"']+)=\"([^\"]*)\"")
ROOT_TAG_RE = re.compile(r"<svg(?=[\s/>])([^>]*?)(\s*/)?>")
# url(#id) and href="#id" (the latter also covers xlink:href)
REFERENCE_RES = (
    re.compile(r"url\(\s*#([^)\s]+)\s*\)"),
    re.compile(r"href=\"#([^\"]*)\""),
)
NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)(px)?\s*$")


@dataclass
class TagMatch:
    """Location of an element inside a markup string."""

    name: str
    attrs: str
    start: int
    open_end: int
    end: int
    self_closing: bool

    @property
    def content_span(self) -> tuple[int, int]:
        """Span of the element body (empty for self-closing elements)."""
        if self.self_closing:
            return (self.open_end, self.open_end)
        return (self.open_end, self.end - len(f"</{self.name}>"))


def attr_pattern(name: str) -> re.Pattern:
    """Build a regex matching ` name="value"` for one attribute name.

    The name must start right after whitespace and end at ``=``, so ``fill``
    does not match inside ``fill-rule`` or ``data-fill``.
    """
    return re.compile(rf"\s+{re.escape(name)}=\"([^\"]*)\"")


def get_attr(attrs: str, name: str) -> str | None:
    """Return the value of an attribute in an attribute string, or None."""
    match = attr_pattern(name).search(attrs)
    return match.group(1) if match else None


def remove_attrs(attrs: str, names: tuple[str, ...] | list[str]) -> str:
    """Remove every occurrence of the given attributes from an attribute string."""
    for name in names:
        attrs = attr_pattern(name).sub("", attrs)
    return attrs


def parse_attrs(attrs: str) -> dict[str, str]:
    """Parse an attribute string into an ordered mapping."""
    return {name: value for name, value in ATTR_RE.findall(attrs)}


def find_closing_tag(svg: str, name: str, pos: int) -> tuple[int, int] | None:
    """Find the closing tag balancing an element whose body starts at ``pos``.

    Args:
        svg: Markup text.
        name: Element name.
        pos: Index just after the element's opening tag.

    Returns:
        (start, end) of the matching ``</name>``, or None if unbalanced.
    """
    tag_re = re.compile(rf"<(/?){re.escape(name)}(?=[\s/>])[^>]*?(/?)>")
    depth = 1
    for match in tag_re.finditer(svg, pos):
        if match.group(1):
            depth -= 1
            if depth == 0:
                return match.start(), match.end()
        elif not match.group(2):
            depth += 1
    return None


def match_element(svg: str, tag: re.Match) -> TagMatch | None:
    """Extend an OPEN_TAG_RE match to the full element it opens.

    Returns None when the element has no balancing closing tag.
    """
    name = tag.group(1)
    attrs = tag.group(2)
    if tag.group(3):
        return TagMatch(name, attrs, tag.start(), tag.end(), tag.end(), True)
    closing = find_closing_tag(svg, name, tag.end())
    if closing is None:
        return None
    return TagMatch(name, attrs, tag.start(), tag.end(), closing[1], False)


def iter_elements(svg: str, name: str | None = None) -> Iterator[TagMatch]:
    """Iterate over elements in document order, optionally filtered by name.

    Nested elements are yielded too; unbalanced elements are skipped.
    """
    for tag in OPEN_TAG_RE.finditer(svg):
        if name is not None and tag.group(1) != name:
            continue
        element = match_element(svg, tag)
        if element is not None:
            yield element


def iter_children(svg: str, start: int, end: int) -> Iterator[TagMatch]:
    """Iterate over the direct child elements found in ``svg[start:end]``.

    Stops at the first child that is not balanced.
    """
    pos = start
    while True:
        tag = OPEN_TAG_RE.search(svg, pos, end)
        if tag is None:
            return
        element = match_element(svg, tag)
        if element is None or element.end > end:
            return
        yield element
        pos = element.end


def find_root(svg: str) -> re.Match | None:
    """Find the opening tag of the root ``<svg>`` element."""
    return ROOT_TAG_RE.search(svg)


def collect_references(svg: str) -> set[str]:
    """Collect ids referenced through ``url(#id)`` or ``href="#id"``."""
    referenced: set[str] = set()
    for pattern in REFERENCE_RES:
        referenced.update(pattern.findall(svg))
    return referenced


def parse_length(value: str | None, default: float = 0.0) -> float | None:
    """Parse a unitless (or px) length.

    Returns:
        The number, ``default`` when the value is missing, or None when the
        value carries another unit or is not a number.
    """
    if value is None:
        return default
    match = NUMBER_RE.match(value)
    if match is None:
        return None
    return float(match.group(1))


def format_number(value: float) -> str:
    """Format a number compactly.

    Example:
        >>> format_number(10.0)
        '10'
        >>> format_number(2.5)
        '2.5'
    """
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def camel_case(name: str) -> str:
    """Convert a hyphenated CSS property name to camelCase.

    Vendor prefixes keep their leading capital (``-webkit-mask`` becomes
    ``WebkitMask``).

    Example:
        >>> camel_case("stroke-width")
        'strokeWidth'
    """
    if name.startswith("-ms-"):
        name = name[1:]
    return re.sub(r"-([a-z])", lambda m: m.group(1).upper(), name)
