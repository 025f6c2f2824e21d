"""SVG markup optimizer.

Rewrites SVG text with independent rules, applied in stages:
- document cleanup
- attribute cleanup
- element removal
- style optimization
- numeric cleanup
- group optimization
- shape/path optimization
- legacy attribute removal

Every rule is a plain ``str -> str`` function and is gated by the field of
the same name in OptimizeConfig. Later stages consume the output of earlier
ones, so the order in RULES must not change.
"""

import logging
import re
from dataclasses import dataclass, fields
from typing import Callable

from .utils import (
    COLOR_KEYWORDS,
    CONTAINER_ELEMENTS,
    EDITOR_NAMESPACES,
    OPEN_TAG_RE,
    PRESENTATION_ATTRS,
    TagMatch,
    attr_pattern,
    collect_references,
    find_closing_tag,
    find_root,
    format_number,
    get_attr,
    iter_children,
    iter_elements,
    match_element,
    parse_attrs,
    parse_length,
    remove_attrs,
)

logger = logging.getLogger(__name__)

DEFAULT_ID_PREFIX = "svgr_"


@dataclass
class OptimizeConfig:
    """Optimizer rule switches.

    Field defaults form the full preset. ``prefix_ids`` accepts True (use
    DEFAULT_ID_PREFIX) or the prefix string itself.
    """

    # Document cleanup
    remove_doctype: bool = True
    remove_xml_proc_inst: bool = True
    remove_comments: bool = True
    remove_metadata: bool = True
    remove_editors_ns_data: bool = True

    # Attribute cleanup
    cleanup_attrs: bool = True
    cleanup_ids: bool = False
    remove_empty_attrs: bool = True
    remove_unused_ns: bool = True
    prefix_ids: bool | str = False

    # Element removal
    remove_title: bool = False
    remove_desc: bool = False
    remove_hidden_elems: bool = True
    remove_empty_containers: bool = True
    remove_empty_text: bool = True
    remove_useless_defs: bool = False

    # Style optimization
    convert_colors: bool = True
    minify_styles: bool = True
    merge_styles: bool = False
    inline_styles: bool = False

    # Numeric cleanup
    cleanup_numeric_values: bool = True

    # Group optimization
    move_elems_attrs_to_group: bool = False
    move_group_attrs_to_elems: bool = False
    collapse_groups: bool = True

    # Shape/path optimization
    convert_shape_to_path: bool = False
    convert_path_data: bool = False
    convert_transform: bool = False
    merge_paths: bool = False

    # Legacy attribute removal
    remove_style_attr: bool = True
    remove_shape_rendering: bool = True
    remove_dimensions: bool = False
    remove_view_box: bool = False
    remove_fill: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class BasicOptimizeOptions:
    """Legacy option record accepted by optimize_svg_basic."""

    icon: bool = False
    dimensions: bool = False
    remove_view_box: bool = False
    add_fill_current_color: bool = False


# ============================================================
# Document cleanup
# ============================================================


def _element_re(name: str) -> re.Pattern:
    """Regex matching a whole ``<name>`` element (self-closing or not, no nesting)."""
    n = re.escape(name)
    return re.compile(rf"<{n}(?=[\s/>])(?:[^>]*?/>|[\s\S]*?</{n}\s*>)")


DOCTYPE_RE = re.compile(r"<!DOCTYPE[^>\[]*(?:\[[\s\S]*?\])?\s*>\s*", re.IGNORECASE)
XML_PROC_INST_RE = re.compile(r"<\?xml(?=\s)[^?]*\?>\s*", re.IGNORECASE)
COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")
METADATA_RE = _element_re("metadata")
TITLE_RE = _element_re("title")
DESC_RE = _element_re("desc")


def remove_doctype(svg: str) -> str:
    """Remove a DOCTYPE declaration, including an internal subset."""
    return DOCTYPE_RE.sub("", svg)


def remove_xml_proc_inst(svg: str) -> str:
    """Remove the ``<?xml ...?>`` declaration."""
    return XML_PROC_INST_RE.sub("", svg)


def remove_comments(svg: str) -> str:
    return COMMENT_RE.sub("", svg)


def remove_metadata(svg: str) -> str:
    return METADATA_RE.sub("", svg)


def remove_editors_ns_data(svg: str) -> str:
    """Remove design-tool namespaces with their attributes and elements.

    Also drops Figma ``data-figma*`` and generic ``data-name`` attributes.
    """
    for prefix in EDITOR_NAMESPACES:
        p = re.escape(prefix)
        svg = re.sub(rf"\s+xmlns:{p}=\"[^\"]*\"", "", svg)
        svg = re.sub(rf"\s+{p}:[\w.-]+=\"[^\"]*\"", "", svg)
        svg = re.sub(rf"<{p}:[\w.-]+[^>]*?/>", "", svg)
        svg = re.sub(rf"<{p}:([\w.-]+)(?=[\s>])[\s\S]*?</{p}:\1\s*>", "", svg)
    svg = re.sub(r"\s+data-figma[\w-]*=\"[^\"]*\"", "", svg)
    svg = re.sub(r"\s+data-name=\"[^\"]*\"", "", svg)
    return svg


# ============================================================
# Attribute cleanup
# ============================================================

ATTR_VALUE_RE = re.compile(r"([\w:.-]+)=\"([^\"]*)\"")
ID_ATTR_RE = re.compile(r"\sid=\"([^\"]+)\"")
STYLE_BLOCK_RE = re.compile(r"<style(?=[\s>])[^>]*>([\s\S]*?)</style\s*>")
CSS_SELECTOR_RE = re.compile(r"([^{}]+)(\{[^{}]*\})")
CSS_NAME_RE = re.compile(r"([.#])([A-Za-z_][\w-]*)")


def cleanup_attrs(svg: str) -> str:
    """Collapse whitespace runs inside attribute values and trim them."""

    def clean(match: re.Match) -> str:
        value = re.sub(r"\s+", " ", match.group(2)).strip()
        return f'{match.group(1)}="{value}"'

    return ATTR_VALUE_RE.sub(clean, svg)


def _style_references(svg: str) -> set[str]:
    """Ids used as ``#id`` selectors in style blocks."""
    referenced: set[str] = set()
    for block in STYLE_BLOCK_RE.findall(svg):
        for selectors, _ in CSS_SELECTOR_RE.findall(block):
            referenced.update(
                name for kind, name in CSS_NAME_RE.findall(selectors) if kind == "#"
            )
    return referenced


def cleanup_ids(svg: str) -> str:
    """Remove ``id`` attributes that nothing references."""
    defined = set(ID_ATTR_RE.findall(svg))
    referenced = collect_references(svg) | _style_references(svg)
    for aria in re.findall(r"aria-(?:labelledby|describedby)=\"([^\"]*)\"", svg):
        referenced.update(aria.split())

    for unused in sorted(defined - referenced):
        svg = re.sub(rf"\s+id=\"{re.escape(unused)}\"", "", svg)
    return svg


def remove_empty_attrs(svg: str) -> str:
    return re.sub(r"\s+[\w:.-]+=\"\"", "", svg)


def remove_unused_ns(svg: str) -> str:
    """Drop the default namespace, and the xlink one when nothing uses it."""
    svg = re.sub(r"\s+xmlns=\"[^\"]*\"", "", svg)
    if not re.search(r"\sxlink:[\w-]+=", svg):
        svg = re.sub(r"\s+xmlns:xlink=\"[^\"]*\"", "", svg)
    return svg


def prefix_ids(svg: str, prefix: str) -> str:
    """Prefix every id and class token, rewriting references to match.

    Tokens that already start with the prefix are left alone.
    """
    if not prefix:
        return svg

    def prefixed(token: str) -> str:
        return token if token.startswith(prefix) else f"{prefix}{token}"

    svg = ID_ATTR_RE.sub(lambda m: f' id="{prefixed(m.group(1))}"', svg)
    svg = re.sub(
        r"url\(\s*#([^)\s]+)\s*\)", lambda m: f"url(#{prefixed(m.group(1))})", svg
    )
    svg = re.sub(r"href=\"#([^\"]+)\"", lambda m: f'href="#{prefixed(m.group(1))}"', svg)
    svg = re.sub(
        r"\sclass=\"([^\"]*)\"",
        lambda m: ' class="{}"'.format(" ".join(prefixed(c) for c in m.group(1).split())),
        svg,
    )

    def prefix_selectors(match: re.Match) -> str:
        selectors = CSS_NAME_RE.sub(
            lambda s: f"{s.group(1)}{prefixed(s.group(2))}", match.group(1)
        )
        return f"{selectors}{match.group(2)}"

    def prefix_block(match: re.Match) -> str:
        css = CSS_SELECTOR_RE.sub(prefix_selectors, match.group(1))
        open_tag = match.group(0)[: match.start(1) - match.start(0)]
        return f"{open_tag}{css}</style>"

    return STYLE_BLOCK_RE.sub(prefix_block, svg)


# ============================================================
# Element removal
# ============================================================

HIDDEN_STYLE_RE = re.compile(
    r"(?:^|;)\s*(?:display\s*:\s*none|visibility\s*:\s*hidden"
    r"|opacity\s*:\s*(?:0+(?:\.0*)?|\.0+))\s*(?:;|$)",
    re.IGNORECASE,
)
EMPTY_CONTAINER_RE = re.compile(
    r"<({})(?=[\s/>])([^>]*?)(?:/>|>\s*</\1\s*>)".format("|".join(CONTAINER_ELEMENTS))
)
EMPTY_TEXT_RE = re.compile(r"<text(?=[\s/>])[^>]*?(?:/>|>\s*</text\s*>)")


def remove_title(svg: str) -> str:
    return TITLE_RE.sub("", svg)


def remove_desc(svg: str) -> str:
    return DESC_RE.sub("", svg)


def _is_hidden(attrs: str) -> bool:
    """Check whether an attribute string marks its element as not rendered."""
    style = get_attr(attrs, "style")
    if style and HIDDEN_STYLE_RE.search(style):
        return True
    if get_attr(attrs, "display") == "none":
        return True
    if get_attr(attrs, "visibility") == "hidden":
        return True
    opacity = get_attr(attrs, "opacity")
    return opacity is not None and parse_length(opacity) == 0


def remove_hidden_elems(svg: str) -> str:
    """Remove elements hidden by display, visibility or zero opacity.

    The root ``<svg>`` is never removed. Elements without a balancing closing
    tag are left as they are.
    """
    pos = 0
    while True:
        tag = OPEN_TAG_RE.search(svg, pos)
        if tag is None:
            return svg
        if tag.group(1) != "svg" and _is_hidden(tag.group(2)):
            element = match_element(svg, tag)
            if element is not None:
                svg = svg[: element.start] + svg[element.end :]
                pos = element.start
                continue
        pos = tag.end()


def remove_empty_containers(svg: str) -> str:
    """Remove containers with no content, repeating until nothing changes.

    An empty container is kept when its id is referenced (an empty clipPath
    still clips).
    """

    def drop(match: re.Match) -> str:
        element_id = get_attr(match.group(2), "id")
        if element_id is not None and element_id in referenced:
            return match.group(0)
        return ""

    previous = None
    while svg != previous:
        previous = svg
        referenced = collect_references(svg)
        svg = EMPTY_CONTAINER_RE.sub(drop, svg)
    return svg


def remove_empty_text(svg: str) -> str:
    return EMPTY_TEXT_RE.sub("", svg)


def _find_useless_def(svg: str, referenced: set[str]) -> TagMatch | None:
    for defs in iter_elements(svg, "defs"):
        start, end = defs.content_span
        for child in iter_children(svg, start, end):
            if get_attr(child.attrs, "id") is None:
                continue
            ids = {
                get_attr(tag.group(2), "id")
                for tag in OPEN_TAG_RE.finditer(svg, child.start, child.end)
            }
            if not ids & referenced:
                return child
    return None


def remove_useless_defs(svg: str) -> str:
    """Remove identified ``<defs>`` children that nothing references.

    A child is kept when its own id or any id inside it is referenced.
    Removing a child can orphan the ids it referenced, so this repeats until
    every remaining identified child is referenced.
    """
    child = _find_useless_def(svg, collect_references(svg))
    while child is not None:
        logger.debug("Removing unreferenced <%s> from defs", child.name)
        svg = svg[: child.start] + svg[child.end :]
        child = _find_useless_def(svg, collect_references(svg))
    return svg


# ============================================================
# Style optimization
# ============================================================

RGB_RE = re.compile(r"rgb\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)", re.IGNORECASE)
# A color never directly follows url( or href=" (those are fragment references)
_NOT_REFERENCE = r"(?<!url\()(?<!href=\")"
COLOR_KEYWORD_RES = [
    (re.compile(rf"{_NOT_REFERENCE}{re.escape(hex_color)}(?![0-9a-fA-F])", re.IGNORECASE), name)
    for hex_color, name in COLOR_KEYWORDS.items()
]
SHORT_HEX_RE = re.compile(
    rf"{_NOT_REFERENCE}#([0-9a-fA-F])\1([0-9a-fA-F])\2([0-9a-fA-F])\3(?![0-9a-fA-F])",
    re.IGNORECASE,
)
CSS_RULE_RE = re.compile(r"([^{}]+)\{([^{}]*)\}")
SIMPLE_SELECTOR_RE = re.compile(r"^[.#]?[A-Za-z_][\w-]*$")


def _shorten_colors(text: str) -> str:
    def to_hex(match: re.Match) -> str:
        return "#" + "".join(f"{min(int(c), 255):02x}" for c in match.groups())

    text = RGB_RE.sub(to_hex, text)
    for pattern, name in COLOR_KEYWORD_RES:
        text = pattern.sub(name, text)
    return SHORT_HEX_RE.sub(r"#\1\2\3", text)


def convert_colors(svg: str) -> str:
    """Shorten color values.

    - ``rgb(r, g, b)`` becomes ``#rrggbb``
    - a few well-known colors become keywords or short hex
    - ``#aabbcc`` becomes ``#abc``

    Inside ``<style>`` blocks only declarations are touched; ``#id``
    selectors keep their spelling.
    """
    parts = []
    pos = 0
    for block in STYLE_BLOCK_RE.finditer(svg):
        parts.append(_shorten_colors(svg[pos : block.start(1)]))
        parts.append(
            CSS_SELECTOR_RE.sub(
                lambda m: m.group(1) + _shorten_colors(m.group(2)), block.group(1)
            )
        )
        pos = block.end(1)
    parts.append(_shorten_colors(svg[pos:]))
    return "".join(parts)


def minify_styles(svg: str) -> str:
    """Strip comments and needless whitespace from ``<style>`` blocks."""

    def minify(match: re.Match) -> str:
        css = re.sub(r"/\*[\s\S]*?\*/", "", match.group(1))
        css = re.sub(r"\s+", " ", css)
        css = re.sub(r";\s+", ";", css)
        css = re.sub(r":\s+", ":", css)
        css = re.sub(r"\s*\{\s*", "{", css)
        css = re.sub(r"\s*\}\s*", "}", css)
        return f"<style>{css.strip()}</style>"

    return STYLE_BLOCK_RE.sub(minify, svg)


def merge_styles(svg: str) -> str:
    """Merge every ``<style>`` block into one, placed first inside the root."""
    blocks = STYLE_BLOCK_RE.findall(svg)
    if len(blocks) <= 1:
        return svg

    svg = STYLE_BLOCK_RE.sub("", svg)
    merged = "<style>{}</style>".format("".join(block.strip() for block in blocks))
    root = find_root(svg)
    if root is None or root.group(2):
        return merged + svg
    return svg[: root.end()] + merged + svg[root.end() :]


def _parse_css_rules(css: str) -> tuple[dict[str, list[str]], list[str]]:
    """Split a stylesheet into inlinable rules and the rules left over.

    Returns:
        Tuple of (declarations by simple selector, leftover rule texts).
    """
    css = re.sub(r"/\*[\s\S]*?\*/", "", css)
    css = css.replace("<![CDATA[", "").replace("]]>", "")

    rules: dict[str, list[str]] = {}
    leftover: list[str] = []
    for selector_text, body in CSS_RULE_RE.findall(css):
        declarations = [d.strip() for d in body.split(";") if d.strip()]
        if not declarations:
            continue
        complex_selectors = []
        for selector in selector_text.split(","):
            selector = selector.strip()
            if SIMPLE_SELECTOR_RE.match(selector):
                rules.setdefault(selector, []).extend(declarations)
            elif selector:
                complex_selectors.append(selector)
        if complex_selectors:
            leftover.append("{}{{{}}}".format(",".join(complex_selectors), body.strip()))
    return rules, leftover


def _apply_inline_rules(svg: str, rules: dict[str, list[str]]) -> str:
    def apply(tag: re.Match) -> str:
        name, attrs = tag.group(1), tag.group(2)
        if name == "style":
            return tag.group(0)

        # Lowest specificity first so later declarations win
        declarations = list(rules.get(name, []))
        for class_name in (get_attr(attrs, "class") or "").split():
            declarations.extend(rules.get(f".{class_name}", []))
        element_id = get_attr(attrs, "id")
        if element_id:
            declarations.extend(rules.get(f"#{element_id}", []))
        if not declarations:
            return tag.group(0)

        existing = get_attr(attrs, "style")
        if existing is not None:
            declarations.extend(d.strip() for d in existing.split(";") if d.strip())
            style = ";".join(declarations)
            attrs = attr_pattern("style").sub(lambda _: f' style="{style}"', attrs, count=1)
        else:
            attrs = '{} style="{}"'.format(attrs, ";".join(declarations))
        return f"<{name}{attrs}{tag.group(3) or ''}>"

    return OPEN_TAG_RE.sub(apply, svg)


def inline_styles(svg: str) -> str:
    """Move simple ``<style>`` rules onto the elements they select.

    Class, id and element selectors are inlined as ``style`` attributes; the
    element's own inline declarations keep precedence. Rules with other
    selectors stay in the block, which is removed once empty. Blocks that use
    at-rules are left untouched.
    """
    rules: dict[str, list[str]] = {}

    def strip_block(match: re.Match) -> str:
        css = match.group(1)
        if "@" in css:
            return match.group(0)
        block_rules, leftover = _parse_css_rules(css)
        for selector, declarations in block_rules.items():
            rules.setdefault(selector, []).extend(declarations)
        return "<style>{}</style>".format("".join(leftover)) if leftover else ""

    svg = STYLE_BLOCK_RE.sub(strip_block, svg)
    if not rules:
        return svg
    return _apply_inline_rules(svg, rules)


# ============================================================
# Numeric cleanup
# ============================================================

TRAILING_ZERO_RE = re.compile(r"(?<![\d.])(\d+)\.0+(?![\d.])")
LEADING_ZERO_RE = re.compile(r"(?<![\d.])0+\.(\d)")
ZERO_UNIT_RE = re.compile(
    r"(?<![\d.])(?:0+(?:\.0*)?|\.0+)(?:px|em|ex|pt|pc|cm|mm|in|%)(?![\w%.])", re.IGNORECASE
)


def cleanup_numeric_values(svg: str) -> str:
    """Shorten numbers in attribute values.

    Example:
        ``1.0`` -> ``1``, ``0.5`` -> ``.5``, ``0px`` -> ``0``
    """

    def clean(match: re.Match) -> str:
        value = TRAILING_ZERO_RE.sub(r"\1", match.group(1))
        value = LEADING_ZERO_RE.sub(r".\1", value)
        value = ZERO_UNIT_RE.sub("0", value)
        value = re.sub(r"\s+", " ", value)
        return f'="{value}"'

    return re.sub(r"=\"([^\"]*)\"", clean, svg)


# ============================================================
# Group optimization
# ============================================================

BARE_GROUP_RE = re.compile(r"<g\s*>")


def _open_groups(svg: str, pos: int = 0):
    for tag in OPEN_TAG_RE.finditer(svg, pos):
        if tag.group(1) == "g" and not tag.group(3):
            yield tag


def _direct_children(svg: str, group: TagMatch) -> list[TagMatch] | None:
    """Direct children of a group, or None if it holds anything else."""
    start, end = group.content_span
    children = list(iter_children(svg, start, end))
    pos = start
    for child in children:
        if svg[pos : child.start].strip():
            return None
        pos = child.end
    if svg[pos:end].strip():
        return None
    return children


def _append_attrs(tag_text: str, attrs: dict[str, str]) -> str:
    """Insert attributes at the end of an opening tag."""
    extra = "".join(f' {name}="{value}"' for name, value in attrs.items())
    return re.sub(r"(\s*/?>)$", lambda m: extra + m.group(1), tag_text, count=1)


def _rewrite_children(svg: str, group: TagMatch, children: list[TagMatch], rewrite) -> str:
    """Rebuild a group body with every child's opening tag passed through ``rewrite``."""
    start, end = group.content_span
    parts = []
    pos = start
    for child in children:
        parts.append(svg[pos : child.start])
        parts.append(rewrite(svg[child.start : child.open_end], child))
        parts.append(svg[child.open_end : child.end])
        pos = child.end
    parts.append(svg[pos:end])
    return "".join(parts)


def move_elems_attrs_to_group(svg: str) -> str:
    """Hoist presentation attributes shared by every child onto the group.

    Only groups with at least two element children are considered, and an
    attribute the group already sets is never hoisted. Hoisting from an
    inner group can leave it free to take its own children's attributes,
    so passes repeat until nothing moves.
    """
    while True:
        hoisted = _hoist_shared_attrs(svg)
        if hoisted == svg:
            return svg
        svg = hoisted


def _hoist_shared_attrs(svg: str) -> str:
    for tag in reversed(list(_open_groups(svg))):
        group = match_element(svg, tag)
        if group is None:
            continue
        children = _direct_children(svg, group)
        if not children or len(children) < 2:
            continue

        common: dict[str, str] = {}
        for attr in PRESENTATION_ATTRS:
            if get_attr(group.attrs, attr) is not None:
                continue
            values = {get_attr(child.attrs, attr) for child in children}
            if len(values) == 1 and None not in values:
                common[attr] = values.pop()
        if not common:
            continue

        body = _rewrite_children(
            svg, group, children, lambda text, _: remove_attrs(text, list(common))
        )
        open_tag = _append_attrs(svg[group.start : group.open_end], common)
        svg = svg[: group.start] + open_tag + body + svg[group.content_span[1] :]
    return svg


def move_group_attrs_to_elems(svg: str) -> str:
    """Push a group's presentation attributes down onto its children.

    Children that already define an attribute keep their own value. The
    attributes are then removed from the group.
    """
    pos = 0
    while True:
        tag = next(_open_groups(svg, pos), None)
        if tag is None:
            return svg
        pos = tag.end()
        group = match_element(svg, tag)
        if group is None:
            continue
        inherited = {
            attr: value
            for attr, value in parse_attrs(group.attrs).items()
            if attr in PRESENTATION_ATTRS
        }
        if not inherited:
            continue
        children = _direct_children(svg, group)
        if not children:
            continue

        def add_missing(text: str, child: TagMatch) -> str:
            missing = {
                attr: value
                for attr, value in inherited.items()
                if get_attr(child.attrs, attr) is None
            }
            return _append_attrs(text, missing) if missing else text

        body = _rewrite_children(svg, group, children, add_missing)
        open_tag = remove_attrs(svg[group.start : group.open_end], list(inherited))
        svg = svg[: group.start] + open_tag + body + svg[group.content_span[1] :]
        pos = group.start + len(open_tag)


def collapse_groups(svg: str) -> str:
    """Replace every attribute-less ``<g>`` with its content.

    Groups carrying any attribute (an id in particular) are kept.
    """
    pos = 0
    while True:
        tag = BARE_GROUP_RE.search(svg, pos)
        if tag is None:
            return svg
        closing = find_closing_tag(svg, "g", tag.end())
        if closing is None:
            pos = tag.end()
            continue
        content = svg[tag.end() : closing[0]].strip()
        svg = svg[: tag.start()] + content + svg[closing[1] :]
        pos = tag.start()


# ============================================================
# Shape/path optimization
# ============================================================


def _shape_re(name: str) -> re.Pattern:
    return re.compile(rf"<{name}(?=[\s/>])([^>]*?)(?:\s*/>|>\s*</{name}\s*>)")


RECT_RE = _shape_re("rect")
CIRCLE_RE = _shape_re("circle")
ELLIPSE_RE = _shape_re("ellipse")
LINE_RE = _shape_re("line")
POLYGON_RE = _shape_re("polygon")
POLYLINE_RE = _shape_re("polyline")


def _lengths(attrs: str, *names: str) -> list[float] | None:
    values = [parse_length(get_attr(attrs, name)) for name in names]
    if any(value is None for value in values):
        return None
    return values


def _rect_path(attrs: str) -> tuple[str, str] | None:
    geometry = _lengths(attrs, "x", "y", "width", "height")
    if geometry is None:
        return None
    x, y, width, height = geometry
    if width <= 0 or height <= 0:
        return None

    # rx and ry default to each other
    rx_value, ry_value = get_attr(attrs, "rx"), get_attr(attrs, "ry")
    rx = parse_length(rx_value if rx_value is not None else ry_value)
    ry = parse_length(ry_value if ry_value is not None else rx_value)
    if rx is None or ry is None:
        return None

    f = format_number
    r = min(rx, ry, width / 2, height / 2)
    if r > 0:
        arc = f"a{f(r)},{f(r)} 0 0 1"
        inner_w, inner_h = width - 2 * r, height - 2 * r
        d = (
            f"M{f(x + r)},{f(y)}h{f(inner_w)}{arc} {f(r)},{f(r)}"
            f"v{f(inner_h)}{arc} {f(-r)},{f(r)}"
            f"h{f(-inner_w)}{arc} {f(-r)},{f(-r)}"
            f"v{f(-inner_h)}{arc} {f(r)},{f(-r)}z"
        )
    else:
        d = f"M{f(x)},{f(y)}h{f(width)}v{f(height)}h{f(-width)}z"
    return remove_attrs(attrs, ("x", "y", "width", "height", "rx", "ry")), d


def _ellipse_d(cx: float, cy: float, rx: float, ry: float) -> str:
    f = format_number
    arc = f"a{f(rx)},{f(ry)} 0 1 0"
    return f"M{f(cx - rx)},{f(cy)}{arc} {f(2 * rx)},0{arc} {f(-2 * rx)},0z"


def _circle_path(attrs: str) -> tuple[str, str] | None:
    geometry = _lengths(attrs, "cx", "cy", "r")
    if geometry is None or geometry[2] <= 0:
        return None
    cx, cy, r = geometry
    return remove_attrs(attrs, ("cx", "cy", "r")), _ellipse_d(cx, cy, r, r)


def _ellipse_path(attrs: str) -> tuple[str, str] | None:
    geometry = _lengths(attrs, "cx", "cy", "rx", "ry")
    if geometry is None or geometry[2] <= 0 or geometry[3] <= 0:
        return None
    return remove_attrs(attrs, ("cx", "cy", "rx", "ry")), _ellipse_d(*geometry)


def _line_path(attrs: str) -> tuple[str, str] | None:
    geometry = _lengths(attrs, "x1", "y1", "x2", "y2")
    if geometry is None:
        return None
    x1, y1, x2, y2 = (format_number(v) for v in geometry)
    return remove_attrs(attrs, ("x1", "y1", "x2", "y2")), f"M{x1},{y1}L{x2},{y2}"


def _points_path(attrs: str, closed: bool) -> tuple[str, str] | None:
    points = get_attr(attrs, "points")
    if points is None:
        return None
    coords = [c for c in re.split(r"[\s,]+", points.strip()) if c]
    if len(coords) < 4 or len(coords) % 2:
        return None
    d = f"M{coords[0]},{coords[1]}"
    for i in range(2, len(coords), 2):
        d += f"L{coords[i]},{coords[i + 1]}"
    if closed:
        d += "z"
    return remove_attrs(attrs, ("points",)), d


SHAPE_CONVERTERS: list[tuple[re.Pattern, Callable[[str], tuple[str, str] | None]]] = [
    (RECT_RE, _rect_path),
    (CIRCLE_RE, _circle_path),
    (ELLIPSE_RE, _ellipse_path),
    (LINE_RE, _line_path),
    (POLYGON_RE, lambda attrs: _points_path(attrs, closed=True)),
    (POLYLINE_RE, lambda attrs: _points_path(attrs, closed=False)),
]


def convert_shape_to_path(svg: str) -> str:
    """Rewrite basic shapes as equivalent ``<path>`` elements.

    Shapes that cannot be converted exactly (units, zero size, odd point
    lists) are left as they are. Other attributes are kept.
    """
    for pattern, converter in SHAPE_CONVERTERS:

        def convert(match: re.Match) -> str:
            converted = converter(match.group(1))
            if converted is None:
                return match.group(0)
            attrs, d = converted
            return f'<path{attrs.rstrip()} d="{d}"/>'

        svg = pattern.sub(convert, svg)
    return svg


def _compress_path_data(d: str) -> str:
    d = re.sub(r"\s+", " ", d)
    d = re.sub(r"([MLHVCSQTAZ])\s+", r"\1", d, flags=re.IGNORECASE)
    d = re.sub(r"\s+([MLHVCSQTAZ])", r"\1", d, flags=re.IGNORECASE)
    d = re.sub(r"(\d)\s+-", r"\1-", d)
    d = re.sub(r"\s*,\s*", " ", d)
    d = re.sub(r"\s+", " ", d).strip()
    d = LEADING_ZERO_RE.sub(r".\1", d)
    d = re.sub(r"(\.\d*?)0+(\s|$|[A-Za-z])", r"\1\2", d)
    return re.sub(r"\.(\s|$|[A-Za-z])", r"\1", d)


def convert_path_data(svg: str) -> str:
    """Compress ``d`` attributes: separators, whitespace and redundant zeros."""
    return re.sub(
        r"\sd=\"([^\"]*)\"", lambda m: f' d="{_compress_path_data(m.group(1))}"', svg
    )


IDENTITY_TRANSFORM_RES = (
    re.compile(r"translate\(\s*0\s*(?:[,\s]\s*0\s*)?\)", re.IGNORECASE),
    re.compile(r"rotate\(\s*0\s*(?:[,\s]\s*-?[\d.]+\s*[,\s]\s*-?[\d.]+\s*)?\)", re.IGNORECASE),
    re.compile(r"scale\(\s*1\s*(?:[,\s]\s*1\s*)?\)", re.IGNORECASE),
    re.compile(r"skew[XY]\(\s*0\s*\)", re.IGNORECASE),
)


def convert_transform(svg: str) -> str:
    """Drop identity transform functions, and the attribute when nothing is left."""

    def simplify(match: re.Match) -> str:
        transform = match.group(1)
        for pattern in IDENTITY_TRANSFORM_RES:
            transform = pattern.sub("", transform)
        transform = re.sub(r"\s+", " ", transform).strip()
        return f' transform="{transform}"' if transform else ""

    return re.sub(r"\s+transform=\"([^\"]*)\"", simplify, svg)


ADJACENT_PATHS_RE = re.compile(r"<path(?=\s)([^>]*?)\s*/>(\s*)<path(?=\s)([^>]*?)\s*/>")


def _mergeable(first: dict[str, str], second: dict[str, str]) -> bool:
    if "d" not in first or "d" not in second:
        return False
    if any(name.startswith("marker") for name in first):
        return False
    others = {k: v for k, v in first.items() if k != "d"}
    return others == {k: v for k, v in second.items() if k != "d"}


def merge_paths(svg: str) -> str:
    """Merge runs of adjacent paths that differ only in ``d``."""
    pos = 0
    while True:
        match = ADJACENT_PATHS_RE.search(svg, pos)
        if match is None:
            return svg
        first, second = parse_attrs(match.group(1)), parse_attrs(match.group(3))
        if not _mergeable(first, second):
            pos = match.start(2)
            continue
        merged_d = f"{first['d']} {second['d']}"
        attrs = attr_pattern("d").sub(lambda _: f' d="{merged_d}"', match.group(1), count=1)
        svg = svg[: match.start()] + f"<path{attrs}/>" + svg[match.end() :]
        pos = match.start()


# ============================================================
# Legacy attribute removal
# ============================================================


def _remove_root_attrs(svg: str, names: tuple[str, ...]) -> str:
    root = find_root(svg)
    if root is None:
        return svg
    return svg[: root.start()] + remove_attrs(root.group(0), names) + svg[root.end() :]


def remove_style_attr(svg: str) -> str:
    return attr_pattern("style").sub("", svg)


def remove_shape_rendering(svg: str) -> str:
    svg = attr_pattern("shape-rendering").sub("", svg)
    return attr_pattern("shapeRendering").sub("", svg)


def remove_dimensions(svg: str) -> str:
    """Remove ``width`` and ``height`` from the root element."""
    return _remove_root_attrs(svg, ("width", "height"))


def remove_view_box(svg: str) -> str:
    """Remove ``viewBox`` from the root element."""
    return _remove_root_attrs(svg, ("viewBox",))


def remove_fill(svg: str) -> str:
    return attr_pattern("fill").sub("", svg)


# ============================================================
# Entry points
# ============================================================

RULES: list[tuple[str, Callable[[str], str] | None]] = [
    # Document cleanup
    ("remove_doctype", remove_doctype),
    ("remove_xml_proc_inst", remove_xml_proc_inst),
    ("remove_comments", remove_comments),
    ("remove_metadata", remove_metadata),
    ("remove_editors_ns_data", remove_editors_ns_data),
    # Attribute cleanup (prefix_ids is handled separately)
    ("cleanup_attrs", cleanup_attrs),
    ("cleanup_ids", cleanup_ids),
    ("remove_empty_attrs", remove_empty_attrs),
    ("remove_unused_ns", remove_unused_ns),
    ("prefix_ids", None),
    # Element removal
    ("remove_title", remove_title),
    ("remove_desc", remove_desc),
    ("remove_hidden_elems", remove_hidden_elems),
    ("remove_empty_containers", remove_empty_containers),
    ("remove_empty_text", remove_empty_text),
    ("remove_useless_defs", remove_useless_defs),
    # Style optimization
    ("convert_colors", convert_colors),
    ("minify_styles", minify_styles),
    ("merge_styles", merge_styles),
    ("inline_styles", inline_styles),
    # Numeric cleanup
    ("cleanup_numeric_values", cleanup_numeric_values),
    # Group optimization
    ("move_elems_attrs_to_group", move_elems_attrs_to_group),
    ("move_group_attrs_to_elems", move_group_attrs_to_elems),
    ("collapse_groups", collapse_groups),
    ("remove_empty_containers", remove_empty_containers),
    # Shape/path optimization
    ("convert_shape_to_path", convert_shape_to_path),
    ("convert_path_data", convert_path_data),
    ("convert_transform", convert_transform),
    ("merge_paths", merge_paths),
    # Legacy attribute removal
    ("remove_style_attr", remove_style_attr),
    ("remove_shape_rendering", remove_shape_rendering),
    ("remove_dimensions", remove_dimensions),
    ("remove_view_box", remove_view_box),
    ("remove_fill", remove_fill),
]


def optimize_svg(svg: str, config: OptimizeConfig | None = None) -> str:
    """Optimize SVG markup.

    Args:
        svg: SVG text.
        config: Rule switches (default: the full preset).

    Returns:
        Optimized SVG text, trimmed.
    """
    if config is None:
        config = OptimizeConfig()

    result = svg.strip()
    for name, rule in RULES:
        value = getattr(config, name)
        if not value:
            continue
        # Inlined styles live in style attributes, keep them
        if name == "remove_style_attr" and config.inline_styles:
            continue

        before = result
        if name == "prefix_ids":
            prefix = value if isinstance(value, str) else DEFAULT_ID_PREFIX
            result = prefix_ids(result, prefix)
        else:
            result = rule(result)
        if result != before:
            logger.debug("Rule %s: %d -> %d chars", name, len(before), len(result))
    return result


def optimize_svg_basic(svg: str, options: BasicOptimizeOptions | None = None) -> str:
    """Optimize with the narrow legacy preset.

    Only document cleanup, namespace removal and the legacy attribute rules
    run; ``icon``/``dimensions`` decide whether root dimensions are dropped.
    """
    if options is None:
        options = BasicOptimizeOptions()

    config = OptimizeConfig(
        remove_doctype=True,
        remove_xml_proc_inst=True,
        remove_comments=True,
        remove_metadata=True,
        remove_editors_ns_data=True,
        cleanup_attrs=False,
        cleanup_ids=False,
        remove_empty_attrs=False,
        remove_unused_ns=True,
        prefix_ids=False,
        remove_title=False,
        remove_desc=False,
        remove_hidden_elems=False,
        remove_empty_containers=False,
        remove_empty_text=False,
        remove_useless_defs=False,
        convert_colors=False,
        minify_styles=False,
        merge_styles=False,
        inline_styles=False,
        cleanup_numeric_values=False,
        move_elems_attrs_to_group=False,
        move_group_attrs_to_elems=False,
        collapse_groups=False,
        convert_shape_to_path=False,
        convert_path_data=False,
        convert_transform=False,
        merge_paths=False,
        remove_style_attr=True,
        remove_shape_rendering=True,
        remove_dimensions=options.icon or not options.dimensions,
        remove_view_box=options.remove_view_box,
        remove_fill=options.add_fill_current_color,
    )
    return optimize_svg(svg, config)


def parse_optimize_section(data: dict) -> OptimizeConfig:
    """Parse an optimizer section from YAML data.

    Args:
        data: Mapping of rule name to switch value.

    Returns:
        Parsed OptimizeConfig; missing rules keep their defaults.

    Raises:
        ValueError: If a rule name is unknown or a value has the wrong type.
    """
    if not isinstance(data, dict):
        raise ValueError("svgo_options must be a mapping of rule names to booleans")

    known = {f.name for f in fields(OptimizeConfig)}
    config = OptimizeConfig()
    for name, value in data.items():
        if name not in known:
            raise ValueError(f"Unknown optimizer rule: {name}")
        if name == "prefix_ids":
            if not isinstance(value, (bool, str)):
                raise ValueError("prefix_ids must be a boolean or a prefix string")
        elif not isinstance(value, bool):
            raise ValueError(f"Optimizer rule '{name}' must be a boolean")
        setattr(config, name, value)
    return config
