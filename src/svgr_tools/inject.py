"""Structural injection into the root ``<svg>`` element.

Runs after optimization and before attribute translation, so every table
here uses markup attribute names (``fill``, ``stroke-width``), not JSX ones.
When the document has no root element every function returns it unchanged.
"""

import logging
import re

from .utils import attr_pattern, find_root

logger = logging.getLogger(__name__)

PROPS_SPREAD = "{...props}"
REF_ATTR = "ref={ref}"
TITLE_ELEMENT = "{title ? <title id={titleId}>{title}</title> : null}"
DESC_ELEMENT = "{desc ? <desc id={descId}>{desc}</desc> : null}"


def _append_to_root(svg: str, text: str) -> str:
    """Insert text before the ``>`` (or ``/>``) of the root opening tag."""
    root = find_root(svg)
    if root is None:
        return svg
    pos = root.end() - 1 - len(root.group(2) or "")
    return f"{svg[:pos]} {text}{svg[pos:]}"


def _insert_after_root_name(svg: str, text: str) -> str:
    root = find_root(svg)
    if root is None:
        return svg
    pos = root.start() + len("<svg")
    return f"{svg[:pos]} {text}{svg[pos:]}"


def replace_attr_values(svg: str, table: dict[str, str]) -> str:
    """Replace attribute values found in a lookup table.

    Every ``name="value"`` in the document whose value equals a key is
    rewritten in a single pass, so replaced values are never matched again.

    Example:
        >>> replace_attr_values('<path fill="#000"/>', {"#000": "currentColor"})
        '<path fill="currentColor"/>'
    """
    if not table:
        return svg
    keys = "|".join(re.escape(key) for key in table)
    pattern = re.compile(rf"([\w:.-]+)=\"({keys})\"")
    return pattern.sub(lambda m: f'{m.group(1)}="{table[m.group(2)]}"', svg)


def add_fill_current_color(svg: str) -> str:
    """Drop every ``fill`` attribute and set ``fill="currentColor"`` on the root."""
    if find_root(svg) is None:
        return svg
    svg = attr_pattern("fill").sub("", svg)
    return _insert_after_root_name(svg, 'fill="currentColor"')


def add_svg_props(svg: str, props: dict[str, str]) -> str:
    """Append literal attributes to the root opening tag."""
    if not props:
        return svg
    text = " ".join(
        '{}="{}"'.format(name, str(value).replace('"', "&quot;"))
        for name, value in props.items()
    )
    return _append_to_root(svg, text)


def add_aria_attributes(svg: str, title: bool, desc: bool) -> str:
    """Point the root's ARIA attributes at the generated title/desc ids."""
    attrs = []
    if title:
        attrs.append("aria-labelledby={titleId}")
    if desc:
        attrs.append("aria-describedby={descId}")
    if not attrs:
        return svg
    return _append_to_root(svg, " ".join(attrs))


def add_props_spread(svg: str, placement: str | bool | None = "end") -> str:
    """Spread the component props onto the root element.

    Args:
        svg: Markup text.
        placement: "start" (right after the tag name), "end" (before the
            closing ``>``) or "none". A false value (False, None, "") is
            the same as "none".

    Returns:
        Markup with exactly one props spread.
    """
    if not placement or placement == "none" or PROPS_SPREAD in svg:
        return svg
    if placement == "start":
        return _insert_after_root_name(svg, PROPS_SPREAD)
    return _append_to_root(svg, PROPS_SPREAD)


def add_ref(svg: str) -> str:
    if REF_ATTR in svg:
        return svg
    return _append_to_root(svg, REF_ATTR)


def add_title_desc_elements(svg: str, title: bool, desc: bool) -> str:
    """Insert conditional ``<title>``/``<desc>`` expressions as the first children.

    A self-closing root is expanded into an open/close pair.
    """
    elements = (TITLE_ELEMENT if title else "") + (DESC_ELEMENT if desc else "")
    if not elements:
        return svg
    root = find_root(svg)
    if root is None:
        return svg

    if root.group(2):
        open_tag = svg[root.start() : root.end() - 1 - len(root.group(2))] + ">"
        return f"{svg[: root.start()]}{open_tag}{elements}</svg>{svg[root.end() :]}"
    return f"{svg[: root.end()]}{elements}{svg[root.end() :]}"


def inject_structure(svg: str, config) -> str:
    """Apply every structural injection enabled in a TransformConfig.

    Order: value replacement, fill override, custom props, ARIA attributes,
    props spread, ref, title/desc elements. Accessibility injections are
    skipped for native output.
    """
    accessible = not config.native

    svg = replace_attr_values(svg, config.replace_attr_values)
    if config.add_fill_current_color:
        svg = add_fill_current_color(svg)
    svg = add_svg_props(svg, config.svg_props)
    if accessible:
        svg = add_aria_attributes(svg, config.title_prop, config.desc_prop)
    elif config.title_prop or config.desc_prop:
        logger.debug("Skipping title/desc injection for native output")
    svg = add_props_spread(svg, config.expand_props)
    if config.ref:
        svg = add_ref(svg)
    if accessible:
        svg = add_title_desc_elements(svg, config.title_prop, config.desc_prop)
    return svg
