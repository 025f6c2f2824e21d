"""Line-based re-indentation of generated component source."""


def _closes(line: str) -> bool:
    return line.startswith(("}", ")", "</"))


def _opens_block(line: str) -> bool:
    return line.endswith(("{", "(")) or "=> {" in line


def _opens_tag(line: str) -> bool:
    """Whether the line opens a JSX element that is not closed by ``/>``."""
    return line.startswith("<") and not line.startswith("</") and not line.endswith("/>")


def format_code(code: str, enabled: bool = True, indent_size: int = 2) -> str:
    """Re-indent source code one line at a time.

    Blank lines are dropped. The indent level drops before lines starting
    with a closing brace, parenthesis or tag, and rises after lines opening a
    block or a JSX element. A JSX line that also contains a closing tag
    leaves the level where it was.

    Args:
        code: Source text.
        enabled: When False the code is returned unchanged.
        indent_size: Spaces per level.

    Returns:
        Re-indented source text.
    """
    if not enabled:
        return code

    level = 0
    lines = []
    for raw in code.split("\n"):
        line = raw.strip()
        if not line:
            continue

        if _closes(line):
            level = max(0, level - 1)
        lines.append(" " * (level * indent_size) + line)

        if _opens_block(line):
            level += 1
        if _opens_tag(line):
            level += 1
            if "</" in line:
                level = max(0, level - 1)

    return "\n".join(lines)
