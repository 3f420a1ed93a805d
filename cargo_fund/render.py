"""Render grouped funding links as a box-drawn tree."""

from __future__ import annotations

import enum
from typing import Dict, List, Tuple

from .models import GroupedMap


class Role(enum.Enum):
    """Position of a line among its siblings."""

    FIRST = "first"
    MIDDLE = "middle"
    LAST = "last"
    ONLY = "only"


class Level(enum.Enum):
    """Column of the tree a glyph pair is drawn in."""

    GROUP_HEAD = "group-head"
    GROUP_BODY = "group-body"
    LINK = "link"
    PACKAGE = "package"


GLYPHS: Dict[Tuple[Level, Role], str] = {
    # First line of a group: the trunk branches off.
    (Level.GROUP_HEAD, Role.FIRST): "├─",
    (Level.GROUP_HEAD, Role.MIDDLE): "├─",
    (Level.GROUP_HEAD, Role.LAST): "└─",
    (Level.GROUP_HEAD, Role.ONLY): "──",
    # Remaining lines of a group: the trunk continues below unless this is the last group.
    (Level.GROUP_BODY, Role.FIRST): "│ ",
    (Level.GROUP_BODY, Role.MIDDLE): "│ ",
    (Level.GROUP_BODY, Role.LAST): "  ",
    (Level.GROUP_BODY, Role.ONLY): "  ",
    (Level.LINK, Role.FIRST): "┬─",
    (Level.LINK, Role.MIDDLE): "├─",
    (Level.LINK, Role.LAST): "└─",
    (Level.LINK, Role.ONLY): "──",
    (Level.PACKAGE, Role.FIRST): "├─",
    (Level.PACKAGE, Role.MIDDLE): "├─",
    (Level.PACKAGE, Role.LAST): "└─",
    (Level.PACKAGE, Role.ONLY): "└─",
}

PACKAGE_INDENT = "   "


def classify_position(index: int, count: int) -> Role:
    if count <= 0 or not 0 <= index < count:
        raise IndexError(f"position {index} out of range for {count} items")
    if count == 1:
        return Role.ONLY
    if index == 0:
        return Role.FIRST
    if index == count - 1:
        return Role.LAST
    return Role.MIDDLE


def glyph(level: Level, role: Role) -> str:
    return GLYPHS[(level, role)]


def render_header(root: str, matched: int, total: int) -> str:
    return f"{root} (found funding links for {matched} out of {total} dependencies)"


def render_tree(root: str, grouped: GroupedMap, matched: int, total: int) -> str:
    """Render ``grouped`` beneath a summary header; every line ends with a newline."""
    lines: List[str] = [render_header(root, matched, total)]
    group_count = len(grouped)
    for group_index, (links, packages) in enumerate(grouped.items()):
        group_role = classify_position(group_index, group_count)
        body = glyph(Level.GROUP_BODY, group_role)
        for link_index, link in enumerate(links):
            trunk = glyph(Level.GROUP_HEAD, group_role) if link_index == 0 else body
            branch = glyph(Level.LINK, classify_position(link_index, len(links)))
            lines.append(f"{trunk}{branch} {link.uri}")
        for package_index, package in enumerate(packages):
            branch = glyph(Level.PACKAGE, classify_position(package_index, len(packages)))
            lines.append(f"{body}{PACKAGE_INDENT}{branch} {package.display}")
    return "\n".join(lines) + "\n"


__all__ = [
    "GLYPHS",
    "Level",
    "Role",
    "classify_position",
    "glyph",
    "render_header",
    "render_tree",
]
