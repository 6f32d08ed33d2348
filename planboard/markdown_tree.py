"""A tree of plan items and its conversion back into markdown text."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

_HORIZONTAL_RULE_RE = re.compile(r"^-{3,}$")


class NodeType(Enum):
    """The markdown construct a tree item stands for."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    QUOTE = "quote"
    LIST = "list"
    LISTITEM = "listitem"


@dataclass(eq=False)
class TreeItem:
    """One node of a plan tree, with the markdown details needed to write it out."""

    text: str = ""
    node_type: Optional[NodeType] = None
    level: int = 0
    ordered: bool = False
    checkable: bool = False
    checked: bool = False
    hidden: bool = False
    children: list["TreeItem"] = field(default_factory=list)
    parent: Optional["TreeItem"] = field(default=None, repr=False)

    def add_child(self, child: "TreeItem") -> "TreeItem":
        """Append a child and make this item its parent."""
        child.parent = self
        self.children.append(child)
        return child

    def index_of_child(self, child: "TreeItem") -> int:
        """The position of the child among this item's children, or -1."""
        for position, each in enumerate(self.children):
            if each is child:
                return position
        return -1


def is_horizontal_rule(text: str) -> bool:
    """True if the text is three or more hyphens and nothing else."""
    return _HORIZONTAL_RULE_RE.match(text) is not None


def _indent(indent: int) -> str:
    return " " * (indent * 2) if indent else ""


def _ancestor_list(item: TreeItem) -> Optional[TreeItem]:
    parent = item.parent
    while parent is not None:
        if parent.node_type is NodeType.LIST:
            return parent
        parent = parent.parent
    return None


def _serialize_list(list_node: TreeItem, indent: int) -> str:
    return "".join(serialize_item(child, indent) for child in list_node.children)


def _serialize_list_item(item: TreeItem, indent: int) -> str:
    list_parent = _ancestor_list(item)
    ordered = False
    index = 0
    if list_parent is not None:
        ordered = list_parent.ordered
        index = list_parent.index_of_child(item) + 1

    pad = _indent(indent)
    if item.checkable and not ordered:
        prefix = pad + ("- [x] " if item.checked else "- [ ] ")
    elif ordered:
        prefix = f"{pad}{index}. "
    else:
        prefix = pad + "- "

    parts = [prefix + item.text + "\n\n"]
    for child in item.children:
        if child.node_type is NodeType.LIST:
            parts.append(_serialize_list(child, indent + 1))
        else:
            parts.append(serialize_item(child, indent + 1))
    return "".join(parts)


def _serialize_quote(item: TreeItem) -> str:
    block = "".join(serialize_item(child, 0) for child in item.children)
    lines = (">\n" if not line else "> " + line + "\n" for line in block.split("\n"))
    return "".join(lines) + "\n"


def serialize_item(item: TreeItem, indent: int = 0) -> str:
    """The markdown text for an item and everything below it."""
    kind = item.node_type
    if kind is NodeType.HEADING:
        head = "#" * item.level + " " + item.text + "\n\n"
        return head + "".join(serialize_item(child, 0) for child in item.children)
    if kind is NodeType.PARAGRAPH:
        head = _indent(indent) + item.text + "\n\n"
        return head + "".join(serialize_item(child, 0) for child in item.children)
    if kind is NodeType.QUOTE:
        return _serialize_quote(item)
    if kind is NodeType.LIST:
        return _serialize_list(item, indent)
    if kind is NodeType.LISTITEM:
        return _serialize_list_item(item, indent)
    head = _indent(indent) + item.text + "\n"
    return head + "".join(serialize_item(child, indent) for child in item.children)


def tree_to_markdown(items: Iterable[TreeItem]) -> str:
    """The markdown for a list of top-level items, ending in a single newline."""
    text = "".join(serialize_item(item, 0) for item in items)
    while text.endswith("\n\n"):
        text = text[:-1]
    return text