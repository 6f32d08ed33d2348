"""A progress view over a plan tree, counting its checkable items."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from .markdown_tree import TreeItem


@dataclass
class ProgressNode:
    """A branch of the plan that holds checkable items; top nodes carry a percentage."""

    text: str
    children: list["ProgressNode"] = field(default_factory=list)
    total: Optional[int] = None
    checked: Optional[int] = None
    percent: Optional[int] = None


def _descendants(node: TreeItem) -> Iterator[TreeItem]:
    for child in node.children:
        yield child
        yield from _descendants(child)


def count_checkable(node: Optional[TreeItem]) -> tuple[int, int]:
    """How many descendants are checkable, and how many of those are checked."""
    if node is None:
        return 0, 0
    total = checked = 0
    for each in _descendants(node):
        if each.checkable:
            total += 1
            if each.checked:
                checked += 1
    return total, checked


def has_checkable_descendants(node: Optional[TreeItem]) -> bool:
    """Whether any item below the node is checkable."""
    return count_checkable(node)[0] > 0


def _copy_branch(node: TreeItem) -> Optional[ProgressNode]:
    if not has_checkable_descendants(node):
        return None
    copy = ProgressNode(text=node.text)
    for child in node.children:
        branch = _copy_branch(child)
        if branch is not None:
            copy.children.append(branch)
    return copy


def _percent(total: int, checked: int) -> int:
    if total <= 0:
        return 0
    return int(checked * 100.0 / total + 0.5)


def build_progress(roots: Iterable[TreeItem]) -> list[ProgressNode]:
    """The branches of each root that hold checkable items, with progress per root."""
    result: list[ProgressNode] = []
    for root in roots:
        copy = _copy_branch(root)
        if copy is None:
            continue
        total, checked = count_checkable(root)
        copy.total = total
        copy.checked = checked
        copy.percent = _percent(total, checked)
        result.append(copy)
    return result