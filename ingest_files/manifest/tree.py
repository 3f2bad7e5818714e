"""
Tree access helpers for the manifest.

Nodes are plain dicts as loaded from index.json:

    {"name": "Report", "type": "dir", "children": [...]}
    {"name": "Summary.pdf", "type": "file", "ext": "pdf",
     "file": "report_2024_q1_summary.pdf", "date": "2024-03-01"}

The root object has no name or type but is treated like any directory node.
Unknown keys are never touched, so they survive a load/save round trip.
"""

from typing import Any

from ..text import collation_key, slugify, titleize

DIR_TYPE = "dir"
FILE_TYPE = "file"

Node = dict[str, Any]


def is_dir(node: Node) -> bool:
    return node.get("type") == DIR_TYPE


def is_file(node: Node) -> bool:
    return node.get("type") == FILE_TYPE


def ensure_children(node: Node) -> list[Node]:
    """Return the node's children list, creating an empty one if missing."""
    if node.get("children") is None:
        node["children"] = []
    return node["children"]


def find_dir_child(parent: Node, segment: str) -> Node | None:
    """Find the directory child whose name has the same slug as `segment`."""
    slug = slugify(segment)
    for child in ensure_children(parent):
        if is_dir(child) and slugify(child.get("name", "")) == slug:
            return child
    return None


def ensure_dir(parent: Node, segment: str) -> Node:
    """
    Get or create the directory child matching `segment`.

    Matching is by slug, so "Informes", "informes" and "INFORMES" all resolve
    to the same node. A new node is named with the titleized segment.

    Args:
        parent: Directory node (or the manifest root).
        segment: Raw filename segment.

    Returns:
        The existing or newly appended directory node.
    """
    existing = find_dir_child(parent, segment)
    if existing is not None:
        return existing

    node = {
        "name": titleize(segment),
        "type": DIR_TYPE,
        "children": [],
    }
    ensure_children(parent).append(node)
    return node


def find_file(parent: Node, filename: str) -> Node | None:
    """Find an immediate file child stored under exactly `filename`."""
    for child in ensure_children(parent):
        if is_file(child) and child.get("file") == filename:
            return child
    return None


def _sort_key(node: Node) -> tuple[int, str]:
    # Anything that is not a directory ranks with the files.
    return (0 if is_dir(node) else 1, collation_key(node.get("name") or ""))


def sort_node(node: Node) -> None:
    """
    Recursively order children: directories first, then files, each group by
    name using Spanish base-level collation. The sort is stable, so names that
    compare equal keep their current order and re-sorting changes nothing.
    """
    children = node.get("children")
    if not isinstance(children, list) or not children:
        return

    children.sort(key=_sort_key)
    for child in children:
        sort_node(child)


def collect_existing_files(root: Node) -> set[str]:
    """Collect the `file` value of every file node in the tree."""
    found: set[str] = set()
    stack = [root]
    while stack:
        node = stack.pop()
        if is_file(node) and node.get("file"):
            found.add(node["file"])
        children = node.get("children")
        if isinstance(children, list):
            stack.extend(children)
    return found
