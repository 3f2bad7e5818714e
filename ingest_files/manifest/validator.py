"""
Manifest loading and validation.

The manifest (index.json) is read fully and checked before any work starts,
so a broken file aborts the run without touching anything.
"""

import json
from pathlib import Path

from ..errors import ManifestError
from ..utils import load_json, save_json
from .tree import Node

# Keys that must hold strings whenever they are present on a node.
STRING_KEYS = ("name", "type", "file", "ext", "date")


def validate_manifest(data: object) -> Node:
    """
    Check that loaded JSON has the shape of a manifest tree.

    Checks for:
    - A JSON object at the top level
    - Every node being a JSON object
    - `children`, when present and not null, being a list
    - `name`, `type`, `file`, `ext` and `date` being strings when present

    Args:
        data: The deserialized JSON document.

    Returns:
        The same object, typed as the root node.

    Raises:
        ManifestError: On the first structural problem found.
    """
    if not isinstance(data, dict):
        raise ManifestError(
            f"Manifest root must be a JSON object, got {type(data).__name__}"
        )

    stack: list[tuple[str, object]] = [("root", data)]
    while stack:
        location, node = stack.pop()
        if not isinstance(node, dict):
            raise ManifestError(f"{location} must be a JSON object, got {type(node).__name__}")

        for key in STRING_KEYS:
            if key in node and not isinstance(node[key], str):
                raise ManifestError(f"{location}.{key} must be a string")

        children = node.get("children")
        if children is None:
            continue
        if not isinstance(children, list):
            raise ManifestError(f"{location}.children must be a list")
        for index, child in enumerate(children):
            stack.append((f"{location}.children[{index}]", child))

    return data


def load_manifest(path: Path) -> Node:
    """
    Load and validate the manifest at `path`.

    Raises:
        ManifestError: If the file is missing, unreadable, not JSON or not a tree.
    """
    try:
        data = load_json(path)
    except FileNotFoundError as e:
        raise ManifestError(f"Manifest not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"Manifest {path} is not valid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Could not open {path}: {e}") from e

    return validate_manifest(data)


def save_manifest(manifest: Node, path: Path) -> None:
    """Overwrite the manifest with the merged tree."""
    save_json(manifest, path)
