"""
Manifest module for the file ingest tool.

Provides:
- Tree access: find-or-create directories, find files, sort, collect
- Manifest loading and validation
- The merge of new files into the tree
"""

from .tree import (
    ensure_children,
    find_dir_child,
    ensure_dir,
    find_file,
    sort_node,
    collect_existing_files,
)
from .validator import validate_manifest, load_manifest, save_manifest
from .merge import (
    IngestReport,
    CreatedEntry,
    Outcome,
    list_entries,
    merge_entries,
    ingest_directory,
)

__all__ = [
    "ensure_children",
    "find_dir_child",
    "ensure_dir",
    "find_file",
    "sort_node",
    "collect_existing_files",
    "validate_manifest",
    "load_manifest",
    "save_manifest",
    "IngestReport",
    "CreatedEntry",
    "Outcome",
    "list_entries",
    "merge_entries",
    "ingest_directory",
]
