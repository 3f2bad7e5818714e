"""
File Ingest Tool
================

A command-line tool that indexes the files of a folder into a JSON manifest,
deriving each file's category path from the underscore-separated segments
of its name.
"""

__version__ = "1.0.0"

from .text import slugify, titleize
from .naming import parse_segments, build_display_name
from .manifest import (
    ensure_children,
    find_dir_child,
    ensure_dir,
    find_file,
    sort_node,
    collect_existing_files,
    load_manifest,
    merge_entries,
    ingest_directory,
    IngestReport,
)
from .config import IngestConfig
from .utils import save_json, load_json

__all__ = [
    "slugify",
    "titleize",
    "parse_segments",
    "build_display_name",
    "ensure_children",
    "find_dir_child",
    "ensure_dir",
    "find_file",
    "sort_node",
    "collect_existing_files",
    "load_manifest",
    "merge_entries",
    "ingest_directory",
    "IngestReport",
    "IngestConfig",
    "save_json",
    "load_json",
]
