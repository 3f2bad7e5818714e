"""
Run configuration.

Defaults mirror the project layout the tool is meant for: a `files/` folder
next to an `index.json` manifest, with a three-level category path.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError

PATH_DEPTH_ENV = "PATH_DEPTH"
DEFAULT_PATH_DEPTH = 3
DEFAULT_FILES_DIR = Path("files")
DEFAULT_MANIFEST_PATH = Path("index.json")


def parse_depth(value: str) -> int:
    """
    Parse a path depth.

    Raises:
        ConfigError: If the value is not a non-negative integer.
    """
    try:
        depth = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Path depth must be an integer, got {value!r}")
    if depth < 0:
        raise ConfigError(f"Path depth must be >= 0, got {depth}")
    return depth


def default_path_depth(environ: Mapping[str, str] | None = None) -> int:
    """
    Default depth for --depth, from PATH_DEPTH (or .env), else 3.

    Args:
        environ: Mapping to read instead of os.environ. When omitted, a .env
            file in the working directory is loaded first.
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ

    raw = environ.get(PATH_DEPTH_ENV, "").strip()
    if not raw:
        return DEFAULT_PATH_DEPTH
    try:
        return parse_depth(raw)
    except ConfigError as e:
        raise ConfigError(f"Invalid {PATH_DEPTH_ENV}: {e}") from e


@dataclass
class IngestConfig:
    """Everything one ingest run needs; passed explicitly, never global."""
    files_dir: Path = DEFAULT_FILES_DIR
    manifest_path: Path = DEFAULT_MANIFEST_PATH
    path_depth: int = DEFAULT_PATH_DEPTH
    dry_run: bool = False
    report_out: Path | None = None
    show_progress: bool = False
