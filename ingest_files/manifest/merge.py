"""
Merge newly discovered files into the manifest.

Each candidate filename is either inserted under the directory chain encoded
in its first `path_depth` segments, skipped because it is already indexed, or
reported as a warning because it does not encode enough segments. Entries are
processed strictly in order since later files may reuse directories created
by earlier ones.
"""

import os
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from tqdm import tqdm

from ..config import IngestConfig
from ..errors import SourceDirError
from ..naming import build_display_name, parse_segments, split_extension
from ..text import sentence_case
from ..utils import save_json
from .tree import (
    FILE_TYPE,
    Node,
    collect_existing_files,
    ensure_children,
    ensure_dir,
    find_file,
    sort_node,
)
from .validator import load_manifest, save_manifest

REASON_ALREADY_INDEXED = "already indexed"
REASON_ALREADY_IN_DESTINATION = "already existed in destination folder"


def depth_warning(path_depth: int) -> str:
    return f"needs at least {path_depth + 1} segments (including the filename)"


@dataclass
class Outcome:
    """A file that was not inserted, and why."""
    file: str
    reason: str


@dataclass
class CreatedEntry:
    """A file node added to the manifest, with the raw segments of its folder."""
    file: str
    path: list[str]


@dataclass
class IngestReport:
    """
    Result of one ingest run.

    `processed` counts every listed entry, hidden files included, so it can be
    larger than created + skipped + warnings.
    """
    processed: int = 0
    created: list[CreatedEntry] = field(default_factory=list)
    skipped: list[Outcome] = field(default_factory=list)
    warnings: list[Outcome] = field(default_factory=list)
    dry_run: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def modified_date(path: Path) -> str:
    """Modification date of `path` as YYYY-MM-DD (UTC)."""
    stat = path.stat()
    return datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc).date().isoformat()


def list_entries(files_dir: Path) -> list[str]:
    """
    List the candidate files of the input directory, sorted by name.

    Sub-directories are left out; hidden files are kept so the caller can
    count them.

    Raises:
        SourceDirError: If the directory cannot be listed.
    """
    try:
        with os.scandir(files_dir) as it:
            names = [entry.name for entry in it if not entry.is_dir()]
    except OSError as e:
        raise SourceDirError(f"Could not list folder {files_dir}: {e}") from e
    return sorted(names)


def merge_entries(
    manifest: Node,
    entries: list[str],
    files_dir: Path,
    path_depth: int,
    show_progress: bool = False,
) -> IngestReport:
    """
    Merge `entries` (filenames inside `files_dir`) into `manifest` in place.

    Args:
        manifest: Root node of the loaded manifest.
        entries: Filenames in processing order.
        files_dir: Directory the entries live in, used to stat each new file.
        path_depth: Number of leading segments that form the directory chain.
        show_progress: Display a tqdm progress bar.

    Returns:
        The report of created, skipped and warned entries.

    Raises:
        OSError: If a new file cannot be stat'ed. The run is aborted.
    """
    report = IngestReport(processed=len(entries))
    existing = collect_existing_files(manifest)

    for entry in tqdm(entries, unit="file", disable=not show_progress):
        if entry.startswith("."):
            continue

        if entry in existing:
            report.skipped.append(Outcome(entry, REASON_ALREADY_INDEXED))
            continue

        stem, ext = split_extension(entry)
        segments = parse_segments(stem)

        if len(segments) < path_depth:
            report.warnings.append(Outcome(entry, depth_warning(path_depth)))
            continue

        dir_segments = segments[:path_depth]
        file_segments = segments[path_depth:]

        pointer = manifest
        for segment in dir_segments:
            pointer = ensure_dir(pointer, segment)
        children = ensure_children(pointer)

        if find_file(pointer, entry) is not None:
            report.skipped.append(Outcome(entry, REASON_ALREADY_IN_DESTINATION))
            continue

        iso_date = modified_date(files_dir / entry)
        display_name = sentence_case(build_display_name(file_segments or [stem], ext))

        children.append({
            "name": display_name,
            "type": FILE_TYPE,
            "ext": ext,
            "file": entry,
            "date": iso_date,
        })
        existing.add(entry)
        report.created.append(CreatedEntry(entry, list(dir_segments)))

    sort_node(manifest)
    return report


def ingest_directory(config: IngestConfig) -> tuple[Node, IngestReport]:
    """
    Run a full ingest: load, list, merge, sort and (unless dry-run) save.

    Args:
        config: Paths, depth and flags for this run.

    Returns:
        The merged manifest and the run report.

    Raises:
        ManifestError: If the manifest cannot be loaded.
        SourceDirError: If the input directory cannot be listed.
        OSError: If a file cannot be stat'ed; nothing is written in that case.
    """
    manifest = load_manifest(config.manifest_path)
    entries = list_entries(config.files_dir)

    report = merge_entries(
        manifest,
        entries,
        config.files_dir,
        config.path_depth,
        show_progress=config.show_progress,
    )
    report.dry_run = config.dry_run

    if not config.dry_run:
        save_manifest(manifest, config.manifest_path)

    if config.report_out is not None:
        save_json(report.to_dict(), config.report_out)

    return manifest, report
