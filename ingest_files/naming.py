"""
Filename decomposition.

A filename such as "report_2024_q1_summary.pdf" encodes its category path in
underscore-separated segments. The first `path_depth` segments become
directories, the rest becomes the display name.
"""

import os
import re

SEGMENT_DELIMITER = "_"
UNTITLED_TEMPLATE = "{ext} sin título"

_HYPHENS_RE = re.compile(r"-+")
_WHITESPACE_RE = re.compile(r"\s+")


def parse_segments(stem: str) -> list[str]:
    """Split a filename stem on underscores, dropping empty segments."""
    return [segment for segment in stem.split(SEGMENT_DELIMITER) if segment]


def split_extension(filename: str) -> tuple[str, str]:
    """
    Split a filename into its stem and lowercase extension.

    Args:
        filename: Base name, e.g. "Notes_2024.PDF".

    Returns:
        ("Notes_2024", "pdf"). The extension has no leading dot and is empty
        when the name has none.
    """
    stem, dot_ext = os.path.splitext(filename)
    return stem, dot_ext[1:].lower()


def untitled_name(extension: str) -> str:
    return UNTITLED_TEMPLATE.format(ext=extension.upper())


def build_display_name(segments: list[str], extension: str) -> str:
    """
    Build the display name of a file node from its remaining segments.

    Segments are joined with spaces and hyphen runs become spaces. When nothing
    readable is left, a placeholder like "PDF sin título" is used instead.
    """
    if not segments:
        return untitled_name(extension)

    cleaned = _HYPHENS_RE.sub(" ", " ".join(segments))
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()
    if not cleaned:
        return untitled_name(extension)

    return f"{cleaned}.{extension}" if extension else cleaned
