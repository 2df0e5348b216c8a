"""Directory listing primitive used by the scanner."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal

from filepick.runtime_logging import get_runtime_logger
from filepick.session.errors import ErrorKind

EntryKind = Literal["file", "dir", "other"]


@dataclass(frozen=True, slots=True)
class DirEntry:
    name: str
    kind: EntryKind


Lister = Callable[[Path], list[DirEntry]]


def _entry_kind(entry: os.DirEntry[str]) -> EntryKind:
    # Directory symlinks are never followed, so traversal cannot loop.
    if entry.is_dir(follow_symlinks=False):
        return "dir"
    if entry.is_file():
        return "file"
    return "other"


def list_directory(path: Path) -> list[DirEntry]:
    """Immediate entries of ``path`` sorted by name; an unreadable directory has none."""
    entries: list[DirEntry] = []
    try:
        with os.scandir(path) as it:
            for entry in it:
                try:
                    kind = _entry_kind(entry)
                except OSError:
                    continue
                entries.append(DirEntry(name=entry.name, kind=kind))
    except OSError as exc:
        get_runtime_logger().debug(
            "scan.list_failed",
            kind=ErrorKind.ENUMERATION.value,
            path=str(path),
            error=str(exc),
        )
        return []
    entries.sort(key=lambda item: item.name)
    return entries
