"""Turn matched paths into list labels of the form ``name (dir/)``."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from filepick.paths import printable_path

ELLIPSIS = "..."
# Room for the ellipsis plus the " (" and "/)" decoration.
DECORATION_WIDTH = 6


@dataclass(frozen=True, slots=True)
class DisplayItem:
    short_label: str
    original_path: str


def split_path(path: str) -> tuple[str, str]:
    head, sep, tail = path.rstrip("/").rpartition("/")
    if not sep:
        return tail, "."
    return tail, head or "/"


def compress_directory(dir_name: str, keep: int) -> str:
    keep = max(0, keep)
    if len(dir_name) <= keep * 2 + len(ELLIPSIS):
        return dir_name
    if keep == 0:
        return ELLIPSIS
    return f"{dir_name[:keep]}{ELLIPSIS}{dir_name[-keep:]}"


def format_label(path: str, max_width: int) -> str:
    path = printable_path(path)
    file_name, dir_name = split_path(path)
    if len(path) > max_width and len(file_name) < max_width:
        dir_name = compress_directory(dir_name, (max_width - len(file_name) - DECORATION_WIDTH) // 2)
    if dir_name == ".":
        return file_name
    suffix = "" if dir_name.endswith("/") else "/"
    return f"{file_name} ({dir_name}{suffix})"


def format_labels(paths: Sequence[str], max_width: int) -> list[str]:
    return [format_label(path, max_width) for path in paths]


def format_items(paths: Sequence[str], max_width: int) -> list[DisplayItem]:
    return [DisplayItem(short_label=format_label(path, max_width), original_path=path) for path in paths]
