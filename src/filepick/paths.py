"""XDG path helpers and home/cwd display normalization."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from platformdirs import PlatformDirs

APP_NAME = "filepick"
APP_AUTHOR = "filepick"


def dirs() -> PlatformDirs:
    return PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR, roaming=False)


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def config_root() -> Path:
    return ensure_dir(Path(dirs().user_config_path))


def state_root() -> Path:
    return ensure_dir(Path(dirs().user_state_path))


def settings_path() -> Path:
    return config_root() / "settings.json"


def display_path(path: str | Path, *, cwd: Path | None = None, home: Path | None = None) -> str:
    """Shorten ``path`` for display: cwd-relative, else ``~``-relative, else absolute."""
    cwd = Path(os.path.abspath(cwd or Path.cwd()))
    home = Path(os.path.abspath(home or Path.home()))
    absolute = Path(path).expanduser()
    if not absolute.is_absolute():
        absolute = cwd / absolute
    absolute = Path(os.path.abspath(absolute))

    try:
        rel = absolute.relative_to(cwd)
    except ValueError:
        pass
    else:
        # A leading "~" segment would read back as home-relative.
        if rel.parts and rel.parts[0] == "~":
            return f"./{rel.as_posix()}"
        return rel.as_posix()

    try:
        rel = absolute.relative_to(home)
    except ValueError:
        return absolute.as_posix()
    return "~" if not rel.parts else f"~/{rel.as_posix()}"


def resolve_display_path(label: str, *, cwd: Path | None = None, home: Path | None = None) -> Path:
    """Invert :func:`display_path` back into an absolute path."""
    if label == "~" or label.startswith("~/"):
        path = (home or Path.home()) / label[2:]
    else:
        path = Path(label)
    if not path.is_absolute():
        path = (cwd or Path.cwd()) / path
    return Path(os.path.abspath(path))


def printable_path(text: str) -> str:
    """Replace undecodable bytes (kept as surrogate escapes by ``os``) for display."""
    return os.fsencode(text).decode(sys.getfilesystemencoding(), errors="replace")
