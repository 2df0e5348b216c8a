"""Entry ignore filtering: dotfiles, object files, optional gitignore patterns."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pathspec

from filepick.config.models import ScanSettings

DEFAULT_IGNORE_PREFIXES: tuple[str, ...] = (".",)
DEFAULT_IGNORE_SUFFIXES: tuple[str, ...] = (".o", ".obj")


def should_ignore(entry_name: str) -> bool:
    """Default ignore rule: dot-entries and compiled object files."""
    return entry_name.startswith(DEFAULT_IGNORE_PREFIXES) or entry_name.endswith(DEFAULT_IGNORE_SUFFIXES)


class PathFilter:
    def __init__(
        self,
        root: Path | None = None,
        *,
        ignore_prefixes: Iterable[str] = DEFAULT_IGNORE_PREFIXES,
        ignore_suffixes: Iterable[str] = DEFAULT_IGNORE_SUFFIXES,
        patterns: Iterable[str] = (),
        use_gitignore: bool = False,
    ) -> None:
        self.root = root
        # An empty affix would match every name.
        self.ignore_prefixes = tuple(item for item in ignore_prefixes if item)
        self.ignore_suffixes = tuple(item for item in ignore_suffixes if item)
        self._spec = self._build_spec(list(patterns), use_gitignore)

    @classmethod
    def from_settings(cls, root: Path, settings: ScanSettings) -> "PathFilter":
        return cls(
            root,
            ignore_prefixes=settings.ignore_prefixes,
            ignore_suffixes=settings.ignore_suffixes,
            patterns=settings.extra_ignore_patterns,
            use_gitignore=settings.use_gitignore,
        )

    def _build_spec(self, patterns: list[str], use_gitignore: bool) -> pathspec.PathSpec | None:
        if use_gitignore and self.root is not None:
            gitignore = self.root / ".gitignore"
            try:
                lines = gitignore.read_text(encoding="utf-8", errors="replace").splitlines()
            except OSError:
                lines = []
            for line in lines:
                line = line.strip()
                if line and not line.startswith("#"):
                    patterns.append(line)

        if not patterns:
            return None
        return pathspec.GitIgnoreSpec.from_lines(patterns)

    def should_ignore(self, entry_name: str, relative_path: str | None = None, *, is_dir: bool = False) -> bool:
        if entry_name.startswith(self.ignore_prefixes) or entry_name.endswith(self.ignore_suffixes):
            return True
        if self._spec is None:
            return False

        rel_text = relative_path or entry_name
        if is_dir:
            rel_text = f"{rel_text}/"
        return self._spec.match_file(rel_text)
