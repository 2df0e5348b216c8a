"""Textual message objects for picker/app coordination."""

from __future__ import annotations

from pathlib import Path

from textual.message import Message


class OpenFile(Message):
    def __init__(self, *, path: Path) -> None:
        self.path = path
        super().__init__()
