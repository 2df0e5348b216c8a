"""Error kinds surfaced by a picker session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    ENUMERATION = "enumeration"
    EMPTY_RESULT = "empty_result"
    EDIT_FAILURE = "edit_failure"
    STALE_CALLBACK = "stale_callback"


@dataclass(frozen=True, slots=True)
class PickerError:
    kind: ErrorKind
    message: str
    path: str | None = None
