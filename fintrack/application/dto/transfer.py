"""Data transfer objects for export and import."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class ImportMode(str, Enum):
    """How imported transactions combine with the current list."""
    MERGE = "merge"
    REPLACE = "replace"


@dataclass(frozen=True)
class ExportResult:
    """A backup document and its suggested file name."""
    filename: str
    document: Dict[str, Any]


@dataclass(frozen=True)
class ImportResult:
    """Counts describing a completed import."""
    mode: ImportMode
    received: int
    imported: int
    skipped: int
    total: int
