"""Core data models shared by the patcher, walker, and session."""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional
from xml.etree import ElementTree as ET

from . import config
from .versioning import VersionTuple


@dataclass(frozen=True)
class UpdateRequest:
    """What to update and how; fixed for the duration of a run."""

    package_name: str
    package_version: str
    rollback: bool = False
    preview: bool = True
    verbose: bool = False
    target_version: Optional[VersionTuple] = None

    def matches(self, name: Optional[str]) -> bool:
        return name is not None and name.strip().casefold() == self.package_name.strip().casefold()


class VersionLocation(Enum):
    ELEMENT = "element"
    ATTRIBUTE = "attribute"


@dataclass
class DeclarationMatch:
    """One package declaration and the spot holding its version."""

    element: ET.Element
    package_name: str
    location: VersionLocation
    version_node: Optional[ET.Element] = None
    attribute: Optional[str] = None

    @property
    def current(self) -> str:
        if self.location is VersionLocation.ELEMENT:
            return (self.version_node.text or "").strip()
        return (self.element.get(self.attribute) or "").strip()

    def set(self, value: str) -> None:
        if self.location is VersionLocation.ELEMENT:
            self.version_node.text = value
        else:
            self.element.set(self.attribute, value)


@dataclass
class PatchResult:
    path: Path
    matched: int = 0
    updated: int = 0
    saved: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ScanSummary:
    files_examined: int = 0
    files_matched: int = 0
    files_changed: int = 0
    declarations_changed: int = 0
    failures: int = 0

    def record(self, result: PatchResult) -> None:
        self.files_examined += 1
        if result.matched:
            self.files_matched += 1
        if result.updated:
            self.files_changed += 1
            self.declarations_changed += result.updated
        if not result.ok:
            self.failures += 1


@dataclass
class ScanProgress:
    """Progress-marker state for one traversal.

    ``tick`` writes a marker when ``interval`` seconds passed since the last
    one; a line break is then owed and ``flush`` writes it before the next
    regular log line.
    """

    write: Optional[Callable[[str], None]] = None
    interval: float = config.PROGRESS_INTERVAL_SECONDS
    clock: Callable[[], float] = time.monotonic
    last_emit: Optional[float] = None
    newline_pending: bool = False

    def __post_init__(self):
        if self.write is None:
            self.write = _stdout_write
        if self.last_emit is None:
            self.last_emit = self.clock()

    def tick(self) -> bool:
        now = self.clock()
        if now - self.last_emit <= self.interval:
            return False
        self.last_emit = now
        self.write(config.PROGRESS_MARKER)
        self.newline_pending = True
        return True

    def touch(self) -> None:
        self.last_emit = self.clock()

    def flush(self) -> None:
        if self.newline_pending:
            self.write("\n")
            self.newline_pending = False


def _stdout_write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()
