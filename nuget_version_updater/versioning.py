"""Dotted numeric versions: parsing, ordering, and the update decision.

A version such as ``2.4.93`` is parsed into a :class:`VersionTuple`.
Comparison is component-by-component and a missing trailing component counts
as zero, so ``1.2`` and ``1.2.0`` are equal.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Optional, Tuple

from .errors import InvalidVersionFormat


class Ordering(Enum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


class VersionStatus(Enum):
    """Where a referenced version sits relative to the requested one."""

    OLDER = "older"
    CURRENT = "current"
    NEWER = "newer"


@total_ordering
@dataclass(frozen=True, eq=False)
class VersionTuple:
    """Immutable sequence of non-negative integers parsed from ``a.b.c``.

    Equality and hashing ignore trailing zero components so they agree with
    :func:`compare_versions`.
    """

    parts: Tuple[int, ...]

    def __post_init__(self):
        parts = tuple(self.parts)
        if not parts:
            raise InvalidVersionFormat("", "no components")
        if any(not isinstance(part, int) or part < 0 for part in parts):
            raise InvalidVersionFormat(
                ".".join(str(p) for p in parts),
                "components must be non-negative integers",
            )
        object.__setattr__(self, "parts", parts)

    def __str__(self) -> str:
        return ".".join(str(part) for part in self.parts)

    def __len__(self) -> int:
        return len(self.parts)

    def __hash__(self) -> int:
        parts = self.parts
        while len(parts) > 1 and parts[-1] == 0:
            parts = parts[:-1]
        return hash(parts)

    def __eq__(self, other) -> bool:
        if not isinstance(other, VersionTuple):
            return NotImplemented
        return compare_versions(self, other) is Ordering.EQUAL

    def __lt__(self, other) -> bool:
        if not isinstance(other, VersionTuple):
            return NotImplemented
        return compare_versions(self, other) is Ordering.LESS


def parse_version(text: Optional[str]) -> VersionTuple:
    """Parse ``text`` into a :class:`VersionTuple`.

    Surrounding whitespace is ignored. Raises :class:`InvalidVersionFormat`
    when the string is empty or any segment is not a decimal number.
    """
    if text is None or not text.strip():
        raise InvalidVersionFormat(text or "", "version is empty")

    cleaned = text.strip()
    parts = []
    for segment in cleaned.split("."):
        if not segment.isdigit() or not segment.isascii():
            raise InvalidVersionFormat(cleaned, f"segment '{segment}' is not numeric")
        parts.append(int(segment))
    return VersionTuple(parts)


def compare_versions(a: VersionTuple, b: VersionTuple) -> Ordering:
    """Compare two versions, padding the shorter one with zeros."""
    width = max(len(a), len(b))
    left = a.parts + (0,) * (width - len(a))
    right = b.parts + (0,) * (width - len(b))
    if left < right:
        return Ordering.LESS
    if left > right:
        return Ordering.GREATER
    return Ordering.EQUAL


def classify_version(found: VersionTuple, target: VersionTuple) -> VersionStatus:
    ordering = compare_versions(found, target)
    if ordering is Ordering.LESS:
        return VersionStatus.OLDER
    if ordering is Ordering.EQUAL:
        return VersionStatus.CURRENT
    return VersionStatus.NEWER


def plan_update(found: VersionTuple, target: VersionTuple, rollback: bool = False) -> Optional[str]:
    """Return the replacement value for ``found``, or None to leave it alone.

    Older versions are always replaced; newer ones only when ``rollback``
    allows a downgrade.
    """
    status = classify_version(found, target)
    if status is VersionStatus.OLDER or (status is VersionStatus.NEWER and rollback):
        return str(target)
    return None
