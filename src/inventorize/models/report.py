"""Verification report produced by checking an inventory."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FailureKind(Enum):
    """Inventory verification failure kind."""

    MISSING_FROM_REPOSITORY = "missing_from_repository"
    """A file is recorded in the inventory but missing from the repository."""

    MISSING_FROM_INVENTORY = "missing_from_inventory"
    """A file is found in the repository but missing from the inventory."""

    SIZE_MISMATCH = "size_mismatch"
    """Actual file size does not match the recorded size."""

    HASH_MISMATCH = "hash_mismatch"
    """Actual file hashes do not match the recorded hashes."""

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    FailureKind.MISSING_FROM_REPOSITORY: "Missing from repository",
    FailureKind.MISSING_FROM_INVENTORY: "Missing from inventory",
    FailureKind.SIZE_MISMATCH: "Size mismatch",
    FailureKind.HASH_MISMATCH: "Hash mismatch",
}


@dataclass
class Report:
    """Files that failed verification, grouped by failure kind."""

    contents: dict[FailureKind, set[str]] = field(default_factory=dict)

    def add_failure(self, path: str, kind: FailureKind) -> None:
        """Record a failure. Adding the same path and kind twice has no effect."""
        self.contents.setdefault(kind, set()).add(path)

    def is_empty(self) -> bool:
        return not self.contents

    def failures(self) -> list[FailureKind]:
        """Return the failure kinds present in the report, in declaration order."""
        return [kind for kind in FailureKind if kind in self.contents]

    def by_failure(self, kind: FailureKind) -> list[str]:
        """Return the paths that caused the given failure, sorted."""
        return sorted(self.contents.get(kind, ()))

    def __len__(self) -> int:
        return sum(len(paths) for paths in self.contents.values())
