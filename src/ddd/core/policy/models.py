"""Value types shared by the decision policy engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple


class ChangeKind(str, Enum):
    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"

    @classmethod
    def from_status(cls, status: str) -> "ChangeKind":
        """Map a ``git diff --name-status`` code (``R087``, ``T`` ...) to a kind.

        Type changes and any other unknown status are treated as modifications.
        """
        code = (status or "").strip()[:1].upper()
        for kind in cls:
            if kind.value == code:
                return kind
        return cls.MODIFIED

    @property
    def is_addition(self) -> bool:
        """True for kinds that introduce a path (added, copied, renamed)."""
        return self in (ChangeKind.ADDED, ChangeKind.COPIED, ChangeKind.RENAMED)


@dataclass(frozen=True)
class Change:
    """One changed path. For renames and copies ``path`` is the destination."""

    path: str
    kind: ChangeKind
    source: Optional[str] = None


@dataclass(frozen=True)
class ChangeSet:
    changes: Tuple[Change, ...] = ()

    @classmethod
    def of(cls, *pairs: Tuple[str, ChangeKind]) -> "ChangeSet":
        return cls(tuple(Change(path=p, kind=k) for p, k in pairs))

    def __iter__(self) -> Iterator[Change]:
        return iter(self.changes)

    def __len__(self) -> int:
        return len(self.changes)

    @property
    def paths(self) -> List[str]:
        return [c.path for c in self.changes]

    def filter(self, kinds: Iterable[ChangeKind]) -> List[Change]:
        wanted = set(kinds)
        return [c for c in self.changes if c.kind in wanted]


class ViolationKind(str, Enum):
    GITIGNORE_POLICY = "GitignorePolicyViolation"
    IMMUTABLE = "ImmutableViolation"
    DECISION_ONLY = "DecisionOnlyChangeSet"
    MISSING_DECISION_DIRECTORY = "MissingDecisionDirectory"
    NO_MATCHING_MENTION = "NoMatchingMention"
    WRONG_PERMISSION_MODE = "WrongPermissionMode"
    SYMLINK_REJECTED = "SymlinkRejected"


@dataclass(frozen=True)
class Violation:
    path: str
    kind: ViolationKind
    message: str
    decision_dir: Optional[str] = None

    def format(self) -> str:
        return f"{self.path} ➜ {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "path": self.path,
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.decision_dir is not None:
            data["decisionDir"] = self.decision_dir
        return data


@dataclass
class ValidationReport:
    """Ordered violations from one validation run. Empty means pass."""

    violations: List[Violation] = field(default_factory=list)

    def add(self, violation: Violation) -> None:
        self.violations.append(violation)

    def extend(self, violations: Iterable[Violation]) -> None:
        self.violations.extend(violations)

    def merge(self, other: "ValidationReport") -> "ValidationReport":
        self.violations.extend(other.violations)
        return self

    @property
    def passed(self) -> bool:
        return not self.violations

    def kinds(self) -> List[ViolationKind]:
        return [v.kind for v in self.violations]

    def format_lines(self) -> List[str]:
        return [v.format() for v in self.violations]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "violations": [v.to_dict() for v in self.violations],
        }


__all__ = [
    "Change",
    "ChangeKind",
    "ChangeSet",
    "ValidationReport",
    "Violation",
    "ViolationKind",
]
