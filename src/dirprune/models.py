from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class Candidate:
    path: Path
    size: int = 0

    def with_size(self, size: int) -> Candidate:
        return replace(self, size=size)


@dataclass(frozen=True)
class ScanResult:
    candidates: list[Candidate]
    notices: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SizeResult:
    size: int
    error: str | None = None


@dataclass(frozen=True)
class Outcome:
    """Result of one work item, tagged with the index of the item it came from."""

    index: int
    ok: bool
    value: Any = None
    error: str | None = None

    @classmethod
    def success(cls, index: int, value: Any) -> Outcome:
        return cls(index=index, ok=True, value=value)

    @classmethod
    def failure(cls, index: int, error: str) -> Outcome:
        return cls(index=index, ok=False, error=error)


@dataclass(frozen=True)
class RunConfig:
    root: Path
    targets_file: Path
    dry_run: bool = False
    assume_yes: bool = False
    verbose: bool = False
    workers: int = 4
    skip_warning: bool = False


class RunState(str, Enum):
    INIT = "init"
    VALIDATING = "validating"
    WALKING = "walking"
    NONE_FOUND = "none_found"
    SIZING = "sizing"
    SUMMARIZED = "summarized"
    DRY_RUN = "dry_run"
    CONFIRMING = "confirming"
    CANCELLED = "cancelled"
    DELETING = "deleting"
    REPORTED = "reported"


@dataclass
class RunReport:
    root: Path
    targets: list[str]
    state: RunState = RunState.INIT
    candidates: list[Candidate] = field(default_factory=list)
    scan_notices: list[str] = field(default_factory=list)
    size_errors: list[str] = field(default_factory=list)
    deleted: list[Path] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)
    bytes_freed: int = 0
    elapsed: float = 0.0

    @property
    def found(self) -> int:
        return len(self.candidates)

    @property
    def total_size(self) -> int:
        return sum(c.size for c in self.candidates)

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["root"] = str(self.root)
        data["state"] = self.state.value
        data["candidates"] = [
            {"path": str(c.path), "size": c.size} for c in self.candidates
        ]
        data["deleted"] = [str(p) for p in self.deleted]
        data["summary"] = {
            "found": self.found,
            "total_size": self.total_size,
            "deleted_count": self.deleted_count,
            "bytes_freed": self.bytes_freed,
        }
        return data
