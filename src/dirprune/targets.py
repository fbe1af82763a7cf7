from __future__ import annotations

from pathlib import Path
from typing import Iterable

from dirprune.exceptions import TargetsError

DEFAULT_TARGETS_FILE = "targets.txt"


def parse_targets(lines: Iterable[str]) -> list[str]:
    """Return directory names from a line-oriented targets listing.

    Blank lines and ``#`` comments are ignored; repeated names keep their
    first position.
    """
    seen: set[str] = set()
    targets: list[str] = []
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line in seen:
            continue
        seen.add(line)
        targets.append(line)
    return targets


def load_targets(path: Path) -> list[str]:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TargetsError(f"could not open targets file: {exc}") from exc
    targets = parse_targets(content.splitlines())
    if not targets:
        raise TargetsError(f"no valid targets found in {path}")
    return targets
