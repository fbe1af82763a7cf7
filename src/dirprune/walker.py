from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path

from dirprune.models import Candidate, ScanResult

LOGGER = logging.getLogger(__name__)


def walk(
    root: Path,
    targets: Iterable[str],
    on_match: Callable[[Candidate], None] | None = None,
) -> ScanResult:
    """Find directories under ``root`` whose name is one of ``targets``.

    Matched directories are never descended into, so a target nested inside
    another match is not reported on its own. Directories that cannot be
    listed are recorded as notices and skipped. Symlinks are neither matched
    nor followed.
    """
    names = set(targets)
    candidates: list[Candidate] = []
    notices: list[str] = []

    def _record(path: Path) -> None:
        candidate = Candidate(path=path)
        candidates.append(candidate)
        LOGGER.debug("Matched %s", path)
        if on_match is not None:
            on_match(candidate)

    def _onerror(exc: OSError) -> None:
        notices.append(f"Error accessing {exc.filename}: {exc.strerror or exc}")

    if root.name in names:
        _record(root)
        return ScanResult(candidates=candidates, notices=notices)

    for dirpath, dirnames, _filenames in os.walk(root, onerror=_onerror):
        keep: list[str] = []
        for name in sorted(dirnames):
            full_path = Path(dirpath) / name
            if os.path.islink(full_path):
                continue
            if name in names:
                _record(full_path)
                continue
            keep.append(name)
        dirnames[:] = keep

    return ScanResult(candidates=candidates, notices=notices)
