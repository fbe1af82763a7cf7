from __future__ import annotations

import os
from pathlib import Path

from dirprune.models import SizeResult


def dir_size(path: Path) -> SizeResult:
    """Sum the sizes of all non-directory entries beneath ``path``.

    Entries that cannot be read contribute nothing and the walk carries on;
    the first such error is returned alongside the partial total.
    """
    total = 0
    first_error: str | None = None
    pending = [os.fspath(path)]

    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    try:
                        if entry.is_dir(follow_symlinks=False):
                            pending.append(entry.path)
                        else:
                            total += entry.stat(follow_symlinks=False).st_size
                    except OSError as exc:
                        if first_error is None:
                            first_error = _describe(entry.path, exc)
        except OSError as exc:
            if first_error is None:
                first_error = _describe(current, exc)

    return SizeResult(size=total, error=first_error)


def _describe(path: str, exc: OSError) -> str:
    return f"{path}: {exc.strerror or exc}"
