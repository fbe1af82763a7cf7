from __future__ import annotations

import logging
import shutil
import sys
from pathlib import Path
from typing import Any

from dirprune.exceptions import DeletionError
from dirprune.models import Candidate

LOGGER = logging.getLogger(__name__)


def remove_tree(path: Path) -> None:
    """Remove ``path`` and everything beneath it, as far as possible.

    Failures on individual entries do not stop the removal of their siblings.
    If anything was left behind, ``DeletionError`` reports the first failure.
    Entries that are already gone count as removed.
    """
    errors: list[str] = []

    def _record(_func: Any, failed_path: str, exc: Any) -> None:
        if not isinstance(exc, BaseException):
            exc = exc[1]
        if isinstance(exc, FileNotFoundError):
            return
        errors.append(f"{failed_path}: {getattr(exc, 'strerror', None) or exc}")

    if sys.version_info >= (3, 12):
        shutil.rmtree(path, onexc=_record)
    else:
        shutil.rmtree(path, onerror=_record)

    if errors:
        raise DeletionError(str(path), errors[0], len(errors))


def delete_candidate(candidate: Candidate) -> int:
    LOGGER.debug("Deleting %s", candidate.path)
    remove_tree(candidate.path)
    return candidate.size
