from __future__ import annotations

import logging
import time
from collections.abc import Callable

from dirprune.deletion import delete_candidate
from dirprune.exceptions import RootPathError
from dirprune.models import Candidate, Outcome, RunConfig, RunReport, RunState
from dirprune.pool import run_pool
from dirprune.reporting import Reporter
from dirprune.sizing import dir_size
from dirprune.targets import load_targets
from dirprune.walker import walk

LOGGER = logging.getLogger(__name__)

CONFIRM_PROMPT = "\n⚠️  Are you sure you want to delete these directories? (y/N): "


def prompt_confirm(prompt: str) -> bool:
    try:
        response = input(prompt)
    except EOFError:
        return False
    return response.strip().lower() in {"y", "yes"}


class Orchestrator:
    """Runs one scan, size, confirm, delete pass over a directory tree.

    Only an invalid root or an unusable targets file stop the run with an
    exception. Every other failure is recorded on the returned report.
    """

    def __init__(
        self,
        config: RunConfig,
        reporter: Reporter | None = None,
        confirm: Callable[[str], bool] = prompt_confirm,
    ) -> None:
        self.config = config
        self.reporter = reporter or Reporter()
        self.confirm = confirm
        self.state = RunState.INIT
        self._started = 0.0

    def run(self) -> RunReport:
        self._started = time.monotonic()
        self._transition(RunState.VALIDATING)
        root = self.config.root.resolve()
        if not root.exists() or not root.is_dir():
            raise RootPathError(f"Path does not exist or is not a directory: {root}")
        targets = load_targets(self.config.targets_file)
        report = RunReport(root=root, targets=targets, state=self.state)
        self.reporter.started(self.config, root, targets)

        self._transition(RunState.WALKING, report)
        scan = walk(root, targets, on_match=self.reporter.found)
        report.candidates = list(scan.candidates)
        report.scan_notices = list(scan.notices)
        self.reporter.scan_notices(report.scan_notices)

        if not report.candidates:
            self._finish(report, RunState.NONE_FOUND)
            self.reporter.none_found(report)
            return report

        self._transition(RunState.SIZING, report)
        self._size(report)
        self._transition(RunState.SUMMARIZED, report)
        report.elapsed = self._elapsed()
        self.reporter.summary(report)

        if self.config.dry_run:
            self._finish(report, RunState.DRY_RUN)
            self.reporter.dry_run_done(report)
            return report

        if not self.config.assume_yes:
            self._transition(RunState.CONFIRMING, report)
            if not self.confirm(CONFIRM_PROMPT):
                self._finish(report, RunState.CANCELLED)
                self.reporter.cancelled(report)
                return report

        self._transition(RunState.DELETING, report)
        self._delete(report)
        self._finish(report, RunState.REPORTED)
        self.reporter.final(report)
        return report

    def _size(self, report: RunReport) -> None:
        candidates = report.candidates

        def _on_result(outcome: Outcome) -> None:
            error = outcome.error if not outcome.ok else outcome.value.error
            self.reporter.item_sized(candidates[outcome.index], error)

        self.reporter.sizing_started(len(candidates))
        outcomes = run_pool(
            [c.path for c in candidates],
            dir_size,
            workers=self.config.workers,
            on_result=_on_result,
        )
        sized: list[Candidate] = []
        for candidate, outcome in zip(candidates, outcomes):
            if outcome.ok:
                result = outcome.value
                sized.append(candidate.with_size(result.size))
                if result.error is not None:
                    report.size_errors.append(
                        f"Could not fully size {candidate.path}: {result.error}"
                    )
            else:
                sized.append(candidate)
                report.size_errors.append(
                    f"Could not calculate size of {candidate.path}: {outcome.error}"
                )
        for error in report.size_errors:
            LOGGER.warning(error)
        report.candidates = sized
        self.reporter.sizing_finished(report.size_errors)

    def _delete(self, report: RunReport) -> None:
        candidates = report.candidates

        def _on_result(outcome: Outcome) -> None:
            self.reporter.item_deleted(candidates[outcome.index], outcome.error)

        self.reporter.deleting_started(len(candidates))
        outcomes = run_pool(
            candidates,
            delete_candidate,
            workers=self.config.workers,
            on_result=_on_result,
        )
        for candidate, outcome in zip(candidates, outcomes):
            if outcome.ok:
                report.deleted.append(candidate.path)
                report.bytes_freed += candidate.size
            else:
                failure = f"{candidate.path}: {outcome.error}"
                LOGGER.warning("Deletion failed for %s", failure)
                report.failures.append(failure)
        self.reporter.deleting_finished(report.failures)

    def _transition(self, state: RunState, report: RunReport | None = None) -> None:
        LOGGER.debug("State %s -> %s", self.state.value, state.value)
        self.state = state
        if report is not None:
            report.state = state

    def _finish(self, report: RunReport, state: RunState) -> None:
        self._transition(state, report)
        report.elapsed = self._elapsed()

    def _elapsed(self) -> float:
        return time.monotonic() - self._started
