from __future__ import annotations

import json
from pathlib import Path

from tqdm import tqdm

from dirprune.models import Candidate, RunConfig, RunReport

_UNITS = "KMGTPE"


def format_bytes(size: int) -> str:
    unit = 1024
    if size < unit:
        return f"{size} B"
    div, exp = unit, 0
    n = size // unit
    while n >= unit and exp < len(_UNITS) - 1:
        div *= unit
        exp += 1
        n //= unit
    return f"{size / div:.1f} {_UNITS[exp]}iB"


def format_duration(seconds: float) -> str:
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}m {rest:.1f}s"


def write_report(path: Path, report: RunReport) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report.to_dict(), indent=2, sort_keys=True))


class Reporter:
    """Receives run events. The base class ignores all of them."""

    def started(self, config: RunConfig, root: Path, targets: list[str]) -> None:
        pass

    def found(self, candidate: Candidate) -> None:
        pass

    def scan_notices(self, notices: list[str]) -> None:
        pass

    def none_found(self, report: RunReport) -> None:
        pass

    def sizing_started(self, total: int) -> None:
        pass

    def item_sized(self, candidate: Candidate, error: str | None) -> None:
        pass

    def sizing_finished(self, errors: list[str]) -> None:
        pass

    def summary(self, report: RunReport) -> None:
        pass

    def dry_run_done(self, report: RunReport) -> None:
        pass

    def cancelled(self, report: RunReport) -> None:
        pass

    def deleting_started(self, total: int) -> None:
        pass

    def item_deleted(self, candidate: Candidate, error: str | None) -> None:
        pass

    def deleting_finished(self, failures: list[str]) -> None:
        pass

    def final(self, report: RunReport) -> None:
        pass


class ConsoleReporter(Reporter):
    def __init__(self, verbose: bool = False, progress: bool = True) -> None:
        self.verbose = verbose
        self.progress = progress
        self._bar: tqdm | None = None

    def _echo(self, message: str = "") -> None:
        if self._bar is not None:
            tqdm.write(message)
        else:
            print(message)

    def _open_bar(self, total: int, desc: str) -> None:
        if self.progress:
            self._bar = tqdm(total=total, desc=desc, unit="dir", leave=False)

    def _advance(self) -> None:
        if self._bar is not None:
            self._bar.update(1)

    def _close_bar(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None

    def started(self, config: RunConfig, root: Path, targets: list[str]) -> None:
        print(f"🔍 Searching for directories in: {root}")
        print(f"🎯 Target directories: {', '.join(targets)}")
        if not config.skip_warning:
            print(
                "⚠️  WARNING: Please review the targets file to ensure you're not "
                "accidentally targeting important directories."
            )
        if config.dry_run:
            print("📋 DRY RUN MODE: No directories will be deleted.")
        if self.verbose:
            print("📢 Verbose mode enabled")
            print(f"👷 Using {config.workers} concurrent workers")

    def found(self, candidate: Candidate) -> None:
        print(f"📁 Found: {candidate.path}")

    def scan_notices(self, notices: list[str]) -> None:
        if not notices or not self.verbose:
            return
        print("\n📋 Scan Errors:")
        for notice in notices:
            print(f"⚠️  {notice}")

    def none_found(self, report: RunReport) -> None:
        print("✅ No target directories found.")

    def sizing_started(self, total: int) -> None:
        print("\n📊 Calculating directory sizes...")
        self._open_bar(total, "Sizing directories")

    def item_sized(self, candidate: Candidate, error: str | None) -> None:
        self._advance()

    def sizing_finished(self, errors: list[str]) -> None:
        self._close_bar()
        if not errors or not self.verbose:
            return
        print("\n📋 Size Calculation Errors:")
        for error in errors:
            print(f"⚠️  {error}")

    def summary(self, report: RunReport) -> None:
        print("\n📊 Summary:")
        print(f"   • Directories found: {report.found}")
        print(f"   • Total size: {format_bytes(report.total_size)}")
        if report.size_errors:
            print(f"   • Size errors: {len(report.size_errors)} (sizes are best effort)")
        print(f"   • Scan duration: {format_duration(report.elapsed)}")

    def dry_run_done(self, report: RunReport) -> None:
        print("🏁 Dry run completed successfully.")

    def cancelled(self, report: RunReport) -> None:
        print("🛑 Operation cancelled by user.")

    def deleting_started(self, total: int) -> None:
        print("\n🗑️  Starting deletion process...")
        self._open_bar(total, "Deleting directories")

    def item_deleted(self, candidate: Candidate, error: str | None) -> None:
        if error is None:
            self._echo(f"🗑️  Deleting: {candidate.path} ✅ Done.")
        else:
            self._echo(f"🗑️  Deleting: {candidate.path} ❌ ERROR: {error}")
        self._advance()

    def deleting_finished(self, failures: list[str]) -> None:
        self._close_bar()
        if not failures:
            return
        print("\n⚠️  Deletion Errors:")
        for failure in failures:
            print(failure)

    def final(self, report: RunReport) -> None:
        print("\n📊 Deletion Results:")
        print(
            f"   • Successfully deleted: {report.deleted_count} out of "
            f"{report.found} directories"
        )
        print(f"   • Freed space: {format_bytes(report.bytes_freed)}")
        print(f"   • Total operation time: {format_duration(report.elapsed)}")
        if report.deleted_count > 0:
            print("🎉 Operation completed successfully!")
        else:
            print("❌ No directories were deleted.")
