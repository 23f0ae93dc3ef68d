"""Observer pattern for validation outcomes."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape

from .messages import Messages, format_message, get_messages
from .models import CommitMsgValidationResult, ValidationResult

SEPARATOR = "━" * 60


class ValidationObserver(ABC):
    """Abstract base class for validation observers."""

    @abstractmethod
    def on_files_validated(self, files: List[str], result: ValidationResult) -> None:
        """Called after staged files were validated."""
        pass

    @abstractmethod
    def on_commit_message_validated(
        self, message: str, result: CommitMsgValidationResult
    ) -> None:
        """Called after a commit message was validated."""
        pass


class ConsoleLogObserver(ValidationObserver):
    """Observer that renders validation outcomes on the console."""

    def __init__(
        self,
        console: Optional[Console] = None,
        messages: Optional[Messages] = None,
        depth_label: str = "",
    ):
        self.console = console or Console()
        self.messages = messages or get_messages()
        self.depth_label = depth_label

    def on_files_validated(self, files: List[str], result: ValidationResult) -> None:
        m = self.messages
        for warning in result.warnings:
            self.console.print(f"[yellow]⚠️  {escape(warning)}[/yellow]")

        if result.valid:
            folder = result.common_path or "root"
            self.console.print(
                f"[green]✅ {m.validation_passed}: {len(files)} files in {escape(f'[{folder}]')}[/green]"
            )
            return

        self.console.print(f"\n[red]❌ {m.commit_blocked}[/red]\n")
        self.console.print(SEPARATOR)
        if len(result.groups) > 1:
            self.console.print(
                format_message(m.multiple_folders, depth=self.depth_label), markup=False
            )
        for error in result.errors:
            self.console.print(f"  {error}", markup=False)
        if len(result.groups) > 1:
            self.console.print("")
            self.console.print(f"✖ {m.rule}", markup=False)
            self.console.print(f"✖ {format_message(m.depth, depth=self.depth_label)}", markup=False)
            self.console.print(f"✖ {m.solution}", markup=False)
            self.console.print("")
            self.console.print(f"💡 {m.quick_fixes}", markup=False)
            for folder, grouped in result.groups.items():
                self.console.print(
                    f"   git reset {' '.join(grouped)}  # {m.unstage} [{folder or '(root)'}]",
                    markup=False,
                )
        self.console.print(SEPARATOR)

        stats = result.stats
        self.console.print(f"\n💡 {m.summary}")
        self.console.print(f"   - {format_message(m.staged_files, count=len(files))}")
        self.console.print(f"   - {format_message(m.required_depth, depth=self.depth_label)}", markup=False)
        if stats is not None:
            self.console.print(
                f"   - {format_message(m.multiple_folders_detected, count=stats.unique_folders)}"
            )
        self.console.print(f"   - {m.action_required}\n")

    def on_commit_message_validated(
        self, message: str, result: CommitMsgValidationResult
    ) -> None:
        for warning in result.warnings:
            self.console.print(f"[yellow]⚠️  {escape(warning)}[/yellow]")

        if result.valid:
            self.console.print(f"[green]✅ {self.messages.commit_msg_valid}[/green]")
            return

        self.console.print(f"\n[red]❌ {self.messages.commit_msg_blocked}[/red]\n")
        self.console.print(SEPARATOR)
        for error in result.errors:
            self.console.print(error, markup=False)
        self.console.print(SEPARATOR)
        self.console.print(f'\n📝 Your commit message:\n   "{message.strip()}"\n', markup=False)


class FileLogObserver(ValidationObserver):
    """Observer that appends violations to a log file.

    Only failures are written; a passing validation leaves the log alone.
    The log is cleared by the post-commit hook once a commit succeeds.
    """

    def __init__(self, log_file: str, max_age_hours: int = 24):
        self.log_file = Path(log_file)
        self.max_age_hours = max_age_hours
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a", encoding="utf-8") as f:
            f.write(f"{timestamp} - {message}\n")

    def on_files_validated(self, files: List[str], result: ValidationResult) -> None:
        if result.valid:
            return
        self._log("=== COMMIT VIOLATION ===")
        self._log(f"Staged files: {', '.join(files)}")
        for error in result.errors:
            self._log(f"ERROR: {error}")
        self._log("========================")

    def on_commit_message_validated(
        self, message: str, result: CommitMsgValidationResult
    ) -> None:
        if result.valid:
            return
        self._log("=== COMMIT MESSAGE VIOLATION ===")
        self._log(f"Message: {message.strip()}")
        for error in result.errors:
            if error:
                self._log(f"ERROR: {error}")
        self._log("================================")

    def read(self) -> str:
        if not self.log_file.exists():
            return ""
        return self.log_file.read_text(encoding="utf-8")

    def clear(self) -> bool:
        """Delete the log file. Returns True if there was one."""
        if self.log_file.exists():
            self.log_file.unlink()
            return True
        return False

    def archive(self) -> Optional[Path]:
        """Rename the current log with a timestamp suffix."""
        if not self.log_file.exists():
            return None
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        target = self.log_file.with_name(f"{self.log_file.name}.{timestamp}.archive")
        self.log_file.rename(target)
        return target

    def _log_files(self) -> List[Path]:
        directory = self.log_file.parent
        if not directory.exists():
            return []
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and (p.suffix in (".log", ".archive"))
        )

    def cleanup_old_logs(self, now: Optional[datetime] = None) -> List[Path]:
        """Remove log and archive files older than ``max_age_hours``."""
        cutoff = (now or datetime.now()) - timedelta(hours=self.max_age_hours)
        removed = []
        for path in self._log_files():
            if datetime.fromtimestamp(path.stat().st_mtime) < cutoff:
                path.unlink()
                removed.append(path)
        return removed

    def stats(self) -> Dict[str, int]:
        files = self._log_files()
        return {
            "files": len(files),
            "archives": sum(1 for p in files if p.suffix == ".archive"),
            "bytes": sum(p.stat().st_size for p in files),
        }
