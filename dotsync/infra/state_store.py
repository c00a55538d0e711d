"""
State persistence backends for dotsync.

Provides the two plain-text stores the sync manager keeps between shell
prompts:
- Timestamp backends: a single decimal epoch-seconds line
- Ledger backends: an append-only, line-oriented failure log

Each has a file implementation and an in-memory one for tests. Writes
never raise; they return a WriteResult so callers can log and carry on.
"""

import getpass
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

STATE_FILE_PREFIX = ".sync-state-"
FAILURE_FILE_PREFIX = ".sync-failures-"


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a store write."""
    ok: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok


WRITE_OK = WriteResult(ok=True)


def current_user() -> str:
    """OS user name used to key the state files."""
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return str(os.getuid()) if hasattr(os, 'getuid') else "user"


def default_state_paths(state_dir: Optional[str] = None, user: Optional[str] = None):
    """
    Return (timestamp_path, ledger_path) for a user.

    Args:
        state_dir: Directory holding the files (default: system temp dir)
        user: User name suffix (default: current OS user)
    """
    directory = Path(state_dir or tempfile.gettempdir()).expanduser()
    user = user or current_user()
    return directory / f"{STATE_FILE_PREFIX}{user}", directory / f"{FAILURE_FILE_PREFIX}{user}"


class TimestampBackend(ABC):
    """Storage for the single last-checked timestamp."""

    @abstractmethod
    def load(self) -> Optional[int]:
        """Return the stored value, or None if absent or unreadable."""

    @abstractmethod
    def save(self, value: int) -> WriteResult:
        """Overwrite the stored value."""

    def describe(self) -> str:
        return self.__class__.__name__


class FileTimestampBackend(TimestampBackend):
    """
    Timestamp kept as one line of decimal epoch seconds.

    Example:
        backend = FileTimestampBackend(Path("/tmp/.sync-state-me"))
        backend.save(1700000000)
        backend.load()  # 1700000000
    """

    def __init__(self, path: Path):
        self.path = Path(path).expanduser()

    def load(self) -> Optional[int]:
        try:
            # Undecodable bytes become U+FFFD and fail the int() parse below
            text = self.path.read_text(errors="replace").strip()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.debug(f"Cannot read {self.path}: {e}")
            return None

        try:
            return int(text)
        except ValueError:
            logger.debug(f"Ignoring malformed timestamp in {self.path}: {text!r}")
            return None

    def save(self, value: int) -> WriteResult:
        """Write atomically using temp file and rename."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp"
            )
        except OSError as e:
            return WriteResult(ok=False, error=str(e))

        try:
            with os.fdopen(fd, 'w') as f:
                f.write(f"{int(value)}\n")
            os.replace(temp_path, self.path)
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            return WriteResult(ok=False, error=str(e))

        return WRITE_OK

    def describe(self) -> str:
        return str(self.path)


class MemoryTimestampBackend(TimestampBackend):
    """In-memory timestamp store for tests."""

    def __init__(self, value: Optional[int] = None, fail_writes: bool = False):
        self.value = value
        self.fail_writes = fail_writes
        self.writes: List[int] = []

    def load(self) -> Optional[int]:
        return self.value

    def save(self, value: int) -> WriteResult:
        if self.fail_writes:
            return WriteResult(ok=False, error="write refused")
        self.value = int(value)
        self.writes.append(self.value)
        return WRITE_OK

    def describe(self) -> str:
        return "<memory>"


class LedgerBackend(ABC):
    """Storage for the append-only failure log."""

    @abstractmethod
    def read_lines(self) -> List[str]:
        """Return all lines, oldest first; empty if the log does not exist."""

    @abstractmethod
    def append(self, line: str) -> WriteResult:
        """Append one line."""

    @abstractmethod
    def clear(self) -> bool:
        """Delete the log. Returns True if there was something to delete."""

    def describe(self) -> str:
        return self.__class__.__name__


class FileLedgerBackend(LedgerBackend):
    """Failure log kept as a flat text file, one record per line."""

    def __init__(self, path: Path):
        self.path = Path(path).expanduser()

    def read_lines(self) -> List[str]:
        try:
            with open(self.path, 'r', errors="replace") as f:
                return [line.rstrip('\n') for line in f]
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.debug(f"Cannot read {self.path}: {e}")
            return []

    def append(self, line: str) -> WriteResult:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'a') as f:
                f.write(line.rstrip('\n') + '\n')
        except OSError as e:
            return WriteResult(ok=False, error=str(e))
        return WRITE_OK

    def clear(self) -> bool:
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        return True

    def describe(self) -> str:
        return str(self.path)


class MemoryLedgerBackend(LedgerBackend):
    """In-memory failure log for tests."""

    def __init__(self, lines: Optional[List[str]] = None, fail_writes: bool = False):
        self.lines: List[str] = list(lines or [])
        self.fail_writes = fail_writes

    def read_lines(self) -> List[str]:
        return list(self.lines)

    def append(self, line: str) -> WriteResult:
        if self.fail_writes:
            return WriteResult(ok=False, error="write refused")
        self.lines.append(line)
        return WRITE_OK

    def clear(self) -> bool:
        had_lines = bool(self.lines)
        self.lines = []
        return had_lines

    def describe(self) -> str:
        return "<memory>"
