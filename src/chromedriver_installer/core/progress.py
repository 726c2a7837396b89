"""Progress sinks for installer status lines.

The installer reports what it is doing (detected platform, binary, version,
download and install steps) as plain human-readable lines. Where those lines
go is up to the caller:
- CLI: write to a text stream (stderr by default)
- Callback: forward to another system (collecting in tests, GUIs)
- Null: discard everything
"""

from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, TextIO


class ProgressReporter(ABC):
    """Abstract sink for installer progress lines."""

    @abstractmethod
    def writeln(self, message: str) -> None:
        """Report a single progress line.

        Args:
            message: The line to report, without trailing newline.
        """


class NullProgress(ProgressReporter):
    """Silent sink. Used when the caller does not care about progress."""

    def writeln(self, message: str) -> None:
        pass


class StreamProgress(ProgressReporter):
    """Thread-safe sink writing each line to a text stream."""

    def __init__(self, output: Optional[TextIO] = None) -> None:
        """Initialize StreamProgress.

        Args:
            output: Stream to write to. Defaults to the current sys.stderr,
                looked up on every write so redirection keeps working.
        """
        self._output = output
        self._lock = threading.Lock()

    def writeln(self, message: str) -> None:
        output = self._output if self._output is not None else sys.stderr
        with self._lock:
            print(message, file=output, flush=True)


class CallbackProgress(ProgressReporter):
    """Sink that forwards each line to a callback."""

    def __init__(self, on_line: Callable[[str], None]) -> None:
        self._on_line = on_line
        self._lock = threading.Lock()

    def writeln(self, message: str) -> None:
        with self._lock:
            self._on_line(message)


class RecordingProgress(CallbackProgress):
    """Sink that keeps every line in memory, in order."""

    def __init__(self) -> None:
        self.lines: List[str] = []
        super().__init__(self.lines.append)
