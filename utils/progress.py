"""
Progress indication for hashing runs, rendered with rich.

Two indicators exist:
- a transient batch bar that advances once per completed file (batches of
  BATCH_PROGRESS_MIN_FILES or more, any thread mode)
- a per-file spinner for sequential runs that only appears when one file takes
  longer than PROGRESS_THRESHOLD_MILLIS to hash

Spinners are driven by short-lived helper threads. The number of live helpers is
capped by a BoundedSemaphore handed to the coordinator.
"""
import logging
import sys
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TextIO

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TaskProgressColumn, TextColumn

logger = logging.getLogger(__name__)

PROGRESS_THRESHOLD_MILLIS = 200
MAX_PROGRESS_THREADS = 4
BATCH_PROGRESS_MIN_FILES = 10


class FileProgressHandle:
    """Handle for one per-file spinner. finish() always leaves the terminal clean."""

    def __init__(self, done: threading.Event, thread: threading.Thread):
        self._done = done
        self._thread = thread

    def finish(self) -> None:
        """Signal completion and wait for the helper thread to clear its spinner."""
        self._done.set()
        self._thread.join()


class ProgressCoordinator:
    """
    Owns the rich console used for progress and the helper-thread ceiling.

    Args:
        console (Console): Console the indicators render on.
        slots (Optional[threading.BoundedSemaphore]): Ceiling on concurrently active spinner threads.
        threshold_millis (int): Delay before a per-file spinner is shown.
        shares_output (bool): True when the console writes to the same stream as hash results.
    """

    def __init__(
        self,
        console: Console,
        slots: Optional[threading.BoundedSemaphore] = None,
        threshold_millis: int = PROGRESS_THRESHOLD_MILLIS,
        shares_output: bool = False,
    ):
        self.console = console
        self.slots = slots or threading.BoundedSemaphore(MAX_PROGRESS_THREADS)
        self.threshold_millis = threshold_millis
        self.shares_output = shares_output
        # rich allows one live display per console
        self._live_lock = threading.Lock()
        self._live_active = False

    def create_file_progress(self, path: str) -> Optional[FileProgressHandle]:
        """
        Start watching one file's hash operation.

        Returns:
            Optional[FileProgressHandle]: Handle to finish(), or None when the thread ceiling is reached.
        """
        if not self.slots.acquire(blocking=False):
            logger.debug(f"Progress thread limit reached, no spinner for {path}")
            return None

        done = threading.Event()
        thread = threading.Thread(
            target=self._watch_file, args=(path, done), name="hash-progress", daemon=True
        )
        try:
            thread.start()
        except RuntimeError:
            self.slots.release()
            raise
        return FileProgressHandle(done, thread)

    def _watch_file(self, path: str, done: threading.Event) -> None:
        try:
            if done.wait(self.threshold_millis / 1000):
                return
            if not self._live_lock.acquire(blocking=False):
                done.wait()
                return
            try:
                self._live_active = True
                with self.console.status(f"Hashing {escape(path)}...", spinner="dots"):
                    done.wait()
            finally:
                self._live_active = False
                self._live_lock.release()
        finally:
            self.slots.release()

    @contextmanager
    def track_batch(self, total: int) -> Iterator[Callable[[], None]]:
        """
        Show a transient batch bar for the duration of the block.

        Yields:
            Callable[[], None]: Advances the bar by one completed file. Safe to call from worker threads.
        """
        progress = Progress(
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            TextColumn("files"),
            TaskProgressColumn(),
            console=self.console,
            transient=True,
            redirect_stdout=False,
            redirect_stderr=False,
        )
        with self._live_lock:
            with progress:
                self._live_active = True
                try:
                    task = progress.add_task("Hashing", total=total)
                    yield lambda: progress.advance(task)
                finally:
                    self._live_active = False

    def emit(self, line: str, write: Callable[[str], None]) -> None:
        """
        Write one result line without tearing an active indicator.

        When the progress console renders on the result stream, the line is printed
        through the console so it lands above the live display.
        """
        if self.shares_output and self._live_active:
            self.console.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)
        else:
            write(line)


def create_progress_coordinator(
    no_progress: bool,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
    slots: Optional[threading.BoundedSemaphore] = None,
) -> Optional[ProgressCoordinator]:
    """
    Build a ProgressCoordinator for an interactive run.

    Returns None when progress is suppressed or neither output stream is a terminal.
    """
    if no_progress:
        return None

    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    if _is_terminal(stdout):
        return ProgressCoordinator(Console(file=stdout), slots=slots, shares_output=True)
    if _is_terminal(stderr):
        return ProgressCoordinator(Console(file=stderr), slots=slots)

    logger.debug("No terminal attached, progress display disabled")
    return None


def _is_terminal(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False
