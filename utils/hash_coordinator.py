"""
Hash coordinator: hashes a resolved list of paths sequentially or across a thread pool.

Each successful file produces one stdout line; each failed file produces one
stderr diagnostic and marks the run as failed without stopping the others.
"""
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from contextlib import nullcontext
from typing import Callable, List, Optional, Sequence, TextIO

import click

from models.file_job import BatchSummary, FileJob, FileResult
from models.run_configuration import RunConfiguration
from services.digest_factory import create_digest
from services.hash_dispatcher import run_job, validate_pairing
from services.hashing_service import HashingService
from utils.errors import HasherError
from utils.progress import (
    BATCH_PROGRESS_MIN_FILES,
    PROGRESS_THRESHOLD_MILLIS,
    ProgressCoordinator,
)

logger = logging.getLogger(__name__)


class HashCoordinator:
    """
    Runs FileJobs for a batch of paths and reports each result as it completes.

    Args:
        config (RunConfiguration): Settings for the run.
        hashing_service (Optional[HashingService]): Engine; defaults to one using config.chunk_size.
        progress (Optional[ProgressCoordinator]): Progress display, or None for none.
        out (Optional[TextIO]): Result stream (defaults to the current stdout).
        err (Optional[TextIO]): Diagnostic stream (defaults to the current stderr).

    Raises:
        ConfigurationError: If the algorithm/encoding pair is invalid or the algorithm is unavailable.
    """

    def __init__(
        self,
        config: RunConfiguration,
        hashing_service: Optional[HashingService] = None,
        progress: Optional[ProgressCoordinator] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ):
        validate_pairing(config.algorithm, config.encoding)
        create_digest(config.algorithm)

        self.config = config
        self.hashing_service = hashing_service or HashingService(chunk_size=config.chunk_size)
        self.progress = progress
        self.out = out
        self.err = err
        self._output_lock = threading.Lock()
        self._summary = BatchSummary()

    def run(self, paths: Sequence[str]) -> BatchSummary:
        """
        Hash every path and return the batch summary.

        Sequential mode is used when configured or when there is a single path.
        """
        self._summary = BatchSummary()
        if not paths:
            logger.debug("No files found")
            return self._summary

        logger.debug(f"Files to hash: {list(paths)}")
        logger.debug(f"Algorithm: {self.config.algorithm.value}, encoding: {self.config.encoding.value}")

        if self.config.single_thread or len(paths) == 1:
            self._run_sequential(paths)
        else:
            self._run_parallel(paths)

        logger.info(
            f"Hashed {self._summary.succeeded}/{self._summary.processed} files, {self._summary.failed} failed"
        )
        return self._summary

    def _batch_tracker(self, count: int):
        if self.progress is not None and count >= BATCH_PROGRESS_MIN_FILES:
            return self.progress.track_batch(count)
        return nullcontext(None)

    def _run_sequential(self, paths: Sequence[str]) -> None:
        logger.debug("Single-threaded mode")
        with self._batch_tracker(len(paths)) as advance:
            for path in paths:
                handle = None
                if advance is None and self.progress is not None:
                    handle = self.progress.create_file_progress(path)
                try:
                    result = self._hash_one(path)
                finally:
                    if handle is not None:
                        handle.finish()
                self._report(result)
                if advance is not None:
                    advance()

    def _run_parallel(self, paths: Sequence[str]) -> None:
        logger.debug(f"Multi-threaded mode (max_workers={self.config.max_workers or 'default'})")
        with self._batch_tracker(len(paths)) as advance:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                futures = [executor.submit(self._process, path, advance) for path in paths]
                for future in as_completed(futures):
                    future.result()

    def _process(self, path: str, advance: Optional[Callable[[], None]]) -> None:
        result = self._hash_one(path)
        self._report(result)
        if advance is not None:
            advance()

    def _hash_one(self, path: str) -> FileResult:
        job = FileJob(path=path, algorithm=self.config.algorithm, encoding=self.config.encoding)
        result = FileResult(job=job)
        start = time.perf_counter()
        try:
            result.encoded = run_job(job, self.hashing_service)
        except HasherError as e:
            result.error = e
        except Exception as e:
            logger.exception(f"Unexpected error hashing {path}: {e}")
            result.error = e
        result.elapsed = time.perf_counter() - start

        if result.elapsed * 1000 >= PROGRESS_THRESHOLD_MILLIS:
            logger.debug(f"File '{path}' took {result.elapsed:.2f}s to hash")
        return result

    def _report(self, result: FileResult) -> None:
        with self._output_lock:
            self._summary.processed += 1
            if result.ok:
                self._summary.succeeded += 1
                self._write_output(result.output_line(self.config.exclude_filenames))
            else:
                self._summary.failed_paths.append(result.job.path)
                click.echo(result.error_line(), file=self.err, err=True)

    def _write_output(self, line: str) -> None:
        def write(text: str) -> None:
            click.echo(text, file=self.out)

        if self.progress is not None:
            self.progress.emit(line, write)
        else:
            write(line)


def hash_files(
    config: RunConfiguration,
    paths: List[str],
    progress: Optional[ProgressCoordinator] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> BatchSummary:
    """
    Hash these files under this configuration, print results and per-file errors.

    Args:
        config (RunConfiguration): Settings for the run.
        paths (List[str]): Resolved file paths.
        progress (Optional[ProgressCoordinator]): Progress display, or None.
        out (Optional[TextIO]): Result stream.
        err (Optional[TextIO]): Diagnostic stream.

    Returns:
        BatchSummary: Counts of processed and failed files; summary.success is False if any file failed.
    """
    coordinator = HashCoordinator(config, progress=progress, out=out, err=err)
    return coordinator.run(paths)
