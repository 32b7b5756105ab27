"""
CLI command to hash files given as paths or glob patterns, or read from stdin.
"""
import sys
import click
import logging
from utils.cli_helpers import get_file_config
from utils.errors import ConfigurationError
from utils.file_resolver import resolve_paths
from utils.hash_coordinator import HashCoordinator
from utils.hasher_config import ALGORITHM_HELP, ENCODING_HELP, build_run_configuration
from utils.progress import create_progress_coordinator

logger = logging.getLogger(__name__)

@click.command("hash", help="Hash files matching PATHS (paths or glob patterns). Reads paths from stdin when none are given.")
@click.argument("paths", nargs=-1)
@click.option("--algorithm", "-a", default=None, help=ALGORITHM_HELP)
@click.option("--encoding", "-e", default=None, help=ENCODING_HELP)
@click.option("--exclude-filenames", "-x", is_flag=True, help="Exclude filenames from output")
@click.option("--single-thread", "-s", is_flag=True, help="Single-threaded (not multi-threaded)")
@click.option("--max-workers", "-m", type=click.IntRange(min=1), default=None, help="Number of concurrent hashing threads")
@click.option("--case-sensitive", "-c", is_flag=True, help="Case-sensitive glob matching")
@click.option("--no-progress", "-n", is_flag=True, help="Suppress progress display (for scripts)")
@click.option("--limit", "-L", type=click.IntRange(min=0), default=None, help="Limit number of files processed")
@click.pass_context
def hash_paths(ctx: click.Context, paths, algorithm, encoding, exclude_filenames, single_thread,
               max_workers, case_sensitive, no_progress, limit) -> None:
    """
    Hash every resolved file and print '<hash> <path>' lines.

    Args:
        ctx (click.Context): Click context containing the loaded configuration.
        paths (tuple): Paths or glob patterns.
        algorithm (str): Algorithm name or alias.
        encoding (str): Output encoding name.
        exclude_filenames (bool): Print only the hash.
        single_thread (bool): Hash files one at a time, in input order.
        max_workers (int): Worker pool size.
        case_sensitive (bool): Case-sensitive glob matching.
        no_progress (bool): Suppress progress display.
        limit (int): Maximum number of files to hash.

    Exits with 0 when every file hashed, 1 when any file failed, 2 on configuration
    errors or a supplied path that does not exist.
    """
    file_config = get_file_config(ctx)

    try:
        config = build_run_configuration(
            file_config,
            algorithm=algorithm,
            encoding=encoding,
            single_thread=single_thread,
            max_workers=max_workers,
            exclude_filenames=exclude_filenames,
            case_sensitive=case_sensitive,
            no_progress=no_progress,
            limit=limit,
            supplied_paths=paths,
        )
    except ConfigurationError as e:
        raise click.UsageError(str(e), ctx=ctx) from e

    if config.supplied_paths:
        logger.debug(f"Paths: {len(config.supplied_paths)} file path(s) supplied")

    try:
        resolved = resolve_paths(config)
    except ConfigurationError as e:
        raise click.UsageError(str(e), ctx=ctx) from e

    if not resolved:
        logger.info("No files found")
        return

    progress = create_progress_coordinator(config.no_progress, stdout=sys.stdout, stderr=sys.stderr)
    summary = HashCoordinator(config, progress=progress).run(resolved)

    if not summary.success:
        logger.error(f"{summary.failed} of {summary.processed} files failed")
        ctx.exit(1)
