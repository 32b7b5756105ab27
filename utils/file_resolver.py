"""
Path resolution for the hash command: glob expansion of supplied patterns, or
newline-separated paths read from stdin when no pattern is supplied.
"""
import glob
import logging
import os
import sys
from typing import Iterable, List, Optional, TextIO

from models.run_configuration import RunConfiguration
from utils.errors import PathResolutionError

logger = logging.getLogger(__name__)

GLOB_CHARS = set("*?[]")


def has_glob_chars(pattern: str) -> bool:
    return any(ch in GLOB_CHARS for ch in pattern)


def case_insensitive_pattern(pattern: str) -> str:
    """
    Rewrite a glob pattern so that every letter matches both cases.

    Letters inside existing [...] classes and the drive prefix are left untouched.
    """
    drive, rest = os.path.splitdrive(pattern)
    out = []
    i = 0
    while i < len(rest):
        ch = rest[i]
        if ch == "[":
            close = rest.find("]", i + 1)
            if close != -1:
                out.append(rest[i:close + 1])
                i = close + 1
                continue
        if ch.lower() != ch.upper():
            out.append(f"[{ch.lower()}{ch.upper()}]")
        else:
            out.append(ch)
        i += 1
    return drive + "".join(out)


def expand_pattern(pattern: str, case_sensitive: bool = False) -> List[str]:
    """
    Expand one supplied path or glob pattern into regular-file paths.

    Args:
        pattern (str): Literal path or glob pattern (``**`` is recursive, ``~`` is expanded).
        case_sensitive (bool): Match letters case-sensitively.

    Returns:
        List[str]: Sorted regular files matched by the pattern. Wildcards also match
        names starting with a dot.

    Raises:
        PathResolutionError: If a literal (non-glob) path does not exist.
    """
    expanded = os.path.expanduser(pattern)
    glob_pattern = expanded if case_sensitive else case_insensitive_pattern(expanded)
    matches = sorted(
        p for p in glob.glob(glob_pattern, recursive=True, include_hidden=True) if os.path.isfile(p)
    )
    if matches:
        return matches

    if os.path.isfile(expanded):
        return [expanded]
    if os.path.isdir(expanded):
        logger.debug(f"Ignoring directory: {pattern}")
        return []
    if has_glob_chars(pattern):
        logger.debug(f"No files matched pattern: {pattern}")
        return []

    raise PathResolutionError(f"File not found: {pattern}")


def read_paths_from_stream(stream: TextIO) -> List[str]:
    """
    Read newline-separated paths, keeping only existing regular files.
    """
    paths = []
    for line in stream:
        path = line.rstrip("\r\n")
        if not path:
            continue
        if os.path.isfile(path):
            paths.append(path)
        else:
            logger.debug(f"Not a file: {path}")
    return paths


def resolve_paths(config: RunConfiguration, stdin: Optional[TextIO] = None) -> List[str]:
    """
    Produce the ordered list of paths to hash for a run.

    Args:
        config (RunConfiguration): Run settings (supplied_paths, case_sensitive, limit).
        stdin (Optional[TextIO]): Stream to read when no paths are supplied (defaults to sys.stdin).

    Returns:
        List[str]: Paths in input order, truncated to config.limit when set.

    Raises:
        PathResolutionError: If a supplied literal path does not exist.
    """
    if config.supplied_paths:
        paths = _expand_all(config.supplied_paths, config.case_sensitive)
    else:
        logger.debug("No path specified, reading from stdin")
        paths = read_paths_from_stream(stdin or sys.stdin)

    if config.limit is not None:
        paths = paths[:config.limit]
    return paths


def _expand_all(patterns: Iterable[str], case_sensitive: bool) -> List[str]:
    paths: List[str] = []
    for pattern in patterns:
        paths.extend(expand_pattern(pattern, case_sensitive))
    return paths
