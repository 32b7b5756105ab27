"""
Logging setup for the filehasher CLI.

stdout carries hash results only, so console logging goes to stderr and is
off entirely unless -v is given. A --logfile always receives INFO and above,
or everything the console shows when more verbose.
"""
import logging
import sys
import os

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(module)s::%(funcName)s - %(message)s'
SILENT = logging.CRITICAL + 1


def verbosity_to_level(verbosity: int) -> int:
    """Map the -v count to a console log level (0 = silent, 1 = INFO, 2+ = DEBUG)."""
    if verbosity <= 0:
        return SILENT
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(verbosity: int = 0, logfile: str = None) -> None:
    """
    Configure the root logger for one CLI invocation.

    Args:
        verbosity (int): Number of -v flags.
        logfile (str, optional): File that also receives log records.
    """
    console_level = verbosity_to_level(verbosity)
    file_level = console_level if verbosity > 0 else logging.INFO
    formatter = logging.Formatter(LOG_FORMAT)

    root = logging.getLogger()
    root.setLevel(file_level if logfile else console_level)
    root.handlers.clear()

    if verbosity > 0:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(formatter)
        stderr_handler.setLevel(console_level)
        root.addHandler(stderr_handler)

    if logfile:
        file_handler = logging.FileHandler(logfile, encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.setLevel(file_level)
        root.addHandler(file_handler)

    root.info(f"Command line: {' '.join(sys.argv)}")
    root.info(f"Current working directory: {os.getcwd()}")
