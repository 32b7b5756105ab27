"""
Models package for the file hasher.

This package contains the algorithm/encoding enums, per-file job records and the
pydantic run configuration.
"""

from .hash_algorithm import HashAlgorithm, OutputEncoding, DEFAULT_ALGORITHM
from .file_job import EncodedHash, FileJob, FileResult, BatchSummary
from .run_configuration import RunConfiguration, pairing_is_valid

__all__ = [
    "HashAlgorithm",
    "OutputEncoding",
    "DEFAULT_ALGORITHM",
    "EncodedHash",
    "FileJob",
    "FileResult",
    "BatchSummary",
    "RunConfiguration",
    "pairing_is_valid",
]
