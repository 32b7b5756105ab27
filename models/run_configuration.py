"""
RunConfiguration model: the immutable settings for one hashing run.
"""
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator
from models.hash_algorithm import DEFAULT_ALGORITHM, HashAlgorithm, OutputEncoding

CONFIG_SCHEMA_VERSION = 1
DEFAULT_CHUNK_SIZE = 32 * 1024

PAIRING_RULE = "CRC32 must use U32 encoding, and U32 encoding can only be used with CRC32"


def pairing_is_valid(algorithm: HashAlgorithm, encoding: OutputEncoding) -> bool:
    """Return True when the CRC32 <-> U32 pairing rule holds."""
    return (algorithm is HashAlgorithm.CRC32) == (encoding is OutputEncoding.U32)


class RunConfiguration(BaseModel):
    """
    Settings for a hashing run, built once by utils.hasher_config and never mutated.

    Attributes:
        schema_version (int): Version of this configuration shape.
        algorithm (HashAlgorithm): Digest or checksum primitive.
        encoding (OutputEncoding): Concrete output encoding (already resolved).
        single_thread (bool): Hash files one at a time in input order.
        max_workers (Optional[int]): Worker pool size for parallel mode (None lets the executor decide).
        exclude_filenames (bool): Print only the hash, without the path.
        case_sensitive (bool): Case-sensitive glob matching.
        no_progress (bool): Suppress all progress display.
        limit (Optional[int]): Maximum number of resolved files to hash.
        chunk_size (int): Streaming threshold and read buffer size in bytes.
        supplied_paths (Tuple[str, ...]): Paths or glob patterns from the command line.
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    schema_version: int = Field(CONFIG_SCHEMA_VERSION, description="Configuration schema version")
    algorithm: HashAlgorithm = Field(DEFAULT_ALGORITHM, description="Hash algorithm")
    encoding: OutputEncoding = Field(OutputEncoding.HEX, description="Output encoding")
    single_thread: bool = Field(False, description="Disable the worker pool")
    max_workers: Optional[int] = Field(None, gt=0, description="Worker pool size")
    exclude_filenames: bool = Field(False, description="Omit filenames from output")
    case_sensitive: bool = Field(False, description="Case-sensitive glob matching")
    no_progress: bool = Field(False, description="Suppress progress display")
    limit: Optional[int] = Field(None, ge=0, description="Maximum number of files to hash")
    chunk_size: int = Field(DEFAULT_CHUNK_SIZE, gt=0, description="Streaming threshold in bytes")
    supplied_paths: Tuple[str, ...] = Field((), description="Paths or glob patterns to hash")

    @model_validator(mode='after')
    def _check_pairing(self) -> "RunConfiguration":
        if not pairing_is_valid(self.algorithm, self.encoding):
            raise ValueError(PAIRING_RULE)
        return self
