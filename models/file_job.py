"""
Per-file hashing records: the job submitted to the engine, its result, and the batch summary.
"""
from dataclasses import dataclass, field
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from models.hash_algorithm import HashAlgorithm, OutputEncoding


class EncodedHash(BaseModel):
    """
    Final textual digest of one file.

    Attributes:
        value (str): Encoded digest, printed as-is.
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    value: str = Field(..., description="Encoded digest text")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FileJob:
    """One (path, algorithm, encoding) unit of work."""
    path: str
    algorithm: HashAlgorithm
    encoding: OutputEncoding


@dataclass
class FileResult:
    """Outcome of a FileJob: either an encoded hash or the error that stopped it."""
    job: FileJob
    encoded: Optional[EncodedHash] = None
    error: Optional[Exception] = None
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None and self.encoded is not None

    def output_line(self, exclude_filename: bool = False) -> str:
        """Render the stdout line for a successful result."""
        if exclude_filename:
            return str(self.encoded)
        return f"{self.encoded} {self.job.path}"

    def error_line(self) -> str:
        """Render the stderr diagnostic for a failed result."""
        return f"File error for '{self.job.path}': {self.error}"


@dataclass
class BatchSummary:
    """Aggregate outcome of a hashing run."""
    processed: int = 0
    succeeded: int = 0
    failed_paths: List[str] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failed_paths)

    @property
    def success(self) -> bool:
        """True when no file failed."""
        return not self.failed_paths
