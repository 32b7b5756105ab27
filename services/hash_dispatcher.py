"""
Single entry point that validates an algorithm/encoding pair and hashes one file.
"""
import logging
from typing import Optional
from models.file_job import EncodedHash, FileJob
from models.hash_algorithm import HashAlgorithm, OutputEncoding
from models.run_configuration import PAIRING_RULE, pairing_is_valid
from services.hashing_service import HashingService
from utils.errors import ConfigurationError

logger = logging.getLogger(__name__)


def validate_pairing(algorithm: HashAlgorithm, encoding: Optional[OutputEncoding]) -> None:
    """
    Enforce that CRC32 is used with U32 and U32 only with CRC32.

    Raises:
        ConfigurationError: If the pair breaks the rule.
    """
    if encoding is not None and not pairing_is_valid(algorithm, encoding):
        raise ConfigurationError(f"{PAIRING_RULE} (got {algorithm.value} with {encoding.value})")


def call_hasher(
    algorithm: HashAlgorithm,
    encoding: OutputEncoding,
    path: str,
    hashing_service: Optional[HashingService] = None,
) -> EncodedHash:
    """
    Hash one file with the given algorithm and encoding.

    The pairing rule is checked before the file is touched, even though the
    configuration layer already enforces it.

    Args:
        algorithm (HashAlgorithm): Algorithm to apply.
        encoding (OutputEncoding): Concrete output encoding.
        path (str): File to hash.
        hashing_service (Optional[HashingService]): Engine to use; a default one is created if omitted.

    Returns:
        EncodedHash: Encoded digest of the file.

    Raises:
        ConfigurationError: If the pair breaks the CRC32/U32 rule.
        FileAccessError: If the file cannot be read.
        EncodingMismatchError: If the digest cannot be rendered in the encoding.
    """
    validate_pairing(algorithm, encoding)
    service = hashing_service or HashingService()
    return service.hash_file(path, algorithm, encoding)


def run_job(job: FileJob, hashing_service: Optional[HashingService] = None) -> EncodedHash:
    """Hash the file described by a FileJob."""
    return call_hasher(job.algorithm, job.encoding, job.path, hashing_service)
