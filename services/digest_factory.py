"""
This module provides a factory for creating digest adapters based on the selected hash algorithm.
"""
import logging
from typing import Dict
from models.hash_algorithm import HashAlgorithm
from services.digest_implementations.digest_interface import DigestInterface
from services.digest_implementations.hashlib_implementation import HashlibDigest
from services.digest_implementations.crc32_implementation import Crc32Digest
from services.digest_implementations.whirlpool_implementation import WhirlpoolDigest
from utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

# hashlib constructor names; CRC32 and WHIRLPOOL have their own adapters
HASHLIB_NAMES: Dict[HashAlgorithm, str] = {
    HashAlgorithm.MD5: "md5",
    HashAlgorithm.SHA1: "sha1",
    HashAlgorithm.SHA2_224: "sha224",
    HashAlgorithm.SHA2_256: "sha256",
    HashAlgorithm.SHA2_384: "sha384",
    HashAlgorithm.SHA2_512: "sha512",
    HashAlgorithm.SHA3_256: "sha3_256",
    HashAlgorithm.SHA3_384: "sha3_384",
    HashAlgorithm.SHA3_512: "sha3_512",
    HashAlgorithm.BLAKE2S_256: "blake2s",
    HashAlgorithm.BLAKE2B_512: "blake2b",
}


def create_digest(algorithm: HashAlgorithm) -> DigestInterface:
    """
    Create and return a fresh digest adapter for the given algorithm.

    Args:
        algorithm (HashAlgorithm): Algorithm selected for the run.

    Returns:
        DigestInterface: An adapter in its initial state.

    Raises:
        ConfigurationError: If hashlib refuses the algorithm (e.g. MD5 on a FIPS-restricted build).
    """
    if algorithm is HashAlgorithm.CRC32:
        return Crc32Digest()
    if algorithm is HashAlgorithm.WHIRLPOOL:
        return WhirlpoolDigest()

    name = HASHLIB_NAMES.get(algorithm)
    if name is None:
        raise ConfigurationError(f"Unsupported hash algorithm: {algorithm}")

    try:
        digest = HashlibDigest(name)
    except ValueError as e:
        logger.debug(f"hashlib.new('{name}') failed: {e}")
        raise ConfigurationError(f"{algorithm.value} is not available in this Python build: {e}") from e

    if digest.digest_size != algorithm.digest_size:
        raise ConfigurationError(
            f"{algorithm.value} produced a {digest.digest_size}-byte digest, expected {algorithm.digest_size}"
        )
    return digest
