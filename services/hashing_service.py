"""
HashingService: digest a single file and encode the result.

Files up to the streaming threshold (32 KiB by default) are read in one call and
fed to the digest at once. Larger files are streamed through one reusable buffer
of the same size.
"""

from __future__ import annotations

import base64
import logging
import os
from typing import Callable, Dict, Optional

from models.file_job import EncodedHash
from models.hash_algorithm import HashAlgorithm, OutputEncoding
from models.run_configuration import DEFAULT_CHUNK_SIZE
from services.digest_factory import create_digest
from services.digest_implementations.digest_interface import DigestInterface
from utils.errors import EncodingMismatchError, FileAccessError

logger = logging.getLogger(__name__)


def _encode_u32(raw: bytes) -> str:
    if len(raw) != 4:
        raise EncodingMismatchError(
            f"When U32 is requested, hash size must be 4 bytes (got {len(raw)})"
        )
    return f"{int.from_bytes(raw, 'big'):010d}"


ENCODERS: Dict[OutputEncoding, Callable[[bytes], str]] = {
    OutputEncoding.HEX: lambda raw: raw.hex(),
    OutputEncoding.BASE64: lambda raw: base64.b64encode(raw).decode("ascii"),
    OutputEncoding.BASE32: lambda raw: base64.b32encode(raw).decode("ascii"),
    OutputEncoding.U32: _encode_u32,
}


def encode_digest(raw: bytes, encoding: Optional[OutputEncoding]) -> EncodedHash:
    """
    Render a raw digest in the requested encoding.

    Args:
        raw (bytes): Raw digest output.
        encoding (OutputEncoding): Concrete encoding. None is an unresolved encoding and is rejected.

    Returns:
        EncodedHash: The encoded digest.

    Raises:
        EncodingMismatchError: If the encoding is unresolved, or U32 is used with a digest that is not 4 bytes.
    """
    encoder = ENCODERS.get(encoding) if encoding is not None else None
    if encoder is None:
        raise EncodingMismatchError(f"Output encoding was not resolved before hashing: {encoding!r}")
    return EncodedHash(value=encoder(raw))


class HashingService:
    """
    Computes raw digests of files and their encoded form.

    - Hex output is lowercase with no separators
    - Base64 and Base32 use the standard RFC 4648 alphabets with padding
    - U32 is a zero-padded 10-digit decimal of the 4 big-endian digest bytes (CRC32 only)
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.chunk_size = chunk_size

    def digest_file(self, file_path: str, algorithm: HashAlgorithm) -> bytes:
        """
        Return the raw digest of a file's contents.

        Args:
            file_path (str): File to read.
            algorithm (HashAlgorithm): Algorithm to apply.

        Returns:
            bytes: Raw digest, algorithm.digest_size bytes long.

        Raises:
            FileAccessError: If the file cannot be stat'ed, opened or read.
        """
        digest = create_digest(algorithm)
        try:
            size = os.stat(file_path).st_size
            if size <= self.chunk_size:
                self._digest_whole(file_path, digest)
            else:
                self._digest_streaming(file_path, digest)
        except OSError as e:
            reason = e.strerror or str(e)
            raise FileAccessError(file_path, reason) from e
        return digest.finalize()

    def _digest_whole(self, file_path: str, digest: DigestInterface) -> None:
        with open(file_path, "rb") as f:
            digest.update(f.read())

    def _digest_streaming(self, file_path: str, digest: DigestInterface) -> None:
        buffer = bytearray(self.chunk_size)
        view = memoryview(buffer)
        with open(file_path, "rb") as f:
            while True:
                bytes_read = f.readinto(buffer)
                if not bytes_read:
                    break
                # only the bytes just read; the tail of the buffer may hold the previous chunk
                digest.update(view[:bytes_read])

    def hash_file(self, file_path: str, algorithm: HashAlgorithm, encoding: OutputEncoding) -> EncodedHash:
        """
        Digest a file and encode the result.

        Args:
            file_path (str): File to hash.
            algorithm (HashAlgorithm): Algorithm to apply.
            encoding (OutputEncoding): Concrete output encoding.

        Returns:
            EncodedHash: Encoded digest.

        Raises:
            FileAccessError: If the file cannot be read.
            EncodingMismatchError: If the digest cannot be rendered in the encoding.
        """
        raw = self.digest_file(file_path, algorithm)
        return encode_digest(raw, encoding)
