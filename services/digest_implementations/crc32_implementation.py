import binascii
from services.digest_implementations.digest_interface import DigestInterface

CRC32_DIGEST_SIZE = 4


class Crc32Digest(DigestInterface):
    """
    CRC32 checksum shimmed to look like a fixed-size digest.

    The rolling checksum is kept as an int; finalize() serializes it as 4 big-endian bytes.
    """

    def __init__(self):
        self._crc = 0

    @property
    def digest_size(self) -> int:
        return CRC32_DIGEST_SIZE

    def reset(self) -> None:
        self._crc = 0

    def update(self, data: bytes) -> None:
        self._crc = binascii.crc32(data, self._crc)

    def finalize(self) -> bytes:
        return (self._crc & 0xFFFFFFFF).to_bytes(CRC32_DIGEST_SIZE, "big")
