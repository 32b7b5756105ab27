import hashlib
from services.digest_implementations.digest_interface import DigestInterface


class HashlibDigest(DigestInterface):
    """
    Pass-through adapter over a hashlib constructor name (md5, sha3_256, blake2b, ...).

    Args:
        name (str): Name understood by hashlib.new().

    Raises:
        ValueError: If the running interpreter's hashlib does not provide the algorithm.
    """

    def __init__(self, name: str):
        self.name = name
        self._hash = hashlib.new(name)

    @property
    def digest_size(self) -> int:
        return self._hash.digest_size

    def reset(self) -> None:
        self._hash = hashlib.new(self.name)

    def update(self, data: bytes) -> None:
        self._hash.update(data)

    def finalize(self) -> bytes:
        return self._hash.digest()
