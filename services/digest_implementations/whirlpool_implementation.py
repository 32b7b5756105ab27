import whirlpool
from services.digest_implementations.digest_interface import DigestInterface

WHIRLPOOL_DIGEST_SIZE = 64


class WhirlpoolDigest(DigestInterface):
    """
    Adapter over the ``whirlpool`` extension module.

    hashlib only offers Whirlpool through OpenSSL's legacy provider, which most
    OpenSSL 3 builds leave out.
    """

    def __init__(self):
        self._hash = whirlpool.new(b"")

    @property
    def digest_size(self) -> int:
        return WHIRLPOOL_DIGEST_SIZE

    def reset(self) -> None:
        self._hash = whirlpool.new(b"")

    def update(self, data: bytes) -> None:
        # the extension only accepts bytes, not memoryview slices
        self._hash.update(bytes(data))

    def finalize(self) -> bytes:
        return self._hash.digest()
