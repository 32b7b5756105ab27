from abc import ABC, abstractmethod


class DigestInterface(ABC):
    """
    Abstract base class defining the streaming interface shared by every supported hash algorithm.

    The file digest engine only talks to this interface, so cryptographic digests and the
    CRC32 checksum are interchangeable behind it.

    Methods:
        reset(): Discard all data fed so far.
        update(data): Feed more bytes into the digest.
        finalize(): Return the fixed-size raw digest of the data fed so far.
        digest_size: Size of the value returned by finalize(), in bytes.
    """

    @property
    @abstractmethod
    def digest_size(self) -> int:
        """Size of the raw digest in bytes."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Return the digest to its initial, empty state."""
        pass

    @abstractmethod
    def update(self, data: bytes) -> None:
        """Feed a bytes-like object into the digest."""
        pass

    @abstractmethod
    def finalize(self) -> bytes:
        """Return the raw digest bytes."""
        pass
