"""
Hash algorithm and output encoding enumerations for the file hasher.

Both enums are closed sets. Parsing from user input is case-insensitive and
goes through the alias tables below; unknown names raise ValueError so that the
configuration layer can turn them into a ConfigurationError.
"""
from enum import Enum
from typing import Dict, Optional, Tuple


class OutputEncoding(str, Enum):
    """Textual representation of a raw digest."""
    HEX = "Hex"
    BASE64 = "Base64"
    BASE32 = "Base32"
    U32 = "U32"

    @classmethod
    def parse(cls, name: Optional[str]) -> Optional["OutputEncoding"]:
        """
        Parse an encoding name.

        Args:
            name (Optional[str]): Encoding name, any case. Empty or None means unresolved.

        Returns:
            Optional[OutputEncoding]: The encoding, or None when it must be derived from the algorithm.

        Raises:
            ValueError: If the name is not a known encoding.
        """
        if name is None or not name.strip():
            return None
        wanted = name.strip().upper()
        for member in cls:
            if member.value.upper() == wanted:
                return member
        raise ValueError(f"Unknown encoding: {name}")


class HashAlgorithm(str, Enum):
    """Digest or checksum primitive used to hash file contents."""
    CRC32 = "CRC32"
    MD5 = "MD5"
    SHA1 = "SHA1"
    SHA2_224 = "SHA2-224"
    SHA2_256 = "SHA2-256"
    SHA2_384 = "SHA2-384"
    SHA2_512 = "SHA2-512"
    SHA3_256 = "SHA3-256"
    SHA3_384 = "SHA3-384"
    SHA3_512 = "SHA3-512"
    WHIRLPOOL = "WHIRLPOOL"
    BLAKE2S_256 = "BLAKE2S-256"
    BLAKE2B_512 = "BLAKE2B-512"

    @property
    def digest_size(self) -> int:
        """Size of the raw digest in bytes."""
        return _DIGEST_SIZES[self]

    @property
    def aliases(self) -> Tuple[str, ...]:
        """Names accepted on the command line for this algorithm."""
        return _ALIASES[self]

    @property
    def default_encoding(self) -> OutputEncoding:
        """Encoding used when the user does not pick one."""
        return OutputEncoding.U32 if self is HashAlgorithm.CRC32 else OutputEncoding.HEX

    @classmethod
    def parse(cls, name: Optional[str]) -> "HashAlgorithm":
        """
        Parse an algorithm name or alias.

        Args:
            name (Optional[str]): Algorithm name, any case. Empty or None selects DEFAULT_ALGORITHM.

        Returns:
            HashAlgorithm: The matching algorithm.

        Raises:
            ValueError: If the name matches no algorithm or alias.
        """
        if name is None or not name.strip():
            return DEFAULT_ALGORITHM
        try:
            return _ALIAS_LOOKUP[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown algorithm: {name}") from None


_DIGEST_SIZES: Dict[HashAlgorithm, int] = {
    HashAlgorithm.CRC32: 4,
    HashAlgorithm.MD5: 16,
    HashAlgorithm.SHA1: 20,
    HashAlgorithm.SHA2_224: 28,
    HashAlgorithm.SHA2_256: 32,
    HashAlgorithm.SHA2_384: 48,
    HashAlgorithm.SHA2_512: 64,
    HashAlgorithm.SHA3_256: 32,
    HashAlgorithm.SHA3_384: 48,
    HashAlgorithm.SHA3_512: 64,
    HashAlgorithm.WHIRLPOOL: 64,
    HashAlgorithm.BLAKE2S_256: 32,
    HashAlgorithm.BLAKE2B_512: 64,
}

_ALIASES: Dict[HashAlgorithm, Tuple[str, ...]] = {
    HashAlgorithm.CRC32: ("CRC32", "CRC-32"),
    HashAlgorithm.MD5: ("MD5", "MD-5"),
    HashAlgorithm.SHA1: ("SHA1", "SHA-1"),
    HashAlgorithm.SHA2_224: ("SHA2-224", "SHA2_224"),
    HashAlgorithm.SHA2_256: ("SHA2", "SHA2-256", "SHA2_256", "SHA_256", "SHA-256"),
    HashAlgorithm.SHA2_384: ("SHA2-384", "SHA2_384"),
    HashAlgorithm.SHA2_512: ("SHA2-512", "SHA2_512"),
    HashAlgorithm.SHA3_256: ("SHA3", "SHA3-256", "SHA3_256"),
    HashAlgorithm.SHA3_384: ("SHA3-384", "SHA3_384"),
    HashAlgorithm.SHA3_512: ("SHA3-512", "SHA3_512"),
    HashAlgorithm.WHIRLPOOL: ("WHIRLPOOL",),
    HashAlgorithm.BLAKE2S_256: ("BLAKE2S-256", "BLAKE2S_256"),
    HashAlgorithm.BLAKE2B_512: ("BLAKE2B-512", "BLAKE2B_512"),
}

_ALIAS_LOOKUP: Dict[str, HashAlgorithm] = {
    alias: algorithm for algorithm, names in _ALIASES.items() for alias in names
}

DEFAULT_ALGORITHM = HashAlgorithm.SHA3_256
