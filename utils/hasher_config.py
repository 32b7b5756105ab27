"""
Configuration utilities for loading the file hasher's INI file and building the RunConfiguration.

Precedence for every setting: command-line value > environment variable > INI file > default.
"""
import configparser
import logging
import os
from typing import Any, Dict, Iterable, Optional

from pydantic import ValidationError

from models.hash_algorithm import HashAlgorithm, OutputEncoding
from models.run_configuration import DEFAULT_CHUNK_SIZE, RunConfiguration
from services.digest_factory import create_digest
from services.hash_dispatcher import validate_pairing
from utils.config.config_normalizer import ConfigNormalizer
from utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(".", "config", "filehasher_config.ini")
HASHING_SECTION = "hashing"

ALGORITHM_HELP = (
    "Algorithm can be: CRC32, MD5, SHA1, SHA2 / SHA2-256 / SHA-256, SHA2-224, SHA2-384, SHA2-512, "
    "SHA3 / SHA3-256, SHA3-384, SHA3-512, WHIRLPOOL, BLAKE2S-256, BLAKE2B-512. Default is SHA3-256"
)
ENCODING_HELP = "Encoding can be: Hex, Base64, Base32 (U32 for CRC32). Default is Hex"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def load_configuration(path: Optional[str] = None) -> Dict[str, Dict[str, Any]]:
    """
    Load the INI configuration, normalize it, and apply environment overrides.

    Args:
        path (Optional[str]): Explicit config file. When None, DEFAULT_CONFIG_PATH is used if it exists.

    Returns:
        Dict[str, Dict[str, Any]]: Normalized configuration (lowercase sections and keys).

    Raises:
        ConfigurationError: If an explicit file is missing or the file cannot be parsed.
    """
    parser = configparser.ConfigParser()

    if path is None and os.path.isfile(DEFAULT_CONFIG_PATH):
        path = DEFAULT_CONFIG_PATH

    if path is not None:
        if not os.path.isfile(path):
            raise ConfigurationError(f"Config file not found: {path}")
        try:
            parser.read(path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigurationError(f"Could not parse config file {path}: {e}") from e
        logger.info(f"Configuration loaded from: {path}")
    else:
        logger.debug("No configuration file, using defaults and environment")

    return ConfigNormalizer().normalize_and_override(parser)


def get_config_value(
    config: Optional[Dict[str, Dict[str, Any]]],
    section: str,
    key: str,
    fallback: Any = None,
    value_type: type = str,
) -> Any:
    """
    Get a configuration value with type conversion.

    Args:
        config: Normalized configuration dict (or None).
        section: Configuration section name (case-insensitive).
        key: Configuration key name (case-insensitive).
        fallback: Default value if not found or empty.
        value_type: Type to convert the value to (str, int, bool).

    Returns:
        Configuration value converted to value_type, or fallback.

    Raises:
        ConfigurationError: If the value cannot be converted.
    """
    if not config:
        return fallback

    value = config.get(section.lower(), {}).get(key.lower())
    if value is None or (isinstance(value, str) and not value.strip()):
        return fallback
    if not isinstance(value, str):
        return value

    value = value.strip()
    if value_type is bool:
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigurationError(f"[{section}] {key}: expected a boolean, got '{value}'")
    if value_type is int:
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(f"[{section}] {key}: expected an integer, got '{value}'") from None
    return value


def get_chunk_size(config: Optional[Dict[str, Dict[str, Any]]]) -> int:
    """Streaming threshold from [hashing] chunk_size_bytes or chunk_size_kib."""
    chunk_size = get_config_value(config, HASHING_SECTION, "chunk_size_bytes", value_type=int)
    if chunk_size is None:
        chunk_kib = get_config_value(config, HASHING_SECTION, "chunk_size_kib", value_type=int)
        if chunk_kib is not None:
            chunk_size = chunk_kib * 1024
    return chunk_size if chunk_size is not None else DEFAULT_CHUNK_SIZE


def resolve_encoding(algorithm: HashAlgorithm, encoding: Optional[OutputEncoding]) -> OutputEncoding:
    """Return the concrete encoding, deriving it from the algorithm when unresolved."""
    return encoding if encoding is not None else algorithm.default_encoding


def build_run_configuration(
    file_config: Optional[Dict[str, Dict[str, Any]]] = None,
    algorithm: Optional[str] = None,
    encoding: Optional[str] = None,
    single_thread: bool = False,
    max_workers: Optional[int] = None,
    exclude_filenames: bool = False,
    case_sensitive: bool = False,
    no_progress: bool = False,
    limit: Optional[int] = None,
    supplied_paths: Iterable[str] = (),
) -> RunConfiguration:
    """
    Build the immutable RunConfiguration for a hashing run.

    Command-line values win; None (or False for flags) falls back to the [hashing]
    section of the loaded configuration, then to defaults.

    Raises:
        ConfigurationError: On unknown algorithm/encoding names, an invalid CRC32/U32
            pairing, an algorithm hashlib refuses, or invalid numbers.
    """
    section = HASHING_SECTION
    algorithm_name = algorithm or get_config_value(file_config, section, "algorithm")
    encoding_name = encoding or get_config_value(file_config, section, "encoding")

    try:
        algo = HashAlgorithm.parse(algorithm_name)
    except ValueError as e:
        raise ConfigurationError(f"{e}. {ALGORITHM_HELP}") from e
    try:
        enc = resolve_encoding(algo, OutputEncoding.parse(encoding_name))
    except ValueError as e:
        raise ConfigurationError(f"{e}. {ENCODING_HELP}") from e

    validate_pairing(algo, enc)
    create_digest(algo)

    if max_workers is None:
        max_workers = get_config_value(file_config, section, "max_workers", value_type=int)
    if limit is None:
        limit = get_config_value(file_config, section, "limit", value_type=int)

    try:
        run_config = RunConfiguration(
            algorithm=algo,
            encoding=enc,
            single_thread=single_thread or get_config_value(file_config, section, "single_thread", False, bool),
            max_workers=max_workers,
            exclude_filenames=exclude_filenames
            or get_config_value(file_config, section, "exclude_filenames", False, bool),
            case_sensitive=case_sensitive or get_config_value(file_config, section, "case_sensitive", False, bool),
            no_progress=no_progress or get_config_value(file_config, section, "no_progress", False, bool),
            limit=limit,
            chunk_size=get_chunk_size(file_config),
            supplied_paths=tuple(supplied_paths),
        )
    except ValidationError as e:
        raise ConfigurationError(_format_validation_errors(e)) from e

    logger.debug(f"Run configuration: {run_config.model_dump()}")
    return run_config


def _format_validation_errors(error: ValidationError) -> str:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        message = item.get("msg", "invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)
