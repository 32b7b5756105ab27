"""
Configuration normalization utilities for handling case-insensitive configuration
and environment variable overrides.
"""

import os
import logging
from typing import Dict, Any, Union
from configparser import ConfigParser

logger = logging.getLogger(__name__)


class ConfigNormalizer:
    """
    Normalizes configuration section names and applies environment variable overrides.

    Section names and keys are lowercased; known section aliases are merged into
    their canonical section, with the lowercase spelling taking precedence.
    """

    # Environment variable mapping: env_var -> (section, key)
    ENV_VAR_MAPPING = {
        'FILEHASHER_ALGORITHM': ('hashing', 'algorithm'),
        'FILEHASHER_ENCODING': ('hashing', 'encoding'),
        'FILEHASHER_MAX_WORKERS': ('hashing', 'max_workers'),
        'FILEHASHER_SINGLE_THREAD': ('hashing', 'single_thread'),
        'FILEHASHER_NO_PROGRESS': ('hashing', 'no_progress'),
        'FILEHASHER_CHUNK_SIZE_BYTES': ('hashing', 'chunk_size_bytes'),
    }

    # Section name aliases for case-insensitive handling
    SECTION_ALIASES = {
        'hashing': ['Hashing', 'HASHING', 'hasher', 'Hasher'],
    }

    def normalize_config(self, config: Union[ConfigParser, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
        """
        Normalize configuration section names and merge duplicate sections.

        Args:
            config: Raw configuration from ConfigParser or dict

        Returns:
            dict: Normalized configuration with lowercase section names and keys
        """
        if isinstance(config, ConfigParser):
            raw_config = {section: dict(config[section]) for section in config.sections()}
        else:
            raw_config = dict(config)

        normalized: Dict[str, Dict[str, Any]] = {}
        section_mapping = self._build_section_mapping()

        for section_name, section_data in raw_config.items():
            canonical_name = section_mapping.get(section_name.lower(), section_name.lower())
            normalized_section_data = {key.lower(): value for key, value in section_data.items()}

            if canonical_name in normalized:
                logger.debug(f"Merging duplicate section: {section_name} -> {canonical_name}")
                if section_name.islower():
                    normalized[canonical_name].update(normalized_section_data)
                else:
                    for key, value in normalized_section_data.items():
                        normalized[canonical_name].setdefault(key, value)
            else:
                normalized[canonical_name] = normalized_section_data

        logger.debug(f"Configuration normalization complete. Sections: {list(normalized.keys())}")
        return normalized

    def apply_env_overrides(self, config: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
        """
        Apply environment variable overrides to configuration.

        Args:
            config: Normalized configuration dict

        Returns:
            dict: Configuration with environment variable overrides applied
        """
        config_with_overrides = {section: data.copy() for section, data in config.items()}

        overrides_applied = 0
        for env_var, (section, key) in self.ENV_VAR_MAPPING.items():
            env_value = os.getenv(env_var)
            if env_value is None:
                continue
            config_with_overrides.setdefault(section, {})
            old_value = config_with_overrides[section].get(key, '<not set>')
            config_with_overrides[section][key] = env_value
            overrides_applied += 1
            logger.info(f"Environment override applied: {env_var} -> [{section}] {key}")
            logger.debug(f"Value changed: {old_value} -> {env_value}")

        if overrides_applied:
            logger.info(f"Applied {overrides_applied} environment variable overrides")
        return config_with_overrides

    def normalize_and_override(self, config: Union[ConfigParser, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
        """
        Complete normalization pipeline: normalize sections and apply environment overrides.
        """
        return self.apply_env_overrides(self.normalize_config(config))

    def get_supported_env_vars(self) -> Dict[str, tuple]:
        """Return all supported environment variables and their (section, key) targets."""
        return self.ENV_VAR_MAPPING.copy()

    def _build_section_mapping(self) -> Dict[str, str]:
        mapping = {}
        for canonical, aliases in self.SECTION_ALIASES.items():
            mapping[canonical.lower()] = canonical
            for alias in aliases:
                mapping[alias.lower()] = canonical
        return mapping
