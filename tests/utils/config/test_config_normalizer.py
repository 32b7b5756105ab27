"""
Tests for ConfigNormalizer class.
"""

from unittest.mock import patch
from configparser import ConfigParser

from utils.config.config_normalizer import ConfigNormalizer


class TestConfigNormalizer:
    """Test cases for ConfigNormalizer functionality."""

    def setup_method(self):
        """Set up test fixtures."""
        self.normalizer = ConfigNormalizer()

    def test_normalize_config_basic(self):
        """Test section names and keys are lowercased and values preserved."""
        raw_config = {'HASHING': {'Algorithm': 'MD5', 'ENCODING': 'Base64'}}

        normalized = self.normalizer.normalize_config(raw_config)

        assert normalized == {'hashing': {'algorithm': 'MD5', 'encoding': 'Base64'}}

    def test_normalize_config_aliases(self):
        """Test that alias sections map onto the canonical section."""
        normalized = self.normalizer.normalize_config({'Hasher': {'limit': '5'}})
        assert normalized == {'hashing': {'limit': '5'}}

    def test_normalize_config_duplicate_sections_lowercase_wins(self):
        """Test handling of duplicate sections with different cases."""
        raw_config = {
            'Hashing': {'algorithm': 'MD5', 'encoding': 'Hex'},
            'hashing': {'algorithm': 'SHA1', 'limit': '3'},
            'HASHING': {'algorithm': 'CRC32', 'max_workers': '2'},
        }

        normalized = self.normalizer.normalize_config(raw_config)

        assert list(normalized) == ['hashing']
        assert normalized['hashing']['algorithm'] == 'SHA1'
        assert normalized['hashing']['encoding'] == 'Hex'
        assert normalized['hashing']['limit'] == '3'
        assert normalized['hashing']['max_workers'] == '2'

    def test_normalize_config_lowercase_first(self):
        """Test that a later non-lowercase duplicate cannot override the lowercase section."""
        raw_config = {
            'hashing': {'algorithm': 'SHA1'},
            'HASHING': {'algorithm': 'MD5', 'encoding': 'Base32'},
        }

        normalized = self.normalizer.normalize_config(raw_config)

        assert normalized['hashing'] == {'algorithm': 'SHA1', 'encoding': 'Base32'}

    def test_normalize_configparser(self):
        """Test normalization straight from a ConfigParser."""
        parser = ConfigParser()
        parser.read_string("[Hashing]\nalgorithm = SHA2-512\nsingle_thread = yes\n")

        normalized = self.normalizer.normalize_config(parser)

        assert normalized == {'hashing': {'algorithm': 'SHA2-512', 'single_thread': 'yes'}}

    def test_unknown_sections_kept(self):
        """Test that sections without aliases are kept under their lowercase name."""
        normalized = self.normalizer.normalize_config({'Extra': {'Key': 'v'}})
        assert normalized == {'extra': {'key': 'v'}}

    def test_apply_env_overrides(self):
        """Test environment variables override configuration values."""
        config = {'hashing': {'algorithm': 'MD5', 'limit': '4'}}
        env = {'FILEHASHER_ALGORITHM': 'SHA1', 'FILEHASHER_MAX_WORKERS': '8'}

        with patch.dict('os.environ', env):
            result = self.normalizer.apply_env_overrides(config)

        assert result['hashing'] == {'algorithm': 'SHA1', 'limit': '4', 'max_workers': '8'}
        # input is not mutated
        assert config == {'hashing': {'algorithm': 'MD5', 'limit': '4'}}

    def test_apply_env_overrides_creates_section(self):
        """Test overrides create the section when the file has none."""
        with patch.dict('os.environ', {'FILEHASHER_NO_PROGRESS': 'true'}):
            result = self.normalizer.apply_env_overrides({})

        assert result == {'hashing': {'no_progress': 'true'}}

    def test_normalize_and_override(self):
        """Test the complete normalization pipeline."""
        with patch.dict('os.environ', {'FILEHASHER_ENCODING': 'Base64'}):
            result = self.normalizer.normalize_and_override({'HASHING': {'Encoding': 'Hex'}})

        assert result == {'hashing': {'encoding': 'Base64'}}

    def test_get_supported_env_vars(self):
        """Test the supported environment variable listing is a copy."""
        env_vars = self.normalizer.get_supported_env_vars()

        assert env_vars['FILEHASHER_ALGORITHM'] == ('hashing', 'algorithm')
        assert env_vars['FILEHASHER_CHUNK_SIZE_BYTES'] == ('hashing', 'chunk_size_bytes')
        env_vars.clear()
        assert self.normalizer.get_supported_env_vars()
