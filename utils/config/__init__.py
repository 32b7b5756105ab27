"""
Configuration utilities for the file hasher.

This package provides configuration normalization and environment variable overrides.
"""

from .config_normalizer import ConfigNormalizer

__all__ = ['ConfigNormalizer']
