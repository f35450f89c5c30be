"""
Utility functions and helpers.

This package contains utility functions for validation,
configuration, and other common operations.
"""

from .config import ProviderConfig, config_logger, load_config
from .validators import sanitize_fqdn, validate_fqdn, validate_zone_name

__all__ = [
    "ProviderConfig",
    "config_logger",
    "load_config",
    "sanitize_fqdn",
    "validate_fqdn",
    "validate_zone_name",
]
