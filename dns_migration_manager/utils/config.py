"""
Configuration loading for the DNS Migration Manager.

Configuration comes from a YAML file with optional environment variable
overrides for the provider credentials.
"""

import copy
import logging
import os
import sys
from dataclasses import dataclass
from typing import Dict, Optional

import yaml

from ..core.exceptions import ConfigurationError, ConfigurationMissingError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.cloudflare.com/client/v4"
DEFAULT_RESOLVER_URL = "https://dns.google/resolve"
DEFAULT_TIMEOUT = 15

# Environment variable -> key under dns_providers.cloudflare
ENV_OVERRIDES = {
    "CLOUDFLARE_API_TOKEN": "api_token",
    "CLOUDFLARE_ZONE_ID": "zone_id",
    "CLOUDFLARE_EMAIL": "email",
    "CLOUDFLARE_ACCOUNT_ID": "account_id",
}


@dataclass(frozen=True)
class ProviderConfig:
    """Credentials and endpoint settings for one provider account."""

    api_token: str = ""
    zone_id: str = ""
    email: str = ""
    account_id: str = ""
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "ProviderConfig":
        data = data or {}
        return cls(
            api_token=data.get("api_token") or "",
            zone_id=data.get("zone_id") or "",
            email=data.get("email") or "",
            account_id=data.get("account_id") or "",
            api_url=(data.get("api_url") or DEFAULT_API_URL).rstrip("/"),
            timeout=data.get("timeout") or DEFAULT_TIMEOUT,
        )

    def require_token(self) -> str:
        if not self.api_token:
            raise ConfigurationMissingError("Cloudflare API Token not configured")
        return self.api_token

    def require_zone_id(self, zone_id: Optional[str] = None) -> str:
        """Return ``zone_id`` or the configured default zone id."""
        target = zone_id or self.zone_id
        if not target:
            raise ConfigurationMissingError("Zone ID not provided and not configured")
        return target


def load_config(config_path: str) -> Dict:
    """Load configuration from YAML file and apply environment overrides."""
    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}
        logger.info(f"Configuration loaded from {config_path}")
    except FileNotFoundError:
        logger.warning(f"Config file {config_path} not found, using defaults")
        config = get_default_config()
    except yaml.YAMLError as e:
        logger.error(f"Error parsing config file: {e}")
        raise ConfigurationError(f"Error parsing config file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    return apply_env_overrides(config)


def apply_env_overrides(config: Dict, environ: Optional[Dict] = None) -> Dict:
    """Overlay CLOUDFLARE_* environment variables onto the cloudflare provider section."""
    environ = os.environ if environ is None else environ
    config = copy.deepcopy(config)
    cloudflare = config.setdefault("dns_providers", {}).setdefault("cloudflare", {}) or {}
    config["dns_providers"]["cloudflare"] = cloudflare

    for env_name, key in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            cloudflare[key] = value
            logger.debug(f"Using {env_name} from environment")

    return config


def get_default_config() -> Dict:
    """Return default configuration."""
    return {
        "dns_providers": {
            "cloudflare": {
                "api_token": "",
                "zone_id": "",
                "email": "",
                "account_id": "",
                "api_url": DEFAULT_API_URL,
                "timeout": DEFAULT_TIMEOUT,
            }
        },
        "default_provider": "cloudflare",
        "resolver": {"url": DEFAULT_RESOLVER_URL, "timeout": DEFAULT_TIMEOUT},
        "logging": {"level": "INFO", "file": "dns_migration_manager.log"},
    }


def config_logger(config: Dict):
    """Configure logging."""
    logging_config = config.get("logging", None)
    if logging_config:
        log_level = logging_config.get("level", "INFO")
        log_file = logging_config.get("file")

        handlers = [logging.StreamHandler(sys.stdout)]
        if log_file:
            handlers.insert(0, logging.FileHandler(log_file))

        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            handlers=handlers,
        )
        return

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
