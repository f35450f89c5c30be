"""
DNS Client - Unified interface for DNS provider APIs

This module provides a common interface in front of the configured DNS
provider, currently Cloudflare or the in-memory mock provider.
"""

import logging
from typing import Any, Dict, List, Optional

from .base_provider import DNSProvider
from .cloudflare_provider import CloudflareProvider
from .mock_provider import MockDNSProvider
from ..core.models import DnsRecordDescriptor, ManagedDnsRecord, Zone
from ..utils.config import ProviderConfig

logger = logging.getLogger(__name__)


class DNSClient:
    """Unified DNS client that supports multiple providers."""

    def __init__(self, config: Dict, provider: Optional[DNSProvider] = None):
        """Initialize DNS client with configuration."""
        self.config = config
        self.provider = provider or self._get_provider()

    def _get_provider(self) -> DNSProvider:
        """Get DNS provider based on configuration."""
        provider_name = self.config.get("default_provider", "cloudflare")
        provider_config = ProviderConfig.from_dict(
            self.config.get("dns_providers", {}).get(provider_name, {})
        )

        if provider_name == "cloudflare":
            return CloudflareProvider(provider_config)
        elif provider_name == "mock":
            return MockDNSProvider(provider_config)
        else:
            logger.warning(f"Unknown provider '{provider_name}', using mock provider")
            return MockDNSProvider(provider_config)

    def resolve_zone_id(self, zone_id: Optional[str] = None) -> str:
        return self.provider.resolve_zone_id(zone_id)

    def require_credentials(self) -> None:
        self.provider.require_credentials()

    def list_records(
        self,
        zone_id: Optional[str] = None,
        name: Optional[str] = None,
        record_type: Optional[str] = None,
    ) -> List[ManagedDnsRecord]:
        return self.provider.list_records(zone_id, name=name, record_type=record_type)

    def get_record(self, record_id: str, zone_id: Optional[str] = None) -> ManagedDnsRecord:
        return self.provider.get_record(record_id, zone_id)

    def create_record(
        self, record: DnsRecordDescriptor, zone_id: Optional[str] = None
    ) -> ManagedDnsRecord:
        return self.provider.create_record(record, zone_id)

    def update_record(
        self, record_id: str, updates: Dict[str, Any], zone_id: Optional[str] = None
    ) -> ManagedDnsRecord:
        return self.provider.update_record(record_id, updates, zone_id)

    def delete_record(self, record_id: str, zone_id: Optional[str] = None) -> None:
        self.provider.delete_record(record_id, zone_id)

    def create_zone(self, name: str, zone_type: str = "full", jump_start: bool = False) -> Zone:
        return self.provider.create_zone(name, zone_type=zone_type, jump_start=jump_start)

    def get_zone(self, zone_id: Optional[str] = None) -> Zone:
        return self.provider.get_zone(zone_id)

    def list_zones(self, name: Optional[str] = None) -> List[Zone]:
        return self.provider.list_zones(name)
