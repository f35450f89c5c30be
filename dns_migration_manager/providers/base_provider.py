"""
Base DNS provider interface.

This module defines the abstract base class that all DNS providers must implement.
Record operations are scoped to a zone id; ``None`` means the configured
default zone.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..core.models import DnsRecordDescriptor, ManagedDnsRecord, Zone
from ..utils.config import ProviderConfig


class DNSProvider(ABC):
    """Abstract base class for DNS providers."""

    def __init__(self, config: Optional[ProviderConfig] = None):
        self.config = config or ProviderConfig()

    def resolve_zone_id(self, zone_id: Optional[str] = None) -> str:
        """Return the explicit zone id or the configured default."""
        return self.config.require_zone_id(zone_id)

    def require_credentials(self) -> None:
        """Raise ConfigurationMissingError if the provider cannot authenticate."""

    @abstractmethod
    def list_records(
        self,
        zone_id: Optional[str] = None,
        name: Optional[str] = None,
        record_type: Optional[str] = None,
    ) -> List[ManagedDnsRecord]:
        """List DNS records in a zone, optionally filtered by name and type."""
        pass

    @abstractmethod
    def get_record(self, record_id: str, zone_id: Optional[str] = None) -> ManagedDnsRecord:
        """Get a single DNS record by id."""
        pass

    @abstractmethod
    def create_record(
        self, record: DnsRecordDescriptor, zone_id: Optional[str] = None
    ) -> ManagedDnsRecord:
        """Create a new DNS record."""
        pass

    @abstractmethod
    def update_record(
        self, record_id: str, updates: Dict[str, Any], zone_id: Optional[str] = None
    ) -> ManagedDnsRecord:
        """Update an existing DNS record in place."""
        pass

    @abstractmethod
    def delete_record(self, record_id: str, zone_id: Optional[str] = None) -> None:
        """Delete a DNS record."""
        pass

    @abstractmethod
    def create_zone(self, name: str, zone_type: str = "full", jump_start: bool = False) -> Zone:
        """Create a new zone."""
        pass

    @abstractmethod
    def get_zone(self, zone_id: Optional[str] = None) -> Zone:
        """Get a zone by id."""
        pass

    @abstractmethod
    def list_zones(self, name: Optional[str] = None) -> List[Zone]:
        """List zones visible to the account, optionally filtered by name."""
        pass
