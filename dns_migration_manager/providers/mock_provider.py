"""
Mock DNS provider for testing and demonstration.

This module provides a mock DNS provider that stores zones and records in
memory for safe testing and dry runs. It mimics the provider's own rules
where they matter to migrations: identical records are rejected and new
zones start out pending.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .base_provider import DNSProvider
from ..core.exceptions import ProviderRejectedError, RecordNotFoundError, ValidationError
from ..core.models import (
    ZONE_STATUSES,
    ZONE_TYPES,
    DnsRecordDescriptor,
    ManagedDnsRecord,
    RecordType,
    Zone,
    normalize_record_updates,
)
from ..utils.config import ProviderConfig
from ..utils.validators import sanitize_fqdn, validate_zone_name

logger = logging.getLogger(__name__)

DEFAULT_NAME_SERVERS = ["ada.ns.cloudflare.com", "bob.ns.cloudflare.com"]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class MockDNSProvider(DNSProvider):
    """Mock DNS provider for testing and demonstration purposes."""

    def __init__(
        self,
        config: Optional[ProviderConfig] = None,
        name_servers: Optional[List[str]] = None,
    ):
        """Initialize mock provider."""
        super().__init__(config)
        self.name_servers = list(name_servers or DEFAULT_NAME_SERVERS)
        self.zones: Dict[str, Zone] = {}
        self.records: Dict[str, List[ManagedDnsRecord]] = {}
        logger.info("Mock DNS provider initialized")

    def _zone_records(self, zone_id: Optional[str]) -> List[ManagedDnsRecord]:
        return self.records.setdefault(self.resolve_zone_id(zone_id), [])

    def list_records(
        self,
        zone_id: Optional[str] = None,
        name: Optional[str] = None,
        record_type: Optional[str] = None,
    ) -> List[ManagedDnsRecord]:
        records = self._zone_records(zone_id)
        if name:
            records = [r for r in records if sanitize_fqdn(r.name) == sanitize_fqdn(name)]
        if record_type:
            wanted = RecordType.parse(record_type)
            records = [r for r in records if r.type == wanted]
        logger.info(f"Mock: Retrieved {len(records)} records")
        return list(records)

    def get_record(self, record_id: str, zone_id: Optional[str] = None) -> ManagedDnsRecord:
        for record in self._zone_records(zone_id):
            if record.id == record_id:
                return record
        raise RecordNotFoundError("DNS record not found")

    def create_record(
        self, record: DnsRecordDescriptor, zone_id: Optional[str] = None
    ) -> ManagedDnsRecord:
        target = self.resolve_zone_id(zone_id)
        records = self._zone_records(target)

        for existing in records:
            if (
                existing.type == record.type
                and sanitize_fqdn(existing.name) == sanitize_fqdn(record.name)
                and existing.content == record.content
            ):
                raise ProviderRejectedError(["An identical record already exists."], 400)

        zone = self.zones.get(target)
        timestamp = _now()
        payload = record.to_payload()
        created = ManagedDnsRecord(
            id=uuid.uuid4().hex,
            type=record.type,
            name=record.name,
            content=record.content,
            ttl=payload["ttl"],
            created_on=timestamp,
            modified_on=timestamp,
            priority=record.priority,
            proxied=record.proxied if record.proxied is not None else False,
            zone_id=target,
            zone_name=zone.name if zone else None,
        )
        records.append(created)
        logger.info(f"Mock: Created record {record.type.value} {record.name} -> {record.content}")
        return created

    def update_record(
        self, record_id: str, updates: Dict[str, Any], zone_id: Optional[str] = None
    ) -> ManagedDnsRecord:
        changes = normalize_record_updates(updates)
        records = self._zone_records(zone_id)
        for i, existing in enumerate(records):
            if existing.id == record_id:
                data = existing.to_dict()
                data.update(changes)
                data["modified_on"] = _now()
                records[i] = ManagedDnsRecord.from_api(data)
                logger.info(f"Mock: Updated record {record_id}")
                return records[i]

        raise RecordNotFoundError(f"Record {record_id} not found for update")

    def delete_record(self, record_id: str, zone_id: Optional[str] = None) -> None:
        records = self._zone_records(zone_id)
        for i, existing in enumerate(records):
            if existing.id == record_id:
                del records[i]
                logger.info(f"Mock: Deleted record {existing.name}")
                return

        raise RecordNotFoundError(f"Record {record_id} not found for deletion")

    def create_zone(self, name: str, zone_type: str = "full", jump_start: bool = False) -> Zone:
        if not validate_zone_name(name):
            raise ValidationError(f"Invalid zone name: {name!r}")
        if zone_type not in ZONE_TYPES:
            raise ValidationError(f"Invalid zone type: {zone_type!r}")
        if any(zone.name == name for zone in self.zones.values()):
            raise ProviderRejectedError([f"{name} already exists"], 400)

        timestamp = _now()
        zone = Zone(
            id=uuid.uuid4().hex,
            name=name,
            status="pending",
            type=zone_type,
            name_servers=list(self.name_servers),
            created_on=timestamp,
            modified_on=timestamp,
        )
        self.zones[zone.id] = zone
        self.records[zone.id] = []
        logger.info(f"Mock: Created zone {name} ({zone.id})")
        return zone

    def get_zone(self, zone_id: Optional[str] = None) -> Zone:
        target = self.resolve_zone_id(zone_id)
        if target not in self.zones:
            raise RecordNotFoundError("Zone not found")
        return self.zones[target]

    def list_zones(self, name: Optional[str] = None) -> List[Zone]:
        zones = list(self.zones.values())
        if name:
            zones = [zone for zone in zones if zone.name == name]
        return zones

    def set_zone_status(self, zone_id: str, status: str) -> Zone:
        """Simulate a provider-driven status transition."""
        if status not in ZONE_STATUSES:
            raise ValidationError(f"Unknown zone status: {status!r}")
        zone = self.get_zone(zone_id)
        data = zone.to_dict()
        data.update(status=status, modified_on=_now())
        self.zones[zone_id] = Zone.from_api(data)
        return self.zones[zone_id]
