"""
Record Manager - Bulk import, export and replication of DNS records

This module moves record sets into and out of a provider zone. Bulk
operations never stop at the first bad record: each record is attempted on
its own and failures are collected next to whatever succeeded.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from .exceptions import ConfigurationMissingError, DetectionError, ZoneFileParseError
from .models import DnsRecordDescriptor, ImportResult, ReplicationResult
from ..parsers.zone_file import dump_zone_file, parse_zone_file

logger = logging.getLogger(__name__)

RecordInput = Union[DnsRecordDescriptor, Dict[str, Any]]


class RecordManager:
    """Manages bulk DNS record operations against a provider zone."""

    def __init__(self, dns_client, detector):
        """Initialize record manager with DNS client and record detector."""
        self.dns_client = dns_client
        self.detector = detector

    def _target_zone(self, zone_id: Optional[str]) -> str:
        """Resolve the target zone, failing before any work if the provider is not configured."""
        self.dns_client.require_credentials()
        return self.dns_client.resolve_zone_id(zone_id)

    def import_records(
        self, records: Sequence[RecordInput], zone_id: Optional[str] = None
    ) -> ImportResult:
        """
        Create every record in the target zone, one at a time.

        Args:
            records: Descriptors, or plain dicts that are validated here
            zone_id: Target zone; the configured default zone when omitted

        Returns:
            ImportResult with the created records and one error per failure

        Raises:
            ConfigurationMissingError: if credentials are missing or no zone id
                is given or configured
        """
        target = self._target_zone(zone_id)
        result = ImportResult()

        logger.info(f"Importing {len(records)} records into zone {target}")

        for record in records:
            name = record.get("name", "<unnamed>") if isinstance(record, dict) else record.name
            try:
                if not isinstance(record, DnsRecordDescriptor):
                    record = DnsRecordDescriptor.from_dict(record)
                created = self.dns_client.create_record(record, target)
                result.imported.append(created)
                logger.info(f"Created record: {record.type.value} {record.name} -> {record.content}")
            except ConfigurationMissingError:
                raise
            except Exception as e:
                logger.error(f"Failed to import record {name}: {e}")
                result.errors.append(f"Failed to import record {name}: {e}")

        logger.info(
            f"Imported {len(result.imported)}/{len(records)} records "
            f"({len(result.errors)} errors)"
        )
        return result

    def export_records(self, zone_id: Optional[str] = None) -> List[DnsRecordDescriptor]:
        """Return the zone's records as identity-free descriptors."""
        records = self.dns_client.list_records(zone_id)
        return [record.to_descriptor() for record in records]

    def replicate(
        self, source_domain: str, target_zone_id: Optional[str] = None
    ) -> ReplicationResult:
        """
        Detect a domain's public records and recreate them in a zone.

        Returns a ReplicationResult in every case except missing
        configuration: no detected records, detection failures and
        per-record failures all end up in ``errors``.
        """
        target = self._target_zone(target_zone_id)

        try:
            detected = self.detector.detect(source_domain)
        except DetectionError as e:
            logger.error(f"Failed to replicate DNS records for {source_domain}: {e}")
            return ReplicationResult(errors=[f"Failed to replicate DNS records: {e}"])

        if not detected:
            logger.warning(f"No DNS records detected for {source_domain}")
            return ReplicationResult(errors=[f"No DNS records detected for {source_domain}"])

        imported = self.import_records(detected, target)
        return ReplicationResult(
            detected=detected,
            replicated=imported.imported,
            errors=imported.errors,
        )

    def import_zone_file(self, content: str, zone_id: Optional[str] = None) -> ImportResult:
        """Parse zone file text and import the records it describes."""
        target = self._target_zone(zone_id)

        try:
            records = parse_zone_file(content)
        except ZoneFileParseError as e:
            logger.error(f"Failed to parse zone file: {e}")
            return ImportResult(errors=[f"Failed to parse zone file: {e}"])

        return self.import_records(records, target)

    def export_zone_file(self, zone_id: Optional[str] = None) -> str:
        """Render the zone's records as zone file text."""
        target = self._target_zone(zone_id)
        zone = self.dns_client.get_zone(target)
        records = self.dns_client.list_records(target)
        logger.info(f"Exporting {len(records)} records from zone {zone.name}")
        return dump_zone_file(records, zone.name)
