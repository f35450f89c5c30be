"""
DNS Manager - Domain migration onto a managed DNS provider

This module ties the provider client, the record detector and the record
manager together. Its migration workflow creates the destination zone,
replicates the records found for the domain, and tells the operator what
to do next. Every operation returns structured results for callers to render.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from .detector import RecordDetector
from .exceptions import ConfigurationMissingError
from .models import (
    DnsRecordDescriptor,
    ImportResult,
    ManagedDnsRecord,
    MigrationResult,
    RecordType,
    ReplicationResult,
    Zone,
    ZoneValidation,
)
from .record_manager import RecordInput, RecordManager
from ..providers.dns_client import DNSClient
from ..providers.public_resolver import PublicResolverProbe
from ..utils.config import DEFAULT_RESOLVER_URL, DEFAULT_TIMEOUT, apply_env_overrides, load_config
from ..utils.validators import sanitize_fqdn

logger = logging.getLogger(__name__)


def _normalize_nameserver(name: str) -> str:
    return name.strip().rstrip(".").lower()


class DNSManager:
    """Main DNS management class that orchestrates the migration process."""

    def __init__(
        self,
        config: Union[Dict, str, None] = None,
        dns_client: Optional[DNSClient] = None,
        probe: Optional[PublicResolverProbe] = None,
    ):
        """Initialize the DNS manager with a config dict or a YAML config path."""
        if config is None or isinstance(config, str):
            self.config = load_config(config or "configs/config.yaml")
        else:
            self.config = apply_env_overrides(config)

        resolver_config = self.config.get("resolver") or {}
        self.dns_client = dns_client or DNSClient(self.config)
        self.probe = probe or PublicResolverProbe(
            url=resolver_config.get("url", DEFAULT_RESOLVER_URL),
            timeout=resolver_config.get("timeout", DEFAULT_TIMEOUT),
        )
        self.detector = RecordDetector(self.probe)
        self.record_manager = RecordManager(self.dns_client, self.detector)

    # ------------------------------------------------------------------
    # Migration workflow
    # ------------------------------------------------------------------

    def migrate_with_detection(self, domain: str, zone_type: str = "full") -> MigrationResult:
        """
        Create a zone for ``domain`` and copy its publicly visible records into it.

        Zone creation is the only fatal step: if it fails the result carries a
        placeholder zone and the error. Replication problems are reported in
        ``errors`` and as an extra next step.

        Raises:
            ConfigurationMissingError: if provider credentials are missing
        """
        zone = self._create_migration_zone(domain, zone_type)
        if isinstance(zone, MigrationResult):
            return zone

        replication = self.record_manager.replicate(domain, zone.id)
        return self._migration_result(zone, replication)

    def start_migration(
        self,
        domain: str,
        records: Optional[Sequence[RecordInput]] = None,
        zone_type: str = "full",
    ) -> MigrationResult:
        """Create a zone for ``domain`` and import caller-supplied records, if any."""
        zone = self._create_migration_zone(domain, zone_type)
        if isinstance(zone, MigrationResult):
            return zone

        # Nothing is detected here; ``detected`` stays empty
        replication = ReplicationResult()
        if records:
            imported = self.record_manager.import_records(records, zone.id)
            replication = ReplicationResult(replicated=imported.imported, errors=imported.errors)

        return self._migration_result(zone, replication)

    def _create_migration_zone(self, domain: str, zone_type: str):
        try:
            return self.dns_client.create_zone(domain, zone_type=zone_type or "full", jump_start=False)
        except ConfigurationMissingError:
            raise
        except Exception as e:
            logger.error(f"Migration of {domain} failed: {e}")
            return MigrationResult(
                zone=Zone.placeholder(),
                errors=[f"Migration failed: {e}"],
                next_steps=["Fix the errors and retry the migration"],
            )

    def _migration_result(self, zone: Zone, replication: ReplicationResult) -> MigrationResult:
        next_steps = [
            "1. Update your domain's nameservers at your registrar to: "
            + ", ".join(zone.name_servers),
            "2. Monitor nameserver propagation with the check-propagation command",
            f"3. Validate setup with the validate-zone command using zone ID: {zone.id}",
        ]
        errors = list(replication.errors)
        if errors:
            next_steps.append(
                f"4. Review and fix any DNS record import errors: {', '.join(errors)}"
            )

        logger.info(
            f"Migration of {zone.name}: {len(replication.replicated)}/"
            f"{len(replication.detected)} records replicated, {len(errors)} errors"
        )
        return MigrationResult(
            zone=zone,
            detected=replication.detected,
            replicated=replication.replicated,
            errors=errors,
            next_steps=next_steps,
        )

    def check_propagation(self, domain: str, expected_nameservers: List[str]) -> bool:
        """True once every expected nameserver is served as NS for ``domain``."""
        try:
            answers = self.probe.resolve(sanitize_fqdn(domain), RecordType.NS)
            current = {
                _normalize_nameserver(answer.data)
                for answer in answers
                if answer.type_code == RecordType.NS.code
            }
            if not current:
                return False
            propagated = all(_normalize_nameserver(ns) in current for ns in expected_nameservers)
        except Exception as e:
            logger.warning(f"Failed to check nameserver propagation for {domain}: {e}")
            return False

        logger.info(f"Nameserver propagation for {domain}: {'complete' if propagated else 'pending'}")
        return propagated

    def validate_zone_setup(self, zone_id: str) -> ZoneValidation:
        """Check that a zone is active, delegated and has records."""
        issues: List[str] = []
        try:
            zone = self.dns_client.get_zone(zone_id)

            if zone.status != "active":
                issues.append(f"Zone status is {zone.status}, should be active")

            if not zone.name_servers:
                issues.append("No nameservers found for zone")

            if not self.dns_client.list_records(zone.id):
                issues.append("No DNS records found in zone")
        except ConfigurationMissingError:
            raise
        except Exception as e:
            issues.append(f"Failed to validate zone: {e}")

        return ZoneValidation(valid=not issues, issues=issues)

    # ------------------------------------------------------------------
    # Records and zones
    # ------------------------------------------------------------------

    def detect(self, domain: str) -> List[DnsRecordDescriptor]:
        return self.detector.detect(domain)

    def replicate(self, source_domain: str, target_zone_id: Optional[str] = None) -> ReplicationResult:
        return self.record_manager.replicate(source_domain, target_zone_id)

    def import_records(
        self, records: Sequence[RecordInput], zone_id: Optional[str] = None
    ) -> ImportResult:
        return self.record_manager.import_records(records, zone_id)

    def export_records(self, zone_id: Optional[str] = None) -> List[DnsRecordDescriptor]:
        return self.record_manager.export_records(zone_id)

    def import_zone_file(self, content: str, zone_id: Optional[str] = None) -> ImportResult:
        return self.record_manager.import_zone_file(content, zone_id)

    def export_zone_file(self, zone_id: Optional[str] = None) -> str:
        return self.record_manager.export_zone_file(zone_id)

    def list_records(
        self, name: Optional[str] = None, record_type: Optional[str] = None, zone_id: Optional[str] = None
    ) -> List[ManagedDnsRecord]:
        return self.dns_client.list_records(zone_id, name=name, record_type=record_type)

    def get_record(self, record_id: str, zone_id: Optional[str] = None) -> ManagedDnsRecord:
        return self.dns_client.get_record(record_id, zone_id)

    def create_record(self, record: RecordInput, zone_id: Optional[str] = None) -> ManagedDnsRecord:
        if not isinstance(record, DnsRecordDescriptor):
            record = DnsRecordDescriptor.from_dict(record)
        return self.dns_client.create_record(record, zone_id)

    def update_record(
        self, record_id: str, updates: Dict[str, Any], zone_id: Optional[str] = None
    ) -> ManagedDnsRecord:
        return self.dns_client.update_record(record_id, updates, zone_id)

    def delete_record(self, record_id: str, zone_id: Optional[str] = None) -> None:
        self.dns_client.delete_record(record_id, zone_id)

    def create_zone(self, name: str, zone_type: str = "full", jump_start: bool = False) -> Zone:
        return self.dns_client.create_zone(name, zone_type=zone_type, jump_start=jump_start)

    def get_zone(self, zone_id: Optional[str] = None) -> Zone:
        return self.dns_client.get_zone(zone_id)

    def list_zones(self, name: Optional[str] = None) -> List[Zone]:
        return self.dns_client.list_zones(name)
