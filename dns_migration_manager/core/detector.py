"""
Record Detector - Best-effort discovery of a domain's public DNS records

Records are found by asking a public resolver for a fixed set of record
types on the domain itself and for A records on a fixed list of common
subdomains. This is not a zone transfer: anything not covered by those
lookups is silently missed.
"""

import logging
import re
from typing import List, Optional, Tuple

from .exceptions import DetectionError, ValidationError
from .models import (
    DETECTABLE_TYPES,
    DnsRecordDescriptor,
    ProbeResult,
    RawAnswer,
    RecordType,
)
from ..utils.validators import sanitize_fqdn, validate_priority

logger = logging.getLogger(__name__)

COMMON_SUBDOMAINS = ("www", "mail", "ftp", "blog", "shop", "api", "admin")

# TTL used when the resolver omits one
DEFAULT_DETECTED_TTL = 300

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def leading_priority(data: str) -> Optional[int]:
    """
    Priority derived from an answer's leading token.

    Any answer containing a space is treated this way, whatever its record
    type, so SRV and CAA answers pick up their first numeric field too.
    Tokens without leading digits yield no priority.
    """
    if " " not in data:
        return None
    match = _LEADING_INT.match(data.split(" ")[0])
    if not match:
        return None
    priority = int(match.group(1))
    if not validate_priority(priority):
        logger.debug(f"Ignoring out-of-range priority {priority} in {data!r}")
        return None
    return priority


class RecordDetector:
    """Detects existing records for a domain through a resolver probe."""

    def __init__(self, probe):
        self.probe = probe

    def detect(self, domain: str) -> List[DnsRecordDescriptor]:
        """Return descriptors for every record found, base domain first."""
        records, _ = self.detect_with_report(domain)
        return records

    def detect_with_report(
        self, domain: str
    ) -> Tuple[List[DnsRecordDescriptor], List[ProbeResult]]:
        """
        Detect records and also return the outcome of every lookup.

        Args:
            domain: Domain to inspect

        Returns:
            Tuple of (descriptors, probe results) where the probe results
            tell a missing record apart from a failed lookup.

        Raises:
            DetectionError: if something other than a lookup miss goes wrong
        """
        domain = sanitize_fqdn(domain)
        records: List[DnsRecordDescriptor] = []
        report: List[ProbeResult] = []

        try:
            for record_type in DETECTABLE_TYPES:
                result = self.probe.probe(domain, record_type)
                report.append(result)
                for answer in result.answers:
                    if answer.type_code == record_type.code:
                        self._collect(
                            records, domain, record_type, answer, leading_priority(answer.data)
                        )

            for subdomain in COMMON_SUBDOMAINS:
                name = f"{subdomain}.{domain}"
                result = self.probe.probe(name, RecordType.A)
                report.append(result)
                for answer in result.answers:
                    if answer.type_code == RecordType.A.code:
                        self._collect(records, name, RecordType.A, answer, None)
        except Exception as e:
            logger.error(f"Failed to detect DNS records for {domain}: {e}")
            raise DetectionError(f"Failed to detect DNS records: {e}") from e

        failed = sum(1 for result in report if result.error)
        logger.info(
            f"Detected {len(records)} records for {domain} "
            f"({len(report)} lookups, {failed} failed)"
        )
        return records, report

    @staticmethod
    def _collect(
        records: List[DnsRecordDescriptor],
        name: str,
        record_type: RecordType,
        answer: RawAnswer,
        priority: Optional[int],
    ) -> None:
        # One unusable answer is dropped, the rest of the batch is kept
        try:
            records.append(
                DnsRecordDescriptor(
                    type=record_type,
                    name=name,
                    content=answer.data,
                    ttl=answer.ttl or DEFAULT_DETECTED_TTL,
                    priority=priority,
                    proxied=False,
                )
            )
        except ValidationError as e:
            logger.warning(f"Skipping {record_type.value} answer for {name}: {e}")
