"""
Cloudflare DNS provider implementation.

This module talks to the Cloudflare v4 REST API using requests. Every
response is an envelope ``{success, errors, messages, result, result_info}``
which is unwrapped here so callers only ever see typed records and zones.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from .base_provider import DNSProvider
from ..core.exceptions import (
    ProviderRejectedError,
    RecordNotFoundError,
    ResponseParseError,
    TransportError,
    ValidationError,
)
from ..core.models import (
    ZONE_TYPES,
    DnsRecordDescriptor,
    ManagedDnsRecord,
    RecordType,
    Zone,
    normalize_record_updates,
)
from ..utils.config import ProviderConfig
from ..utils.validators import validate_zone_name

logger = logging.getLogger(__name__)


class CloudflareProvider(DNSProvider):
    """Cloudflare DNS provider backed by the v4 REST API."""

    PER_PAGE = 100

    def __init__(self, config: ProviderConfig, session: Optional[requests.Session] = None):
        """Initialize Cloudflare provider."""
        super().__init__(config)
        self.session = session or requests.Session()
        logger.info(f"Cloudflare provider initialized for {self.config.api_url}")

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def require_credentials(self) -> None:
        self.config.require_token()

    def _headers(self) -> Dict[str, str]:
        token = self.config.require_token()
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    def _request(
        self,
        method: str,
        endpoint: str,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Send one API call and return the envelope of a successful response."""
        headers = self._headers()
        url = f"{self.config.api_url}/{endpoint}"
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                json=body,
                params=params,
                timeout=self.config.timeout,
            )
        except requests.Timeout as e:
            raise TransportError("Cloudflare API request timed out") from e
        except requests.RequestException as e:
            raise TransportError(f"Cloudflare API error: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            if not response.ok:
                raise ProviderRejectedError(
                    [f"{response.status_code} {response.reason}"], response.status_code
                ) from e
            raise ResponseParseError(f"Failed to parse API response: {e}") from e

        if not isinstance(payload, dict) or "success" not in payload:
            if not response.ok:
                raise ProviderRejectedError(
                    [f"{response.status_code} {response.reason}"], response.status_code
                )
            raise ResponseParseError("Failed to parse API response: missing envelope")

        if not payload["success"] or not response.ok:
            messages = [
                error.get("message", str(error)) if isinstance(error, dict) else str(error)
                for error in payload.get("errors") or []
            ]
            if not messages:
                messages = [f"{response.status_code} {response.reason}"]
            logger.error(f"{method} {endpoint} rejected: {', '.join(messages)}")
            raise ProviderRejectedError(messages, response.status_code)

        return payload

    @staticmethod
    def _single_result(payload: Dict[str, Any], not_found: str) -> Dict[str, Any]:
        result = payload.get("result")
        if not result or isinstance(result, list):
            raise RecordNotFoundError(not_found)
        return result

    @staticmethod
    def _many_results(payload: Dict[str, Any]) -> List[Any]:
        result = payload.get("result")
        if not result:
            return []
        if isinstance(result, list):
            return [item for item in result if item is not None]
        return [result]

    # ------------------------------------------------------------------
    # DNS records
    # ------------------------------------------------------------------

    def list_records(
        self,
        zone_id: Optional[str] = None,
        name: Optional[str] = None,
        record_type: Optional[str] = None,
    ) -> List[ManagedDnsRecord]:
        """List DNS records, following pagination until the last page."""
        target = self.resolve_zone_id(zone_id)
        params: Dict[str, Any] = {"per_page": self.PER_PAGE}
        if name:
            params["name"] = name
        if record_type:
            params["type"] = RecordType.parse(record_type).value

        records = []
        page = 1
        while True:
            params["page"] = page
            payload = self._request("GET", f"zones/{target}/dns_records", params=params)
            for item in self._many_results(payload):
                try:
                    records.append(ManagedDnsRecord.from_api(item))
                except ResponseParseError as e:
                    # Record types outside RecordType (HTTPS, SVCB, LOC, ...) are not managed here
                    logger.warning(f"Skipping record {item.get('name') if isinstance(item, dict) else item}: {e}")

            total_pages = (payload.get("result_info") or {}).get("total_pages") or 1
            if page >= total_pages:
                break
            page += 1

        logger.info(f"Retrieved {len(records)} records from zone {target}")
        return records

    def get_record(self, record_id: str, zone_id: Optional[str] = None) -> ManagedDnsRecord:
        target = self.resolve_zone_id(zone_id)
        payload = self._request("GET", f"zones/{target}/dns_records/{record_id}")
        return ManagedDnsRecord.from_api(self._single_result(payload, "DNS record not found"))

    def create_record(
        self, record: DnsRecordDescriptor, zone_id: Optional[str] = None
    ) -> ManagedDnsRecord:
        target = self.resolve_zone_id(zone_id)
        payload = self._request("POST", f"zones/{target}/dns_records", body=record.to_payload())
        created = ManagedDnsRecord.from_api(
            self._single_result(payload, "Failed to create DNS record")
        )
        logger.debug(f"Created record {created.type.value} {created.name} -> {created.content}")
        return created

    def update_record(
        self, record_id: str, updates: Dict[str, Any], zone_id: Optional[str] = None
    ) -> ManagedDnsRecord:
        target = self.resolve_zone_id(zone_id)
        body = normalize_record_updates(updates)
        payload = self._request("PATCH", f"zones/{target}/dns_records/{record_id}", body=body)
        updated = ManagedDnsRecord.from_api(
            self._single_result(payload, "Failed to update DNS record")
        )
        logger.debug(f"Updated record {record_id}")
        return updated

    def delete_record(self, record_id: str, zone_id: Optional[str] = None) -> None:
        target = self.resolve_zone_id(zone_id)
        self._request("DELETE", f"zones/{target}/dns_records/{record_id}")
        logger.debug(f"Deleted record {record_id}")

    # ------------------------------------------------------------------
    # Zones
    # ------------------------------------------------------------------

    def create_zone(self, name: str, zone_type: str = "full", jump_start: bool = False) -> Zone:
        if not validate_zone_name(name):
            raise ValidationError(f"Invalid zone name: {name!r}")
        if zone_type not in ZONE_TYPES:
            raise ValidationError(f"Invalid zone type: {zone_type!r}")

        body: Dict[str, Any] = {"name": name, "type": zone_type, "jump_start": jump_start}
        if self.config.account_id:
            body["account"] = {"id": self.config.account_id}

        payload = self._request("POST", "zones", body=body)
        zone = Zone.from_api(self._single_result(payload, "Failed to create zone"))
        logger.info(f"Created zone {zone.name} ({zone.id})")
        return zone

    def get_zone(self, zone_id: Optional[str] = None) -> Zone:
        target = self.resolve_zone_id(zone_id)
        payload = self._request("GET", f"zones/{target}")
        return Zone.from_api(self._single_result(payload, "Zone not found"))

    def list_zones(self, name: Optional[str] = None) -> List[Zone]:
        params = {"name": name} if name else None
        payload = self._request("GET", "zones", params=params)
        return [Zone.from_api(item) for item in self._many_results(payload)]
