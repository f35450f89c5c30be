"""
Record and zone models.

Descriptors, managed records and zones are validated once when they enter
the system (``from_dict`` for caller input, ``from_api`` for provider
responses) and passed around as typed values afterwards.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

import dns.rdatatype

from .exceptions import ValidationError, ResponseParseError
from ..utils.validators import AUTOMATIC_TTL, validate_priority, validate_ttl


class RecordType(str, Enum):
    A = "A"
    AAAA = "AAAA"
    CNAME = "CNAME"
    MX = "MX"
    TXT = "TXT"
    NS = "NS"
    SRV = "SRV"
    CAA = "CAA"
    PTR = "PTR"

    @property
    def code(self) -> int:
        """Numeric RR type code as used on the wire and by DoH resolvers."""
        return int(dns.rdatatype.from_text(self.value))

    @classmethod
    def parse(cls, value) -> "RecordType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValidationError(f"Unsupported record type: {value!r}")


# PTR is only managed on the provider side
DETECTABLE_TYPES = (
    RecordType.A,
    RecordType.AAAA,
    RecordType.CNAME,
    RecordType.MX,
    RecordType.TXT,
    RecordType.NS,
    RecordType.SRV,
    RecordType.CAA,
)

ZONE_STATUSES = ("active", "pending", "initializing", "moved", "deleted", "deactivated")
ZONE_TYPES = ("full", "partial")


def _drop_none(data: Dict) -> Dict:
    return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True)
class DnsRecordDescriptor:
    """A provider-agnostic record value with no identity."""

    type: RecordType
    name: str
    content: str
    ttl: Optional[int] = None
    priority: Optional[int] = None
    proxied: Optional[bool] = None

    def __post_init__(self):
        object.__setattr__(self, "type", RecordType.parse(self.type))
        if not isinstance(self.name, str):
            raise ValidationError(f"Record name must be a string: {self.name!r}")
        if not isinstance(self.content, str) or not self.content:
            raise ValidationError(f"Record {self.name} has no content")
        if self.ttl is not None and not validate_ttl(self.ttl):
            raise ValidationError(f"Invalid TTL for {self.name}: {self.ttl!r}")
        if self.priority is not None and not validate_priority(self.priority):
            raise ValidationError(
                f"Invalid priority for {self.name}: {self.priority!r}"
            )
        if self.type == RecordType.MX and self.priority is None:
            raise ValidationError(f"MX record {self.name} requires a priority")
        if self.proxied is not None and not isinstance(self.proxied, bool):
            raise ValidationError(
                f"Invalid proxied flag for {self.name}: {self.proxied!r}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DnsRecordDescriptor":
        """Build a descriptor from loosely typed input, validating every field."""
        if not isinstance(data, dict):
            raise ValidationError(f"Record must be a mapping, got {type(data).__name__}")

        missing = [key for key in ("type", "name", "content") if data.get(key) in (None, "")]
        if missing:
            raise ValidationError(
                f"Record {data.get('name', '<unnamed>')} is missing: {', '.join(missing)}"
            )

        return cls(
            type=RecordType.parse(data["type"]),
            name=data["name"],
            content=str(data["content"]),
            ttl=data.get("ttl"),
            priority=data.get("priority"),
            proxied=data.get("proxied"),
        )

    def to_payload(self) -> Dict[str, Any]:
        """Render the body of a provider create-record call."""
        payload = {
            "type": self.type.value,
            "name": self.name,
            "content": self.content,
            "ttl": self.ttl or AUTOMATIC_TTL,
            "priority": self.priority,
            "proxied": self.proxied,
        }
        return _drop_none(payload)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["type"] = self.type.value
        return _drop_none(data)


UPDATABLE_FIELDS = ("type", "name", "content", "ttl", "priority", "proxied")


def normalize_record_updates(updates: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a partial record update and drop unset fields."""
    unknown = set(updates) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown record fields: {', '.join(sorted(unknown))}")

    normalized = _drop_none(dict(updates))
    if not normalized:
        raise ValidationError("No fields to update")
    if "type" in normalized:
        normalized["type"] = RecordType.parse(normalized["type"]).value
    if "ttl" in normalized and not validate_ttl(normalized["ttl"]):
        raise ValidationError(f"Invalid TTL: {normalized['ttl']!r}")
    if "priority" in normalized and not validate_priority(normalized["priority"]):
        raise ValidationError(f"Invalid priority: {normalized['priority']!r}")
    if "proxied" in normalized and not isinstance(normalized["proxied"], bool):
        raise ValidationError(f"Invalid proxied flag: {normalized['proxied']!r}")
    return normalized


@dataclass(frozen=True)
class ManagedDnsRecord:
    """A record as stored by the provider."""

    id: str
    type: RecordType
    name: str
    content: str
    ttl: int
    created_on: str
    modified_on: str
    priority: Optional[int] = None
    proxied: Optional[bool] = None
    zone_id: Optional[str] = None
    zone_name: Optional[str] = None

    @classmethod
    def from_api(cls, data: Any) -> "ManagedDnsRecord":
        if not isinstance(data, dict):
            raise ResponseParseError(f"Expected a DNS record object, got {type(data).__name__}")
        try:
            return cls(
                id=str(data["id"]),
                type=RecordType.parse(data["type"]),
                name=data["name"],
                content=data["content"],
                ttl=int(data["ttl"]),
                created_on=data["created_on"],
                modified_on=data["modified_on"],
                priority=data.get("priority"),
                proxied=data.get("proxied"),
                zone_id=data.get("zone_id"),
                zone_name=data.get("zone_name"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ResponseParseError(f"Invalid DNS record in provider response: {e!r}") from e

    def to_descriptor(self) -> DnsRecordDescriptor:
        return DnsRecordDescriptor(
            type=self.type,
            name=self.name,
            content=self.content,
            ttl=self.ttl,
            priority=self.priority,
            proxied=self.proxied,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["type"] = self.type.value
        return _drop_none(data)


@dataclass(frozen=True)
class Zone:
    id: str
    name: str
    status: str
    type: str
    name_servers: List[str]
    created_on: str
    modified_on: str
    original_name_servers: Optional[List[str]] = None

    @classmethod
    def from_api(cls, data: Any) -> "Zone":
        if not isinstance(data, dict):
            raise ResponseParseError(f"Expected a zone object, got {type(data).__name__}")
        try:
            zone = cls(
                id=str(data["id"]),
                name=data["name"],
                status=data["status"],
                type=data.get("type", "full"),
                name_servers=list(data.get("name_servers") or []),
                created_on=data["created_on"],
                modified_on=data["modified_on"],
                original_name_servers=data.get("original_name_servers"),
            )
        except (KeyError, TypeError) as e:
            raise ResponseParseError(f"Invalid zone in provider response: {e!r}") from e

        if zone.status not in ZONE_STATUSES:
            raise ResponseParseError(f"Unknown zone status: {zone.status!r}")
        if zone.type not in ZONE_TYPES:
            raise ResponseParseError(f"Unknown zone type: {zone.type!r}")
        return zone

    @classmethod
    def placeholder(cls) -> "Zone":
        """Empty zone reported when a migration fails before a zone exists."""
        return cls(id="", name="", status="", type="", name_servers=[], created_on="", modified_on="")

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(asdict(self))


@dataclass(frozen=True)
class RawAnswer:
    """One entry of a public resolver ``Answer`` section."""

    data: str
    type_code: int
    ttl: Optional[int] = None


class ProbeStatus(str, Enum):
    ANSWERED = "answered"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass
class ProbeResult:
    name: str
    record_type: RecordType
    status: ProbeStatus
    answers: List[RawAnswer] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class ImportResult:
    imported: List[ManagedDnsRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "imported": [record.to_dict() for record in self.imported],
            "errors": list(self.errors),
        }


@dataclass
class ReplicationResult:
    detected: List[DnsRecordDescriptor] = field(default_factory=list)
    replicated: List[ManagedDnsRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detected": [record.to_dict() for record in self.detected],
            "replicated": [record.to_dict() for record in self.replicated],
            "errors": list(self.errors),
        }


@dataclass
class MigrationResult:
    zone: Zone
    detected: List[DnsRecordDescriptor] = field(default_factory=list)
    replicated: List[ManagedDnsRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    next_steps: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "zone": self.zone.to_dict(),
            "detected": [record.to_dict() for record in self.detected],
            "replicated": [record.to_dict() for record in self.replicated],
            "errors": list(self.errors),
            "next_steps": list(self.next_steps),
        }


@dataclass
class ZoneValidation:
    valid: bool
    issues: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "issues": list(self.issues)}
