"""
Zone file import and export.

The format is the plain ``name ttl IN type [priority] content`` layout
with ``$ORIGIN`` and ``$TTL`` directives. Parsing is line by line and
forward only: a directive affects the lines after it, never the ones
before it.
"""

import logging
from typing import Iterable, List, Optional, Union

from ..core.exceptions import ValidationError, ZoneFileParseError
from ..core.models import (
    DETECTABLE_TYPES,
    DnsRecordDescriptor,
    ManagedDnsRecord,
    RecordType,
)

logger = logging.getLogger(__name__)

DEFAULT_ZONE_TTL = 300

_RECOGNISED_TYPES = {record_type.value for record_type in DETECTABLE_TYPES}


def _relative_name(name: str, zone_name: str) -> str:
    if not name or name == zone_name:
        return "@"
    suffix = f".{zone_name}"
    if name.endswith(suffix):
        return name[: -len(suffix)]
    # Outside the zone: write it absolute so re-import does not append the origin
    return f"{name}."


def dump_zone_file(
    records: Iterable[Union[DnsRecordDescriptor, ManagedDnsRecord]], zone_name: str
) -> str:
    """Render records as zone file text relative to ``zone_name``."""
    zone_name = zone_name.rstrip(".")
    lines = [f"$ORIGIN {zone_name}.", f"$TTL {DEFAULT_ZONE_TTL}", ""]

    for record in records:
        name = _relative_name(record.name, zone_name)
        ttl = record.ttl or DEFAULT_ZONE_TTL
        # Only MX lines carry a priority column; other types keep it inside content
        if record.type == RecordType.MX and record.priority is not None:
            content = f"{record.priority} {record.content}"
        else:
            content = record.content
        lines.append(f"{name}\t{ttl}\tIN\t{record.type.value}\t{content}")

    return "\n".join(lines) + "\n"


def _qualify(name: str, origin: str) -> str:
    if name == "@":
        return origin
    if name.endswith("."):
        return name[:-1]
    if origin:
        return f"{name}.{origin}"
    return name


def _to_int(token: str) -> Optional[int]:
    try:
        return int(token)
    except ValueError:
        return None


def parse_zone_file(content: str) -> List[DnsRecordDescriptor]:
    """
    Parse zone file text into record descriptors.

    Blank lines and ``;`` comments are skipped, unknown record types are
    ignored. ``@`` resolves to the most recent ``$ORIGIN`` seen so far,
    which is the empty string if none has appeared yet.

    Raises:
        ZoneFileParseError: for a bare ``$ORIGIN``, an MX line without
            a numeric priority, or a TTL or priority out of range
    """
    records: List[DnsRecordDescriptor] = []
    default_ttl = DEFAULT_ZONE_TTL
    origin = ""

    for line_number, line in enumerate(content.splitlines(), start=1):
        stripped = line.strip()

        if not stripped or stripped.startswith(";"):
            continue

        parts = stripped.split()

        if parts[0] == "$TTL":
            value = _to_int(parts[1]) if len(parts) > 1 else None
            default_ttl = value if value and value > 0 else DEFAULT_ZONE_TTL
            continue

        if parts[0] == "$ORIGIN":
            if len(parts) < 2:
                raise ZoneFileParseError("$ORIGIN directive without a name", line_number)
            origin = parts[1].rstrip(".")
            continue

        if len(parts) < 4:
            logger.debug(f"Skipping short zone file line {line_number}: {stripped}")
            continue

        type_token = parts[3]
        if type_token not in _RECOGNISED_TYPES:
            logger.debug(f"Skipping unsupported record type {type_token} on line {line_number}")
            continue

        record_type = RecordType(type_token)
        ttl = _to_int(parts[1])
        if not ttl or ttl < 0:
            ttl = default_ttl

        priority = None
        data = parts[4:]
        if record_type == RecordType.MX and data:
            priority = _to_int(data[0])
            if priority is None:
                raise ZoneFileParseError(f"MX priority is not a number: {data[0]!r}", line_number)
            data = data[1:]

        if not data:
            logger.warning(f"Skipping record without data on line {line_number}: {stripped}")
            continue

        try:
            record = DnsRecordDescriptor(
                type=record_type,
                name=_qualify(parts[0], origin),
                content=" ".join(data),
                ttl=ttl,
                priority=priority,
                proxied=False,
            )
        except ValidationError as e:
            raise ZoneFileParseError(str(e), line_number) from e
        records.append(record)

    logger.info(f"Parsed {len(records)} records from zone file")
    return records


class ZoneFileParser:
    def __init__(self, zone_file_path: str):
        self.zone_file_path = zone_file_path

    def read(self) -> str:
        try:
            with open(self.zone_file_path, "r") as f:
                return f.read()
        except FileNotFoundError as e:
            raise FileNotFoundError(f"Zone file not found: {self.zone_file_path}") from e

    def parse(self) -> List[DnsRecordDescriptor]:
        """Parse the zone file into record descriptors."""
        return parse_zone_file(self.read())
