"""
Exceptions raised by the DNS Migration Manager.

Single-record operations raise these directly. Batch operations (imports,
replication, zone-file imports) catch them per item and collect the
messages instead.
"""

from typing import List, Optional


class DNSManagerError(Exception):
    """Base class for all DNS Migration Manager errors."""


class ConfigurationError(DNSManagerError):
    """Configuration file could not be read or parsed."""


class ConfigurationMissingError(DNSManagerError):
    """A required credential or zone id has not been configured."""


class TransportError(DNSManagerError):
    """Network failure or timeout while talking to a remote API."""


class ProviderRejectedError(DNSManagerError):
    """The provider answered with ``success: false``."""

    def __init__(self, messages: List[str], status_code: Optional[int] = None):
        self.messages = messages
        self.status_code = status_code
        super().__init__(f"API Error: {', '.join(messages) or 'unknown error'}")


class RecordNotFoundError(DNSManagerError):
    """The provider returned no result where exactly one was expected."""


class ParseError(DNSManagerError):
    """Input could not be parsed."""


class ResponseParseError(ParseError):
    """A provider response did not have the expected shape."""


class ZoneFileParseError(ParseError):
    """Zone file content is malformed."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class DetectionError(DNSManagerError):
    """Record detection failed for a reason other than a lookup miss."""


class ValidationError(DNSManagerError, ValueError):
    """A record descriptor, update or zone name failed validation."""
