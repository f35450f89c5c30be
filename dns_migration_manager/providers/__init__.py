"""
DNS provider implementations.

This package contains the Cloudflare and mock DNS providers, the
unified client in front of them, and the public resolver probe used
for record detection.
"""

from .dns_client import DNSClient, DNSProvider
from .cloudflare_provider import CloudflareProvider
from .mock_provider import MockDNSProvider
from .public_resolver import PublicResolverProbe

__all__ = [
    "DNSClient",
    "DNSProvider",
    "CloudflareProvider",
    "MockDNSProvider",
    "PublicResolverProbe",
]
