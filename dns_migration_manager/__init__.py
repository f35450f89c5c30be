"""
DNS Migration Manager - Move domains onto a managed DNS provider

Manages DNS records and zones for a Cloudflare account and migrates
domains onto it by detecting their existing public records and
replicating them into a new zone.
"""

__version__ = "1.0.0"
__author__ = "DNS Migration Manager Team"
__description__ = "DNS record management and domain migration for Cloudflare"

from .core.dns_manager import DNSManager
from .core.record_manager import RecordManager
from .providers.dns_client import DNSClient

__all__ = [
    "DNSManager",
    "RecordManager",
    "DNSClient",
]
