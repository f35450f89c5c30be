"""
Core DNS migration functionality.

This package contains the record model, detection, replication and the
migration workflow.
"""

from .dns_manager import DNSManager
from .detector import RecordDetector
from .record_manager import RecordManager

__all__ = ["DNSManager", "RecordDetector", "RecordManager"]
