"""
Validators - Input validation for DNS records and zones

This module provides validation functions for domain names, TTLs and
priorities so that record descriptors are checked once at the boundary.
"""

import logging
import re

logger = logging.getLogger(__name__)

# Provider TTL of 1 means "automatic"
AUTOMATIC_TTL = 1
MAX_TTL = 2147483647
MAX_PRIORITY = 65535


def validate_fqdn(fqdn: str) -> bool:
    """
    Validate a Fully Qualified Domain Name (FQDN).

    Args:
        fqdn: The FQDN to validate

    Returns:
        True if valid, False otherwise
    """
    if not fqdn or not isinstance(fqdn, str):
        return False

    # A single trailing dot marks an absolute name and is allowed
    fqdn = fqdn[:-1] if fqdn.endswith(".") else fqdn

    if len(fqdn) > 253:
        logger.warning(f"FQDN too long: {fqdn}")
        return False

    labels = fqdn.split(".")

    if len(labels) < 2:
        logger.warning(f"FQDN must have at least 2 labels: {fqdn}")
        return False

    if any(label == "" for label in labels):
        logger.warning(f"FQDN contains empty labels: {fqdn}")
        return False

    for label in labels:
        if not _validate_label(label):
            logger.warning(f"Invalid label '{label}' in FQDN: {fqdn}")
            return False

    return True


def _validate_label(label: str) -> bool:
    """
    Validate a single domain label.

    Labels can contain letters, digits, hyphens and underscores
    (service labels such as ``_sip`` or ``_dmarc``) and cannot start or
    end with a hyphen.
    """
    if len(label) == 0 or len(label) > 63:
        return False

    if label == "*":
        return True

    return bool(re.match(r"^[a-zA-Z0-9_]([a-zA-Z0-9_-]*[a-zA-Z0-9_])?$", label))


def validate_zone_name(zone: str) -> bool:
    """
    Validate DNS zone name.

    Args:
        zone: The zone name to validate

    Returns:
        True if valid, False otherwise
    """
    if not validate_fqdn(zone):
        return False

    # Zone apex cannot be a wildcard or a service label
    first_label = zone.split(".")[0]
    if first_label == "*" or first_label.startswith("_"):
        return False

    return True


def validate_ttl(ttl) -> bool:
    """Check that a TTL is a positive integer (1 meaning automatic)."""
    if isinstance(ttl, bool) or not isinstance(ttl, int):
        return False
    return AUTOMATIC_TTL <= ttl <= MAX_TTL


def validate_priority(priority) -> bool:
    """Check that a priority fits the 16-bit range used by MX and SRV."""
    if isinstance(priority, bool) or not isinstance(priority, int):
        return False
    return 0 <= priority <= MAX_PRIORITY


def sanitize_fqdn(fqdn: str) -> str:
    """
    Sanitize FQDN by removing invalid characters and normalizing.

    Args:
        fqdn: The FQDN to sanitize

    Returns:
        Sanitized FQDN
    """
    if not fqdn:
        return fqdn

    fqdn = fqdn.strip().strip(".").lower()

    # Keep only letters, digits, hyphens, underscores, wildcards and dots
    fqdn = re.sub(r"[^a-z0-9._*-]", "", fqdn)
    fqdn = re.sub(r"\.+", ".", fqdn)

    return fqdn.strip(".")
