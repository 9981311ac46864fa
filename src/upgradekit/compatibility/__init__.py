"""
Upgrade compatibility decision.

Reconciles processor identity, vendor records and platform facts into a verdict.
"""

from .engine import (
    check_compatibility,
    decide,
    evaluate_platform,
    found_in_records,
    select_vendor_url,
    CompatibilityVerdict,
    Fetcher,
)
from .settings import (
    CheckSettings,
    MemoryCheckScope,
    VENDOR_URLS,
    DEFAULT_MANUFACTURER_ALLOWLIST,
    MIN_MEMORY_MB,
)

__all__ = [
    # Primary API
    "check_compatibility",
    "decide",
    "CompatibilityVerdict",
    "CheckSettings",
    "MemoryCheckScope",

    # Building blocks
    "evaluate_platform",
    "found_in_records",
    "select_vendor_url",
    "Fetcher",

    # Defaults
    "VENDOR_URLS",
    "DEFAULT_MANUFACTURER_ALLOWLIST",
    "MIN_MEMORY_MB",
]
