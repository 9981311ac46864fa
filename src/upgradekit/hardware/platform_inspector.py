#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
platform_inspector.py

Collects the platform facts a Windows 11 upgrade assessment needs (UEFI boot,
Secure Boot, TPM state, virtual machine flag, installed memory) together with
the raw processor descriptive string.

Information is gathered by direct API calls (Win32, WMI, registry) on Windows
and by reading /sys and /proc on Linux. A probe that cannot answer reports the
negative value (False / 0) instead of raising, so an unreadable TPM counts
against the machine rather than aborting the run.
"""

import logging
import platform
from typing import Dict, Any, Optional

from .hardware_schema import PlatformFacts, PlatformProfile
from .linux_firmware import get_linux_firmware_facts
from .windows_firmware import get_windows_firmware_facts, get_windows_processor_name
from ..utils import safe_import

logger = logging.getLogger(__name__)


class PlatformInspector:
    """
    A class to inspect and collect firmware posture and processor identity
    from the host system.
    """

    def __init__(self):
        """Initializes the PlatformInspector."""
        self.platform_info: Dict[str, Any] = {
            "os": {},
            "processor_name": None,
            "facts": {},
        }

    def _get_os_details(self):
        """Gathers basic OS information using standard libraries."""
        self.platform_info["os"]["platform"] = platform.system()
        self.platform_info["os"]["version"] = platform.release()
        self.platform_info["os"]["architecture"] = platform.machine()

    def _get_processor_name(self):
        """Gets the raw CPU brand string, preferring py-cpuinfo."""
        name: Optional[str] = None

        if self.platform_info["os"].get("platform") == "Windows":
            name = get_windows_processor_name()

        if not name:
            cpuinfo = safe_import("cpuinfo")
            if cpuinfo:
                try:
                    name = cpuinfo.get_cpu_info().get("brand_raw")
                except Exception as e:
                    logger.debug(f"py-cpuinfo failed: {e}")

        if not name:
            name = platform.processor() or None  # Fallback for basic name

        self.platform_info["processor_name"] = name

    def _get_firmware_facts(self):
        """Gathers firmware facts with the platform-specific probe."""
        system = self.platform_info["os"].get("platform")

        if system == "Windows":
            facts = get_windows_firmware_facts()
        elif system == "Linux":
            facts = get_linux_firmware_facts()
        else:
            logger.warning(f"Unsupported platform for firmware inspection: {system}")
            facts = PlatformFacts().model_dump()

        if not facts.get("memory_mb"):
            facts["memory_mb"] = self._get_psutil_memory_mb()

        self.platform_info["facts"] = facts

    def _get_psutil_memory_mb(self) -> int:
        """Fallback memory detection using psutil."""
        psutil = safe_import("psutil")
        if psutil:
            try:
                return psutil.virtual_memory().total // (1024 ** 2)
            except Exception:
                pass
        return 0

    def inspect_all(self) -> Dict[str, Any]:
        """Runs all inspection methods to build the complete platform profile."""
        # OS details first: the other probes branch on the platform
        self._get_os_details()
        self._get_processor_name()
        self._get_firmware_facts()

        logger.debug(f"Platform inspection: {self.platform_info}")
        return self.platform_info


def platform_profile() -> PlatformProfile:
    """
    Get the host's platform profile as a validated Pydantic BaseModel.

    Example:
        >>> profile = platform_profile()
        >>> print(f"CPU: {profile.processor_name}")
        >>> print(f"TPM 2.0: {profile.facts.tpm_is_v2}")
    """
    inspector = PlatformInspector()
    return PlatformProfile(**inspector.inspect_all())
