"""
Platform detection for upgrade readiness.

Provides firmware posture (UEFI, Secure Boot, TPM), virtual machine detection,
installed memory and the raw processor string.
"""

from .platform_inspector import PlatformInspector, platform_profile
from .hardware_schema import (
    OperatingSystem,
    PlatformFacts,
    PlatformProfile,
)

# Platform-specific probes (for advanced usage)
# These imports are safe on all platforms - the functions handle platform checks internally
from .linux_firmware import get_linux_firmware_facts
from .windows_firmware import get_windows_firmware_facts

__all__ = [
    "PlatformInspector",
    "platform_profile",

    # Schemas
    "OperatingSystem",
    "PlatformFacts",
    "PlatformProfile",

    # Platform-specific fact detection functions
    "get_linux_firmware_facts",
    "get_windows_firmware_facts",
]
