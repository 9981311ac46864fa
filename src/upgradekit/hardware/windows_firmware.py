#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Windows-specific firmware and platform detection via Win32 API, registry and WMI.

The implementation uses:
- GetFirmwareType: Boot firmware (Legacy BIOS vs UEFI)
- HKLM\\SYSTEM\\CurrentControlSet\\Control\\SecureBoot\\State: Secure Boot state
- WMI Win32_Tpm (root/CIMV2/Security/MicrosoftTpm): TPM activation, enablement, spec version
- WMI Win32_ComputerSystem: hypervisor vendor/model strings
- GlobalMemoryStatusEx: Installed physical memory

Win32_Tpm is only visible to elevated processes; without elevation every TPM
flag reads as False.
"""

from ctypes import Structure, c_ulong, c_ulonglong, sizeof, byref
from typing import Dict, Any, Optional

from ..utils import safe_import
from .linux_firmware import HYPERVISOR_MARKERS

# FIRMWARE_TYPE enumeration (winnt.h)
FIRMWARE_TYPE_UEFI = 2

SECURE_BOOT_STATE_KEY = r"SYSTEM\CurrentControlSet\Control\SecureBoot\State"
TPM_WMI_NAMESPACE = "root/CIMV2/Security/MicrosoftTpm"


class MEMORYSTATUSEX(Structure):
    """Windows MEMORYSTATUSEX structure for GlobalMemoryStatusEx."""
    _fields_ = [
        ("dwLength", c_ulong),
        ("dwMemoryLoad", c_ulong),
        ("ullTotalPhys", c_ulonglong),
        ("ullAvailPhys", c_ulonglong),
        ("ullTotalPageFile", c_ulonglong),
        ("ullAvailPageFile", c_ulonglong),
        ("ullTotalVirtual", c_ulonglong),
        ("ullAvailVirtual", c_ulonglong),
        ("ullAvailExtendedVirtual", c_ulonglong),
    ]


def _kernel32():
    wintypes = safe_import("ctypes.wintypes")
    if not wintypes:
        raise OSError("Windows API not available on this platform")
    try:
        from ctypes import windll
    except ImportError:
        raise OSError("Windows API not available on this platform")
    return windll.kernel32


def get_windows_memory_mb() -> int:
    """
    Get installed physical memory in MB using GlobalMemoryStatusEx.

    Raises:
        OSError: If not on Windows or GlobalMemoryStatusEx fails
    """
    kernel32 = _kernel32()

    mem_status = MEMORYSTATUSEX()
    mem_status.dwLength = sizeof(MEMORYSTATUSEX)

    if not kernel32.GlobalMemoryStatusEx(byref(mem_status)):
        raise OSError("GlobalMemoryStatusEx failed")

    return mem_status.ullTotalPhys // (1024 ** 2)


def is_uefi_boot() -> bool:
    """Ask the firmware table provider which firmware booted the OS."""
    try:
        kernel32 = _kernel32()
        firmware_type = c_ulong(0)
        if not kernel32.GetFirmwareType(byref(firmware_type)):
            return False
        return firmware_type.value == FIRMWARE_TYPE_UEFI
    except (OSError, AttributeError):
        return False


def is_secure_boot_enabled() -> bool:
    """Read UEFISecureBootEnabled from the SecureBoot\\State registry key."""
    winreg = safe_import("winreg")
    if not winreg:
        return False
    try:
        with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, SECURE_BOOT_STATE_KEY) as key:
            value, _ = winreg.QueryValueEx(key, "UEFISecureBootEnabled")
            return value == 1
    except OSError:
        # Key is absent on legacy BIOS machines
        return False


def _first_wmi_instance(class_name: str, namespace: Optional[str] = None):
    wmi = safe_import("wmi")
    if not wmi:
        return None
    try:
        connection = wmi.WMI(namespace=namespace) if namespace else wmi.WMI()
        instances = getattr(connection, class_name)()
        return instances[0] if instances else None
    except Exception:
        # COM errors surface as wmi.x_wmi or pywintypes.com_error
        return None


def get_tpm_state() -> Dict[str, bool]:
    """
    Get TPM flags from WMI Win32_Tpm.

    SpecVersion is a comma separated list such as "2.0, 0, 1.38"; the first
    entry is the TPM spec version.
    """
    tpm = _first_wmi_instance("Win32_Tpm", namespace=TPM_WMI_NAMESPACE)
    if tpm is None:
        return {"active": False, "enabled": False, "is_v2": False}

    spec_version = str(getattr(tpm, "SpecVersion", "") or "")
    return {
        "active": bool(getattr(tpm, "IsActivated_InitialValue", False)),
        "enabled": bool(getattr(tpm, "IsEnabled_InitialValue", False)),
        "is_v2": spec_version.split(",")[0].strip() == "2.0",
    }


def is_virtual_machine() -> bool:
    """Match Win32_ComputerSystem manufacturer/model against hypervisor markers."""
    system = _first_wmi_instance("Win32_ComputerSystem")
    if system is None:
        return False
    text = f"{getattr(system, 'Manufacturer', '') or ''} {getattr(system, 'Model', '') or ''}".lower()
    return any(marker in text for marker in HYPERVISOR_MARKERS)


def get_windows_processor_name() -> Optional[str]:
    """Get the processor descriptive string from WMI Win32_Processor."""
    processor = _first_wmi_instance("Win32_Processor")
    if processor is None:
        return None
    name = getattr(processor, "Name", None)
    return name.strip() if name else None


def get_windows_firmware_facts() -> Dict[str, Any]:
    """
    Get all firmware/platform facts for Windows.

    Returns:
        Dict[str, Any]: PlatformFacts-compatible dictionary
    """
    tpm = get_tpm_state()
    try:
        memory_mb = get_windows_memory_mb()
    except OSError:
        memory_mb = 0

    return {
        "booted_uefi": is_uefi_boot(),
        "secure_boot": is_secure_boot_enabled(),
        "tpm_active": tpm["active"],
        "tpm_enabled": tpm["enabled"],
        "tpm_is_v2": tpm["is_v2"],
        "memory_mb": memory_mb,
        "is_vm": is_virtual_machine(),
    }
