#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Linux-specific firmware and platform detection via sysfs and procfs.

This module reads the kernel's virtual filesystems to answer the questions a
Windows upgrade assessment asks of the firmware:

- /sys/firmware/efi: present only when the kernel was booted by UEFI firmware
- efivars SecureBoot-<guid>: the firmware's Secure Boot state variable
- /sys/class/tpm/tpm0: the first TPM chip, with its major spec version
- /sys/class/dmi/id: SMBIOS vendor/product strings (hypervisor detection)
- /proc/meminfo: installed memory

Every path is resolved relative to a ``root`` argument so the probes can be
pointed at a fake tree.
"""

import os
from typing import Dict, Any, Optional

# EFI global variable namespace GUID
EFI_GLOBAL_VARIABLE_GUID = "8be4df61-93ca-11d2-aa0d-00e098032b8c"

# SMBIOS strings reported by common hypervisors
HYPERVISOR_MARKERS = (
    "vmware",
    "virtualbox",
    "kvm",
    "qemu",
    "xen",
    "bochs",
    "parallels",
    "virtual machine",
    "amazon ec2",
    "google compute engine",
)


def _path(root: str, *parts: str) -> str:
    return os.path.join(root, *parts)


def _read_text(path: str) -> Optional[str]:
    try:
        with open(path, 'r') as f:
            return f.read().strip()
    except (FileNotFoundError, PermissionError, OSError):
        return None


def _parse_meminfo_value(value_str: str) -> int:
    """
    Parse a value from /proc/meminfo and convert to MB.

    Args:
        value_str: Value string like "16384 kB" or "16384"

    Returns:
        Value in megabytes
    """
    value_str = value_str.strip().replace('kB', '').replace('KB', '').strip()
    try:
        return int(value_str) // 1024
    except ValueError:
        return 0


def get_linux_memory_mb(root: str = "/") -> int:
    """
    Get installed memory in MB from the MemTotal line of /proc/meminfo.

    Raises:
        FileNotFoundError: If /proc/meminfo doesn't exist (non-Linux system)
        PermissionError: If /proc/meminfo is not readable
    """
    with open(_path(root, 'proc', 'meminfo'), 'r') as f:
        for line in f:
            if ':' not in line:
                continue
            key, value = line.split(':', 1)
            if key.strip() == 'MemTotal':
                return _parse_meminfo_value(value)
    return 0


def is_uefi_boot(root: str = "/") -> bool:
    """The kernel only exposes /sys/firmware/efi when booted through UEFI."""
    return os.path.isdir(_path(root, 'sys', 'firmware', 'efi'))


def is_secure_boot_enabled(root: str = "/") -> bool:
    """
    Read the SecureBoot EFI variable.

    The efivarfs file starts with a 4-byte attribute mask followed by the
    variable data; a single data byte of 1 means Secure Boot is on.
    """
    var_path = _path(root, 'sys', 'firmware', 'efi', 'efivars', f"SecureBoot-{EFI_GLOBAL_VARIABLE_GUID}")
    try:
        with open(var_path, 'rb') as f:
            data = f.read()
    except (FileNotFoundError, PermissionError, OSError):
        return False
    return len(data) >= 5 and data[4] == 1


def get_tpm_state(root: str = "/") -> Dict[str, bool]:
    """
    Get TPM presence and version from /sys/class/tpm/tpm0.

    TPM 1.2 chips expose ``device/enabled`` and ``device/active`` flags. TPM 2.0
    chips have no such switches: a registered tpm0 device is both enabled and
    active as far as the OS is concerned.

    Returns:
        Dict with ``active``, ``enabled`` and ``is_v2`` flags
    """
    tpm_dir = _path(root, 'sys', 'class', 'tpm', 'tpm0')
    if not os.path.isdir(tpm_dir):
        return {"active": False, "enabled": False, "is_v2": False}

    major = _read_text(os.path.join(tpm_dir, 'tpm_version_major'))
    if major is None:
        # Kernels before 5.6 lack tpm_version_major; 1.2 chips publish "caps"
        is_v2 = not os.path.exists(os.path.join(tpm_dir, 'device', 'caps'))
    else:
        is_v2 = major == "2"

    enabled = _read_text(os.path.join(tpm_dir, 'device', 'enabled'))
    active = _read_text(os.path.join(tpm_dir, 'device', 'active'))
    return {
        "active": active != "0",
        "enabled": enabled != "0",
        "is_v2": is_v2,
    }


def is_virtual_machine(root: str = "/") -> bool:
    """
    Detect a hypervisor from SMBIOS strings or the ``hypervisor`` CPU flag.
    """
    dmi_dir = _path(root, 'sys', 'class', 'dmi', 'id')
    for name in ('sys_vendor', 'product_name', 'board_vendor'):
        value = _read_text(os.path.join(dmi_dir, name))
        if value and any(marker in value.lower() for marker in HYPERVISOR_MARKERS):
            return True

    cpuinfo = _read_text(_path(root, 'proc', 'cpuinfo'))
    if cpuinfo:
        for line in cpuinfo.splitlines():
            if line.startswith('flags') and ' hypervisor' in line:
                return True
    return False


def get_linux_firmware_facts(root: str = "/") -> Dict[str, Any]:
    """
    Get all firmware/platform facts for Linux.

    Returns:
        Dict[str, Any]: PlatformFacts-compatible dictionary
    """
    tpm = get_tpm_state(root)
    try:
        memory_mb = get_linux_memory_mb(root)
    except (FileNotFoundError, PermissionError):
        memory_mb = 0

    return {
        "booted_uefi": is_uefi_boot(root),
        "secure_boot": is_secure_boot_enabled(root),
        "tpm_active": tpm["active"],
        "tpm_enabled": tpm["enabled"],
        "tpm_is_v2": tpm["is_v2"],
        "memory_mb": memory_mb,
        "is_vm": is_virtual_machine(root),
    }
