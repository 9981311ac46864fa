"""Tests for platform fact detection against fake sysfs/procfs trees and WMI stubs."""

from types import SimpleNamespace

import pytest

from upgradekit.hardware import PlatformFacts, linux_firmware, platform_inspector, windows_firmware
from upgradekit.hardware.linux_firmware import EFI_GLOBAL_VARIABLE_GUID, get_linux_firmware_facts

MEMINFO = "MemTotal:       16318412 kB\nMemFree:         1234567 kB\n"


def write(root, relative, content, binary=False):
    path = root.joinpath(*relative.split("/"))
    path.parent.mkdir(parents=True, exist_ok=True)
    if binary:
        path.write_bytes(content)
    else:
        path.write_text(content)
    return path


@pytest.fixture
def uefi_root(tmp_path):
    write(tmp_path, "proc/meminfo", MEMINFO)
    write(tmp_path, "proc/cpuinfo", "processor\t: 0\nflags\t\t: fpu vme sse2\n")
    write(
        tmp_path,
        f"sys/firmware/efi/efivars/SecureBoot-{EFI_GLOBAL_VARIABLE_GUID}",
        b"\x06\x00\x00\x00\x01",
        binary=True,
    )
    write(tmp_path, "sys/class/tpm/tpm0/tpm_version_major", "2\n")
    write(tmp_path, "sys/class/dmi/id/sys_vendor", "Dell Inc.\n")
    return tmp_path


class TestLinuxFirmware:
    def test_fully_capable_machine(self, uefi_root):
        facts = get_linux_firmware_facts(str(uefi_root))
        assert facts == {
            "booted_uefi": True,
            "secure_boot": True,
            "tpm_active": True,
            "tpm_enabled": True,
            "tpm_is_v2": True,
            "memory_mb": 15935,
            "is_vm": False,
        }
        PlatformFacts(**facts)

    def test_empty_tree_reports_negatives(self, tmp_path):
        facts = get_linux_firmware_facts(str(tmp_path))
        assert facts["booted_uefi"] is False
        assert facts["secure_boot"] is False
        assert facts["tpm_is_v2"] is False
        assert facts["memory_mb"] == 0

    def test_secure_boot_disabled(self, uefi_root):
        write(
            uefi_root,
            f"sys/firmware/efi/efivars/SecureBoot-{EFI_GLOBAL_VARIABLE_GUID}",
            b"\x06\x00\x00\x00\x00",
            binary=True,
        )
        assert linux_firmware.is_secure_boot_enabled(str(uefi_root)) is False

    def test_tpm_12_is_not_v2(self, tmp_path):
        write(tmp_path, "sys/class/tpm/tpm0/device/caps", "TCG version: 1.2\n")
        write(tmp_path, "sys/class/tpm/tpm0/device/enabled", "1\n")
        write(tmp_path, "sys/class/tpm/tpm0/device/active", "0\n")
        assert linux_firmware.get_tpm_state(str(tmp_path)) == {
            "active": False,
            "enabled": True,
            "is_v2": False,
        }

    def test_hypervisor_from_dmi(self, uefi_root):
        write(uefi_root, "sys/class/dmi/id/product_name", "VMware Virtual Platform\n")
        assert linux_firmware.is_virtual_machine(str(uefi_root))

    def test_hypervisor_from_cpu_flags(self, tmp_path):
        write(tmp_path, "proc/cpuinfo", "flags\t\t: fpu vme hypervisor sse2\n")
        assert linux_firmware.is_virtual_machine(str(tmp_path))


class TestWindowsFirmware:
    def test_tpm_state_from_wmi(self, monkeypatch):
        tpm = SimpleNamespace(IsActivated_InitialValue=True, IsEnabled_InitialValue=True, SpecVersion="2.0, 0, 1.38")
        monkeypatch.setattr(windows_firmware, "_first_wmi_instance", lambda name, namespace=None: tpm)
        assert windows_firmware.get_tpm_state() == {"active": True, "enabled": True, "is_v2": True}

    def test_tpm_12_from_wmi(self, monkeypatch):
        tpm = SimpleNamespace(IsActivated_InitialValue=True, IsEnabled_InitialValue=False, SpecVersion="1.2, 2, 3")
        monkeypatch.setattr(windows_firmware, "_first_wmi_instance", lambda name, namespace=None: tpm)
        assert windows_firmware.get_tpm_state() == {"active": True, "enabled": False, "is_v2": False}

    def test_no_wmi_means_no_tpm(self, monkeypatch):
        monkeypatch.setattr(windows_firmware, "_first_wmi_instance", lambda name, namespace=None: None)
        assert windows_firmware.get_tpm_state() == {"active": False, "enabled": False, "is_v2": False}
        assert windows_firmware.is_virtual_machine() is False
        assert windows_firmware.get_windows_processor_name() is None

    def test_virtual_machine_from_computer_system(self, monkeypatch):
        system = SimpleNamespace(Manufacturer="Microsoft Corporation", Model="Virtual Machine")
        monkeypatch.setattr(windows_firmware, "_first_wmi_instance", lambda name, namespace=None: system)
        assert windows_firmware.is_virtual_machine()

    def test_processor_name_is_stripped(self, monkeypatch):
        cpu = SimpleNamespace(Name="Intel(R) Core(TM) i7-10700K CPU @ 3.80GHz   ")
        monkeypatch.setattr(windows_firmware, "_first_wmi_instance", lambda name, namespace=None: cpu)
        assert windows_firmware.get_windows_processor_name() == "Intel(R) Core(TM) i7-10700K CPU @ 3.80GHz"


class TestPlatformInspector:
    def test_linux_profile(self, monkeypatch, uefi_root):
        monkeypatch.setattr(platform_inspector.platform, "system", lambda: "Linux")
        monkeypatch.setattr(
            platform_inspector, "get_linux_firmware_facts", lambda: get_linux_firmware_facts(str(uefi_root))
        )
        monkeypatch.setattr(platform_inspector.PlatformInspector, "_get_processor_name", lambda self: None)

        profile = platform_inspector.platform_profile()
        assert profile.os.platform == "Linux"
        assert profile.facts.tpm_is_v2
        assert profile.facts.memory_mb == 15935

    def test_unsupported_platform_falls_back(self, monkeypatch):
        monkeypatch.setattr(platform_inspector.platform, "system", lambda: "Darwin")
        monkeypatch.setattr(platform_inspector.PlatformInspector, "_get_processor_name", lambda self: None)
        monkeypatch.setattr(platform_inspector.PlatformInspector, "_get_psutil_memory_mb", lambda self: 8192)

        profile = platform_inspector.platform_profile()
        assert profile.facts.booted_uefi is False
        assert profile.facts.memory_mb == 8192
