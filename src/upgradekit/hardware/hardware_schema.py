#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Hardware Schema Definitions

Pydantic BaseModel schemas that define the output structure of the
PlatformInspector.inspect_all() method from platform_inspector.py.

PlatformFacts is the only part the compatibility engine consumes; the
surrounding PlatformProfile keeps the raw probe results for diagnostics.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field


class OperatingSystem(BaseModel):
    """Operating system information."""
    platform: Optional[str] = Field(None, description="Operating system platform (e.g., 'Linux', 'Windows')")
    version: Optional[str] = Field(None, description="OS version/release")
    architecture: Optional[str] = Field(None, description="Machine architecture (e.g., 'AMD64', 'x86_64', 'ARM64')")


class PlatformFacts(BaseModel):
    """
    Firmware and platform posture observed on the host.

    Supplied once per run and never mutated afterwards.
    """
    booted_uefi: bool = Field(False, description="Whether the OS was booted in UEFI mode")
    secure_boot: bool = Field(False, description="Whether UEFI Secure Boot is enabled")
    tpm_active: bool = Field(False, description="Whether the TPM is activated")
    tpm_enabled: bool = Field(False, description="Whether the TPM is enabled")
    tpm_is_v2: bool = Field(False, description="Whether the TPM implements spec version 2.0")
    memory_mb: int = Field(0, ge=0, description="Installed physical memory in megabytes")
    is_vm: bool = Field(False, description="Whether the host is a virtual machine")

    class Config:
        """Pydantic configuration."""
        frozen = True


class PlatformProfile(BaseModel):
    """
    Complete platform profile from PlatformInspector.inspect_all().
    """
    os: OperatingSystem = Field(..., description="Operating system information")
    processor_name: Optional[str] = Field(None, description="Raw CPU brand string from hardware inventory")
    facts: PlatformFacts = Field(..., description="Firmware and platform facts")

    class Config:
        """Pydantic configuration."""
        # Allow extra fields for future compatibility
        extra = "allow"
        validate_assignment = True


def validate_platform_data(data: Dict[str, Any]) -> PlatformProfile:
    """
    Validate platform inspection data against the schema.

    Args:
        data: Dictionary containing platform inspection results

    Returns:
        Validated PlatformProfile instance

    Raises:
        ValidationError: If data doesn't match the schema
    """
    return PlatformProfile(**data)
