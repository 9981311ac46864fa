"""
Settings for a compatibility check run.
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field

from ..tables.remote import DEFAULT_TIMEOUT


# ============================================================================
# CONFIGURATION CONSTANTS
# ============================================================================

# Microsoft's published Windows 11 supported processor lists, one per manufacturer
VENDOR_URLS: Dict[str, str] = {
    "Intel": "https://learn.microsoft.com/en-us/windows-hardware/design/minimum/supported/windows-11-supported-intel-processors",
    "AMD": "https://learn.microsoft.com/en-us/windows-hardware/design/minimum/supported/windows-11-supported-amd-processors",
    "Qualcomm": "https://learn.microsoft.com/en-us/windows-hardware/design/minimum/supported/windows-11-supported-qualcomm-processors",
}

DEFAULT_MANUFACTURER_ALLOWLIST = ["Intel", "AMD", "Qualcomm"]

# Windows 11 minimum memory (4 GB)
MIN_MEMORY_MB = 4096

DEFAULT_DIALOG_TIMEOUT = 600  # seconds


class MemoryCheckScope(str, Enum):
    """Which branches of the decision include the memory threshold."""
    NONE = "none"
    PHYSICAL = "physical"
    ALL = "all"


class CheckSettings(BaseModel):
    """Configuration for one compatibility check run."""
    vendor_urls: Dict[str, str] = Field(default_factory=lambda: dict(VENDOR_URLS), description="Manufacturer to supported-processor page URL")
    manufacturer_allowlist: List[str] = Field(default_factory=lambda: list(DEFAULT_MANUFACTURER_ALLOWLIST), description="Manufacturers eligible for the upgrade")
    min_memory_mb: int = Field(MIN_MEMORY_MB, ge=0, description="Minimum installed memory in MB")
    memory_check_scope: MemoryCheckScope = Field(MemoryCheckScope.ALL, description="Branches that apply the memory threshold")
    abort_on_retrieval_failure: bool = Field(False, description="Raise RetrievalError instead of treating a failed fetch as 'no records'")
    request_timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Vendor page request timeout in seconds")
    table_index: int = Field(0, description="Position of the supported processor table on the vendor page")
    case_sensitive: bool = Field(False, description="Whether brand/model/manufacturer matching is case sensitive")

    # Presentation
    organization: str = Field("IT Department", description="Organization name shown in dialogs")
    package_name: str = Field("Windows 11 Upgrade", description="Deployment package name shown in dialogs")
    dialog_timeout: int = Field(DEFAULT_DIALOG_TIMEOUT, ge=0, description="Seconds before a dialog closes on its own (0 = never)")

    class Config:
        """Pydantic configuration."""
        validate_assignment = True

    def memory_applies(self, is_vm: bool) -> bool:
        if self.memory_check_scope == MemoryCheckScope.ALL:
            return True
        if self.memory_check_scope == MemoryCheckScope.PHYSICAL:
            return not is_vm
        return False
