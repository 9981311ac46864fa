"""
UpgradeKit - Processor and firmware compatibility checks for a Windows 11 upgrade.

Submodules:
    - upgradekit.processor: Processor name normalization
    - upgradekit.tables: Vendor table retrieval and record extraction
    - upgradekit.compatibility: Compatibility decision
    - upgradekit.hardware: Platform fact detection
    - upgradekit.presentation: Dialogs for negative outcomes
"""

__version__ = "0.1.0"

# Import submodules for namespace access (uk.processor.normalize())
from . import processor
from . import tables
from . import hardware
from . import compatibility
from . import presentation

# Top-level convenience exports (most common operations)
from .processor import normalize, ProcessorIdentity
from .tables import extract, fetch_compatibility_records, RetrievalResult
from .hardware import platform_profile, PlatformFacts
from .compatibility import check_compatibility, decide, CompatibilityVerdict, CheckSettings
from .exceptions import (
    CompatibilityError,
    ParseError,
    RetrievalError,
    UnsupportedManufacturerError,
)

__all__ = [
    # Submodules
    "processor",
    "tables",
    "hardware",
    "compatibility",
    "presentation",

    # Primary API
    "normalize",
    "extract",
    "fetch_compatibility_records",
    "platform_profile",
    "check_compatibility",
    "decide",

    # Types
    "ProcessorIdentity",
    "RetrievalResult",
    "PlatformFacts",
    "CompatibilityVerdict",
    "CheckSettings",

    # Errors
    "CompatibilityError",
    "ParseError",
    "RetrievalError",
    "UnsupportedManufacturerError",
]
