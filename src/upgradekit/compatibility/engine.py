"""
Compatibility Decision Engine

Decides whether a machine qualifies for the upgrade by reconciling the
normalized processor identity with the vendor's supported-processor records and
the platform facts.

Processor lookups are permissive substring searches over every field of every
record: "Ryzen 5" is found in "AMD Ryzen 5 3600", and so is "Ryzen 5" in
"Ryzen 5 PRO 4650G". This is a known source of false positives and is kept as is.
"""

import logging
import re
from functools import partial
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field

from .settings import CheckSettings
from ..exceptions import ParseError, RetrievalError, UnsupportedManufacturerError
from ..hardware.hardware_schema import PlatformFacts
from ..processor import ProcessorIdentity, normalize
from ..tables import CompatibilityRecord, RetrievalResult, fetch_compatibility_records

# Module logger
logger = logging.getLogger(__name__)

# Type alias for the vendor page fetcher (URL in, records out)
Fetcher = Callable[[str], RetrievalResult]


# ============================================================================
# VERDICT
# ============================================================================

class CompatibilityVerdict(BaseModel):
    """
    Result of a compatibility check.

    CPU checks are None on virtual machines, where they are not evaluated.
    """
    manufacturer_ok: Optional[bool] = Field(None, description="Manufacturer is on the allowlist")
    brand_ok: Optional[bool] = Field(None, description="Brand found in the vendor records")
    model_ok: Optional[bool] = Field(None, description="Model found in the vendor records")
    platform_ok: bool = Field(..., description="UEFI, Secure Boot, TPM 2.0 (and memory) requirements met")
    memory_ok: Optional[bool] = Field(None, description="Memory threshold met; None when not evaluated")
    final: bool = Field(..., description="Overall verdict")

    is_vm: bool = Field(False, description="Whether the machine is virtual")
    processor: Optional[str] = Field(None, description="Normalized processor identity")
    records_checked: int = Field(0, description="Number of vendor records searched")
    retrieval_error: Optional[str] = Field(None, description="Why vendor records are unavailable")

    class Config:
        """Pydantic configuration."""
        frozen = True

    def failed_checks(self) -> List[str]:
        """Names of the checks that evaluated to False."""
        checks = {
            "manufacturer": self.manufacturer_ok,
            "brand": self.brand_ok,
            "model": self.model_ok,
            "platform": self.platform_ok,
        }
        return [name for name, passed in checks.items() if passed is False]


def _log_verdict(verdict: CompatibilityVerdict, facts: PlatformFacts) -> None:
    """Log every intermediate check and the final verdict."""
    icon = "[✓]" if verdict.final else "[✗]"
    status_text = "COMPATIBLE" if verdict.final else "NOT COMPATIBLE"
    machine = "virtual machine" if verdict.is_vm else "physical machine"

    log_fn = logger.info if verdict.final else logger.error
    log_fn(f"{icon} Compatibility: {status_text} | {machine} | processor={verdict.processor or 'n/a'}")

    # Breakdown stays visible at the default WARNING level when the verdict is negative
    detail_fn = logger.info if verdict.final else logger.warning
    detail_fn(
        f"  Firmware: uefi={facts.booted_uefi}, secure_boot={facts.secure_boot}, "
        f"tpm_active={facts.tpm_active}, tpm_enabled={facts.tpm_enabled}, tpm_v2={facts.tpm_is_v2}"
    )
    detail_fn(f"  Memory: {facts.memory_mb:,} MB (ok={verdict.memory_ok})")
    detail_fn(
        f"  Checks: manufacturer={verdict.manufacturer_ok}, brand={verdict.brand_ok}, "
        f"model={verdict.model_ok}, platform={verdict.platform_ok}"
    )
    if verdict.retrieval_error:
        logger.warning(f"  Vendor records unavailable: {verdict.retrieval_error}")


# ============================================================================
# CHECKS
# ============================================================================

def _contains(haystack: str, needle: str, case_sensitive: bool) -> bool:
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.search(re.escape(needle), str(haystack), flags) is not None


def found_in_records(needle: str, records: Iterable[CompatibilityRecord], case_sensitive: bool = False) -> bool:
    """True if ``needle`` occurs in the text of any field of any record."""
    return any(
        _contains(value, needle, case_sensitive)
        for record in records
        for value in record.values()
    )


def evaluate_platform(facts: PlatformFacts, settings: CheckSettings) -> Tuple[bool, Optional[bool]]:
    """
    Evaluate the firmware requirements.

    Returns:
        Tuple of (platform_ok, memory_ok); memory_ok is None when the memory
        threshold does not apply to this kind of machine
    """
    firmware_ok = (
        facts.booted_uefi
        and facts.secure_boot
        and facts.tpm_active
        and facts.tpm_enabled
        and facts.tpm_is_v2
    )

    memory_ok = None
    if settings.memory_applies(facts.is_vm):
        memory_ok = facts.memory_mb >= settings.min_memory_mb

    return firmware_ok and memory_ok is not False, memory_ok


def select_vendor_url(identity: ProcessorIdentity, settings: CheckSettings) -> str:
    """
    Pick the supported-processor page for the identity's manufacturer.

    Raises:
        UnsupportedManufacturerError: If no page is configured for the manufacturer
    """
    url = settings.vendor_urls.get(identity.manufacturer)
    if url is None:
        raise UnsupportedManufacturerError(identity.manufacturer)
    return url


# ============================================================================
# DECISION LOGIC
# ============================================================================

def decide(
    identity: Optional[ProcessorIdentity],
    records: Union[RetrievalResult, Sequence[CompatibilityRecord]],
    facts: PlatformFacts,
    manufacturer_allowlist: Optional[Iterable[str]] = None,
    settings: Optional[CheckSettings] = None,
) -> CompatibilityVerdict:
    """
    Combine processor identity, vendor records and platform facts into a verdict.

    Args:
        identity: Normalized processor identity, or None if parsing failed
        records: Vendor records, or the RetrievalResult that produced them
        facts: Platform facts
        manufacturer_allowlist: Eligible manufacturers (defaults to settings)
        settings: Check settings (defaults to CheckSettings())

    Returns:
        CompatibilityVerdict

    Raises:
        ParseError: Physical machine without a complete identity
        UnsupportedManufacturerError: Physical machine whose manufacturer has no vendor page
    """
    settings = settings or CheckSettings()
    if manufacturer_allowlist is None:
        manufacturer_allowlist = settings.manufacturer_allowlist

    platform_ok, memory_ok = evaluate_platform(facts, settings)

    if facts.is_vm:
        # Virtual CPUs are not in the vendor lists; only the platform is checked
        verdict = CompatibilityVerdict(
            platform_ok=platform_ok,
            memory_ok=memory_ok,
            final=platform_ok,
            is_vm=True,
            processor=str(identity) if identity else None,
        )
        _log_verdict(verdict, facts)
        return verdict

    if identity is None:
        raise ParseError()
    select_vendor_url(identity, settings)

    retrieval_error = None
    if isinstance(records, RetrievalResult):
        retrieval_error = records.error
        records = records.records
    records = list(records)

    # Evaluate all three independently so each one is reported
    case_sensitive = settings.case_sensitive
    manufacturer_ok = any(
        _contains(entry, identity.manufacturer, case_sensitive) for entry in manufacturer_allowlist
    )
    brand_ok = found_in_records(identity.brand, records, case_sensitive)
    model_ok = found_in_records(identity.model, records, case_sensitive)

    verdict = CompatibilityVerdict(
        manufacturer_ok=manufacturer_ok,
        brand_ok=brand_ok,
        model_ok=model_ok,
        platform_ok=platform_ok,
        memory_ok=memory_ok,
        final=manufacturer_ok and brand_ok and model_ok and platform_ok,
        is_vm=False,
        processor=str(identity),
        records_checked=len(records),
        retrieval_error=retrieval_error,
    )
    _log_verdict(verdict, facts)
    return verdict


def check_compatibility(
    processor_name: str,
    facts: PlatformFacts,
    settings: Optional[CheckSettings] = None,
    fetcher: Optional[Fetcher] = None,
) -> CompatibilityVerdict:
    """
    Run a full compatibility check for one machine.

    Virtual machines are decided on platform facts alone and never trigger a
    fetch. Physical machines fetch exactly one vendor page, chosen by the
    processor manufacturer.

    Args:
        processor_name: Raw processor descriptive string
        facts: Platform facts
        settings: Check settings (defaults to CheckSettings())
        fetcher: Vendor page fetcher (defaults to fetch_compatibility_records)

    Returns:
        CompatibilityVerdict

    Raises:
        ParseError: Physical machine whose processor string could not be parsed
        UnsupportedManufacturerError: Manufacturer with no vendor page
        RetrievalError: Fetch failed and settings.abort_on_retrieval_failure is set
    """
    settings = settings or CheckSettings()
    if fetcher is None:
        fetcher = partial(
            fetch_compatibility_records,
            index=settings.table_index,
            timeout=settings.request_timeout,
        )

    identity = normalize(processor_name)

    if facts.is_vm:
        logger.debug("Virtual machine detected, skipping processor lookup")
        return decide(identity, [], facts, settings=settings)

    if identity is None:
        raise ParseError(processor_name)

    url = select_vendor_url(identity, settings)
    result = fetcher(url)

    if not result.ok and settings.abort_on_retrieval_failure:
        raise RetrievalError(url, result.error)

    return decide(identity, result, facts, settings=settings)
