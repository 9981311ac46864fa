"""
Processor Name Normalizer

Turns a freeform processor descriptive string from hardware inventory, such as
"Intel(R) Core(TM) i7-10700K CPU @ 3.80GHz", into a structured
(manufacturer, brand, model) identity that can be looked up in the vendors'
supported processor tables.

Vendor naming is irregular across Intel, AMD and Qualcomm, so the brand/model
split is a fixed pipeline followed by an ordered list of manufacturer-scoped
repartition rules (PROCESSOR_RULES). Parsing is all-or-nothing: either all three
fields are resolved or normalize() returns None.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


# ============================================================================
# NAMING TABLES
# ============================================================================

# Cosmetic noise, removed in order
NOISE_PATTERNS = (
    re.compile(r"\((?:R|TM)\)|®|™", re.IGNORECASE),   # registered/trademark markers
    re.compile(r" CPU"),
    re.compile(r" @ \d+\.\d+GHz"),                    # clock speed suffix
    re.compile(r"^\d+th Gen "),                       # "11th Gen Intel Core ..."
    re.compile(r" \d+-Core Processor$"),              # "AMD Ryzen 5 3600 6-Core Processor"
)

# Recognized manufacturer tokens, checked in this order
MANUFACTURERS = ("Intel", "AMD", "Qualcomm")

# Intel sub-brands that identify the manufacturer when "Intel" itself is missing
INTEL_SUB_BRANDS = ("Pentium", "Celeron", "Xeon", "Core", "Atom", "Itanium")

_MANUFACTURER_PATTERNS = {
    name: re.compile(rf"\b{name}\b ?") for name in MANUFACTURERS
}
_INTEL_SUB_BRAND_PATTERN = re.compile(rf"\b(?:{'|'.join(INTEL_SUB_BRANDS)})\b")
_BRAND_MODEL_PATTERN = re.compile(r"^(\S+)\s+(.+)$")


class ProcessorIdentity(BaseModel):
    """Normalized processor identity; every field is non-empty."""
    manufacturer: str = Field(..., min_length=1, description="Processor manufacturer ('Intel', 'AMD', 'Qualcomm')")
    brand: str = Field(..., min_length=1, description="Brand or family (e.g., 'Core', 'Ryzen 5')")
    model: str = Field(..., min_length=1, description="Model number (e.g., 'i7-10700K', '3600')")

    class Config:
        """Pydantic configuration."""
        frozen = True

    def __str__(self) -> str:
        return f"{self.manufacturer} {self.brand} {self.model}"


# ============================================================================
# REPARTITION RULES
# ============================================================================

@dataclass(frozen=True)
class ProcessorRule:
    """
    One manufacturer-scoped repartition rule.

    Two kinds exist:
    - fold rules (``brand`` set): the pattern is matched at the start of the
      model; the matched marker moves from the model into the brand.
    - series rules (``series`` set): used only when the first-token split left
      brand and model empty; the pattern is matched against the whole cleaned
      text, which becomes the model, and the brand becomes ``series``.
    """
    name: str
    manufacturer: str
    pattern: Pattern[str]
    brand: Optional[str] = None
    series: Optional[str] = None

    def applies(self, manufacturer: str, brand: str, model: str) -> bool:
        if manufacturer != self.manufacturer:
            return False
        if self.series is not None:
            return not brand and not model
        return brand == self.brand

    def apply(self, text: str, brand: str, model: str) -> Tuple[str, str]:
        if self.series is not None:
            match = self.pattern.match(text)
            if match:
                return self.series, match.group(0)
            return brand, model

        match = self.pattern.match(model)
        if match:
            return f"{brand} {match.group(1)}", model[match.end():].strip()
        return brand, model


PROCESSOR_RULES = (
    ProcessorRule(
        name="ryzen-tier",
        manufacturer="AMD",
        brand="Ryzen",
        # Longest alternatives first so "Threadripper PRO" wins over "Threadripper"
        pattern=re.compile(r"^(Threadripper PRO|Threadripper|Embedded R2000 Series|Embedded|\d+ PRO|\d+)(?:\s+|$)"),
    ),
    ProcessorRule(
        name="athlon-ii",
        manufacturer="AMD",
        brand="Athlon",
        pattern=re.compile(r"^(II)(?:\s+|$)"),
    ),
    ProcessorRule(
        name="intel-n-series",
        manufacturer="Intel",
        series="N-series",
        pattern=re.compile(r"^N\d+$"),
    ),
    ProcessorRule(
        name="amd-a-series",
        manufacturer="AMD",
        series="A-series",
        pattern=re.compile(r"^A\d+-\d+"),
    ),
)


# ============================================================================
# PIPELINE
# ============================================================================

def clean_processor_name(raw: str) -> str:
    """
    Strip cosmetic noise (trademarks, clock speed, generation prefix, core count).

    Example:
        >>> clean_processor_name("Intel(R) Core(TM) i7-10700K CPU @ 3.80GHz")
        'Intel Core i7-10700K'
    """
    # WMI pads Win32_Processor.Name with trailing spaces
    text = " ".join(raw.split())
    for pattern in NOISE_PATTERNS:
        text = pattern.sub("", text)
    return " ".join(text.split())


def detect_manufacturer(text: str) -> Tuple[str, str]:
    """
    Detect the manufacturer of a cleaned processor name.

    Returns:
        Tuple of (manufacturer, remaining_text). The manufacturer is "" when it
        could not be resolved. An explicit manufacturer token is removed from
        the remaining text; an inferred Intel manufacturer leaves it untouched.
    """
    for name, pattern in _MANUFACTURER_PATTERNS.items():
        if pattern.search(text):
            return name, pattern.sub("", text).strip()

    if _INTEL_SUB_BRAND_PATTERN.search(text):
        return "Intel", text

    return "", text


def split_brand_model(text: str) -> Tuple[str, str]:
    """Split into (first token, rest); both empty if there are fewer than two tokens."""
    match = _BRAND_MODEL_PATTERN.match(text)
    if not match:
        return "", ""
    return match.group(1), match.group(2).strip()


def normalize(raw: str) -> Optional[ProcessorIdentity]:
    """
    Normalize a raw processor descriptive string.

    Args:
        raw: Processor string from hardware inventory

    Returns:
        ProcessorIdentity with all three fields set, or None if any field could
        not be resolved

    Examples:
        >>> normalize("AMD Ryzen 5 3600 6-Core Processor")
        ProcessorIdentity(manufacturer='AMD', brand='Ryzen 5', model='3600')
        >>> normalize("Genuine Processor") is None
        True
    """
    text = clean_processor_name(raw or "")
    manufacturer, text = detect_manufacturer(text)
    brand, model = split_brand_model(text)

    for rule in PROCESSOR_RULES:
        if rule.applies(manufacturer, brand, model):
            brand, model = rule.apply(text, brand, model)

    if not (manufacturer and brand and model):
        logger.warning(
            f"Could not parse processor name {raw!r} "
            f"(manufacturer={manufacturer!r}, brand={brand!r}, model={model!r})"
        )
        return None

    identity = ProcessorIdentity(manufacturer=manufacturer, brand=brand, model=model)
    logger.debug(f"Normalized {raw!r} -> {identity}")
    return identity
