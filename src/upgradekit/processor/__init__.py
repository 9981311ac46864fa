"""
Processor name normalization.

Converts hardware-inventory processor strings into (manufacturer, brand, model).
"""

from .normalizer import (
    normalize,
    clean_processor_name,
    detect_manufacturer,
    split_brand_model,
    ProcessorIdentity,
    ProcessorRule,
    PROCESSOR_RULES,
    MANUFACTURERS,
)

__all__ = [
    "normalize",
    "ProcessorIdentity",

    # Pipeline steps (for testing and diagnostics)
    "clean_processor_name",
    "detect_manufacturer",
    "split_brand_model",
    "ProcessorRule",
    "PROCESSOR_RULES",
    "MANUFACTURERS",
]
