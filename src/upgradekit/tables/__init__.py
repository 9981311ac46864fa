"""
Vendor table retrieval and record extraction.
"""

from .extractor import (
    extract,
    placeholder_titles,
    Cell,
    Row,
    Table,
    CompatibilityRecord,
)
from .remote import (
    fetch_compatibility_records,
    fetch_html,
    parse_tables,
    RetrievalResult,
)

__all__ = [
    # Primary API
    "extract",
    "fetch_compatibility_records",
    "RetrievalResult",

    # Table structure
    "Cell",
    "Row",
    "Table",
    "CompatibilityRecord",

    # Helpers
    "placeholder_titles",
    "fetch_html",
    "parse_tables",
]
