"""
Vendor Page Retrieval

Fetches a vendor's supported-processor page over HTTPS and runs its HTML tables
through the table extractor.

A failed fetch is not an exception at this level: fetch_compatibility_records()
always returns a RetrievalResult, and a failed result simply carries no records
so that brand/model lookups evaluate to False downstream.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import requests
from bs4 import BeautifulSoup

from .extractor import Cell, Row, Table, CompatibilityRecord, extract
from ..utils import check_internet

logger = logging.getLogger(__name__)

# ============================================================================
# RETRIEVAL CONSTANTS
# ============================================================================

DEFAULT_TIMEOUT = 30  # seconds
USER_AGENT = "Mozilla/5.0 (compatible; upgradekit/0.1)"

# The supported processor list is the first table on each vendor page
DEFAULT_TABLE_INDEX = 0


# ============================================================================
# RESULT
# ============================================================================

@dataclass
class RetrievalResult:
    """Outcome of fetching and extracting one vendor table."""

    url: str
    records: List[CompatibilityRecord] = field(default_factory=list)
    error: Optional[str] = None     # None = success

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, url: str, error: str) -> "RetrievalResult":
        return cls(url=url, records=[], error=error)


# ============================================================================
# FETCH AND PARSE
# ============================================================================

def fetch_html(url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """
    Fetch a page and return its decoded body.

    Raises:
        requests.RequestException: On connection errors, timeouts or HTTP error status
    """
    resp = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
    resp.raise_for_status()
    return resp.text


def parse_tables(html: str) -> List[Table]:
    """
    Parse every <table> of an HTML document into rows of Cells.

    Cell text is whitespace-joined so that line breaks inside a cell
    (e.g. "Core™<br>i7-10700K") do not glue words together.
    """
    soup = BeautifulSoup(html, "html.parser")
    tables: List[Table] = []

    for table_tag in soup.find_all("table"):
        rows: Table = []
        for tr in table_tag.find_all("tr"):
            if tr.find_parent("table") is not table_tag:
                # Row of a nested table; listed with that table instead
                continue
            row: Row = [
                Cell(is_header=(cell.name == "th"), text=cell.get_text(" ", strip=True))
                for cell in tr.find_all(["th", "td"], recursive=False)
            ]
            rows.append(row)
        tables.append(rows)

    return tables


def fetch_compatibility_records(
    url: str,
    index: int = DEFAULT_TABLE_INDEX,
    timeout: float = DEFAULT_TIMEOUT,
) -> RetrievalResult:
    """
    Fetch a vendor page and extract the records of one of its tables.

    Args:
        url: Vendor page URL
        index: Table position on the page
        timeout: Request timeout in seconds

    Returns:
        RetrievalResult with the extracted records, or a failed result
        describing why no records are available
    """
    logger.debug(f"Fetching supported processor list from {url}")

    try:
        html = fetch_html(url, timeout=timeout)
    except requests.RequestException as e:
        reason = str(e) if check_internet() else f"connectivity check failed, host may be offline ({e})"
        logger.warning(f"Could not fetch {url}: {reason}")
        return RetrievalResult.failure(url, reason)

    try:
        records = list(extract(parse_tables(html), index))
    except IndexError:
        reason = f"page has no table at index {index}"
        logger.warning(f"Could not extract records from {url}: {reason}")
        return RetrievalResult.failure(url, reason)

    logger.debug(f"Extracted {len(records)} records from {url}")
    return RetrievalResult(url=url, records=records)
