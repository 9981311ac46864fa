"""
Table Extractor

Converts parsed HTML tables into CompatibilityRecords: one ordered
``{column title: cell text}`` mapping per data row.

Vendor pages do not share a schema, so column titles are discovered while
walking the rows. A row whose first cell is a header cell replaces the current
titles; a table without any header row gets placeholder titles P1..Pn sized
from its first data row. A row without cells is a data row and yields {}.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Sequence

# Extra placeholder titles beyond the first data row's width, tolerating wider rows later on
PLACEHOLDER_SLACK = 2


@dataclass(frozen=True)
class Cell:
    """One table cell; ``is_header`` is True for <th> cells."""
    is_header: bool
    text: str


Row = List[Cell]
Table = List[Row]
CompatibilityRecord = Dict[str, str]


def placeholder_titles(width: int) -> List[str]:
    """Synthesize "P1".."Pn" titles for a headerless table."""
    return [f"P{i}" for i in range(1, width + PLACEHOLDER_SLACK + 1)]


def _iter_records(table: Sequence[Row]) -> Iterator[CompatibilityRecord]:
    titles: List[str] = []

    for row in table:
        if row and row[0].is_header:
            titles = [cell.text.strip() for cell in row]
            continue

        if not titles:
            titles = placeholder_titles(len(row))

        record: CompatibilityRecord = {}
        for title, cell in zip(titles, row):
            if not title:
                continue
            # Duplicate titles: the later cell wins
            record[title] = cell.text.strip()
        yield record


def extract(tables: Sequence[Table], index: int) -> Iterator[CompatibilityRecord]:
    """
    Extract records from the table at ``index``.

    Args:
        tables: Tables in document order
        index: Position of the table to read

    Returns:
        Iterator yielding one record per data row, in document order. Calling
        extract() again starts a fresh pass.

    Raises:
        IndexError: If ``index`` is out of range (raised immediately)

    Example:
        >>> table = [[Cell(True, "Model"), Cell(True, "Status")],
        ...          [Cell(False, "i7-10700K"), Cell(False, "Supported")]]
        >>> list(extract([table], 0))
        [{'Model': 'i7-10700K', 'Status': 'Supported'}]
    """
    table = tables[index]
    return _iter_records(table)
