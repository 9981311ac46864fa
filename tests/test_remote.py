"""Tests for vendor page retrieval."""

import pytest
import requests

from upgradekit.tables import remote
from upgradekit.tables import RetrievalResult, fetch_compatibility_records, fetch_html, parse_tables

URL = "https://example.test/supported-intel-processors"

VENDOR_PAGE = """
<html><body>
  <table>
    <thead><tr><th>Manufacturer</th><th>Brand</th><th>Model</th></tr></thead>
    <tbody>
      <tr><td>Intel®</td><td>Core™</td><td>i7-10700K</td></tr>
      <tr><td>Intel®</td><td>Core™<br/>Xeon®</td><td>W-1290</td></tr>
    </tbody>
  </table>
  <table><tr><td>unrelated</td></tr></table>
</body></html>
"""


class FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


def test_parse_tables_keeps_cell_kinds():
    tables = parse_tables(VENDOR_PAGE)
    assert len(tables) == 2
    header, first, second = tables[0]
    assert all(cell.is_header for cell in header)
    assert [cell.text for cell in first] == ["Intel®", "Core™", "i7-10700K"]
    assert not first[0].is_header
    # <br> inside a cell does not glue words together
    assert second[1].text == "Core™ Xeon®"


def test_fetch_html_sends_user_agent(monkeypatch):
    seen = {}

    def fake_get(url, headers=None, timeout=None):
        seen.update(url=url, headers=headers, timeout=timeout)
        return FakeResponse("<html></html>")

    monkeypatch.setattr(remote.requests, "get", fake_get)
    assert fetch_html(URL, timeout=5) == "<html></html>"
    assert seen["url"] == URL
    assert seen["timeout"] == 5
    assert "User-Agent" in seen["headers"]


def test_fetch_html_raises_on_http_error(monkeypatch):
    monkeypatch.setattr(remote.requests, "get", lambda *a, **kw: FakeResponse("", status_code=404))
    with pytest.raises(requests.HTTPError):
        fetch_html(URL)


def test_fetch_compatibility_records_success(monkeypatch):
    monkeypatch.setattr(remote, "fetch_html", lambda url, timeout: VENDOR_PAGE)
    result = fetch_compatibility_records(URL)
    assert result.ok
    assert result.url == URL
    assert result.records[0] == {"Manufacturer": "Intel®", "Brand": "Core™", "Model": "i7-10700K"}
    assert len(result.records) == 2


def test_fetch_compatibility_records_network_failure(monkeypatch):
    def boom(url, timeout):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(remote, "fetch_html", boom)
    monkeypatch.setattr(remote, "check_internet", lambda: True)
    result = fetch_compatibility_records(URL)
    assert not result.ok
    assert result.records == []
    assert "connection refused" in result.error


def test_fetch_compatibility_records_offline(monkeypatch):
    def boom(url, timeout):
        raise requests.Timeout("timed out")

    monkeypatch.setattr(remote, "fetch_html", boom)
    monkeypatch.setattr(remote, "check_internet", lambda: False)
    result = fetch_compatibility_records(URL)
    assert result.error.startswith("connectivity check failed")


def test_fetch_compatibility_records_missing_table(monkeypatch):
    monkeypatch.setattr(remote, "fetch_html", lambda url, timeout: VENDOR_PAGE)
    result = fetch_compatibility_records(URL, index=5)
    assert not result.ok
    assert "index 5" in result.error


def test_failure_constructor():
    result = RetrievalResult.failure(URL, "boom")
    assert result == RetrievalResult(url=URL, records=[], error="boom")
    assert not result.ok


def test_nested_table_rows_stay_with_their_own_table():
    html = (
        "<table><tr><th>Model</th></tr>"
        "<tr><td><table><tr><td>inner</td></tr></table></td></tr></table>"
    )
    outer, inner = parse_tables(html)
    assert len(outer) == 2
    assert outer[0][0].is_header
    assert [[cell.text for cell in row] for row in inner] == [["inner"]]
