"""HTML table extraction for the government registries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bs4 import BeautifulSoup

if TYPE_CHECKING:
    from bs4 import Tag

    from guardianbee.domain.ports.fetching import RawRecord


def _cell_text(cell: Tag) -> str:
    link = cell.select_one("a")
    text = link.get_text(" ", strip=True) if link is not None else ""
    return text or cell.get_text(" ", strip=True)


def _rows(soup: BeautifulSoup, selector: str, cell_selector: str) -> list[list[str]]:
    rows: list[list[str]] = []
    for row in soup.select(selector):
        cells = [_cell_text(cell) for cell in row.select(cell_selector)]
        if cells and any(cells):
            rows.append(cells)
    return rows


def _zip(columns: tuple[str, ...], cells: list[str], page_url: str) -> dict[str, str]:
    record = {
        column: (cells[index] if index < len(cells) else "")
        for index, column in enumerate(columns)
    }
    record["page_url"] = page_url
    return record


def parse_crc(html: str, page_url: str) -> list[RawRecord]:
    """Sanction list rendered as ARIA rows: county, target, violation, date."""

    soup = BeautifulSoup(html, "html.parser")
    columns = ("county", "target", "violation", "date")
    rows = _rows(soup, '[role="row"]', '[role="cell"]') or _rows(soup, "table tbody tr", "td")
    return [_zip(columns, cells, page_url) for cells in rows]


def parse_ncwis(html: str, page_url: str) -> list[RawRecord]:
    """Penalty table: name, category, violation, date, location."""

    soup = BeautifulSoup(html, "html.parser")
    columns = ("name", "category", "violation", "date", "location")
    return [_zip(columns, cells, page_url) for cells in _rows(soup, "table tbody tr", "td")]


def parse_ece(html: str, page_url: str) -> list[RawRecord]:
    """Punishment grid: kindergarten, violation, date, location."""

    soup = BeautifulSoup(html, "html.parser")
    columns = ("kindergarten", "violation", "date", "location")
    rows = _rows(soup, "#gvPunish tr", "td") or _rows(soup, "table tbody tr", "td")
    return [_zip(columns, cells, page_url) for cells in rows]


def parse_kindyinfo(html: str, page_url: str) -> list[RawRecord]:
    """Blog table: date, city, district, name, count and an optional penalty text."""

    soup = BeautifulSoup(html, "html.parser")
    columns = ("date", "city", "district", "name", "count", "penalty")
    return [
        _zip(columns, cells, page_url)
        for cells in _rows(soup, "table tr", "td")
        if len(cells) >= 5
    ]
