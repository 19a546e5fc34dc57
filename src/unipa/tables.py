"""Table and cell decoding.

Rows are read in document order and cells are mapped to fields strictly by
position (cell 0 -> field A, cell 1 -> field B, ...). Header cells are not
consulted: their wording differs between page variants. This makes every
positional mapping sensitive to upstream column reordering.

A minimum-cell-count guard skips header and decoration rows:

    for cells in data_rows(table, min_cells=5):
        name, credits = cell_texts(cells)[:2]

Line-broken cells hold up to three values separated by <br>:

    <td>Programming I<br>Prof. A<br>Room 101</td>
    -> LineBrokenCell(primary="Programming I", secondary="Prof. A", tertiary="Room 101")
"""

import re
from collections.abc import Iterator, Sequence
from typing import NamedTuple

from bs4 import Tag

from src.unipa.locators import Candidates, select_all, select_all_first, select_one
from src.unipa.logging import get_logger
from src.unipa.text import (
    cell_lines,
    classify_by_keywords,
    element_text,
    optional_text,
)

log = get_logger(__name__)

BODY_ROWS = ("tbody tr",)

_LABEL_SEPARATOR = re.compile(r"[:：]")


class LineBrokenCell(NamedTuple):
    primary: str | None = None
    secondary: str | None = None
    tertiary: str | None = None


def table_rows(table: Tag, row_selectors: Candidates = BODY_ROWS) -> list[Tag]:
    """Rows of the first row selector that matches anything, in document order."""
    return select_all_first(table, row_selectors)


def row_cells(row: Tag, cell_selector: str = "td") -> list[Tag]:
    return select_all(row, cell_selector)


def data_rows(
    table: Tag,
    min_cells: int,
    row_selectors: Candidates = BODY_ROWS,
    cell_selector: str = "td",
) -> Iterator[list[Tag]]:
    """Yield the cell list of every row with at least min_cells cells."""
    skipped = 0
    for row in table_rows(table, row_selectors):
        cells = row_cells(row, cell_selector)
        if len(cells) < min_cells:
            skipped += 1
            continue
        yield cells
    if skipped:
        log.debug("table_rows_skipped", skipped=skipped, min_cells=min_cells)


def cell_texts(cells: Sequence[Tag]) -> list[str]:
    """Trimmed text of each cell, positions preserved."""
    return [element_text(cell) for cell in cells]


def cell_text(cells: Sequence[Tag], index: int) -> str:
    """Text of cell[index], or "" when the row is shorter."""
    if index < len(cells):
        return element_text(cells[index])
    return ""


def decode_line_broken_cell(cell: Tag | str) -> LineBrokenCell:
    """Assign line i of a <br>-separated cell to sub-field i; missing lines are None."""
    lines = cell_lines(cell)
    values = [optional_text(lines[i]) if i < len(lines) else None for i in range(3)]
    return LineBrokenCell(*values)


def labelled_values(section: Tag) -> list[tuple[str, str]]:
    """(label, value) pairs of a detail panel, in document order.

    Two-cell rows (<th>label</th><td>value</td>) come first, then text
    lines written as "label: value" or "label：value".
    """
    pairs: list[tuple[str, str]] = []
    for row in select_all(section, "tr"):
        cells = row_cells(row, "th, td")
        if len(cells) == 2:
            label, value = cell_texts(cells)
            pairs.append((label, value))
    for line in section.get_text("\n").split("\n"):
        line = line.strip()
        match = _LABEL_SEPARATOR.search(line)
        if match:
            pairs.append((line[: match.start()].strip(), line[match.end() :].strip()))
    return pairs


def assign_labelled(
    pairs: Sequence[tuple[str, str]],
    rules: Sequence[tuple[tuple[str, ...], str]],
) -> dict[str, str]:
    """Map labelled values onto field names.

    Each label goes to the first rule with a keyword contained in it; the
    first value seen for a field wins.
    """
    fields: dict[str, str] = {}
    for label, value in pairs:
        field = classify_by_keywords(label, rules, None)
        if field is not None and field not in fields:
            fields[field] = value
    return fields


def header_value_cells(table: Tag) -> list[tuple[str, Tag]]:
    """(header text, value cell) for every row holding both a <th> and a <td>.

    Only the first <th> and first <td> of a row are used. The value cell is
    returned as-is so callers can decode line-broken values.
    """
    pairs: list[tuple[str, Tag]] = []
    for row in select_all(table, "tr"):
        header = select_one(row, "th")
        value = select_one(row, "td")
        if header is not None and value is not None:
            pairs.append((element_text(header), value))
    return pairs
