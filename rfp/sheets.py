"""Locating sheets and header cells inside an openpyxl workbook."""

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from openpyxl.utils import column_index_from_string, get_column_letter
from openpyxl.utils.cell import coordinate_from_string
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from .exceptions import StructuralError
from .names import normalize_name

SheetQuery = Union[str, re.Pattern]


@dataclass(frozen=True)
class SheetCell:
    """Position of a cell: column letter and 1-based row."""
    column: str
    row: int

    @property
    def address(self) -> str:
        return f'{self.column}{self.row}'

    def below(self, offset: int = 1) -> 'SheetCell':
        return SheetCell(self.column, self.row + offset)


def _title_matches(title: str, query: SheetQuery) -> bool:
    normalized = normalize_name(title)
    if isinstance(query, re.Pattern):
        return query.search(normalized) is not None
    return normalized == normalize_name(query)


def find_sheet(workbook: Workbook, query: SheetQuery) -> Optional[Worksheet]:
    """
    First sheet whose normalized title equals a literal or matches a pattern.

    Returns None when nothing matches; callers decide whether that is fatal.

    Examples:
        find_sheet(wb, 'Лист регистрации')
        find_sheet(wb, re.compile(r'^кубок [aа]$'))
    """
    for worksheet in workbook.worksheets:
        if _title_matches(worksheet.title, query):
            return worksheet
    return None


def find_sheets(workbook: Workbook, query: SheetQuery) -> list[Worksheet]:
    """All matching sheets, in workbook order."""
    return [ws for ws in workbook.worksheets if _title_matches(ws.title, query)]


def find_header_cell(sheet: Worksheet, text: str) -> Optional[SheetCell]:
    """
    Locate a header by its text, scanning rows top to bottom.

    The comparison uses normalized text, so "Команда" matches "команда ".
    """
    wanted = normalize_name(text)
    for row in sheet.iter_rows():
        for cell in row:
            if is_empty(cell.value):
                continue
            if normalize_name(cell.value) == wanted:
                return SheetCell(get_column_letter(cell.column), cell.row)
    return None


def is_empty(value) -> bool:
    """True for a missing value or a whitespace-only string."""
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def get_value(sheet: Worksheet, address: str):
    """Raw value at an address like "B4"; never adds cells to the sheet."""
    column, row = coordinate_from_string(address)
    column_index = column_index_from_string(column)
    # sheet.cell() creates missing cells, which would grow max_row
    if row > sheet.max_row or column_index > sheet.max_column:
        return None
    return sheet.cell(row=row, column=column_index).value


def iter_column(sheet: Worksheet, start: SheetCell) -> Iterator[tuple[SheetCell, object]]:
    """Yield (cell, value) pairs going down from a cell to the sheet end."""
    for row in range(start.row, sheet.max_row + 1):
        cell = SheetCell(start.column, row)
        yield cell, get_value(sheet, cell.address)


def require_header(sheet: Worksheet, text: str) -> SheetCell:
    """Header cell or StructuralError."""
    header = find_header_cell(sheet, text)
    if header is None:
        raise StructuralError(f'Sheet "{sheet.title}": header "{text}" not found')
    return header
