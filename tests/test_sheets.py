"""Tests for locating sheets, headers and cells."""

import re

import pytest
from builders import make_workbook

from rfp.diagnostics import analyze_workbook_structure
from rfp.exceptions import StructuralError
from rfp.sheets import (
    SheetCell,
    find_header_cell,
    find_sheet,
    find_sheets,
    get_value,
    is_empty,
    iter_column,
    require_header,
)


@pytest.fixture
def workbook():
    return make_workbook({
        'Лист регистрации': {'C3': 'Команда', 'C4': 'Иванов'},
        'Кубок А': {'B4': 'Иванов'},
        'Группа 1': {},
        'группа 2': {},
    })


class TestFindSheet:
    """Tests for sheet lookup by title."""

    def test_literal_is_case_insensitive(self, workbook):
        assert find_sheet(workbook, 'ЛИСТ РЕГИСТРАЦИИ').title == 'Лист регистрации'

    def test_literal_requires_whole_title(self, workbook):
        assert find_sheet(workbook, 'Лист') is None

    def test_pattern(self, workbook):
        assert find_sheet(workbook, re.compile(r'^кубок [aа]$')).title == 'Кубок А'

    def test_pattern_without_match(self, workbook):
        assert find_sheet(workbook, re.compile(r'^кубок [bб]$')) is None

    def test_find_sheets_keeps_order(self, workbook):
        sheets = find_sheets(workbook, re.compile('группа'))
        assert [s.title for s in sheets] == ['Группа 1', 'группа 2']


class TestHeaders:
    """Tests for header lookup."""

    def test_find_header(self, workbook):
        sheet = workbook['Лист регистрации']
        assert find_header_cell(sheet, 'команда') == SheetCell('C', 3)

    def test_missing_header(self, workbook):
        assert find_header_cell(workbook['Кубок А'], 'Команда') is None

    def test_require_header(self, workbook):
        with pytest.raises(StructuralError, match='Команда'):
            require_header(workbook['Кубок А'], 'Команда')


class TestCells:
    """Tests for cell access helpers."""

    @pytest.mark.parametrize(
        'value,expected',
        [(None, True), ('', True), ('  ', True), (0, False), ('x', False)],
    )
    def test_is_empty(self, value, expected):
        assert is_empty(value) is expected

    def test_get_value(self, workbook):
        sheet = workbook['Лист регистрации']
        assert get_value(sheet, 'C4') == 'Иванов'
        assert get_value(sheet, 'B3') is None

    def test_get_value_outside_sheet_adds_no_cells(self, workbook):
        sheet = workbook['Кубок А']
        before = analyze_workbook_structure(workbook)['sheets']

        assert get_value(sheet, 'B64') is None
        assert get_value(sheet, 'R34') is None
        assert (sheet.max_row, sheet.max_column) == (4, 2)
        assert analyze_workbook_structure(workbook)['sheets'] == before

    def test_sheet_cell(self):
        cell = SheetCell('B', 4)
        assert cell.address == 'B4'
        assert cell.below(4).address == 'B8'

    def test_iter_column(self, workbook):
        sheet = workbook['Лист регистрации']
        cells = list(iter_column(sheet, SheetCell('C', 3)))
        assert cells == [(SheetCell('C', 3), 'Команда'), (SheetCell('C', 4), 'Иванов')]
