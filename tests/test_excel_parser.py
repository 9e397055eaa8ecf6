"""Tests for the registration and manual results sheets."""

import asyncio
import io

import pytest
from builders import make_workbook, registration_cells, table_cells

from rfp.exceptions import (
    InvalidCellValue,
    MissingCellValue,
    PlayerAmbiguous,
    PlayerNotFound,
    SheetValidationError,
    StructuralError,
)
from rfp.excel_parser import load_workbook, parse_manual_results, parse_registration_sheet
from rfp.models import Cup, CupPosition, Player
from rfp.players import PlayerResolver
from rfp.roster import DataFrameRoster

MANUAL_HEADERS = ['Команда', 'Кубок', 'Позиция', 'Очки', 'победы']


class TestRegistrationSheet:
    """Tests for reading registered teams."""

    def test_reads_teams_in_order(self, resolver):
        workbook = make_workbook({
            'Лист регистрации': registration_cells(
                ['Иванов, Петров', 'Сидоров Олег, Смирнов', 'Кузнецов']
            ),
        })
        teams = asyncio.run(parse_registration_sheet(workbook, resolver))

        assert [t.order_num for t in teams] == [1, 2, 3]
        assert [sorted(t.player_ids) for t in teams] == [[1, 2], [3, 4], [5]]

    def test_stops_at_first_empty_cell(self, resolver):
        cells = registration_cells(['Иванов', 'Петров'])
        cells['B6'] = 'Сидоров'
        workbook = make_workbook({'Лист регистрации': cells})

        teams = asyncio.run(parse_registration_sheet(workbook, resolver))
        assert len(teams) == 2

    def test_skips_cells_without_names(self, resolver):
        workbook = make_workbook({
            'Лист регистрации': registration_cells(['Иванов', ' , ', 'Петров']),
        })
        teams = asyncio.run(parse_registration_sheet(workbook, resolver))
        assert [t.order_num for t in teams] == [1, 2]
        assert teams[1].player_names == ['Петров Петр']

    def test_idempotent(self, resolver):
        workbook = make_workbook({
            'Лист регистрации': registration_cells(['Иванов, Петров', 'Сидоров', 'Попов']),
        })
        first = asyncio.run(parse_registration_sheet(workbook, resolver))
        second = asyncio.run(parse_registration_sheet(workbook, resolver))
        assert first == second

    def test_collects_every_error(self):
        roster = DataFrameRoster.from_players(
            [Player(1, 'Смирнов Иван'), Player(2, 'Смирнов Петр'), Player(3, 'Орлов Олег')]
        )
        workbook = make_workbook({
            'Лист регистрации': registration_cells(['Орлов, Неизвестный', 'Смирнов', 'Никто']),
        })

        with pytest.raises(SheetValidationError) as exc_info:
            asyncio.run(parse_registration_sheet(workbook, PlayerResolver(roster)))

        error = exc_info.value
        assert error.sheet_title == 'Лист регистрации'
        assert [type(e) for e in error.errors] == [PlayerNotFound, PlayerAmbiguous, PlayerNotFound]
        assert [e.cell for e in error.errors] == ['B3', 'B4', 'B5']
        assert len(str(error).splitlines()) == 4
        assert error.messages[0].startswith('B3: player "Неизвестный"')

    def test_rejects_more_than_four_players(self, resolver):
        workbook = make_workbook({
            'Лист регистрации': registration_cells(
                ['Иванов, Петров', 'Егоров, Павлов, Козлов, Степанов, Николаев']
            ),
        })
        with pytest.raises(SheetValidationError) as exc_info:
            asyncio.run(parse_registration_sheet(workbook, resolver))

        (error,) = exc_info.value.errors
        assert isinstance(error, InvalidCellValue)
        assert error.cell == 'B4'
        assert 'at most 4 players' in str(error)

    def test_four_players_allowed(self, resolver):
        workbook = make_workbook({
            'Лист регистрации': registration_cells(['Егоров, Павлов, Козлов, Степанов']),
        })
        (team,) = asyncio.run(parse_registration_sheet(workbook, resolver))
        assert len(team.players) == 4

    def test_missing_sheet(self, resolver):
        workbook = make_workbook({'Кубок А': {}})
        with pytest.raises(StructuralError, match='Registration sheet not found'):
            asyncio.run(parse_registration_sheet(workbook, resolver))

    def test_missing_header(self, resolver):
        workbook = make_workbook({'Лист регистрации': {'B2': 'Игроки'}})
        with pytest.raises(StructuralError, match='Команда'):
            asyncio.run(parse_registration_sheet(workbook, resolver))


class TestManualResults:
    """Tests for the manual results sheet."""

    def test_no_manual_sheet(self, resolver):
        workbook = make_workbook({'Лист регистрации': {}})
        assert asyncio.run(parse_manual_results(workbook, resolver)) is None

    def test_reads_results(self, resolver):
        workbook = make_workbook({
            'Ручной ввод': table_cells(
                MANUAL_HEADERS,
                [
                    ('Иванов, Петров', 'А', 1, 12, 5),
                    ('Сидоров', 'Б', '1/2', 4, 3),
                    ('Смирнов', None, None, 2, 2),
                ],
            ),
        })
        results = asyncio.run(parse_manual_results(workbook, resolver))

        winner, semi_finalist, no_cup = results
        assert winner.team.player_ids == frozenset({1, 2})
        assert (winner.cup, winner.cup_position) == (Cup.A, CupPosition.WINNER)
        assert (winner.points, winner.wins, winner.losses) == (12, 8, 0)

        assert (semi_finalist.cup, semi_finalist.cup_position) == (Cup.B, CupPosition.SEMI_FINAL)
        assert (semi_finalist.wins, semi_finalist.losses) == (4, 3)

        assert no_cup.cup is None and no_cup.cup_position is None
        assert (no_cup.points, no_cup.qualifying_wins, no_cup.wins, no_cup.losses) == (2, 2, 2, 3)
        assert [r.team.order_num for r in results] == [1, 2, 3]

    def test_wins_column_is_optional(self, resolver):
        workbook = make_workbook({
            'Ручной ввод': table_cells(MANUAL_HEADERS[:4], [('Иванов', 'C', '2', 3)]),
        })
        (result,) = asyncio.run(parse_manual_results(workbook, resolver))
        assert result.qualifying_wins == 0
        assert (result.wins, result.losses) == (2, 6)

    def test_collects_row_errors(self, resolver):
        workbook = make_workbook({
            'Ручной ввод': table_cells(
                MANUAL_HEADERS,
                [
                    ('Неизвестный', 'D', '1/3', 'x', None),
                    ('Иванов', 'A', None, 5, 1),
                ],
            ),
        })
        with pytest.raises(SheetValidationError) as exc_info:
            asyncio.run(parse_manual_results(workbook, resolver))

        errors = exc_info.value.errors
        assert [(type(e), e.cell) for e in errors] == [
            (PlayerNotFound, 'B3'),
            (InvalidCellValue, 'C3'),
            (InvalidCellValue, 'D3'),
            (InvalidCellValue, 'E3'),
            (MissingCellValue, 'D4'),
        ]

    def test_rejects_more_than_four_players(self, resolver):
        workbook = make_workbook({
            'Ручной ввод': table_cells(
                MANUAL_HEADERS,
                [('Егоров, Павлов, Козлов, Степанов, Николаев', 'A', 1, 12, 5)],
            ),
        })
        with pytest.raises(SheetValidationError) as exc_info:
            asyncio.run(parse_manual_results(workbook, resolver))

        (error,) = exc_info.value.errors
        assert (type(error), error.cell) == (InvalidCellValue, 'B3')

    def test_missing_points(self, resolver):
        workbook = make_workbook({
            'Ручной ввод': table_cells(MANUAL_HEADERS, [('Иванов', 'A', 1, None, 5)]),
        })
        with pytest.raises(SheetValidationError) as exc_info:
            asyncio.run(parse_manual_results(workbook, resolver))
        assert isinstance(exc_info.value.errors[0], MissingCellValue)

    def test_missing_required_header(self, resolver):
        workbook = make_workbook({
            'Ручной ввод': table_cells(['Команда', 'Кубок', 'Позиция'], [('Иванов', 'A', 1)]),
        })
        with pytest.raises(StructuralError, match='Очки'):
            asyncio.run(parse_manual_results(workbook, resolver))


class TestLoadWorkbook:
    """Tests for opening workbooks."""

    def test_from_bytes(self):
        buffer = io.BytesIO()
        make_workbook({'Лист регистрации': {'B2': 'Команда'}}).save(buffer)

        workbook = load_workbook(buffer.getvalue())
        assert workbook.sheetnames == ['Лист регистрации']

    def test_from_path(self, tmp_path):
        path = tmp_path / 'cup.xlsx'
        make_workbook({'Кубок А': {'B4': 'Иванов'}}).save(path)

        workbook = load_workbook(path)
        assert workbook['Кубок А']['B4'].value == 'Иванов'
