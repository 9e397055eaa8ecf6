"""Unit tests for validation functions."""

import pytest
from builders import ROSTER_PLAYERS, make_workbook

from rfp.models import Cup, CupPosition, TeamEntry, TournamentResult
from rfp.schemas import ParserConfig
from rfp.validators import (
    parse_cup_position,
    parse_cup_value,
    validate_crossover,
    validate_document_structure,
    validate_results,
    validate_teams,
)


def make_result(team, cup=None, position=None, qualifying_wins=2, points=2, wins=2, losses=3):
    return TournamentResult(
        team=team,
        cup=cup,
        cup_position=position,
        qualifying_wins=qualifying_wins,
        points=points,
        wins=wins,
        losses=losses,
    )


class TestParseCupValue:
    """Tests for cup cells."""

    @pytest.mark.parametrize(
        'value,expected',
        [
            ('A', Cup.A),
            ('a', Cup.A),
            ('А', Cup.A),
            (' б ', Cup.B),
            ('В', Cup.B),
            ('B', Cup.B),
            ('с', Cup.C),
            ('C', Cup.C),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_cup_value(value) == expected

    @pytest.mark.parametrize('value', [None, '', 'D', 'AB', 1])
    def test_invalid(self, value):
        assert parse_cup_value(value) is None


class TestParseCupPosition:
    """Tests for position cells."""

    @pytest.mark.parametrize(
        'value,expected',
        [
            ('1', CupPosition.WINNER),
            (1, CupPosition.WINNER),
            (2.0, CupPosition.RUNNER_UP),
            (' 3 ', CupPosition.THIRD_PLACE),
            ('1/2', CupPosition.SEMI_FINAL),
            ('1 / 4', CupPosition.QUARTER_FINAL),
            ('1/8', CupPosition.ROUND_OF_16),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_cup_position(value) == expected

    @pytest.mark.parametrize('value', [None, '', '4', '1/3', 0.5, True])
    def test_invalid(self, value):
        assert parse_cup_position(value) is None


class TestDocumentStructure:
    """Tests for the pre-parse sheet check."""

    def test_complete_workbook(self):
        workbook = make_workbook({
            'Лист регистрации': {},
            'Итоги швейцарки': {},
            'Кубок А': {},
            'Кубок Б': {},
        })
        assert validate_document_structure(workbook, ParserConfig()) == []

    def test_groups_satisfy_qualifying(self):
        workbook = make_workbook({
            'Лист регистрации': {},
            'Группа 1': {},
            'Кубок A': {},
            'Кубок B': {},
        })
        assert validate_document_structure(workbook, ParserConfig()) == []

    def test_reports_every_missing_sheet(self):
        workbook = make_workbook({'Кубок А': {}})
        errors = validate_document_structure(workbook, ParserConfig())

        assert len(errors) == 3
        assert 'Registration sheet not found' in errors[0]
        assert 'Кубок B' in errors[1]
        assert 'qualifying' in errors[2]

    def test_required_cups_configurable(self):
        workbook = make_workbook({'Лист регистрации': {}, 'Итоги швейцарки': {}, 'Кубок А': {}})
        assert validate_document_structure(workbook, ParserConfig(required_cups=['A'])) == []

    def test_manual_sheet_alone(self):
        workbook = make_workbook({'Ручной ввод': {}})
        assert validate_document_structure(workbook, ParserConfig()) == []


class TestTeamsValidation:
    """Tests for registered team sanity checks."""

    def test_valid_teams(self):
        teams = [
            TeamEntry(1, (ROSTER_PLAYERS[0], ROSTER_PLAYERS[1])),
            TeamEntry(2, (ROSTER_PLAYERS[2],)),
        ]
        assert validate_teams(teams) == []

    def test_player_in_two_teams(self):
        teams = [
            TeamEntry(1, (ROSTER_PLAYERS[0], ROSTER_PLAYERS[1])),
            TeamEntry(2, (ROSTER_PLAYERS[1], ROSTER_PLAYERS[2])),
        ]
        warnings = validate_teams(teams)
        assert warnings == ['Петров Петр is registered in teams #1 and #2']

    def test_same_team_twice(self):
        teams = [TeamEntry(1, (ROSTER_PLAYERS[0],)), TeamEntry(3, (ROSTER_PLAYERS[0],))]
        warnings = validate_teams(teams)
        assert 'Teams #1 and #3 have the same players' in warnings


class TestCrossoverValidation:
    """Tests for crossover outcomes against cups."""

    def test_consistent(self):
        assert validate_crossover({1: True, 2: False}, {1: Cup.A, 2: Cup.B}) == []

    def test_promoted_team_not_in_cup_a(self):
        warnings = validate_crossover({1: True}, {1: Cup.B})
        assert warnings == ['Team #1 won the crossover but is in cup B']

    def test_eliminated_team_in_cup_a(self):
        warnings = validate_crossover({2: False}, {2: Cup.A})
        assert warnings == ['Team #2 lost the crossover but is in cup A']


class TestResultsValidation:
    """Tests for computed result sanity checks."""

    def test_valid(self):
        team = TeamEntry(1, (ROSTER_PLAYERS[0],))
        results = [
            make_result(team, Cup.A, CupPosition.WINNER, 5, 10, 8, 0),
            make_result(TeamEntry(2, (ROSTER_PLAYERS[1],))),
        ]
        assert validate_results(results) == []

    def test_cup_without_position(self):
        warnings = validate_results([make_result(TeamEntry(1, (ROSTER_PLAYERS[0],)), cup=Cup.B)])
        assert len(warnings) == 1
        assert 'cup B but position -' in warnings[0]

    def test_wins_below_qualifying(self):
        result = make_result(TeamEntry(1, (ROSTER_PLAYERS[0],)), qualifying_wins=4, wins=2)
        assert 'fewer than 4 qualifying wins' in validate_results([result])[0]
