"""Top-level tournament parsing: from a workbook to per-team results."""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Sequence

from openpyxl.workbook.workbook import Workbook

from .bracket import decode_bracket
from .config import get_config
from .constants import CUP_SHEET_PATTERNS
from .crossover import find_crossover_sheet, parse_crossover_sheet
from .excel_parser import load_workbook, parse_manual_results, parse_registration_sheet
from .exceptions import CellError, SheetValidationError, StructuralError
from .models import (
    Cup,
    CupPosition,
    QualifyingResult,
    TeamEntry,
    TournamentCategory,
    TournamentResult,
)
from .players import PlayerResolver
from .qualifying import parse_qualifying_stage
from .roster import RosterLookup
from .schemas import ParserConfig, TournamentResultRecord
from .scoring import get_points, get_points_by_qualifying_stage
from .sheets import find_sheet
from .validators import (
    validate_crossover,
    validate_document_structure,
    validate_results,
    validate_teams,
)
from .wins_losses import calculate_wins_and_losses

logger = logging.getLogger('rfp.parser')


class TournamentParser:
    """
    Turns a tournament workbook into rating results.

    One parse() call either returns the result of every registered team or
    raises; nothing is returned for a partially valid workbook.
    """

    def __init__(
        self,
        roster: RosterLookup,
        category: int,
        config: Optional[ParserConfig] = None,
    ):
        self.resolver = PlayerResolver(roster)
        self.category = TournamentCategory(int(category))
        self.config = config or get_config()

    async def parse(self, workbook: Workbook) -> list[TournamentResult]:
        """
        Parse a workbook.

        Raises:
            StructuralError: A required sheet or header is missing
            NoQualifyingData: No qualifying results found
            UnsupportedGridSize: A cup sheet has an unknown layout
            SheetValidationError: Cell-level errors in one sheet
        """
        structure_errors = validate_document_structure(workbook, self.config)
        if structure_errors:
            raise StructuralError('\n'.join(structure_errors))

        manual_results = await parse_manual_results(workbook, self.resolver, self.config)
        if manual_results is not None:
            self._log_warnings(validate_results(manual_results))
            return manual_results

        teams = await parse_registration_sheet(workbook, self.resolver, self.config)
        self._log_warnings(validate_teams(teams))

        qualifying = await parse_qualifying_stage(workbook, self.resolver, teams, self.config)
        self._check_qualifying_complete(workbook, teams, qualifying)

        cups, positions = await self._decode_cups(workbook, teams)

        crossover_sheet = find_crossover_sheet(workbook, self.config)
        if crossover_sheet is not None:
            logger.info(f'Crossover sheet: "{crossover_sheet.title}"')
            crossover = await parse_crossover_sheet(crossover_sheet, self.resolver, teams)
            self._log_warnings(validate_crossover(crossover, cups))

        results = [
            self._build_result(
                team,
                qualifying[team.order_num],
                cups.get(team.order_num),
                positions.get(team.order_num),
                len(teams),
            )
            for team in teams
        ]
        self._log_warnings(validate_results(results))

        logger.info(f'Parsed {len(results)} teams (category {self.category.value})')
        return results

    def _check_qualifying_complete(
        self,
        workbook: Workbook,
        teams: Sequence[TeamEntry],
        qualifying: dict[int, QualifyingResult],
    ) -> None:
        """Every registered team must have played the qualifying stage."""
        errors = [
            CellError(f'team {team} has no qualifying stage result')
            for team in teams
            if team.order_num not in qualifying
        ]
        if errors:
            swiss_sheet = find_sheet(workbook, self.config.swiss_sheet_name)
            title = swiss_sheet.title if swiss_sheet is not None else self.config.group_sheet_marker
            raise SheetValidationError(title, errors)

    async def _decode_cups(
        self,
        workbook: Workbook,
        teams: Sequence[TeamEntry],
    ) -> tuple[dict[int, Cup], dict[int, CupPosition]]:
        """Decode every cup sheet present; a team may play in one cup only."""
        teams_by_num = {team.order_num: team for team in teams}
        cups: dict[int, Cup] = {}
        positions: dict[int, CupPosition] = {}

        for cup, pattern in CUP_SHEET_PATTERNS.items():
            sheet = find_sheet(workbook, pattern)
            if sheet is None:
                logger.info(f'No sheet for cup {cup.value}')
                continue

            decoded = await decode_bracket(sheet, self.resolver, teams)

            errors: list[CellError] = []
            for order_num, position in decoded.items():
                if order_num in cups:
                    team = teams_by_num[order_num]
                    errors.append(CellError(f'team {team} is already in cup {cups[order_num].value}'))
                    continue
                cups[order_num] = cup
                positions[order_num] = position
            if errors:
                raise SheetValidationError(sheet.title, errors)

        return cups, positions

    def _build_result(
        self,
        team: TeamEntry,
        qualifying: QualifyingResult,
        cup: Optional[Cup],
        position: Optional[CupPosition],
        total_teams: int,
    ) -> TournamentResult:
        qualifying_points = get_points_by_qualifying_stage(self.category, qualifying.wins)
        if cup is None:
            points = qualifying_points
        else:
            points = get_points(
                self.category,
                cup,
                position,
                total_teams,
                qualifying_points=qualifying_points if cup == Cup.C else 0,
            )

        wins, losses = calculate_wins_and_losses(position, qualifying.wins, qualifying.rounds)

        return TournamentResult(
            team=team,
            cup=cup,
            cup_position=position,
            qualifying_wins=qualifying.wins,
            points=points,
            wins=wins,
            losses=losses,
        )

    @staticmethod
    def _log_warnings(warnings: list[str]) -> None:
        for warning in warnings:
            logger.warning(warning)


def results_to_records(results: Sequence[TournamentResult]) -> list[TournamentResultRecord]:
    """Convert results to validated records for export or persistence."""
    return [
        TournamentResultRecord(
            order_num=result.team.order_num,
            player_ids=[p.id for p in result.team.players],
            player_names=result.team.player_names,
            cup=result.cup.value if result.cup else None,
            cup_position=result.cup_position.value if result.cup_position else None,
            qualifying_wins=result.qualifying_wins,
            points=result.points,
            wins=result.wins,
            losses=result.losses,
        )
        for result in results
    ]


def parse_tournament_file(
    source: str | Path | bytes,
    roster: RosterLookup,
    category: int,
    config: Optional[ParserConfig] = None,
) -> list[TournamentResult]:
    """
    Parse a workbook file synchronously.

    Example:
        roster = DataFrameRoster.from_json('data/roster.json')
        results = parse_tournament_file('cup.xlsx', roster, category=1)
    """
    workbook = load_workbook(source)
    return asyncio.run(TournamentParser(roster, category, config).parse(workbook))
