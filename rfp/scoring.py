"""Rating points for cup positions and qualifying results.

Points follow the federation table:

    Category 1, Cup A   8-12: 10/8/6/5   13-18: 11/9/7/6    19-24: 12/10/8/7
                       25-30: 13/11/9/8  31-36: 14/12/10/9  36+:   16/14/12/11
    Category 1, Cup B  13-18: 5/4        19-24: 6/5/4
                       25-30: 7/6/5/4    31-36: 8/7/6/5     36+:   9/8/7/6
    Category 2, Cup A   8-12: 6/5/4/3    13-18: 7/6/5/4     19-24: 8/7/6/5
                       25-30: 9/8/7/6    31-36: 10/9/8/7    36+:   12/11/10/9
    Category 2, Cup B  13-18: 4/3        19-24: 5/4/3
                       25-30: 6/5/4/3    31-36: 6/5/4/3     36+:   7/6/5/4

(winner / runner-up / semifinal / quarterfinal). Third place is worth the
semifinal points, plus one in category 1 cup A. Cup C has no table: it adds
a finals bonus to the qualifying stage points.
"""

import logging

from .constants import TEAM_COUNT_RANGE_MAX, TEAM_COUNT_RANGES
from .models import Cup, CupPosition

logger = logging.getLogger('rfp.scoring')

W, R, S, Q = (
    CupPosition.WINNER,
    CupPosition.RUNNER_UP,
    CupPosition.SEMI_FINAL,
    CupPosition.QUARTER_FINAL,
)

# (category, cup, team count range) -> position -> points
CUP_POINTS: dict[tuple[int, Cup, str], dict[CupPosition, int]] = {
    # Category 1
    (1, Cup.A, '8-12'): {W: 10, R: 8, S: 6, Q: 5},
    (1, Cup.A, '13-18'): {W: 11, R: 9, S: 7, Q: 6},
    (1, Cup.A, '19-24'): {W: 12, R: 10, S: 8, Q: 7},
    (1, Cup.A, '25-30'): {W: 13, R: 11, S: 9, Q: 8},
    (1, Cup.A, '31-36'): {W: 14, R: 12, S: 10, Q: 9},
    (1, Cup.A, '36+'): {W: 16, R: 14, S: 12, Q: 11},
    (1, Cup.B, '13-18'): {W: 5, R: 4},
    (1, Cup.B, '19-24'): {W: 6, R: 5, S: 4},
    (1, Cup.B, '25-30'): {W: 7, R: 6, S: 5, Q: 4},
    (1, Cup.B, '31-36'): {W: 8, R: 7, S: 6, Q: 5},
    (1, Cup.B, '36+'): {W: 9, R: 8, S: 7, Q: 6},
    # Category 2
    (2, Cup.A, '8-12'): {W: 6, R: 5, S: 4, Q: 3},
    (2, Cup.A, '13-18'): {W: 7, R: 6, S: 5, Q: 4},
    (2, Cup.A, '19-24'): {W: 8, R: 7, S: 6, Q: 5},
    (2, Cup.A, '25-30'): {W: 9, R: 8, S: 7, Q: 6},
    (2, Cup.A, '31-36'): {W: 10, R: 9, S: 8, Q: 7},
    (2, Cup.A, '36+'): {W: 12, R: 11, S: 10, Q: 9},
    (2, Cup.B, '13-18'): {W: 4, R: 3},
    (2, Cup.B, '19-24'): {W: 5, R: 4, S: 3},
    (2, Cup.B, '25-30'): {W: 6, R: 5, S: 4, Q: 3},
    (2, Cup.B, '31-36'): {W: 6, R: 5, S: 4, Q: 3},
    (2, Cup.B, '36+'): {W: 7, R: 6, S: 5, Q: 4},
}

CUP_C_BONUS = {
    CupPosition.WINNER: 2,
    CupPosition.RUNNER_UP: 2,
    CupPosition.SEMI_FINAL: 1,
}


def get_team_count_range(total_teams: int) -> str:
    """Map a team count to its points-table range (upper bound inclusive)."""
    for upper_bound, label in TEAM_COUNT_RANGES:
        if total_teams <= upper_bound:
            return label
    return TEAM_COUNT_RANGE_MAX


def get_points(
    category: int,
    cup: Cup | str,
    position: CupPosition | str,
    total_teams: int,
    qualifying_points: int = 0,
) -> int:
    """
    Rating points for a cup position.

    Never raises: combinations missing from the table (cup B below 13
    teams, round of 16, unknown positions) are worth 0 and logged.

    Args:
        category: Tournament category (1 or 2)
        cup: Cup letter
        position: Furthest stage reached in the cup
        total_teams: Number of teams in the tournament
        qualifying_points: Qualifying stage points (cup C only)

    Returns:
        Points earned
    """
    try:
        cup = Cup(cup)
    except ValueError:
        logger.warning(f'Unknown cup "{cup}", awarding 0 points')
        return 0

    try:
        position = CupPosition(position)
    except ValueError:
        position = None

    if cup == Cup.C:
        bonus = CUP_C_BONUS.get(position, 0)
        total = qualifying_points + bonus
        logger.debug(f'Cup C: {qualifying_points} (qualifying) + {bonus} (bonus) = {total}')
        return total

    if position is None:
        logger.warning(f'Unknown cup position, awarding 0 points in cup {cup.value}')
        return 0

    try:
        category = int(category)
    except (TypeError, ValueError):
        logger.warning(f'Unknown tournament category "{category}", awarding 0 points')
        return 0

    teams_range = get_team_count_range(total_teams)
    key = (category, cup, teams_range)
    table = CUP_POINTS.get(key)

    if table is None:
        logger.warning(
            f'No points table for category {category}, cup {cup.value}, '
            f'{total_teams} teams (range {teams_range}), awarding 0 points'
        )
        return 0

    if position == CupPosition.THIRD_PLACE:
        semi_final_points = table.get(CupPosition.SEMI_FINAL)
        if semi_final_points is None:
            logger.warning(
                f'No semifinal points for category {category}, cup {cup.value}, '
                f'range {teams_range}: third place gets 0 points'
            )
            return 0
        bonus = 1 if category == 1 and cup == Cup.A else 0
        return semi_final_points + bonus

    points = table.get(position)
    if points is None:
        logger.warning(
            f'No points for position {position} in cup {cup.value} '
            f'(category {category}, range {teams_range}), awarding 0 points'
        )
        return 0

    return points


def get_points_by_qualifying_stage(category: int, wins: int) -> int:
    """
    Rating points for a team that earned no cup points.

    0 wins -> 0; 1-2 wins -> 2 (category 1) / 1 (category 2);
    3+ wins -> 3 (category 1) / 2 (category 2). Negative wins count as 0.
    """
    if wins <= 0:
        return 0
    federal = int(category) == 1
    if wins >= 3:
        return 3 if federal else 2
    return 2 if federal else 1


def get_all_points_config() -> dict[str, dict[str, int]]:
    """Dump the points table keyed like "1-A-8-12" for debugging and export."""
    return {
        f'{category}-{cup.value}-{teams_range}': {
            position.name: points for position, points in table.items()
        }
        for (category, cup, teams_range), table in CUP_POINTS.items()
    }


def get_points_example(category: int, total_teams: int) -> dict[str, dict[str, int]]:
    """
    Points for every cup position at a given tournament size.

    Example:
        get_points_example(1, 29)['A']['WINNER'] -> 13
    """
    positions = (
        CupPosition.WINNER,
        CupPosition.RUNNER_UP,
        CupPosition.THIRD_PLACE,
        CupPosition.SEMI_FINAL,
        CupPosition.QUARTER_FINAL,
    )
    return {
        cup.value: {
            position.name: get_points(category, cup, position, total_teams)
            for position in positions
        }
        for cup in (Cup.A, Cup.B)
    }
