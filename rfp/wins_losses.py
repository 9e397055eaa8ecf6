"""Total wins and losses of a team over the whole tournament.

Wins are the qualifying wins plus the matches won in the cup bracket:

    WINNER: +3, RUNNER_UP: +2, THIRD_PLACE: +2, SEMI_FINAL: +1, other: +0

Losses are the qualifying losses (rounds played minus wins, 5 Swiss rounds
by default) plus the bracket match that knocked the team out:

    SEMI_FINAL, THIRD_PLACE, RUNNER_UP: +1, WINNER and other: +0

A quarterfinal loss is already part of the qualifying count.
"""

from typing import Optional

from .models import CupPosition

SWISS_ROUNDS = 5

CUP_WINS_BONUS = {
    CupPosition.WINNER: 3,
    CupPosition.RUNNER_UP: 2,
    CupPosition.THIRD_PLACE: 2,
    CupPosition.SEMI_FINAL: 1,
}

CUP_LOSSES_PENALTY = {
    CupPosition.SEMI_FINAL: 1,
    CupPosition.THIRD_PLACE: 1,
    CupPosition.RUNNER_UP: 1,
}


def calculate_wins(cup_position: Optional[CupPosition], qualifying_wins: int) -> int:
    """Qualifying wins plus the bracket bonus for the cup position."""
    return qualifying_wins + CUP_WINS_BONUS.get(cup_position, 0)


def calculate_losses(
    cup_position: Optional[CupPosition],
    qualifying_wins: int,
    qualifying_rounds: int = SWISS_ROUNDS,
) -> int:
    """Qualifying losses (never negative) plus the bracket penalty."""
    return max(0, qualifying_rounds - qualifying_wins) + CUP_LOSSES_PENALTY.get(cup_position, 0)


def calculate_wins_and_losses(
    cup_position: Optional[CupPosition],
    qualifying_wins: int,
    qualifying_rounds: int = SWISS_ROUNDS,
) -> tuple[int, int]:
    """
    Both totals at once.

    Example:
        calculate_wins_and_losses(CupPosition.RUNNER_UP, 3) -> (5, 3)
    """
    return (
        calculate_wins(cup_position, qualifying_wins),
        calculate_losses(cup_position, qualifying_wins, qualifying_rounds),
    )
