"""Pydantic schemas for configuration, roster files and exported results."""

from pydantic import BaseModel, Field, field_validator

from .constants import MAX_TEAM_PLAYERS


class RosterPlayer(BaseModel):
    """Player entry in a roster file."""

    id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)
    gender: str | None = Field(default=None, pattern=r'^(male|female)$')

    class Config:
        extra = 'forbid'


class RosterFile(BaseModel):
    """Complete roster.json file structure."""

    players: list[RosterPlayer]

    @field_validator('players')
    @classmethod
    def validate_unique_ids(cls, v):
        """Ensure player ids are unique."""
        seen = set()
        for player in v:
            if player.id in seen:
                raise ValueError(f'Duplicate player id: {player.id}')
            seen.add(player.id)
        return v

    class Config:
        extra = 'forbid'


class TournamentResultRecord(BaseModel):
    """Per-team result handed to the persistence layer."""

    order_num: int = Field(..., ge=1)
    player_ids: list[int] = Field(..., min_length=1, max_length=MAX_TEAM_PLAYERS)
    player_names: list[str]
    cup: str | None = Field(default=None, pattern=r'^(A|B|C)$')
    cup_position: str | None = Field(default=None, pattern=r'^(1|2|3|1/2|1/4|1/8)$')
    qualifying_wins: int = Field(..., ge=0)
    points: int = Field(..., ge=0)
    wins: int = Field(..., ge=0)
    losses: int = Field(..., ge=0)

    class Config:
        extra = 'forbid'


class TournamentResultsFile(BaseModel):
    """Exported results of one parse run."""

    source: str
    category: int = Field(..., ge=1, le=2)
    teams_count: int = Field(..., ge=0)
    results: list[TournamentResultRecord]

    class Config:
        extra = 'forbid'


class ParserConfig(BaseModel):
    """Spreadsheet layout settings.

    Sheet titles and header texts are compared after name normalization,
    so letter case does not matter.
    """

    registration_sheet_names: list[str] = Field(
        default_factory=lambda: ['Лист регистрации'], min_length=1
    )
    swiss_sheet_name: str = 'Итоги швейцарки'
    group_sheet_marker: str = 'Группа'
    manual_sheet_name: str = 'Ручной ввод'
    crossover_sheet_pattern: str = r'^стык [aа][bб]$'
    team_header: str = 'Команда'
    result_header: str = 'Результат'
    wins_header: str = 'победы'
    cup_header: str = 'Кубок'
    position_header: str = 'Позиция'
    points_header: str = 'Очки'
    bye_markers: list[str] = Field(default_factory=lambda: ['bye'])
    swiss_rounds: int = Field(default=5, ge=1, le=15)
    group_empty_rows_limit: int = Field(default=2, ge=1, le=10)
    required_cups: list[str] = Field(default_factory=lambda: ['A', 'B'])

    @field_validator('required_cups')
    @classmethod
    def validate_cups(cls, v):
        """Ensure all cups are valid."""
        valid_cups = {'A', 'B', 'C'}
        for cup in v:
            if cup not in valid_cups:
                raise ValueError(f'Invalid cup: {cup}')
        return v

    class Config:
        extra = 'forbid'
