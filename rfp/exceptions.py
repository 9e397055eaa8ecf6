"""Exceptions raised while extracting tournament results from a workbook."""

from typing import Iterable, Optional


class RatingEngineError(Exception):
    """Base exception for all engine errors."""

    pass


# ========== Structural (fatal) errors ==========


class StructuralError(RatingEngineError):
    """A required sheet, header or anchor cell is missing.

    Parsing of the affected sheet stops immediately.
    """

    pass


class NoQualifyingData(StructuralError):
    """Neither Swiss nor group results produced a single team."""

    def __init__(self, message: str = 'No qualifying stage results found (Swiss or group sheets)'):
        super().__init__(message)


class UnsupportedGridSize(StructuralError):
    """A cup sheet matches none of the known bracket layouts."""

    def __init__(self, sheet_title: str):
        self.sheet_title = sheet_title
        super().__init__(
            f'Sheet "{sheet_title}": bracket layout not recognized '
            f'(expected a 4, 8 or 16 team grid)'
        )


# ========== Cell-level (accumulated) errors ==========


class CellError(RatingEngineError):
    """A recoverable problem in a single cell or row."""

    def __init__(self, message: str, cell: Optional[str] = None):
        self.cell = cell
        super().__init__(f'{cell}: {message}' if cell else message)


class PlayerNotFound(CellError):
    """No roster entry matches the name."""

    def __init__(self, raw_name: str, cell: Optional[str] = None):
        self.raw_name = raw_name
        super().__init__(
            f'player "{raw_name}" not found in the roster. '
            f'Use the full surname and first name or add the player to the roster',
            cell,
        )


class PlayerAmbiguous(CellError):
    """More than one roster entry matches the name."""

    def __init__(self, raw_name: str, candidates: Iterable, cell: Optional[str] = None):
        self.raw_name = raw_name
        self.candidates = list(candidates)
        names = ', '.join(c.name for c in self.candidates)
        super().__init__(
            f'player "{raw_name}" is ambiguous, matches: {names}. '
            f'Use the full surname and first name',
            cell,
        )


class TeamNotFound(CellError):
    """A resolved player is not part of any registered team."""

    def __init__(self, player_name: str, cell: Optional[str] = None):
        self.player_name = player_name
        super().__init__(f'player "{player_name}" is not registered in any team', cell)


class MissingCellValue(CellError):
    """A required cell is empty."""

    def __init__(self, cell: str, what: str = 'value'):
        super().__init__(f'required {what} is missing', cell)


class InvalidCellValue(CellError):
    """A cell holds a value that cannot be interpreted."""

    def __init__(self, cell: str, value, expected: str):
        self.value = value
        super().__init__(f'invalid value "{value}", expected {expected}', cell)


# ========== Aggregate ==========


class SheetValidationError(RatingEngineError):
    """Every recoverable error found in one sheet, reported together."""

    def __init__(self, sheet_title: str, errors: Iterable[RatingEngineError]):
        self.sheet_title = sheet_title
        self.errors = list(errors)
        lines = [f'Sheet "{sheet_title}": {len(self.errors)} error(s)']
        lines.extend(f'  - {e}' for e in self.errors)
        super().__init__('\n'.join(lines))

    @property
    def messages(self) -> list[str]:
        return [str(e) for e in self.errors]
