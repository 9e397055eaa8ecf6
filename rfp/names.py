"""Player name normalization."""

import re

_PARENTHETICAL = re.compile(r'\([^)]*\)')
_DOTS_AND_STARS = re.compile(r'[.*]')
_WHITESPACE = re.compile(r'\s+')


def normalize_name(name) -> str:
    """
    Canonicalize a human-typed name for matching.

    Lowercases, strips commas, folds "ё" into "е", drops parenthetical
    annotations, turns dots and asterisks into spaces and collapses
    whitespace.

    Examples:
        "Иванов  Пётр (капитан)," -> "иванов петр"
        "Петров П.*"              -> "петров п"
    """
    if name is None:
        return ''

    text = str(name).lower()
    text = text.replace(',', '').replace('ё', 'е')
    text = _PARENTHETICAL.sub(' ', text)
    text = _DOTS_AND_STARS.sub(' ', text)
    return _WHITESPACE.sub(' ', text).strip()


def split_player_names(cell_value) -> list[str]:
    """Split a comma-separated player list into its non-empty fragments."""
    if cell_value is None:
        return []
    return [part.strip() for part in str(cell_value).split(',') if part.strip()]
