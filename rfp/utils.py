"""Helpers for JSON files and spreadsheet cell values."""

import json
import logging
import math
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('rfp.utils')


def load_json(path: Path | str, schema: type[T] | None = None) -> Any | T:
    """
    Read a UTF-8 JSON file, validating it against a pydantic model if given.

    Raises:
        FileNotFoundError: The file is missing
        json.JSONDecodeError: The file is not valid JSON
        ValueError: The content does not match the schema

    Example:
        from rfp.schemas import RosterFile
        roster = load_json('data/roster.json', schema=RosterFile)
    """
    path = Path(path)
    if not path.exists():
        logger.error(f'File not found: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        logger.error(f'Invalid JSON in {path}: {e.msg} at position {e.pos}')
        raise json.JSONDecodeError(f'Invalid JSON in {path}: {e.msg}', e.doc, e.pos) from e

    if schema is None:
        return data

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'{path} does not match {schema.__name__}: {e}')
        raise ValueError(f'Schema validation failed for {path}:\n{e}') from e


def save_json(path: Path | str, data: Any, indent: int = 2, create_dirs: bool = True) -> None:
    """
    Write data (plain JSON values or a pydantic model) as UTF-8 JSON.

    Cyrillic text is written as is, not escaped.

    Raises:
        TypeError: The data cannot be serialized
    """
    path = Path(path)
    if create_dirs:
        path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(data, BaseModel):
        data = data.model_dump()

    try:
        text = json.dumps(data, indent=indent, ensure_ascii=False)
    except TypeError as e:
        logger.error(f'Data is not JSON-serializable: {e}')
        raise TypeError(f'Data is not JSON-serializable: {e}') from e

    path.write_text(text, encoding='utf-8')
    logger.debug(f'Saved {path}')


def parse_int_cell(value) -> int | None:
    """
    Interpret a spreadsheet cell as a whole number.

    Numbers are floored, numeric strings are parsed and blank cells count
    as 0. Returns None when the value is not a number.

    Examples:
        3.0 -> 3, "4" -> 4, None -> 0, "" -> 0, "abc" -> None
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return math.floor(value)

    text = str(value).strip()
    if not text:
        return 0
    try:
        return math.floor(float(text.replace(',', '.')))
    except (ValueError, OverflowError):
        return None
