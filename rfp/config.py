"""Parser configuration management."""

import logging
from functools import lru_cache
from pathlib import Path

from .schemas import ParserConfig
from .utils import load_json

logger = logging.getLogger('rfp.config')

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'parser_config.json'


def load_config(config_path: Path | str) -> ParserConfig:
    """
    Load and validate a parser configuration file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file has invalid structure
    """
    return load_json(config_path, schema=ParserConfig)


@lru_cache(maxsize=1)
def get_config() -> ParserConfig:
    """
    Load parser configuration from data/parser_config.json.

    Configuration is cached after first load. When the file is absent
    (e.g. the package is installed without the data directory) the
    built-in defaults are used.

    Example:
        from rfp.config import get_config
        config = get_config()
        print(f"Swiss rounds: {config.swiss_rounds}")
    """
    if not DEFAULT_CONFIG_PATH.exists():
        logger.debug(f'No config at {DEFAULT_CONFIG_PATH}, using defaults')
        return ParserConfig()
    return load_config(DEFAULT_CONFIG_PATH)


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
