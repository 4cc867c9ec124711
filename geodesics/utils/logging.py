"""Logging utility for geodesics"""

__all__ = ['LOGGER', 'set_log_level', 'warn_once']

import logging
from typing import Union

LOGGER = logging.getLogger('geodesics')
LOGGER.setLevel(logging.WARNING)
_LOG_HANDLER = logging.StreamHandler()
_LOG_FORMATTER = logging.Formatter('[%(levelname)s] %(name)s: %(message)s')
_LOG_HANDLER.setFormatter(_LOG_FORMATTER)
LOGGER.addHandler(_LOG_HANDLER)

_WARNINGS = set()


def set_log_level(level: Union[int, str]):
    """Set the level of the geodesics logger, e.g. 'DEBUG' or logging.INFO"""
    if isinstance(level, str):
        _level = logging.getLevelName(level.upper())
        if not isinstance(_level, int):
            raise ValueError(f'Unknown log level {level!r}')
        level = _level

    LOGGER.setLevel(level)


def warn_once(warning: str, *args):
    """
    Log a warning the first time it is seen. The message template (not its
    formatted arguments) identifies the warning.
    """
    if warning not in _WARNINGS:
        LOGGER.warning(warning, *args)
        _WARNINGS.add(warning)
