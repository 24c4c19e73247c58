# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import logging
from typing import Any, Optional

from .constants import DEFAULT_LOG_FILE, DEFAULT_LOG_LEVEL, DEFAULT_LOG_FORMAT


SINGLE_CHAR_TO_LEVEL = {
    'D': 'DEBUG',
    'I': 'INFO',
    'W': 'WARNING',
    'E': 'ERROR',
    'C': 'CRITICAL',
}


def single_char_to_level(char: str) -> Any:
    """Resolve ``debug``, ``DEBUG`` or simply ``d`` into :data:`logging.DEBUG`."""
    try:
        return getattr(logging, SINGLE_CHAR_TO_LEVEL[char.upper()[0]])
    except (IndexError, KeyError):
        raise ValueError('Invalid log level %r' % char)


class Logger:
    """Common logging utilities and setup."""

    @staticmethod
    def setup(
            log_file: Optional[str] = DEFAULT_LOG_FILE,
            log_level: str = DEFAULT_LOG_LEVEL,
            log_format: str = DEFAULT_LOG_FORMAT,
    ) -> None:
        level = single_char_to_level(log_level)
        if log_file:    # pragma: no cover
            logging.basicConfig(
                filename=log_file,
                filemode='a',
                level=level,
                format=log_format,
            )
        else:
            logging.basicConfig(
                level=level,
                format=log_format,
            )
        # asyncio transport noise only at debug level
        if level > logging.DEBUG:
            logging.getLogger('asyncio').setLevel(logging.WARNING)
