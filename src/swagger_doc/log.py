"""Logging setup for the command line."""

import logging

FORMAT = "%(levelname)s:%(name)s:%(message)s"


def configure_root(level: int | str = logging.WARNING) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(level=level, format=FORMAT)
