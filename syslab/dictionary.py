"""A word dictionary loaded from ``word:translation`` lines."""

from __future__ import annotations

import os
from pathlib import Path

from .inetaddr import InetAddr
from .log import LogLevel, Logger
from .log import logger as default_logger

DEFAULT_PATH = "./dictionary.txt"
SEPARATOR = ":"
UNKNOWN = "unknown"


def parse_line(line: str) -> tuple[str, str] | None:
    """Split a line at its first separator; None for blank or unseparated lines."""
    if not line:
        return None
    word, sep, translation = line.partition(SEPARATOR)
    if not sep:
        return None
    return word, translation


class Dictionary:
    """Maps words to translations; the first entry for a word wins."""

    def __init__(self, path: str | os.PathLike = DEFAULT_PATH,
                 logger: Logger | None = None) -> None:
        self.path = Path(path)
        self._logger = logger if logger is not None else default_logger
        self._entries: dict[str, str] = {}

    def load(self) -> int:
        """Read the dictionary file and return the number of entries held.

        Raises OSError if the file cannot be opened.
        """
        with open(self.path, encoding="utf-8") as handle:
            for raw in handle:
                entry = parse_line(raw.rstrip("\n"))
                if entry is not None:
                    self._entries.setdefault(*entry)
        return len(self._entries)

    def translate(self, word: str, client: InetAddr) -> str:
        """Return the translation of ``word``, or ``unknown``."""
        self._logger.log(LogLevel.DEBUG)
        translation = self._entries.get(word)
        if translation is None:
            return UNKNOWN
        self._logger.log(LogLevel.DEBUG, "translate request from ",
                         client.port, ":", client.ip)
        return translation