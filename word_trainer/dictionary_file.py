"""Parser for the personal ``name:translation`` dictionary file."""

from pathlib import Path
from typing import List

import structlog

from .errors import DictionaryParseError
from .models import RawPair
from .utils import read_text

log = structlog.get_logger()

DELIMITER = ":"


def parse_dictionary(text: str) -> List[RawPair]:
    """Parse dictionary text, one ``name:translation`` record per line.

    The name runs up to the first delimiter and the translation is the rest
    of the line, delimiters included. There is no escaping. Blank lines are
    skipped. A line without a delimiter, or with nothing on one side of it,
    raises :class:`DictionaryParseError` and nothing from the file is returned.
    """
    pairs = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        name, separator, translation = line.partition(DELIMITER)
        if not separator or not name.strip() or not translation.strip():
            raise DictionaryParseError(line_number, line)
        pairs.append(RawPair(name, translation))
    return pairs


def read_dictionary(file_path: Path) -> List[RawPair]:
    """Load and parse a dictionary file."""
    pairs = parse_dictionary(read_text(file_path))
    log.info("Dictionary parsed", file=str(file_path), count=len(pairs))
    return pairs
