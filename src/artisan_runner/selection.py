"""Parsing of comma-separated ``--numbers`` selections."""

import re
from collections.abc import Iterable

from .catalog import all_positions
from .errors import SelectionError

# Token that expands to every catalog position
ALL_TOKEN = "0"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def dedupe(values: Iterable[int]) -> list[int]:
    """Drop repeated values, keeping first-occurrence order."""
    seen: set[int] = set()
    out: list[int] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out


def parse_numbers(raw: str, maximum: int) -> list[int]:
    """Parse ``"1,3,2"`` into positions within ``[1, maximum]``.

    Empty segments are ignored. A ``0`` segment anywhere overrides
    everything else and yields ``[1..maximum]``. Tokens are checked left
    to right, so a bad token before the ``0`` still fails.

    Raises:
        SelectionError: A token is not an integer or is out of range.
    """
    out: list[int] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        if part == ALL_TOKEN:
            return all_positions(maximum)
        if not _INTEGER_RE.fullmatch(part):
            raise SelectionError(f"invalid number: {part!r}")
        number = int(part)
        if number < 1 or number > maximum:
            raise SelectionError(f"choice out of range: {number}")
        out.append(number)
    return dedupe(out)
