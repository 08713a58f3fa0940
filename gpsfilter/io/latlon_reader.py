from __future__ import annotations

import logging
import re
from typing import Iterator, Optional, TextIO, Tuple

from gpsfilter.types import Fix

log = logging.getLogger(__name__)

_FLOAT = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
# "<lat>,<lon>" at line start; anything after the pair is ignored.
_PAIR = re.compile(rf"^\s*({_FLOAT})\s*,\s*({_FLOAT})")


def parse_lat_long(line: str) -> Optional[Tuple[float, float]]:
    m = _PAIR.match(line)
    if m is None:
        return None
    return float(m.group(1)), float(m.group(2))


def read_lat_long(stream: TextIO) -> Optional[Tuple[float, float]]:
    """Return the next (lat, lon) pair in `stream`, skipping malformed lines; None at EOF."""
    for line in iter(stream.readline, ""):
        pair = parse_lat_long(line)
        if pair is not None:
            return pair
        log.debug("skipping line without a lat,lon pair: %r", line.rstrip("\n"))
    return None


def iter_lat_long(stream: TextIO) -> Iterator[Tuple[float, float]]:
    while True:
        pair = read_lat_long(stream)
        if pair is None:
            return
        yield pair


def iter_fixes(stream: TextIO, dt: float = 1.0) -> Iterator[Fix]:
    """Fixes from a text stream; the format has no timestamps so every interval is `dt`."""
    for lat, lon in iter_lat_long(stream):
        yield Fix(lat, lon, dt)
