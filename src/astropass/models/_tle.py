"""
Two-Line Element (TLE) set parsing.

Turns the text of one or more NORAD two- or three-line element sets into
:class:`TLE` bodies, converting the published fields to the units the
propagators consume.
"""

from __future__ import annotations

import re
from math import pi

from astropass.constants import DEG2RAD
from astropass.models._satellite import TLE
from astropass.models._set import TLESet
from astropass.models._types import OrbitalElements
from astropass.time import epoch_from_tle

# Published mean motion is in rev/day; the models want rad/min
_REV_PER_DAY = 2.0 * pi / 1440.0

_LINE1 = re.compile(r"^1(\s*\d+)")
_LINE2 = re.compile(r"^2(\s*\d+)")
_EXPONENT = re.compile(r"^(.)(.{5})(..)$")

# A line shorter than this is a name line
_NAME_LINE_LIMIT = 50


def compute_checksum(line: str) -> int:
    """Compute the TLE checksum for a line.

    The checksum is the sum of all digit characters plus 1 for each
    minus sign, modulo 10, computed over the first 68 characters.

    Args:
        line: A TLE line string (at least 68 characters).

    Returns:
        The checksum digit (0-9).
    """
    return sum((int(c) if c.isdigit() else c == "-") for c in line[:68]) % 10


def _implied_exponent(field: str) -> float:
    """Decode a field like ``' 13844-3'`` as ``0.13844e-3``."""
    match = _EXPONENT.match(field)
    if match is None:
        raise ValueError(f"Malformed exponential field '{field}'")
    mantissa, digits, exponent = match.groups()
    return float(f"{mantissa.strip() or '+'}.{digits.replace(' ', '0')}e{exponent.strip()}")


def _elements_from_lines(name: str, line1: str, line2: str) -> OrbitalElements:
    line1 = line1.rstrip("\r\n").ljust(80)
    line2 = line2.rstrip("\r\n").ljust(80)

    if line1[79] == "G":
        raise ValueError("G (internal) format data not supported")
    for pattern, line, number in ((_LINE1, line1, 1), (_LINE2, line2, 2)):
        match = pattern.match(line)
        if match is None or len(match.group(1)) != 6:
            raise ValueError(f"Invalid line {number} of element set: {line.rstrip()}")

    satnum = line1[2:7]
    if int(satnum) != int(line2[2:7]):
        raise ValueError(
            f"Object numbers in lines 1 and 2 do not match: '{satnum}', '{line2[2:7]}'"
        )

    year = int(line1[18:20])
    day = float(line1[20:32])

    return OrbitalElements(
        id=satnum.strip(),
        name=name,
        classification=line1[7].strip() or "U",
        international=line1[9:17].strip(),
        epoch=epoch_from_tle(year, day),
        firstderivative=float(line1[33:43]) * _REV_PER_DAY / 1440.0,
        secondderivative=_implied_exponent(line1[44:52]) * _REV_PER_DAY / 1440.0 / 1440.0,
        bstardrag=_implied_exponent(line1[53:61]),
        ephemeristype=int(line1[62].strip() or "0"),
        elementnumber=int(line1[64:68].strip() or "0"),
        inclination=float(line2[8:16]) * DEG2RAD,
        rightascension=float(line2[17:25]) * DEG2RAD,
        eccentricity=float("0." + line2[26:33].replace(" ", "0")),
        argumentofperigee=float(line2[34:42]) * DEG2RAD,
        meananomaly=float(line2[43:51]) * DEG2RAD,
        meanmotion=float(line2[52:63]) * _REV_PER_DAY,
        revolutionsatepoch=int(line2[63:68].strip() or "0"),
    )


def parse_tle(*data: str, aggregate: bool = False) -> list[TLE | TLESet]:
    """Parse NORAD two- or three-line element sets.

    Each argument may hold any number of lines and element sets.  Blank
    lines and lines whose first non-blank character is ``#`` are skipped.  A line shorter than
    50 characters preceding a set is taken as the body's name.  Checksums
    are not verified.

    Args:
        *data: Text containing element sets.
        aggregate: Group element sets of the same body into a
            :class:`TLESet` (see :meth:`TLESet.aggregate`). Default: ``False``

    Returns:
        One :class:`TLE` per element set, in input order.  With
        ``aggregate``, one entry per catalog number instead.

    Raises:
        ValueError: If a set is malformed, its line numbers are wrong, its
            catalog numbers disagree, or it is in internal ('G') format.

    Examples:
        ```python
        from astropass.models import parse_tle
        bodies = parse_tle(
            "1 88888U          80275.98708465  .00073094  13844-3  66816-4 0    8\\n"
            "2 88888  72.8435 115.9689 0086731  52.6988 110.5714 16.05824518  105"
        )
        bodies[0].get("id")  # '88888'
        ```
    """
    lines = [
        line.rstrip("\r")
        for chunk in data
        for line in chunk.split("\n")
        if line.strip() and not line.lstrip().startswith("#")
    ]

    bodies = []
    i = 0
    while i < len(lines):
        name = ""
        if len(lines[i].rstrip()) < _NAME_LINE_LIMIT:
            name = lines[i].strip()
            i += 1
        if i + 1 >= len(lines):
            raise ValueError("Incomplete element set at end of input")
        group = lines[i - 1 if name else i : i + 2]
        elements = _elements_from_lines(name, lines[i], lines[i + 1])
        bodies.append(TLE(elements, tle="\n".join(group) + "\n"))
        i += 2
    if aggregate:
        return TLESet.aggregate(bodies)
    return bodies
