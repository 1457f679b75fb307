"""Runway groups: visual range, surface state and wind shear."""

import re
from enum import Enum
from typing import Optional, Sequence, Tuple

from wxdecode.records import Record
from wxdecode.visibility import Distance, DistanceUnit

DESIGNATOR_RE = re.compile(r"^(?P<course>\d{2})(?P<side>[LCR])?$")
# R25/M0075, R33L/P1500, R16R/1000U, R27/0150V0300U, R09/1200FT/D
VISUAL_RANGE_RE = re.compile(
    r"^R(?P<runway>\d{2}[LCR]?)/(?P<flag>[PM])?(?P<value>\d{4})(?P<ft>FT)?"
    r"(?:V(?P<upto_flag>[PM])?(?P<upto>\d{4})(?P<upto_ft>FT)?)?/?(?P<tendency>[UDN])?$"
)
# R24L/451293, R21/0///65, R25/CLRD70, R31/70D, R88//////
STATE_RE = re.compile(
    r"^R(?P<runway>\d{2}[LCR]?)/(?:(?P<type>\d|/)(?P<dimension>\d|/)(?P<height>\d\d|//)|(?P<clrd>CLRD))?"
    r"(?P<braking>\d\d|//)(?P<cleared>D)?$"
)
SNOW_CLOSED_RE = re.compile(r"^R(?P<runway>\d{2}[LCR]?)?/SNOCLO$")
WIND_SHEAR_RUNWAY_RE = re.compile(r"^R(?:WY)?(?P<runway>\d{2}[LCR]?)$")

ALL_RUNWAYS_CODE = 88


class RunwayDesignator(Record):
    """Runway number as reported (with side letter), or the "all runways" code."""

    number: str = ""
    all_runways: bool = False

    @classmethod
    def from_code(cls, code: str) -> "RunwayDesignator":
        """
        Build a designator from a two-digit runway code.

        Codes 51-86 address the second of two parallel runways: the
        runway is code minus 50 with an ``R`` marker. 88 means all runways.
        """
        match = DESIGNATOR_RE.match(code)
        if not match:
            return cls(number=code)
        course = int(match.group("course"))
        if course == ALL_RUNWAYS_CODE:
            return cls(number=code, all_runways=True)
        if 51 <= course <= 86:
            return cls(number=f"{course - 50:02d}R")
        # 99 (repeated last report) is kept as reported
        return cls(number=code)


class Tendency(str, Enum):
    UP = "U"
    DOWN = "D"
    NO_CHANGE = "N"


class RunwayVisualRange(Record):
    """Runway visual range, optionally a variation up to a second value."""

    runway: RunwayDesignator
    distance: Distance
    above_max: bool = False
    below_min: bool = False
    upto_distance: Optional[Distance] = None
    upto_above_max: bool = False
    upto_below_min: bool = False
    tendency: Optional[Tendency] = None


class RunwayState(Record):
    """
    Runway surface condition.

    Coverage type, coverage dimension (extent), coverage height (depth)
    and braking action each carry a ``_not_defined`` flag for the ``/``
    placeholders. A cleared runway only reports braking action.
    """

    runway: Optional[RunwayDesignator] = None
    coverage_type: Optional[int] = None
    coverage_type_not_defined: bool = False
    coverage_dimension: Optional[int] = None
    coverage_dimension_not_defined: bool = False
    coverage_height: Optional[int] = None
    coverage_height_not_defined: bool = False
    braking: Optional[int] = None
    braking_not_defined: bool = False
    cleared: bool = False
    snow_closed: bool = False


def parse_visual_range(tokens: Sequence[str], pos: int) -> Optional[Tuple[RunwayVisualRange, int]]:
    """Try to decode a runway visual range group at ``tokens[pos]``."""
    if pos >= len(tokens):
        return None
    match = VISUAL_RANGE_RE.match(tokens[pos])
    if not match:
        return None
    feet = match.group("ft") or match.group("upto_ft")
    unit = DistanceUnit.FT if feet else DistanceUnit.M
    fields = {
        "runway": RunwayDesignator.from_code(match.group("runway")),
        "distance": Distance(value=int(match.group("value")), unit=unit),
        "above_max": match.group("flag") == "P",
        "below_min": match.group("flag") == "M",
    }
    if match.group("upto"):
        fields["upto_distance"] = Distance(value=int(match.group("upto")), unit=unit)
        fields["upto_above_max"] = match.group("upto_flag") == "P"
        fields["upto_below_min"] = match.group("upto_flag") == "M"
    if match.group("tendency"):
        fields["tendency"] = Tendency(match.group("tendency"))
    return RunwayVisualRange(**fields), 1


def _digits(value: str) -> Tuple[Optional[int], bool]:
    if value.startswith("/"):
        return None, True
    return int(value), False


def parse_runway_state(tokens: Sequence[str], pos: int) -> Optional[Tuple[RunwayState, int]]:
    """Try to decode a runway state group (or a closed-by-snow token) at ``tokens[pos]``."""
    if pos >= len(tokens):
        return None
    token = tokens[pos]

    closed = SNOW_CLOSED_RE.match(token)
    if closed:
        runway = RunwayDesignator.from_code(closed.group("runway")) if closed.group("runway") else None
        return RunwayState(runway=runway, snow_closed=True), 1

    match = STATE_RE.match(token)
    if not match:
        return None
    braking, braking_not_defined = _digits(match.group("braking"))
    fields = {
        "runway": RunwayDesignator.from_code(match.group("runway")),
        "braking": braking,
        "braking_not_defined": braking_not_defined,
    }
    if match.group("clrd") or match.group("cleared"):
        return RunwayState(cleared=True, **fields), 1

    if match.group("type") is not None:
        fields["coverage_type"], fields["coverage_type_not_defined"] = _digits(match.group("type"))
        fields["coverage_dimension"], fields["coverage_dimension_not_defined"] = _digits(match.group("dimension"))
        fields["coverage_height"], fields["coverage_height_not_defined"] = _digits(match.group("height"))
    return RunwayState(**fields), 1


def parse_wind_shear(tokens: Sequence[str], pos: int) -> Optional[Tuple[RunwayDesignator, int]]:
    """Try to decode ``WS ALL RWY`` (3 tokens) or ``WS R06R`` / ``WS RWY06R`` (2 tokens)."""
    if pos + 1 >= len(tokens) or tokens[pos] != "WS":
        return None
    if tuple(tokens[pos + 1:pos + 3]) == ("ALL", "RWY"):
        return RunwayDesignator(all_runways=True), 3
    match = WIND_SHEAR_RUNWAY_RE.match(tokens[pos + 1])
    if match:
        return RunwayDesignator.from_code(match.group("runway")), 2
    return None
