"""Prevailing visibility decoding (metric and statute-mile forms)."""

import re
from enum import Enum
from typing import Optional, Sequence, Tuple

from wxdecode.records import Record
from wxdecode.utils import ft_to_m, ft_to_smile, m_to_ft, m_to_smile, smile_to_ft, smile_to_m

# 9999, P5000, M0050, 9999NDV
METRIC_RE = re.compile(r"^(?P<flag>[PM])?(?P<value>\d{4})(?P<ndv>NDV)?$")
SECTOR_RE = re.compile(r"^(?P<value>\d{4})(?P<direction>NE|SE|NW|SW|N|E|S|W)$")
# 10SM, P6SM, 1/2SM, M1/4SM, 21/2SM (2 1/2 with the space missing)
IMPERIAL_RE = re.compile(r"^(?P<flag>[PM])?(?P<whole>\d{0,2}?)(?:(?P<num>\d)/(?P<den>\d{1,2}))?SM$")
WHOLE_MILES_RE = re.compile(r"^[PM]?\d{1,2}$")


class DistanceUnit(str, Enum):
    M = "M"
    FT = "FT"
    SM = "SM"


class Distance(Record):
    """A distance in its reported unit. ``fraction`` is only used for statute miles."""

    value: int = 0
    fraction: float = 0.0
    unit: DistanceUnit = DistanceUnit.M

    def meters(self) -> int:
        if self.unit == DistanceUnit.FT:
            return ft_to_m(self.value)
        if self.unit == DistanceUnit.SM:
            return smile_to_m(self.value + self.fraction)
        return self.value

    def feet(self) -> int:
        if self.unit == DistanceUnit.FT:
            return self.value
        if self.unit == DistanceUnit.SM:
            return smile_to_ft(self.value + self.fraction)
        return m_to_ft(self.value)

    def miles(self) -> float:
        if self.unit == DistanceUnit.FT:
            return ft_to_smile(self.value)
        if self.unit == DistanceUnit.SM:
            return self.value + self.fraction
        return m_to_smile(self.value)


class Visibility(Record):
    """Prevailing visibility, optionally with the lowest sector visibility and its direction."""

    distance: Distance = Distance()
    above_max: bool = False
    below_min: bool = False
    no_directional_variation: bool = False
    lower_distance: Optional[Distance] = None
    lower_direction: Optional[str] = None


def _parse_metric(tokens: Sequence[str], pos: int) -> Optional[Tuple[Visibility, int]]:
    match = METRIC_RE.match(tokens[pos])
    if not match:
        return None
    fields = {
        "distance": Distance(value=int(match.group("value")), unit=DistanceUnit.M),
        "above_max": match.group("flag") == "P",
        "below_min": match.group("flag") == "M",
        "no_directional_variation": match.group("ndv") is not None,
    }
    used = 1
    if pos + 1 < len(tokens):
        sector = SECTOR_RE.match(tokens[pos + 1])
        if sector:
            fields["lower_distance"] = Distance(value=int(sector.group("value")), unit=DistanceUnit.M)
            fields["lower_direction"] = sector.group("direction")
            used = 2
    return Visibility(**fields), used


def _parse_imperial(token: str) -> Optional[Visibility]:
    match = IMPERIAL_RE.match(token)
    if not match or (not match.group("whole") and not match.group("num")):
        return None
    fraction = 0.0
    if match.group("num"):
        denominator = int(match.group("den"))
        if denominator:
            fraction = int(match.group("num")) / denominator
    return Visibility(
        distance=Distance(value=int(match.group("whole") or 0), fraction=fraction, unit=DistanceUnit.SM),
        above_max=match.group("flag") == "P",
        below_min=match.group("flag") == "M",
    )


def parse_visibility(tokens: Sequence[str], pos: int) -> Optional[Tuple[Visibility, int]]:
    """
    Try to decode prevailing visibility at ``tokens[pos]``.

    Metric: ``dddd`` with an optional ``ddddDIR`` sector token after it.
    Statute miles: ``[P|M][whole][n/d]SM``, where the whole miles may be a
    separate token (``1 3/4SM``).

    Returns:
        (visibility, tokens consumed) or None
    """
    if pos >= len(tokens):
        return None
    metric = _parse_metric(tokens, pos)
    if metric:
        return metric

    token = tokens[pos]
    imperial = _parse_imperial(token)
    if imperial:
        return imperial, 1

    # whole miles split from the fraction: "1 3/4SM"
    if WHOLE_MILES_RE.match(token) and pos + 1 < len(tokens):
        fraction = _parse_imperial(tokens[pos + 1])
        if fraction and fraction.distance.value == 0 and not (fraction.above_max or fraction.below_min):
            flag = token[0] if token[0] in "PM" else ""
            whole = int(token[len(flag):])
            distance = Distance(value=whole, fraction=fraction.distance.fraction, unit=DistanceUnit.SM)
            return Visibility(distance=distance, above_max=flag == "P", below_min=flag == "M"), 2
    return None
