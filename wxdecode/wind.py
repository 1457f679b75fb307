"""Surface wind group decoding."""

import re
from enum import Enum
from typing import Optional, Sequence, Tuple

from wxdecode.records import Record
from wxdecode.utils import direction_to_cardinal, kph_to_mps, kts_to_mps, mps_to_kph, mps_to_kts, round_half_up

# e.g. 22003MPS, VRB15MPS, 240P49MPS, 04008G20KT, /////KT
WIND_RE = re.compile(
    r"^(?P<direction>\d{3}|VRB|///)(?P<above>P)?(?P<speed>\d{2,3}|//)"
    r"(?:G(?P<gust>\d{2,3}))?(?P<unit>MPS|KT|KPH|KMH)$"
)
VARIABLE_SECTOR_RE = re.compile(r"^(\d{3})V(\d{3})$")


class SpeedUnit(str, Enum):
    MPS = "MPS"
    KT = "KT"
    KPH = "KPH"
    KMH = "KMH"


def _to_mps(value: float, unit: SpeedUnit) -> float:
    if unit == SpeedUnit.KT:
        return kts_to_mps(value)
    if unit in (SpeedUnit.KPH, SpeedUnit.KMH):
        return kph_to_mps(value)
    return value


def _from_mps(value: float, unit: SpeedUnit) -> float:
    if unit == SpeedUnit.KT:
        return mps_to_kts(value)
    if unit in (SpeedUnit.KPH, SpeedUnit.KMH):
        return mps_to_kph(value)
    return value


class Wind(Record):
    """
    Surface wind.

    Speeds are kept in the unit the station reported them in; the
    conversion helpers convert on demand so repeated conversions do not
    accumulate rounding error.
    """

    direction: Optional[int] = None
    variable: bool = False
    direction_not_reported: bool = False
    speed: int = 0
    speed_not_reported: bool = False
    gust: Optional[int] = None
    unit: SpeedUnit = SpeedUnit.MPS
    above_max: bool = False
    variable_from: Optional[int] = None
    variable_to: Optional[int] = None

    def speed_in(self, unit: SpeedUnit) -> float:
        """Wind speed expressed in another unit."""
        if unit == self.unit:
            return float(self.speed)
        return _from_mps(_to_mps(self.speed, self.unit), unit)

    def gust_in(self, unit: SpeedUnit) -> Optional[float]:
        if self.gust is None:
            return None
        if unit == self.unit:
            return float(self.gust)
        return _from_mps(_to_mps(self.gust, self.unit), unit)

    def speed_kt(self) -> int:
        return round_half_up(self.speed_in(SpeedUnit.KT))

    def speed_mps(self) -> int:
        return round_half_up(self.speed_in(SpeedUnit.MPS))

    def gust_kt(self) -> Optional[int]:
        gust = self.gust_in(SpeedUnit.KT)
        return None if gust is None else round_half_up(gust)

    def gust_mps(self) -> Optional[int]:
        gust = self.gust_in(SpeedUnit.MPS)
        return None if gust is None else round_half_up(gust)

    def direction_cardinal(self) -> Optional[str]:
        """Prevailing direction as a compass point (None for variable or missing direction)."""
        if self.direction is None:
            return None
        return direction_to_cardinal(self.direction)


def parse_wind(tokens: Sequence[str], pos: int) -> Optional[Tuple[Wind, int]]:
    """
    Try to decode a wind group at ``tokens[pos]``.

    A following ``dddVddd`` token (variable direction sector) is consumed
    as part of the same group.

    Returns:
        (wind, tokens consumed) or None if the token is not a wind group
    """
    if pos >= len(tokens):
        return None
    match = WIND_RE.match(tokens[pos])
    if not match:
        return None

    fields = {
        "unit": SpeedUnit(match.group("unit")),
        "above_max": match.group("above") is not None,
    }
    direction = match.group("direction")
    if direction == "VRB":
        fields["variable"] = True
    elif direction == "///":
        fields["direction_not_reported"] = True
    else:
        fields["direction"] = int(direction)

    speed = match.group("speed")
    if speed == "//":
        fields["speed_not_reported"] = True
    else:
        fields["speed"] = int(speed)
    if match.group("gust"):
        fields["gust"] = int(match.group("gust"))

    used = 1
    if pos + 1 < len(tokens):
        sector = VARIABLE_SECTOR_RE.match(tokens[pos + 1])
        if sector:
            fields["variable_from"] = int(sector.group(1))
            fields["variable_to"] = int(sector.group(2))
            used = 2
    return Wind(**fields), used
