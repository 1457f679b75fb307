"""Unit conversion helpers used by the decoded report models."""

import math
from typing import Optional

# Compass points for 45 degree sectors, north repeated for the wrap-around.
CARDINAL_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW", "N")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def kph_to_mps(kph: float) -> float:
    """Convert kilometres per hour to metres per second."""
    return kph / 3.6


def mps_to_kph(mps: float) -> float:
    """Convert metres per second to kilometres per hour."""
    return mps * 3.6


def kts_to_mps(kts: float) -> float:
    """Convert knots to metres per second."""
    return kts / 1.94384


def mps_to_kts(mps: float) -> float:
    """Convert metres per second to knots."""
    return mps * 1.94384


def smile_to_m(sm: float) -> int:
    """Convert statute miles to metres."""
    return round_half_up(sm * 1609.344)


def smile_to_ft(sm: float) -> int:
    """Convert statute miles to feet."""
    return int(sm * 5280)


def ft_to_m(ft: int) -> int:
    """Convert feet to metres, rounded to 10 metres."""
    return round_half_up(ft * 0.3048 / 10) * 10


def m_to_ft(m: int) -> int:
    """Convert metres to feet, rounded to 10 feet."""
    return round_half_up(m * 3.28084 / 10) * 10


def m_to_smile(m: int) -> float:
    """Convert metres to statute miles."""
    return m * 0.00062137119223733


def ft_to_smile(ft: int) -> float:
    """Convert feet to statute miles."""
    return ft / 5280


def inhg_to_hpa(inhg: float) -> int:
    """Convert inches of mercury to hectopascals."""
    return round_half_up(inhg * 33.86389)


def hpa_to_inhg(hpa: float) -> float:
    """Convert hectopascals to inches of mercury (two decimals)."""
    return round(hpa / 33.86389, 2)


def hpa_to_mmhg(hpa: float) -> int:
    """Convert hectopascals to millimetres of mercury."""
    return round_half_up(hpa * 0.75006375541921)


def mmhg_to_hpa(mm: float) -> int:
    """Convert millimetres of mercury to hectopascals."""
    return round_half_up(mm * 1.333223684)


def direction_to_cardinal(direction: int) -> str:
    """Convert a direction in degrees to one of the eight compass points."""
    return CARDINAL_POINTS[round_half_up((direction % 360) / 45)]


def relative_humidity(temperature: int, dewpoint: int) -> Optional[int]:
    """
    Calculate relative humidity from temperature and dew point.

    Uses the Magnus-type formula with the constants valid between -20 and
    +50 degrees Celsius.

    Args:
        temperature: Air temperature in degrees Celsius
        dewpoint: Dew point in degrees Celsius

    Returns:
        Relative humidity in percent, or None if the inputs are degenerate
    """
    m = 7.591386
    tn = 240.7263
    if dewpoint + tn == 0 or temperature + tn == 0:
        return None
    rh = 100 * math.pow(10, m * (dewpoint / (dewpoint + tn) - temperature / (temperature + tn)))
    return round_half_up(rh)
