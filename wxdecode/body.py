"""
Main-body decoder shared by observations, forecasts and trends.

The body is walked with a token cursor. Each step tries one field grammar
at the cursor and returns how many tokens it consumed (0 = no match, state
unchanged). Steps run in a fixed order; if any of them advanced, the pass
starts over from the first step, so repeated or out-of-order groups are
still picked up. A token nothing matches is recorded as not decoded and
skipped. The decoder never gives up on a body.
"""

import logging
import re
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from wxdecode.clouds import CloudLayer, VerticalVisibility, parse_cloud, parse_vertical_visibility
from wxdecode.context import DecodeContext, add_month
from wxdecode.phenomena import Phenomenon, parse_phenomenon, parse_recent_phenomenon
from wxdecode.records import Record
from wxdecode.runways import (
    RunwayDesignator,
    RunwayState,
    RunwayVisualRange,
    parse_runway_state,
    parse_visual_range,
    parse_wind_shear,
)
from wxdecode.utils import hpa_to_inhg, hpa_to_mmhg, inhg_to_hpa, relative_humidity
from wxdecode.visibility import Visibility, parse_visibility
from wxdecode.wind import Wind, parse_wind

logger = logging.getLogger(__name__)

CAVOK = "CAVOK"
NOSIG = "NOSIG"
PHENOMENA_NOT_OBSERVED = "//"

TEMPERATURE_RE = re.compile(r"^(?P<temp_minus>M)?(?P<temp>\d{2})/(?P<dew_minus>M)?(?P<dew>\d{2})$")
PRESSURE_RE = re.compile(r"^(?P<unit>[QA])(?P<value>\d{4})$")
TEMPERATURE_FORECAST_RE = re.compile(
    r"^T(?P<kind>[XN])(?P<minus>M)?(?P<temp>\d{2})/(?P<day>\d{2})(?P<hour>\d{2})Z$"
)


class BodyKind(str, Enum):
    OBSERVATION = "observation"
    TREND = "trend"
    FORECAST = "forecast"


class PressureUnit(str, Enum):
    HPA = "hPa"
    INHG = "inHg"


class Pressure(Record):
    """Altimeter setting in its reported unit."""

    value: float
    unit: PressureUnit = PressureUnit.HPA

    def hpa(self) -> int:
        if self.unit == PressureUnit.INHG:
            return inhg_to_hpa(self.value)
        return int(self.value)

    def inhg(self) -> float:
        if self.unit == PressureUnit.INHG:
            return self.value
        return hpa_to_inhg(self.value)

    def mmhg(self) -> int:
        return hpa_to_mmhg(self.hpa())


class TemperatureForecast(Record):
    """Forecast maximum (TX) or minimum (TN) temperature and when it is expected."""

    temperature: int
    time: Optional[datetime] = None
    is_max: bool = False

    @property
    def is_min(self) -> bool:
        return not self.is_max


class BodyFields(Record):
    """Every field the main-body decoder can fill in."""

    wind: Optional[Wind] = None
    cavok: bool = False
    visibility: Optional[Visibility] = None
    runway_visual_ranges: Tuple[RunwayVisualRange, ...] = ()
    phenomena: Tuple[Phenomenon, ...] = ()
    phenomena_not_observed: bool = False
    vertical_visibility: Optional[VerticalVisibility] = None
    clouds: Tuple[CloudLayer, ...] = ()
    temperature: Optional[int] = None
    dewpoint: Optional[int] = None
    temperature_forecasts: Tuple[TemperatureForecast, ...] = ()
    pressure: Optional[Pressure] = None
    recent_phenomena: Tuple[Phenomenon, ...] = ()
    wind_shear: Tuple[RunwayDesignator, ...] = ()
    runway_states: Tuple[RunwayState, ...] = ()
    nosig: bool = False
    not_decoded_tokens: Tuple[str, ...] = ()

    def relative_humidity(self) -> Optional[int]:
        if self.temperature is None or self.dewpoint is None:
            return None
        return relative_humidity(self.temperature, self.dewpoint)


def parse_temperature(tokens: Sequence[str], pos: int) -> Optional[Tuple[Tuple[int, int], int]]:
    """Try to decode ``TT/DD`` (``M`` prefix for negatives); returns ((temperature, dewpoint), 1)."""
    if pos >= len(tokens):
        return None
    match = TEMPERATURE_RE.match(tokens[pos])
    if not match:
        return None
    temperature = int(match.group("temp"))
    dewpoint = int(match.group("dew"))
    if match.group("temp_minus"):
        temperature = -temperature
    if match.group("dew_minus"):
        dewpoint = -dewpoint
    return (temperature, dewpoint), 1


def parse_pressure(tokens: Sequence[str], pos: int) -> Optional[Tuple[Pressure, int]]:
    """Try to decode ``Qdddd`` (hPa) or ``Adddd`` (hundredths of inHg)."""
    if pos >= len(tokens):
        return None
    match = PRESSURE_RE.match(tokens[pos])
    if not match:
        return None
    digits = match.group("value")
    if match.group("unit") == "A":
        # A3006 is 30.06 inHg
        return Pressure(value=float(f"{digits[:2]}.{digits[2:]}"), unit=PressureUnit.INHG), 1
    return Pressure(value=int(digits), unit=PressureUnit.HPA), 1


def parse_temperature_forecast(
    tokens: Sequence[str],
    pos: int,
    context: DecodeContext,
    issue_time: Optional[datetime] = None,
) -> Optional[Tuple[TemperatureForecast, int]]:
    """
    Try to decode a forecast temperature extreme, ``TX21/1712Z`` or ``TNM07/1802Z``.

    A day earlier than the issue day belongs to the following month.
    """
    if pos >= len(tokens):
        return None
    match = TEMPERATURE_FORECAST_RE.match(tokens[pos])
    if not match:
        return None
    temperature = int(match.group("temp"))
    if match.group("minus"):
        temperature = -temperature
    day = int(match.group("day"))
    when = context.resolve_day_time(day, int(match.group("hour")))
    if when is not None and issue_time is not None and day < issue_time.day:
        when = add_month(when)
    forecast = TemperatureForecast(temperature=temperature, time=when, is_max=match.group("kind") == "X")
    return forecast, 1


class _BodyState:
    """Mutable accumulator behind one body decode."""

    def __init__(self):
        self.wind: Optional[Wind] = None
        self.cavok = False
        self.visibility: Optional[Visibility] = None
        self.runway_visual_ranges: List[RunwayVisualRange] = []
        self.phenomena: List[Phenomenon] = []
        self.phenomena_not_observed = False
        self.vertical_visibility: Optional[VerticalVisibility] = None
        self.clouds: List[CloudLayer] = []
        self.temperature: Optional[int] = None
        self.dewpoint: Optional[int] = None
        self.temperature_forecasts: List[TemperatureForecast] = []
        self.pressure: Optional[Pressure] = None
        self.recent_phenomena: List[Phenomenon] = []
        self.wind_shear: List[RunwayDesignator] = []
        self.runway_states: List[RunwayState] = []
        self.nosig = False
        self.not_decoded_tokens: List[str] = []

    def freeze(self) -> BodyFields:
        return BodyFields(
            wind=self.wind,
            cavok=self.cavok,
            visibility=self.visibility,
            runway_visual_ranges=tuple(self.runway_visual_ranges),
            phenomena=tuple(self.phenomena),
            phenomena_not_observed=self.phenomena_not_observed,
            vertical_visibility=self.vertical_visibility,
            clouds=tuple(self.clouds),
            temperature=self.temperature,
            dewpoint=self.dewpoint,
            temperature_forecasts=tuple(self.temperature_forecasts),
            pressure=self.pressure,
            recent_phenomena=tuple(self.recent_phenomena),
            wind_shear=tuple(self.wind_shear),
            runway_states=tuple(self.runway_states),
            nosig=self.nosig,
            not_decoded_tokens=tuple(self.not_decoded_tokens),
        )


Parser = Callable[[Sequence[str], int], Optional[Tuple[object, int]]]
Store = Callable[[_BodyState, object], None]


class _Step:
    """
    One field grammar in the body pipeline.

    A parsed value goes to ``store`` when given. Otherwise it is appended
    to the ``field`` list for repeatable groups, or assigned to ``field``.
    """

    def __init__(self, name: str, parser: Parser, field: Optional[str] = None, store: Optional[Store] = None,
                 repeat: bool = False, kinds: Tuple[BodyKind, ...] = tuple(BodyKind),
                 skipped_by_cavok: bool = False):
        self.name = name
        self.parser = parser
        self.field = field
        self.store = store
        self.repeat = repeat
        self.kinds = kinds
        self.skipped_by_cavok = skipped_by_cavok

    def applies(self, kind: BodyKind, state: _BodyState) -> bool:
        if kind not in self.kinds:
            return False
        return not (self.skipped_by_cavok and state.cavok)

    def save(self, state: _BodyState, value: object) -> None:
        if self.store is not None:
            self.store(state, value)
        elif self.repeat:
            getattr(state, self.field).append(value)
        else:
            setattr(state, self.field, value)

    def run(self, state: _BodyState, tokens: Sequence[str], pos: int) -> int:
        """Apply the grammar at ``pos`` (repeatedly if allowed); returns tokens consumed."""
        consumed = 0
        while pos + consumed < len(tokens):
            result = self.parser(tokens, pos + consumed)
            if result is None:
                break
            value, used = result
            self.save(state, value)
            consumed += used
            if not self.repeat:
                break
        return consumed


def _keyword(word: str) -> Parser:
    def parse(tokens: Sequence[str], pos: int) -> Optional[Tuple[bool, int]]:
        if pos < len(tokens) and tokens[pos] == word:
            return True, 1
        return None
    return parse


def _store_temperature(state: _BodyState, value: Tuple[int, int]) -> None:
    state.temperature, state.dewpoint = value


def _store_present_weather(state: _BodyState, value: Optional[Phenomenon]) -> None:
    if value is None:
        state.phenomena_not_observed = True
    else:
        state.phenomena.append(value)


def _parse_present_weather(tokens: Sequence[str], pos: int) -> Optional[Tuple[Optional[Phenomenon], int]]:
    if pos < len(tokens) and tokens[pos] == PHENOMENA_NOT_OBSERVED:
        return None, 1
    return parse_phenomenon(tokens, pos)


def _build_steps(context: DecodeContext, issue_time: Optional[datetime]) -> List[_Step]:
    observation = (BodyKind.OBSERVATION,)
    reported = (BodyKind.OBSERVATION, BodyKind.TREND)

    def parse_forecast_temperature(tokens: Sequence[str], pos: int):
        return parse_temperature_forecast(tokens, pos, context, issue_time)

    return [
        _Step("wind", parse_wind, "wind"),
        _Step("cavok", _keyword(CAVOK), "cavok"),
        _Step("visibility", parse_visibility, "visibility", skipped_by_cavok=True),
        _Step("runway visual range", parse_visual_range, "runway_visual_ranges",
              repeat=True, kinds=observation, skipped_by_cavok=True),
        _Step("present weather", _parse_present_weather, store=_store_present_weather,
              repeat=True, skipped_by_cavok=True),
        _Step("vertical visibility", parse_vertical_visibility, "vertical_visibility", skipped_by_cavok=True),
        _Step("clouds", parse_cloud, "clouds", repeat=True, skipped_by_cavok=True),
        _Step("temperature", parse_temperature, store=_store_temperature, kinds=reported),
        _Step("temperature forecast", parse_forecast_temperature, "temperature_forecasts",
              repeat=True, kinds=(BodyKind.FORECAST,)),
        _Step("pressure", parse_pressure, "pressure", kinds=reported),
        _Step("recent weather", parse_recent_phenomenon, "recent_phenomena", repeat=True, kinds=observation),
        _Step("wind shear", parse_wind_shear, "wind_shear", repeat=True, kinds=observation),
        _Step("runway state", parse_runway_state, "runway_states", repeat=True, kinds=observation),
        _Step("nosig", _keyword(NOSIG), "nosig", kinds=observation),
    ]


def decode_body(
    tokens: Sequence[str],
    kind: BodyKind,
    context: DecodeContext,
    issue_time: Optional[datetime] = None,
) -> BodyFields:
    """
    Decode a run of body tokens.

    Args:
        tokens: Body tokens only (no header, trend or remarks tokens)
        kind: Which report section the tokens come from; selects the steps
        context: Reference date for timestamps
        issue_time: Report issue time, used for month rollover of forecast temperatures

    Returns:
        Frozen body fields, including the tokens no step could place
    """
    state = _BodyState()
    steps = _build_steps(context, issue_time)
    pos = 0
    while pos < len(tokens):
        advanced = False
        for step in steps:
            if pos >= len(tokens):
                break
            if not step.applies(kind, state):
                continue
            used = step.run(state, tokens, pos)
            if used:
                pos += used
                advanced = True
        if not advanced:
            logger.debug(f"Token not decoded ({kind.value} body): {tokens[pos]}")
            state.not_decoded_tokens.append(tokens[pos])
            pos += 1
    return state.freeze()
