"""Forecast-of-change (trend) blocks: TEMPO, BECMG, FM and PROB groups."""

import logging
import re
from datetime import datetime
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from wxdecode.body import BodyFields, BodyKind, decode_body
from wxdecode.context import DecodeContext

logger = logging.getLogger(__name__)

TEMPO = "TEMPO"
BECMG = "BECMG"
PROBABILITIES = {"PROB30": 30, "PROB40": 40}

FROM_TIMESTAMP_RE = re.compile(r"^FM(?P<day>\d{2})(?P<hour>\d{2})(?P<minute>\d{2})$")
# AT1230, FM1030, TL2400; the four characters are validated when resolved
TIME_MARKER_RE = re.compile(r"^(?P<marker>AT|FM|TL)(?P<time>\w{4})$")
WINDOW_RE = re.compile(r"^(?P<from_day>\d{2})(?P<from_hour>\d{2})/(?P<to_day>\d{2})(?P<to_hour>\d{2})$")


class TrendType(str, Enum):
    TEMPO = "TEMPO"  # temporary fluctuations
    BECMG = "BECMG"  # becoming
    FM = "FM"  # from (forecast change groups)


class Trend(BodyFields):
    """
    A forecast of change.

    In observation trends the times are clock times on the context day
    (``BECMG FM1030 TL1130``). In forecasts they are day/hour pairs
    (``TEMPO 2208/2218``) or an absolute ``FMddhhmm``.
    """

    type: Optional[TrendType] = None
    probability: Optional[int] = None
    from_time: Optional[datetime] = None
    until_time: Optional[datetime] = None
    at_time: Optional[datetime] = None


def _parse_clock(value: str, context: DecodeContext) -> Optional[datetime]:
    # str.isdigit also accepts superscripts and other non-ASCII digits
    if not (value.isascii() and value.isdigit()):
        logger.warning(f"Malformed trend time: {value}")
        return None
    return context.resolve_clock_time(int(value[:2]), int(value[2:]))


def _decode_prefix(tokens: Sequence[str], context: DecodeContext) -> Tuple[dict, List[str], int]:
    """Decode probability, type and time groups; returns (fields, not decoded tokens, tokens consumed)."""
    fields = {}
    not_decoded: List[str] = []
    pos = 0

    if pos < len(tokens) and tokens[pos] in PROBABILITIES:
        fields["probability"] = PROBABILITIES[tokens[pos]]
        fields["type"] = TrendType.TEMPO
        pos += 1

    if pos < len(tokens):
        token = tokens[pos]
        from_timestamp = FROM_TIMESTAMP_RE.match(token)
        if token in (TEMPO, BECMG):
            fields["type"] = TrendType(token)
            pos += 1
        elif from_timestamp:
            fields["type"] = TrendType.FM
            from_time = context.resolve_day_time(
                int(from_timestamp.group("day")),
                int(from_timestamp.group("hour")),
                int(from_timestamp.group("minute")),
            )
            if from_time is None:
                not_decoded.append(token)
            else:
                fields["from_time"] = from_time
            pos += 1

    # Observation form: any number of AT/FM/TL clock times
    while pos < len(tokens):
        marker = TIME_MARKER_RE.match(tokens[pos])
        if not marker:
            break
        when = _parse_clock(marker.group("time"), context)
        if when is None:
            not_decoded.append(tokens[pos])
        else:
            key = {"AT": "at_time", "FM": "from_time", "TL": "until_time"}[marker.group("marker")]
            fields[key] = when
        pos += 1

    # Forecast form: one ddhh/ddhh window
    if pos < len(tokens):
        window = WINDOW_RE.match(tokens[pos])
        if window:
            start = context.resolve_day_time(int(window.group("from_day")), int(window.group("from_hour")))
            end = context.resolve_day_time(int(window.group("to_day")), int(window.group("to_hour")))
            if start is not None:
                fields["from_time"] = start
            if end is not None:
                fields["until_time"] = end
            if start is None or end is None:
                not_decoded.append(tokens[pos])
            pos += 1
    return fields, not_decoded, pos


def decode_trend(tokens: Sequence[str], context: DecodeContext) -> Trend:
    """
    Decode one trend block.

    Args:
        tokens: The block, starting with its PROB/TEMPO/BECMG/FM keyword
        context: Reference date for the block's times

    Returns:
        Trend with the prefix fields and the decoded body fields
    """
    fields, not_decoded, pos = _decode_prefix(tokens, context)
    body = decode_body(tokens[pos:], BodyKind.TREND, context)
    values = dict(body)
    values["not_decoded_tokens"] = tuple(not_decoded) + body.not_decoded_tokens
    values.update(fields)
    return Trend(**values)
