"""Fixed-position report header decoding."""

import logging
import re
from datetime import datetime
from typing import Optional, Sequence, Tuple

from wxdecode.context import DecodeContext, add_month
from wxdecode.records import Record

logger = logging.getLogger(__name__)

OBSERVATION_TYPES = ("METAR", "SPECI")
FORECAST_TYPES = ("TAF",)

STATION_RE = re.compile(r"^[A-Z0-9]{4}$")
ISSUE_TIME_RE = re.compile(r"^(?P<day>\d{2})(?P<hour>\d{2})(?P<minute>\d{2})Z$")
VALIDITY_RE = re.compile(r"^(?P<from_day>\d{2})(?P<from_hour>\d{2})/(?P<to_day>\d{2})(?P<to_hour>\d{2})$")


class Header(Record):
    """
    Decoded header.

    ``length`` is the number of tokens the header took. When
    ``recognized`` is False the station or the issue time was missing and
    nothing else in the report can be trusted. ``not_decoded`` holds
    header tokens whose date or time did not resolve.
    """

    recognized: bool = False
    length: int = 0
    report_type: Optional[str] = None
    cor: bool = False
    amd: bool = False
    station: Optional[str] = None
    issue_time: Optional[datetime] = None
    auto: bool = False
    nil: bool = False
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None
    cnl: bool = False
    not_decoded: Tuple[str, ...] = ()


def _resolve_validity(day: int, hour: int, context: DecodeContext,
                      issue_time: Optional[datetime]) -> Optional[datetime]:
    when = context.resolve_day_time(day, hour)
    # a validity day before the issue day is in the next month
    if when is not None and issue_time is not None and day < issue_time.day:
        when = add_month(when)
    return when


def decode_header(tokens: Sequence[str], context: DecodeContext, forecast: bool) -> Header:
    """
    Decode the header at the start of ``tokens``.

    Observation: ``[METAR|SPECI] [COR] CCCC ddhhmmZ [AUTO] [NIL]``.
    Forecast: ``[TAF] [COR] [AMD] CCCC ddhhmmZ [AUTO] [NIL] [ddhh/ddhh] [CNL]``.
    """
    fields = {}
    not_decoded = []
    pos = 0

    def take(word: str) -> bool:
        nonlocal pos
        if pos < len(tokens) and tokens[pos] == word:
            pos += 1
            return True
        return False

    types = FORECAST_TYPES if forecast else OBSERVATION_TYPES
    if pos < len(tokens) and tokens[pos] in types:
        fields["report_type"] = tokens[pos]
        pos += 1
    fields["cor"] = take("COR")
    if forecast:
        fields["amd"] = take("AMD")

    if pos + 1 >= len(tokens) or not STATION_RE.match(tokens[pos]):
        logger.info(f"Report header not recognized: {' '.join(tokens[:3])}")
        return Header()
    issue = ISSUE_TIME_RE.match(tokens[pos + 1])
    if not issue:
        logger.info(f"Report issue time not recognized: {tokens[pos + 1]}")
        return Header()
    fields["station"] = tokens[pos]
    issue_time = context.resolve_day_time(int(issue.group("day")), int(issue.group("hour")),
                                          int(issue.group("minute")))
    fields["issue_time"] = issue_time
    if issue_time is None:
        not_decoded.append(tokens[pos + 1])
    pos += 2

    fields["auto"] = take("AUTO")
    fields["nil"] = take("NIL")

    if forecast and not fields["nil"] and pos < len(tokens):
        validity = VALIDITY_RE.match(tokens[pos])
        if validity:
            fields["valid_from"] = _resolve_validity(int(validity.group("from_day")), int(validity.group("from_hour")),
                                                     context, issue_time)
            fields["valid_to"] = _resolve_validity(int(validity.group("to_day")), int(validity.group("to_hour")),
                                                   context, issue_time)
            if fields["valid_from"] is None or fields["valid_to"] is None:
                not_decoded.append(tokens[pos])
            pos += 1
        fields["cnl"] = take("CNL")

    return Header(recognized=True, length=pos, not_decoded=tuple(not_decoded), **fields)
