"""Report-type dispatch: one entry point for METAR, SPECI and TAF text."""

from typing import Sequence, Union

from wxdecode.context import DecodeContext
from wxdecode.header import FORECAST_TYPES, OBSERVATION_TYPES
from wxdecode.metar_parser import MetarMessage, decode_metar
from wxdecode.segmenter import tokenize
from wxdecode.taf_parser import TafMessage, decode_taf

METAR = "METAR"
TAF = "TAF"

Message = Union[MetarMessage, TafMessage]


def report_kind(tokens: Sequence[str], default_type: str = METAR) -> str:
    """Return ``"METAR"`` or ``"TAF"`` from the leading keyword, ``default_type`` without one."""
    if tokens and tokens[0] in FORECAST_TYPES:
        return TAF
    if tokens and tokens[0] in OBSERVATION_TYPES:
        return METAR
    return default_type


def decode(raw: str, context: DecodeContext, default_type: str = METAR) -> Message:
    """
    Decode a report of either kind.

    Args:
        raw: Report text
        context: Reference date
        default_type: Kind assumed when the text starts with the station
            code ("METAR" or "TAF")

    Returns:
        MetarMessage or TafMessage
    """
    if report_kind(tokenize(raw), default_type) == TAF:
        return decode_taf(raw, context)
    return decode_metar(raw, context)
