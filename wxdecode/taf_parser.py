"""TAF (terminal aerodrome forecast) decoding."""

import logging
from datetime import datetime
from typing import Optional, Tuple

from wxdecode.assembler import decode_sections, header_fields
from wxdecode.body import BodyFields, BodyKind
from wxdecode.context import DecodeContext
from wxdecode.header import decode_header
from wxdecode.remarks import Remark
from wxdecode.segmenter import tokenize
from wxdecode.trend import Trend

logger = logging.getLogger(__name__)

HEADER_FIELDS = (
    "report_type", "cor", "amd", "station", "issue_time", "auto", "nil", "valid_from", "valid_to", "cnl",
)


class TafMessage(BodyFields):
    """Decoded terminal aerodrome forecast."""

    raw: str
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
    trends: Tuple[Trend, ...] = ()
    remarks: Optional[Remark] = None

    @property
    def valid(self) -> bool:
        """True when the header was recognized."""
        return self.station is not None


def decode_taf(raw: str, context: DecodeContext) -> TafMessage:
    """
    Decode a TAF.

    Args:
        raw: Forecast text, e.g. "TAF UUEE 170800Z 1709/1809 02003MPS 0700 FG BKN003 TX21/1712Z"
        context: Reference date the day/hour fields are resolved against

    Returns:
        Decoded forecast. A NIL forecast stops after the issue time, a
        cancelled one (CNL) after the validity window.
    """
    tokens = tokenize(raw)
    header = decode_header(tokens, context, forecast=True)
    if not header.recognized:
        return TafMessage(raw=raw, not_decoded_tokens=(raw,))

    fields = header_fields(header, *HEADER_FIELDS)
    if header.nil or header.cnl:
        logger.debug(f"{header.station}: forecast {'missing' if header.nil else 'cancelled'}")
        return TafMessage(raw=raw, not_decoded_tokens=header.not_decoded, **fields)

    fields.update(decode_sections(tokens, header, BodyKind.FORECAST, context))
    return TafMessage(raw=raw, **fields)
