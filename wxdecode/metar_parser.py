"""METAR/SPECI decoding: best-effort, never fails on a bad group."""

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

HEADER_FIELDS = ("report_type", "cor", "station", "issue_time", "auto", "nil")


class MetarMessage(BodyFields):
    """Decoded current-observation report."""

    raw: str
    report_type: Optional[str] = None
    cor: bool = False
    station: Optional[str] = None
    issue_time: Optional[datetime] = None
    auto: bool = False
    nil: bool = False
    trends: Tuple[Trend, ...] = ()
    remarks: Optional[Remark] = None

    @property
    def valid(self) -> bool:
        """True when the header was recognized."""
        return self.station is not None


def decode_metar(raw: str, context: DecodeContext) -> MetarMessage:
    """
    Decode a METAR or SPECI report.

    Args:
        raw: Report text, e.g. "METAR URSS 270600Z 22003MPS 9999 VCFG VV/// 17/11 Q1018"
        context: Reference date the day/hour fields are resolved against

    Returns:
        Decoded message. If station and time cannot be read, the whole text
        is the only not-decoded token. A NIL report stops after the header.
    """
    tokens = tokenize(raw)
    header = decode_header(tokens, context, forecast=False)
    if not header.recognized:
        return MetarMessage(raw=raw, not_decoded_tokens=(raw,))

    fields = header_fields(header, *HEADER_FIELDS)
    if header.nil:
        logger.debug(f"{header.station}: missing report (NIL)")
        return MetarMessage(raw=raw, not_decoded_tokens=header.not_decoded, **fields)

    fields.update(decode_sections(tokens, header, BodyKind.OBSERVATION, context))
    message = MetarMessage(raw=raw, **fields)
    if message.not_decoded_tokens:
        logger.debug(f"{message.station}: {len(message.not_decoded_tokens)} token(s) not decoded")
    return message
