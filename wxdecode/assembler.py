"""Composition of header, body, trend and remark results into message fields."""

from typing import Any, Dict, Sequence

from wxdecode.body import BodyKind, decode_body
from wxdecode.context import DecodeContext
from wxdecode.header import Header
from wxdecode.remarks import decode_remarks
from wxdecode.segmenter import split_message
from wxdecode.trend import decode_trend


def header_fields(header: Header, *names: str) -> Dict[str, Any]:
    """The named header values, ready to pass to a message constructor."""
    return {name: getattr(header, name) for name in names}


def decode_sections(tokens: Sequence[str], header: Header, kind: BodyKind,
                    context: DecodeContext) -> Dict[str, Any]:
    """
    Decode everything after the header.

    Returns:
        Message fields: body fields, ``trends``, ``remarks`` and
        ``not_decoded_tokens`` (header, then main body, then each trend,
        so tokens stay in report order)
    """
    segments = split_message(tokens, header.length, forecast=kind == BodyKind.FORECAST)
    body = decode_body(segments.body, kind, context, header.issue_time)
    trends = tuple(decode_trend(block, context) for block in segments.trends)

    fields = dict(body)
    fields["trends"] = trends
    fields["remarks"] = decode_remarks(segments.remarks) if segments.remarks is not None else None
    fields["not_decoded_tokens"] = header.not_decoded + body.not_decoded_tokens + tuple(
        token for trend in trends for token in trend.not_decoded_tokens
    )
    return fields
