"""Splitting a tokenized report into main body, trend blocks and remarks."""

from typing import List, Optional, Sequence, Tuple

from wxdecode.remarks import REMARKS_MARKER
from wxdecode.trend import BECMG, FROM_TIMESTAMP_RE, PROBABILITIES, TEMPO

END_OF_MESSAGE = "="


def tokenize(raw: str) -> List[str]:
    """Split raw report text into code groups, dropping the ``=`` end-of-message marker."""
    text = raw.strip()
    if text.endswith(END_OF_MESSAGE):
        text = text[:-1]
    return text.split()


class Segments:
    """Token ranges of one report, in message order."""

    def __init__(self, body: List[str], trends: List[List[str]], remarks: Optional[List[str]]):
        self.body = body
        self.trends = trends
        # None when the report has no RMK section; tokens after the marker otherwise
        self.remarks = remarks


def _trend_start(tokens: Sequence[str], i: int, body_start: int, forecast: bool) -> Optional[int]:
    """Start index of the trend block opened at ``tokens[i]``, or None if it opens none."""
    token = tokens[i]
    if token == TEMPO:
        if forecast and i - 1 >= body_start and tokens[i - 1] in PROBABILITIES:
            return i - 1
        return i
    if token == BECMG:
        return i
    if forecast and (token in PROBABILITIES or FROM_TIMESTAMP_RE.match(token)):
        return i
    return None


def scan_boundaries(tokens: Sequence[str], body_start: int,
                    forecast: bool) -> Tuple[int, List[Tuple[int, int]], Optional[int]]:
    """
    Find block boundaries with a single backward pass.

    A block's end is only known once the next block's start has been seen,
    so the scan runs right to left and the collected blocks are reversed
    at the end.

    Returns:
        (end of main body, trend blocks as (start, end) in message order, remarks marker index)
    """
    end = len(tokens)
    remarks_at = None
    blocks: List[Tuple[int, int]] = []
    i = end - 1
    while i >= body_start:
        if tokens[i] == REMARKS_MARKER:
            # anything found to the right belongs to the remarks
            remarks_at = i
            blocks = []
            end = i
        else:
            start = _trend_start(tokens, i, body_start, forecast)
            if start is not None:
                blocks.append((start, end))
                end = start
                i = start
        i -= 1
    blocks.reverse()
    return end, blocks, remarks_at


def split_message(tokens: Sequence[str], body_start: int, forecast: bool) -> Segments:
    """
    Split the tokens following the header.

    Args:
        tokens: All report tokens
        body_start: Index of the first token after the header
        forecast: True for forecasts, where PROBnn and FMddhhmm also open trend blocks

    Returns:
        Segments with the main body, each trend block and the remarks
    """
    body_end, blocks, remarks_at = scan_boundaries(tokens, body_start, forecast)
    remarks = list(tokens[remarks_at + 1:]) if remarks_at is not None else None
    return Segments(
        body=list(tokens[body_start:body_end]),
        trends=[list(tokens[start:stop]) for start, stop in blocks],
        remarks=remarks,
    )
