"""Decoding of the supplementary remarks section (after RMK)."""

import logging
import re
from typing import List, Optional, Sequence, Tuple

from wxdecode.records import Record
from wxdecode.runways import RunwayDesignator
from wxdecode.utils import mmhg_to_hpa
from wxdecode.wind import Wind, parse_wind

logger = logging.getLogger(__name__)

REMARKS_MARKER = "RMK"

# R06/25002MPS: wind measured on a runway (not in the ICAO tables, used in URSS and UHMA reports)
RUNWAY_WIND_RE = re.compile(r"^R(?P<runway>\d{2}[LCR]?)/(?P<wind>.+)$")
CLOUD_BASE_RE = re.compile(r"^QBB(?P<height>\d+)$")
# QFE762 or QFE762/1004 (mmHg/hPa); only the mmHg value is read
QFE_RE = re.compile(r"^QFE(?P<mmhg>\d{3})")
OBSCURED = "OBSC"
OBSCURED_SUBJECTS = {"MT": "mountains_obscured", "MAST": "mast_obscured", "OBST": "obstacle_obscured"}


class RunwayWind(Record):
    runway: RunwayDesignator
    wind: Wind


class Remark(Record):
    """Decoded remarks. ``other_tokens`` keeps what none of the remark groups matched."""

    runway_winds: Tuple[RunwayWind, ...] = ()
    cloud_base_m: Optional[int] = None
    mountains_obscured: bool = False
    mast_obscured: bool = False
    obstacle_obscured: bool = False
    qfe_mmhg: Optional[int] = None
    other_tokens: Tuple[str, ...] = ()

    def qfe_hpa(self) -> Optional[int]:
        if self.qfe_mmhg is None:
            return None
        return mmhg_to_hpa(self.qfe_mmhg)


def _parse_runway_wind(tokens: Sequence[str], pos: int) -> Optional[Tuple[RunwayWind, int]]:
    match = RUNWAY_WIND_RE.match(tokens[pos])
    if not match:
        return None
    # the wind part stands in for the first token so a variable sector can follow it
    result = parse_wind([match.group("wind")] + list(tokens[pos + 1:pos + 2]), 0)
    if result is None:
        return None
    wind, used = result
    return RunwayWind(runway=RunwayDesignator.from_code(match.group("runway")), wind=wind), used


def decode_remarks(tokens: Sequence[str]) -> Remark:
    """
    Decode the remark tokens that follow the RMK marker.

    Runway winds, the cloud base, obscuration pairs and QFE are tried in
    that order at each position; a token none of them takes is kept in
    ``other_tokens``.
    """
    fields = {}
    runway_winds: List[RunwayWind] = []
    other: List[str] = []
    pos = 0
    while pos < len(tokens):
        start = pos

        while pos < len(tokens):
            result = _parse_runway_wind(tokens, pos)
            if result is None:
                break
            runway_winds.append(result[0])
            pos += result[1]

        if pos < len(tokens):
            cloud_base = CLOUD_BASE_RE.match(tokens[pos])
            if cloud_base:
                fields["cloud_base_m"] = int(cloud_base.group("height"))
                pos += 1

        while pos + 1 < len(tokens) and tokens[pos + 1] == OBSCURED and tokens[pos] in OBSCURED_SUBJECTS:
            fields[OBSCURED_SUBJECTS[tokens[pos]]] = True
            pos += 2

        if pos < len(tokens):
            qfe = QFE_RE.match(tokens[pos])
            if qfe:
                fields["qfe_mmhg"] = int(qfe.group("mmhg"))
                pos += 1

        if pos == start:
            logger.debug(f"Remark token not decoded: {tokens[pos]}")
            other.append(tokens[pos])
            pos += 1

    return Remark(runway_winds=tuple(runway_winds), other_tokens=tuple(other), **fields)
