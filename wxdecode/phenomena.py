"""Present and recent weather phenomena decoding."""

import re
from enum import Enum
from typing import Optional, Sequence, Tuple

from wxdecode.records import Record

# Legal present-weather groups. Qualifiers do not combine freely: VC only
# goes with SH, TS, FG, VA, PO, FC, SS, DS and the BL group, there is no
# light funnel cloud (-FC), no shallow-only fog intensity (MIFG), etc.
PRESENT_WEATHER_CODES = frozenset({
    "-DZ", "-RA", "-SN", "-SG", "-PL", "UP", "-DZRA", "-RADZ", "-SNDZ", "-SGDZ", "-PLDZ", "-DZSN", "-RASN",
    "-SNRA", "-SGRA", "-PLRA", "FZUP", "-DZSG", "-RASG", "-SNSG", "-SGSN", "-PLSN", "-DZPL", "-RAPL", "-SNPL",
    "-SGPL", "-PLSG", "-DZRASN", "-RADZSN", "-SNDZRA", "-SGDZRA", "-PLDZRA", "-DZRASG", "-RADZSG", "-SNRADZ",
    "-SGRASN", "-PLRASN", "-DZRAPL", "-RADZPL", "-SNRASG", "-SGPLSN", "-PLSNRA", "-DZSNRA", "-RASNDZ",
    "-SNRAPL", "-SGSNRA", "-PLRADZ", "-DZSGRA", "-RASNSG", "-SNPLRA", "-SGRADZ", "-PLSNSG", "-DZPLRA",
    "-RASNPL", "-SNPLSG", "-SGSNPL", "-PLSGSN", "-RASGSN", "-SNSGRA", "-RASGDZ", "-SNSGPL", "PL", "-RAPLDZ",
    "PLDZ", "-RAPLSN", "PLRA", "DZ", "RA", "SN", "SG", "PLSN", "DZRA", "RADZ", "SNDZ", "SGDZ", "PLSG", "DZSN",
    "RASN", "SNRA", "SGRA", "PLDZRA", "DZSG", "RASG", "SNSG", "SGSN", "PLRASN", "DZPL", "RAPL", "SNPL", "SGPL",
    "PLSNRA", "DZRASN", "RADZSN", "SNDZRA", "SGDZRA", "PLRADZ", "DZRASG", "RADZSG", "SNRADZ", "SGRASN",
    "PLSNSG", "DZRAPL", "RADZPL", "SNRASG", "SGPLSN", "PLSGSN", "DZSNRA", "RASNDZ", "SNRAPL", "SGSNRA", "+PL",
    "DZSGRA", "RASNSG", "SNPLRA", "SGRADZ", "+PLDZ", "DZPLRA", "RASNPL", "SNPLSG", "SGSNPL", "+PLRA",
    "RASGSN", "SNSGRA", "+PLSN", "RASGDZ", "SNSGPL", "+PLSG", "RAPLDZ", "+PLDZRA", "RAPLSN", "+PLRASN", "+DZ",
    "+RA", "+SN", "+SG", "+PLSNRA", "+DZRA", "+RADZ", "+SNDZ", "+SGDZ", "+PLRADZ", "+DZSN", "+RASN", "+SNRA",
    "+SGRA", "+PLSNSG", "+DZSG", "+RASG", "+SNSG", "+SGSN", "+PLSGSN", "+DZPL", "+RAPL", "+SNPL", "+SGPL",
    "SHUP", "+DZRASN", "+RADZSN", "+SNDZRA", "+SGDZRA", "TSUP", "+DZRASG", "+RADZSG", "+SNRADZ", "+SGRASN",
    "TS", "+DZRAPL", "+RADZPL", "+SNRASG", "+SGPLSN", "VCTS", "+DZSNRA", "+RASNDZ", "+SNRAPL", "+SGSNRA",
    "+DZSGRA", "+RASNSG", "+SNPLRA", "+SGRADZ", "+DZPLRA", "+RASNPL", "+SNPLSG", "+SGSNPL", "+RASGSN",
    "+SNSGRA", "+RASGDZ", "+SNSGPL", "+RAPLDZ", "+RAPLSN", "-SHRA", "-SHSN", "-SHGR", "-SHGS", "-SHRASN",
    "-SHSNRA", "-SHGRRA", "-SHGSRA", "-SHRAGR", "-SHSNGR", "-SHGRSN", "-SHGSSN", "-SHRAGS", "-SHSNGS",
    "-SHRASNGR", "-SHSNRAGR", "-SHGRRASN", "-SHGSRASN", "-SHRAGRSN", "-SHSNGRRA", "-SHGRSNRA", "-SHGSSNRA",
    "-SHRASNGS", "-SHSNRAGS", "-SHRAGSSN", "-SHSNGSRA", "SHRA", "SHSN", "SHGR", "SHGS", "SHRASN", "SHSNRA",
    "SHGRRA", "SHGSRA", "SHRAGR", "SHSNGR", "SHGRSN", "SHGSSN", "SHRAGS", "SHSNGS", "SHRASNGR", "SHSNRAGR",
    "SHGRRASN", "SHGSRASN", "SHRAGRSN", "SHSNGRRA", "SHGRSNRA", "SHGSSNRA", "SHRASNGS", "SHSNRAGS",
    "SHRAGSSN", "SHSNGSRA", "+SHRA", "+SHSN", "+SHGR", "+SHGS", "+SHRASN", "+SHSNRA", "+SHGRRA", "+SHGSRA",
    "+SHRAGR", "+SHSNGR", "+SHGRSN", "+SHGSSN", "+SHRAGS", "+SHSNGS", "+SHRASNGR", "+SHSNRAGR", "+SHGRRASN",
    "+SHGSRASN", "+SHRAGRSN", "+SHSNGRRA", "+SHGRSNRA", "+SHGSSNRA", "+SHRASNGS", "+SHSNRAGS", "+SHRAGSSN",
    "+SHSNGSRA", "-TSRA", "-TSSN", "-TSGR", "-TSGS", "-TSRASN", "-TSSNRA", "-TSGRRA", "-TSGSRA", "-TSRAGR",
    "-TSSNGR", "-TSGRSN", "-TSGSSN", "-TSRAGS", "-TSSNGS", "-TSRASNGR", "-TSSNRAGR", "-TSGRRASN",
    "-TSGSRASN", "-TSRAGRSN", "-TSSNGRRA", "-TSGRSNRA", "-TSGSSNRA", "-TSRASNGS", "-TSSNRAGS", "-TSRAGSSN",
    "-TSSNGSRA", "TSRA", "TSSN", "TSGR", "TSGS", "TSRASN", "TSSNRA", "TSGRRA", "TSGSRA", "TSRAGR", "TSSNGR",
    "TSGRSN", "TSGSSN", "TSRAGS", "TSSNGS", "TSRASNGR", "TSSNRAGR", "TSGRRASN", "TSGSRASN", "TSRAGRSN",
    "TSSNGRRA", "TSGRSNRA", "TSGSSNRA", "TSRASNGS", "TSSNRAGS", "TSRAGSSN", "TSSNGSRA", "+TSRA", "+TSSN",
    "+TSGR", "+TSGS", "+TSRASN", "+TSSNRA", "+TSGRRA", "+TSGSRA", "+TSRAGR", "+TSSNGR", "+TSGRSN", "+TSGSSN",
    "+TSRAGS", "+TSSNGS", "+TSRASNGR", "+TSSNRAGR", "+TSGRRASN", "+TSGSRASN", "+TSRAGRSN", "+TSSNGRRA",
    "+TSGRSNRA", "+TSGSSNRA", "+TSRASNGS", "+TSSNRAGS", "+TSRAGSSN", "+TSSNGSRA", "-FZDZ", "-FZRA",
    "-FZDZRA", "-FZRADZ", "FZDZ", "FZRA", "FZDZRA", "FZRADZ", "+FZDZ", "+FZRA", "+FZDZRA", "+FZRADZ", "-DS",
    "DS", "+DS", "VCDS", "-SS", "SS", "+SS", "VCSS", "FG", "FC", "PO", "VA", "VCFG", "+FC", "VCPO", "VCVA", "VCFC",
    "VCSH", "BLSA", "BLDU", "BLSN", "DRSA", "DRDU", "DRSN", "SA", "DU", "VCBLSA", "VCBLDU", "VCBLSN", "MIFG",
    "PRFG", "BCFG", "FZFG", "BR", "HZ", "FU", "SQ", "NSW",
})

# Recent weather: always RE-prefixed, never with intensity or vicinity.
RECENT_WEATHER_CODES = frozenset({
    "REFZDZ", "REFZRA", "REDZ", "RERA", "RESHRA", "RERASN", "RESN", "RESG", "RESHGR", "RESHGS", "REBLSN",
    "RESS", "REDS", "RETSRA", "RETSSN", "RETSGR", "RETSGS", "RETS", "REFC", "REVA", "REPL", "REUP", "REFZUP",
    "RETSUP", "RESHUP",
})

# Codes a compound group splits into: TSRASNGR -> TSRA, SN, GR
COMPONENT_CODES = frozenset({
    "BCFG", "BLDU", "BLSA", "BLSN", "BR", "DRDU", "DRSA", "DRSN", "DS", "DU", "DZ", "FC", "FG", "FU", "FZDZ",
    "FZFG", "FZRA", "GS", "GR", "HZ", "IC", "MIFG", "PO", "PL", "PRFG", "RA", "SA", "SG", "SH", "SHGR", "SHGS",
    "SHRA", "SHSN", "SN", "SQ", "SS", "TS", "TSGR", "TSGS", "TSRA", "TSSN", "UP", "SHUP", "TSUP", "FZUP", "VA",
    "NSW",
})

PHENOMENON_RE = re.compile(r"^(?P<intensity>[+-])?(?P<vicinity>VC)?(?P<code>[A-Z]{2,8})$")


class Intensity(str, Enum):
    LIGHT = "-"
    MODERATE = ""
    HEAVY = "+"


class Phenomenon(Record):
    """A present or recent weather phenomenon."""

    code: str
    intensity: Intensity = Intensity.MODERATE
    vicinity: bool = False

    def components(self) -> Tuple[str, ...]:
        """
        Split a compound code into its basic codes.

        Longest match first, so TSRASNGR gives (TSRA, SN, GR). An
        unknown remainder is returned as is.
        """
        parts = []
        rest = self.code
        while rest:
            for size in (4, 2):
                if rest[:size] in COMPONENT_CODES:
                    parts.append(rest[:size])
                    rest = rest[size:]
                    break
            else:
                parts.append(rest)
                break
        return tuple(parts)


def parse_phenomenon(tokens: Sequence[str], pos: int) -> Optional[Tuple[Phenomenon, int]]:
    """Try to decode a present-weather group at ``tokens[pos]`` (whitelist first, then decompose)."""
    if pos >= len(tokens) or tokens[pos] not in PRESENT_WEATHER_CODES:
        return None
    match = PHENOMENON_RE.match(tokens[pos])
    phenomenon = Phenomenon(
        code=match.group("code"),
        intensity=Intensity(match.group("intensity") or ""),
        vicinity=match.group("vicinity") is not None,
    )
    return phenomenon, 1


def parse_recent_phenomenon(tokens: Sequence[str], pos: int) -> Optional[Tuple[Phenomenon, int]]:
    """Try to decode a recent-weather group (``RESHRA``) at ``tokens[pos]``."""
    if pos >= len(tokens) or tokens[pos] not in RECENT_WEATHER_CODES:
        return None
    return Phenomenon(code=tokens[pos][2:]), 1
