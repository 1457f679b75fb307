"""Cloud layer and vertical visibility decoding."""

import re
from enum import Enum
from typing import Optional, Sequence, Tuple

from wxdecode.records import Record
from wxdecode.utils import ft_to_m

# Prefix-anchored: trailing garbage after a valid layer (BKN015//) is tolerated.
CLOUD_RE = re.compile(r"^(?P<amount>FEW|SCT|BKN|OVC|NSC|SKC|NCD|CLR|///)(?P<height>\d{3}|///)?(?P<type>TCU|CB|///)?")
VERTICAL_VISIBILITY_RE = re.compile(r"^VV(?P<height>\d{3}|///)$")


class CloudAmount(str, Enum):
    FEW = "FEW"
    SCT = "SCT"  # scattered
    BKN = "BKN"  # broken
    OVC = "OVC"  # overcast
    NSC = "NSC"  # nil significant cloud
    NCD = "NCD"  # nil cloud detected (automated station)
    SKC = "SKC"  # sky clear
    CLR = "CLR"  # sky clear (automated station)
    NOT_DEFINED = "///"


NO_CLOUD_AMOUNTS = frozenset({CloudAmount.NSC, CloudAmount.NCD, CloudAmount.SKC, CloudAmount.CLR})


class ConvectiveType(str, Enum):
    CB = "CB"
    TCU = "TCU"
    NOT_DEFINED = "///"


class CloudLayer(Record):
    """
    One cloud layer.

    ``height`` is in hundreds of feet, as reported. It is None when the
    group carries no height, and 0 with ``height_not_defined`` set for
    ``///``.
    """

    amount: CloudAmount
    height: Optional[int] = None
    height_not_defined: bool = False
    convective_type: Optional[ConvectiveType] = None

    def height_ft(self) -> Optional[int]:
        if self.height is None:
            return None
        return self.height * 100

    def height_m(self) -> Optional[int]:
        ft = self.height_ft()
        return None if ft is None else ft_to_m(ft)

    @property
    def cumulonimbus(self) -> bool:
        return self.convective_type == ConvectiveType.CB

    @property
    def towering_cumulus(self) -> bool:
        return self.convective_type == ConvectiveType.TCU


class VerticalVisibility(Record):
    """Vertical visibility, hundreds of feet."""

    height: int = 0
    not_defined: bool = False

    def height_ft(self) -> int:
        return self.height * 100

    def height_m(self) -> int:
        return ft_to_m(self.height_ft())


def parse_cloud(tokens: Sequence[str], pos: int) -> Optional[Tuple[CloudLayer, int]]:
    """Try to decode one cloud layer group at ``tokens[pos]``."""
    if pos >= len(tokens):
        return None
    match = CLOUD_RE.match(tokens[pos])
    if not match:
        return None
    amount = CloudAmount(match.group("amount"))
    if amount in NO_CLOUD_AMOUNTS:
        return CloudLayer(amount=amount), 1

    height = match.group("height")
    layer = CloudLayer(
        amount=amount,
        height=0 if height == "///" else (int(height) if height else None),
        height_not_defined=height == "///",
        convective_type=ConvectiveType(match.group("type")) if match.group("type") else None,
    )
    return layer, 1


def parse_vertical_visibility(tokens: Sequence[str], pos: int) -> Optional[Tuple[VerticalVisibility, int]]:
    """Try to decode ``VVddd`` or ``VV///`` at ``tokens[pos]``."""
    if pos >= len(tokens):
        return None
    match = VERTICAL_VISIBILITY_RE.match(tokens[pos])
    if not match:
        return None
    if match.group("height") == "///":
        return VerticalVisibility(not_defined=True), 1
    return VerticalVisibility(height=int(match.group("height"))), 1
