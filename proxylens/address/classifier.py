"""
Named reserved-range classifier
"""

from enum import Enum

from ..models import Address, IPKind, v4, v6
from .parser import parse, valid


class RangeName(str, Enum):
    """Reserved range labels, compare equal to their plain names"""
    UNSPECIFIED = "unspecified"
    BROADCAST = "broadcast"
    MULTICAST = "multicast"
    LINK_LOCAL = "linkLocal"
    LOOPBACK = "loopback"
    PRIVATE = "private"
    RESERVED = "reserved"
    UNIQUE_LOCAL = "uniqueLocal"
    IPV4_MAPPED = "ipv4Mapped"
    RFC6145 = "rfc6145"
    RFC6052 = "rfc6052"
    SIX_TO_FOUR = "6to4"
    TEREDO = "teredo"
    UNICAST = "unicast"


# Order matters: the first matching entry wins
IPV4_RANGES: tuple[tuple[RangeName, tuple[Address, ...]], ...] = (
    (RangeName.UNSPECIFIED, (v4((0, 0, 0, 0), 8),)),
    (RangeName.BROADCAST, (v4((255, 255, 255, 255), 32),)),
    (RangeName.MULTICAST, (v4((224, 0, 0, 0), 4),)),
    (RangeName.LINK_LOCAL, (v4((169, 254, 0, 0), 16),)),
    (RangeName.LOOPBACK, (v4((127, 0, 0, 0), 8),)),
    (RangeName.PRIVATE, (
        v4((10, 0, 0, 0), 8),
        v4((172, 16, 0, 0), 12),
        v4((192, 168, 0, 0), 16),
    )),
    (RangeName.RESERVED, (
        v4((192, 0, 0, 0), 24),
        v4((192, 0, 2, 0), 24),
        v4((192, 88, 99, 0), 24),
        v4((198, 51, 100, 0), 24),
        v4((203, 0, 113, 0), 24),
        v4((240, 0, 0, 0), 4),
    )),
)

IPV6_RANGES: tuple[tuple[RangeName, tuple[Address, ...]], ...] = (
    (RangeName.UNSPECIFIED, (v6((0, 0, 0, 0, 0, 0, 0, 0), 128),)),
    (RangeName.LINK_LOCAL, (v6((0xfe80, 0, 0, 0, 0, 0, 0, 0), 10),)),
    (RangeName.MULTICAST, (v6((0xff00, 0, 0, 0, 0, 0, 0, 0), 8),)),
    (RangeName.LOOPBACK, (v6((0, 0, 0, 0, 0, 0, 0, 1), 128),)),
    (RangeName.UNIQUE_LOCAL, (v6((0xfc00, 0, 0, 0, 0, 0, 0, 0), 7),)),
    (RangeName.IPV4_MAPPED, (v6((0, 0, 0, 0, 0, 0xffff, 0, 0), 96),)),
    (RangeName.RFC6145, (v6((0, 0, 0, 0, 0xffff, 0, 0, 0), 96),)),
    (RangeName.RFC6052, (v6((0x64, 0xff9b, 0, 0, 0, 0, 0, 0), 96),)),
    (RangeName.SIX_TO_FOUR, (v6((0x2002, 0, 0, 0, 0, 0, 0, 0), 16),)),
    (RangeName.TEREDO, (v6((0x2001, 0, 0, 0, 0, 0, 0, 0), 32),)),
    (RangeName.RESERVED, (v6((0x2001, 0xdb8, 0, 0, 0, 0, 0, 0), 32),)),
)

RANGES = {IPKind.V4: IPV4_RANGES, IPKind.V6: IPV6_RANGES}


def classify(address: Address, default: RangeName = RangeName.UNICAST) -> RangeName:
    """
    Classify an address into its named reserved range.

    Args:
        address: Parsed address (its own prefix length is ignored)
        default: Label returned when no range matches

    Returns:
        RangeName of the first matching table entry
    """
    for name, networks in RANGES[address.kind]:
        for network in networks:
            if address.match(network):
                return name
    return default


class AddressClassifier:
    """
    Text-level convenience wrappers around :func:`classify`.

    Invalid input classifies as None instead of raising.
    """

    @classmethod
    def classify(cls, text: str):
        if not text or not valid(text):
            return None
        return classify(parse(text))
