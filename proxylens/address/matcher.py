"""
CIDR matching and IPv4-mapped IPv6 bridging
"""

from typing import Optional, Sequence

from ..exceptions import KindMismatch, NotIPv4Mapped
from ..models import Address, IPKind, v4, v6
from .classifier import RangeName, classify


def match_limbs(first: Sequence[int], second: Sequence[int],
                width: int, bits: int) -> bool:
    """
    Compare the ``bits`` most significant bits of two limb sequences.

    The last, partially masked limb is compared after shifting out the
    unmasked low bits of both operands.
    """
    if len(first) != len(second):
        raise KindMismatch("cannot match CIDR for objects with different lengths")

    for a, b in zip(first, second):
        if bits <= 0:
            break
        shift = max(width - bits, 0)
        if a >> shift != b >> shift:
            return False
        bits -= width
    return True


def match(address: Address, network: Address, cidr: Optional[int] = None) -> bool:
    """
    Check whether ``address`` falls inside ``network``'s block.

    Args:
        address: Address under test
        network: Block base, carrying its own prefix length
        cidr: Prefix length overriding ``network.prefix_length``

    Raises:
        KindMismatch: the two addresses belong to different families
    """
    if address.kind is not network.kind:
        raise KindMismatch(
            f"cannot match different address version: "
            f"{address.kind.value} against {network.kind.value}"
        )
    if cidr is not None:
        network = network.with_prefix(cidr)
    return match_limbs(address.limbs, network.limbs,
                       network.limb_width, network.prefix_length)


def is_ipv4_mapped(address: Address) -> bool:
    return classify(address) == RangeName.IPV4_MAPPED


def to_ipv4_mapped(address: Address) -> Address:
    """IPv4 address -> ``::ffff:a.b.c.d``"""
    if address.kind is not IPKind.V4:
        raise KindMismatch(f"{address} is not an ipv4 address")
    o = address.octets
    return v6((0, 0, 0, 0, 0, 0xffff, (o[0] << 8) | o[1], (o[2] << 8) | o[3]),
              embedded=o)


def to_ipv4(address: Address) -> Address:
    """``::ffff:a.b.c.d`` -> IPv4 address"""
    if address.kind is not IPKind.V6 or not is_ipv4_mapped(address):
        raise NotIPv4Mapped(f"trying to convert a generic address to ipv4: {address}")
    high, low = address.parts[6], address.parts[7]
    return v4((high >> 8, high & 0xff, low >> 8, low & 0xff))
