"""
Trust specification compiler

A trust specification says which chain elements are trusted proxies. It is
either a predicate ``(address, index) -> bool`` used as is, or one or more
address literals (``10.0.0.1``, ``10.0.0.0/8``, ``fe80::/ffc0::``) mixed
with the aliases in :data:`ALIASES`. Literals compile into a
:class:`CompiledTrust`.
"""

import re
from typing import Callable, Optional, Sequence, Union

from ..address.parser import parse, valid
from ..exceptions import (
    InvalidIP, InvalidRangeOnAddress, MissingArgument, UnsupportedTrustArgument,
)
from ..models import Address, IPKind, TrustSubnet


TrustPredicate = Callable[[str, int], bool]
TrustSpec = Union[str, Sequence[str], TrustPredicate]

ALIASES: dict[str, tuple[str, ...]] = {
    'linklocal': ('169.254.0.0/16', 'fe80::/10'),
    'loopback': ('127.0.0.1/8', '::1/128'),
    'uniquelocal': ('10.0.0.0/8', '172.16.0.0/12', '192.168.0.0/16', 'fc00::/7'),
}

_DECIMAL = re.compile(r'[0-9]+')

# IPv4-mapped literals lose the ::ffff:0:0/96 part of their prefix
_MAPPED_PREFIX_BITS = 96


def parse_netmask(text: str) -> int:
    """
    Convert a netmask into a prefix length.

    Fully set limbs count their whole width. In the first limb that is not
    fully set only the leading set bits count and scanning stops there:
    set bits after the first unset bit are ignored, never rejected.
    """
    mask = parse(text)
    width = mask.limb_width
    full = (1 << width) - 1
    top = 1 << (width - 1)
    prefix = 0

    for limb in mask.limbs:
        if limb == full:
            prefix += width
            continue
        while limb & top:
            prefix += 1
            limb = (limb << 1) & full
        break

    return prefix


def parse_notation(note: str) -> TrustSubnet:
    """
    Parse one trust literal into a subnet.

    Args:
        note: ``address``, ``address/prefix`` or ``address/netmask``

    Raises:
        InvalidIP: the address part is not an address
        InvalidRangeOnAddress: the prefix is outside ``(0, max]``
    """
    address_text, _, range_text = note.partition('/')
    if not address_text or not range_text:
        address_text, range_text = note, ''

    if not valid(address_text):
        raise InvalidIP(f"invalid IP address: {address_text}")

    address = parse(address_text)
    max_prefix = address.max_prefix

    if not range_text:
        prefix = max_prefix
    elif _DECIMAL.fullmatch(range_text):
        prefix = int(range_text)
    elif valid(range_text):
        prefix = parse_netmask(range_text)
    else:
        prefix = 0

    if address.kind is IPKind.V6 and address.is_ipv4_mapped():
        address = address.to_ipv4()
        if prefix <= max_prefix:
            prefix -= _MAPPED_PREFIX_BITS

    if not 0 < prefix <= max_prefix:
        raise InvalidRangeOnAddress(f"invalid range on address: {note}")

    return TrustSubnet(address.with_prefix(prefix), prefix)


def expand_aliases(entries: Sequence[str]) -> list[str]:
    """Replace alias names by their literals, one level deep"""
    expanded: list[str] = []
    for entry in entries:
        if not isinstance(entry, str):
            raise UnsupportedTrustArgument(f"unsupported trust argument: {entry!r}")
        expanded.extend(ALIASES.get(entry, (entry,)))
    return expanded


class CompiledTrust:
    """
    Trust predicate over a fixed list of subnets.

    Called as ``trust(address, index)``; the index is accepted for
    signature compatibility with hand written predicates and ignored.
    Text that is not an address is never trusted. An IPv4-mapped IPv6
    address is compared to IPv4 subnets through its IPv4 form; an IPv4
    address is never compared to IPv6 subnets.
    """

    def __init__(self, subnets: Sequence[TrustSubnet]):
        self.subnets: tuple[TrustSubnet, ...] = tuple(subnets)
        if not self.subnets:
            self._trust = self._trust_none
        elif len(self.subnets) == 1:
            self._trust = self._trust_single
        else:
            self._trust = self._trust_multi

    def __call__(self, address: str, index: int = 0) -> bool:
        return self._trust(address)

    def __repr__(self) -> str:
        return f"CompiledTrust([{', '.join(str(s) for s in self.subnets)}])"

    def _trust_none(self, address: str) -> bool:
        return False

    def _trust_single(self, address: str) -> bool:
        if not valid(address):
            return False
        return self._matches(parse(address), self.subnets[0])

    def _trust_multi(self, address: str) -> bool:
        if not valid(address):
            return False

        ip = parse(address)
        ipv4: Optional[Address] = None
        for subnet in self.subnets:
            candidate = ip
            if ip.kind is not subnet.address.kind:
                if not self._bridgeable(ip, subnet):
                    continue
                ipv4 = ipv4 or ip.to_ipv4()
                candidate = ipv4
            if candidate.match(subnet.address, subnet.prefix_length):
                return True
        return False

    @staticmethod
    def _bridgeable(ip: Address, subnet: TrustSubnet) -> bool:
        return (ip.kind is IPKind.V6 and subnet.address.kind is IPKind.V4
                and ip.is_ipv4_mapped())

    @classmethod
    def _matches(cls, ip: Address, subnet: TrustSubnet) -> bool:
        if ip.kind is subnet.address.kind:
            return ip.match(subnet.address, subnet.prefix_length)
        if cls._bridgeable(ip, subnet):
            return ip.to_ipv4().match(subnet.address, subnet.prefix_length)
        return False


def compile_trust(spec: TrustSpec) -> Union[CompiledTrust, TrustPredicate]:
    """
    Compile a trust specification into a predicate.

    Args:
        spec: Predicate, literal or list of literals and aliases

    Returns:
        The predicate itself, or a CompiledTrust over the parsed literals

    Raises:
        MissingArgument: spec is None
        UnsupportedTrustArgument: spec is of another type
        InvalidIP, InvalidRangeOnAddress: a literal does not parse
    """
    if spec is None:
        raise MissingArgument("argument is required")

    if callable(spec):
        return spec

    if isinstance(spec, str):
        entries = [spec]
    elif isinstance(spec, (list, tuple)):
        entries = list(spec)
    else:
        raise UnsupportedTrustArgument(f"unsupported trust argument: {spec!r}")

    return CompiledTrust([parse_notation(entry) for entry in expand_aliases(entries)])
