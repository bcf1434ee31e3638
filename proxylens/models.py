"""
Data models for ProxyLens
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Sequence

from .exceptions import InvalidOctets, InvalidParts, OutOfRange


class IPKind(Enum):
    """Address family"""
    V4 = "ipv4"
    V6 = "ipv6"


# Limb width in bits and full prefix length per family
LIMB_WIDTH = {IPKind.V4: 8, IPKind.V6: 16}
MAX_PREFIX = {IPKind.V4: 32, IPKind.V6: 128}


def _check_octets(octets: Sequence[int]):
    if len(octets) != 4:
        raise InvalidOctets(f"ipv4 octet count should be 4, got {len(octets)}")
    for octet in octets:
        if not isinstance(octet, int) or not 0 <= octet <= 0xff:
            raise InvalidOctets(f"ipv4 octet is a byte, got {octet!r}")


def _check_parts(parts: Sequence[int]):
    if len(parts) != 8:
        raise InvalidParts(f"ipv6 part count should be 8, got {len(parts)}")
    for part in parts:
        if not isinstance(part, int) or not 0 <= part <= 0xffff:
            raise InvalidParts(f"ipv6 part should fit to two octets, got {part!r}")


def _compress_groups(parts: tuple[int, ...]) -> str:
    """Render IPv6 groups, collapsing the first longest zero run into '::'"""
    best_start, best_len = -1, 0
    run_start, run_len = -1, 0
    for i, part in enumerate(parts):
        if part == 0:
            if run_len == 0:
                run_start = i
            run_len += 1
            if run_len > best_len:
                best_start, best_len = run_start, run_len
        else:
            run_len = 0

    groups = [format(part, 'x') for part in parts]
    if best_len == 0:
        return ':'.join(groups)

    head = ':'.join(groups[:best_start])
    tail = ':'.join(groups[best_start + best_len:])
    return f"{head}::{tail}"


@dataclass(frozen=True, eq=False)
class Address:
    """
    Immutable IPv4 or IPv6 address bound to a prefix length.

    Exactly one of ``octets`` (IPv4) or ``parts`` (IPv6) is populated.
    ``embedded`` keeps the dotted IPv4 tail of an IPv6 address when one
    was given; it always mirrors the last two groups.

    Equality is asymmetric: ``a == b`` holds when ``a`` falls inside the
    block ``(b, b.prefix_length)``. Addresses are therefore unhashable.
    Comparing an IPv4 with an IPv6 address raises ``KindMismatch`` instead
    of returning False, so membership tests over lists mixing both
    families raise too.
    """
    kind: IPKind
    octets: tuple[int, ...] = ()
    parts: tuple[int, ...] = ()
    prefix_length: Optional[int] = None
    embedded: tuple[int, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'octets', tuple(self.octets))
        object.__setattr__(self, 'parts', tuple(self.parts))
        object.__setattr__(self, 'embedded', tuple(self.embedded))

        if self.kind is IPKind.V4:
            _check_octets(self.octets)
            if self.parts or self.embedded:
                raise InvalidParts("ipv4 address cannot carry ipv6 parts")
        else:
            _check_parts(self.parts)
            if self.octets:
                raise InvalidOctets("ipv6 address cannot carry ipv4 octets")
            if self.embedded:
                _check_octets(self.embedded)
                tail = ((self.embedded[0] << 8) | self.embedded[1],
                        (self.embedded[2] << 8) | self.embedded[3])
                if tail != self.parts[6:]:
                    raise InvalidParts("embedded ipv4 octets differ from the last two parts")

        if self.prefix_length is None:
            object.__setattr__(self, 'prefix_length', self.max_prefix)
        elif not 0 <= self.prefix_length <= self.max_prefix:
            raise OutOfRange(
                f"prefix length {self.prefix_length} outside 0..{self.max_prefix}"
            )

    @property
    def limbs(self) -> tuple[int, ...]:
        return self.octets if self.kind is IPKind.V4 else self.parts

    @property
    def limb_width(self) -> int:
        return LIMB_WIDTH[self.kind]

    @property
    def max_prefix(self) -> int:
        return MAX_PREFIX[self.kind]

    def with_prefix(self, prefix_length: int) -> 'Address':
        """Same address bound to another prefix length"""
        return replace(self, prefix_length=prefix_length)

    def range(self):
        """Named reserved range this address falls into"""
        from .address.classifier import classify
        return classify(self)

    def match(self, other: 'Address', cidr: Optional[int] = None) -> bool:
        """Check whether this address lies inside ``other``'s block"""
        from .address.matcher import match
        return match(self, other, cidr)

    def equals(self, other: 'Address') -> bool:
        return self.match(other)

    def is_ipv4_mapped(self) -> bool:
        from .address.matcher import is_ipv4_mapped
        return is_ipv4_mapped(self)

    def to_ipv4_mapped(self) -> 'Address':
        from .address.matcher import to_ipv4_mapped
        return to_ipv4_mapped(self)

    def to_ipv4(self) -> 'Address':
        from .address.matcher import to_ipv4
        return to_ipv4(self)

    def __eq__(self, other):
        if not isinstance(other, Address):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __str__(self) -> str:
        if self.kind is IPKind.V4:
            return '.'.join(str(octet) for octet in self.octets)
        return _compress_groups(self.parts)

    def __repr__(self) -> str:
        return f"Address('{self}/{self.prefix_length}')"


def v4(octets: Sequence[int], cidr: int = 32) -> Address:
    """Build an IPv4 address from its four octets"""
    return Address(IPKind.V4, octets=tuple(octets), prefix_length=cidr)


def v6(parts: Sequence[int], cidr: int = 128,
       embedded: Optional[Sequence[int]] = None) -> Address:
    """Build an IPv6 address from its eight 16-bit groups"""
    return Address(IPKind.V6, parts=tuple(parts), prefix_length=cidr,
                   embedded=tuple(embedded or ()))


@dataclass(frozen=True)
class TrustSubnet:
    """One compiled trust entry"""
    address: Address
    prefix_length: int

    def __str__(self) -> str:
        return f"{self.address}/{self.prefix_length}"


@dataclass
class ProxiedRequest:
    """The two request facts the chain walker needs"""
    remote_address: str
    forwarded_for: Optional[str] = None


@dataclass
class ChainHop:
    """One element of a walked forwarded chain"""
    index: int
    address: str
    trusted: Optional[bool] = None  # None: last element, never submitted

    @property
    def terminal(self) -> bool:
        return self.trusted is None


@dataclass
class ChainReport:
    """Walk result rendered by the CLI"""
    remote_address: str
    forwarded_for: Optional[str] = None
    trust: list[str] = field(default_factory=list)
    hops: list[ChainHop] = field(default_factory=list)

    @property
    def resolved(self) -> Optional[str]:
        if self.hops:
            return self.hops[-1].address
        return None
