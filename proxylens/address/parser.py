"""
Address parser

Turns text into :class:`~proxylens.models.Address` values. IPv4 accepts the
legacy numeric notations (octal and hex tokens, a single 32-bit number),
IPv6 accepts one ``::`` run and a trailing dotted IPv4 tail.
"""

import re
from typing import Optional

from ..exceptions import (
    AddressError, InvalidFormat, InvalidOctets, InvalidParts, NeitherV4NorV6,
    OutOfRange,
)
from ..models import Address, v4, v6


# Structural shapes, checked before any real parsing
_V4_TOKEN = r'(?:0?[xX]?)[0-9a-fA-F]+'
_V4_SINGLE_SHAPE = re.compile(rf'{_V4_TOKEN}/?[0-9]*')
_V4_QUAD_SHAPE = re.compile(rf'{_V4_TOKEN}(?:\.{_V4_TOKEN}){{3}}/?[0-9]*')
_V6_SHAPE = re.compile(r'[:0-9xXa-fA-F]*?::?[0-9xXa-fA-F]*[.0-9xXa-fA-F]*/?[0-9]*')

_DIGITS = {
    8: re.compile(r'[0-7]+'),
    10: re.compile(r'[0-9]+'),
    16: re.compile(r'[0-9a-fA-F]+'),
}
_PREFIX = re.compile(r'[0-9]*')
_GROUP = re.compile(r'[0-9a-fA-F]+')


def split_prefix(text: str) -> tuple[str, Optional[int]]:
    """
    Split an optional ``/N`` suffix off an address.

    Returns:
        (address text, prefix length or None when absent or empty)
    """
    body, sep, suffix = text.partition('/')
    if not sep:
        return text, None
    if not _PREFIX.fullmatch(suffix):
        raise InvalidFormat(f"invalid prefix length in '{text}'")
    return body, int(suffix) if suffix else None


def parse_number(token: str) -> int:
    """
    Parse one IPv4 numeric token.

    ``0x``/``0X`` introduces hex, a leading ``0`` introduces octal,
    everything else is decimal.
    """
    if token[:2] in ('0x', '0X'):
        digits, base = token[2:], 16
    elif len(token) > 1 and token.startswith('0'):
        digits, base = token[1:], 8
    else:
        digits, base = token, 10

    if not _DIGITS[base].fullmatch(digits):
        raise InvalidFormat(f"invalid numeric token '{token}'")
    return int(digits, base)


def _parse_v4_octets(body: str) -> list[int]:
    tokens = body.split('.')

    if len(tokens) == 1:
        value = parse_number(tokens[0])
        if value > 0xffffffff:
            raise OutOfRange(f"address outside defined range: '{body}'")
        return [(value >> 24) & 0xff, (value >> 16) & 0xff,
                (value >> 8) & 0xff, value & 0xff]

    if len(tokens) != 4:
        raise InvalidFormat(f"invalid ip address: '{body}'")

    return [parse_number(token) for token in tokens]


def expand_groups(head: str, required: int) -> list[int]:
    """
    Expand colon separated hex groups to exactly ``required`` values.

    Zero groups are inserted where ``::`` stands; ``::`` has to stand for
    at least one group.
    """
    if head.count('::') > 1:
        raise InvalidFormat(f"more than one '::' in '{head}'")

    def tokenize(chunk: str) -> list[int]:
        if not chunk:
            return []
        groups = []
        for group in chunk.split(':'):
            if not _GROUP.fullmatch(group):
                raise InvalidFormat(f"string is not formatted like ip address: '{head}'")
            if len(group) > 4:
                raise InvalidParts(f"ipv6 part should fit to two octets: '{group}'")
            groups.append(int(group, 16))
        return groups

    if '::' not in head:
        groups = tokenize(head)
        if len(groups) != required:
            raise InvalidParts(
                f"expected {required} groups, got {len(groups)} in '{head}'"
            )
        return groups

    left, right = head.split('::')
    left_groups, right_groups = tokenize(left), tokenize(right)
    missing = required - len(left_groups) - len(right_groups)
    if missing < 1:
        raise InvalidParts(f"too many groups around '::' in '{head}'")
    return left_groups + [0] * missing + right_groups


def parse_v4(text: str, cidr: Optional[int] = None) -> Address:
    """
    Parse an IPv4 address.

    Accepts a dotted quad or a single 32-bit number, each token in decimal,
    octal or hex. An optional ``/N`` suffix sets the prefix length,
    otherwise ``cidr`` (or 32) is used.
    """
    body, prefix = split_prefix(text)
    octets = _parse_v4_octets(body)
    if prefix is None:
        prefix = 32 if cidr is None else cidr
    return v4(octets, prefix)


def parse_v6(text: str, cidr: Optional[int] = None) -> Address:
    """
    Parse an IPv6 address.

    Accepts one ``::`` run and a trailing dotted IPv4 tail replacing the
    last two groups. An optional ``/N`` suffix sets the prefix length,
    otherwise ``cidr`` (or 128) is used.
    """
    body, prefix = split_prefix(text)
    embedded: list[int] = []
    required = 8

    if '.' in body:
        head, colon, tail = body.rpartition(':')
        if not colon:
            raise InvalidFormat(f"invalid ipv6 format: '{text}'")
        if len(tail.split('.')) != 4:
            raise InvalidFormat(f"invalid ipv4 tail in '{text}'")
        embedded = _parse_v4_octets(tail)
        if any(octet > 0xff for octet in embedded):
            raise InvalidOctets(f"ipv4 octet is a byte in '{text}'")
        # keep a '::' that directly precedes the tail
        body = head + colon if head.endswith(':') or not head else head
        required = 6

    parts = expand_groups(body, required)
    if embedded:
        parts += [(embedded[0] << 8) | embedded[1], (embedded[2] << 8) | embedded[3]]

    if prefix is None:
        prefix = 128 if cidr is None else cidr
    return v6(parts, prefix, embedded or None)


def is_v4(text: str, validate: bool = False) -> bool:
    """Check whether ``text`` looks like (or, validating, is) an IPv4 address"""
    if not isinstance(text, str):
        return False
    if validate:
        try:
            parse_v4(text)
        except AddressError:
            return False
        return True
    return bool(_V4_SINGLE_SHAPE.fullmatch(text) or _V4_QUAD_SHAPE.fullmatch(text))


def is_v6(text: str, validate: bool = False) -> bool:
    """Check whether ``text`` looks like (or, validating, is) an IPv6 address"""
    if not isinstance(text, str):
        return False
    if validate:
        try:
            parse_v6(text)
        except AddressError:
            return False
        return True
    return bool(_V6_SHAPE.fullmatch(text))


def parse(text: str, cidr: Optional[int] = None) -> Address:
    """Parse either family, trying the IPv6 shape first"""
    if is_v6(text):
        return parse_v6(text, cidr)
    if is_v4(text):
        return parse_v4(text, cidr)
    raise NeitherV4NorV6(f"the address has neither IPv6 nor IPv4 format: '{text}'")


def valid(text: str) -> bool:
    """Whether :func:`parse` would succeed, without raising"""
    try:
        parse(text)
    except AddressError:
        return False
    return True
