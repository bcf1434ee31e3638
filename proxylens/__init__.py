"""
ProxyLens - Proxy chain client address resolution

Tolerant IPv4/IPv6 parsing, CIDR matching and reserved range
classification, used to find the originating address of a request that
went through trusted proxies.
"""

__version__ = "1.0.0"
__author__ = "ProxyLens"

from .exceptions import ProxyLensError
from .models import Address, IPKind, ProxiedRequest, TrustSubnet, v4, v6
from .address import (
    RangeName, parse, parse_v4, parse_v6, is_v4, is_v6, valid,
)
from .trust import (
    CompiledTrust, compile_trust, forwarded_addresses, walk, all_addresses, resolve,
)

__all__ = [
    'ProxyLensError',
    'Address', 'IPKind', 'ProxiedRequest', 'TrustSubnet', 'v4', 'v6',
    'RangeName', 'parse', 'parse_v4', 'parse_v6', 'is_v4', 'is_v6', 'valid',
    'CompiledTrust', 'compile_trust', 'forwarded_addresses', 'walk',
    'all_addresses', 'resolve',
]
