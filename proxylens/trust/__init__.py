"""
Trust compilation and forwarded chain walking for ProxyLens
"""

from .compiler import ALIASES, CompiledTrust, compile_trust, parse_netmask, parse_notation
from .chain import forwarded_addresses, walk, all_addresses, resolve

__all__ = [
    'ALIASES', 'CompiledTrust', 'compile_trust', 'parse_netmask', 'parse_notation',
    'forwarded_addresses', 'walk', 'all_addresses', 'resolve',
]
