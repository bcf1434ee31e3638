"""
Address parsing, classification and matching for ProxyLens
"""

from .parser import parse, parse_v4, parse_v6, is_v4, is_v6, valid
from .classifier import AddressClassifier, RangeName, classify
from .matcher import match, match_limbs, is_ipv4_mapped, to_ipv4_mapped, to_ipv4

__all__ = [
    'parse', 'parse_v4', 'parse_v6', 'is_v4', 'is_v6', 'valid',
    'AddressClassifier', 'RangeName', 'classify',
    'match', 'match_limbs', 'is_ipv4_mapped', 'to_ipv4_mapped', 'to_ipv4',
]
