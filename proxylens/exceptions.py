"""
Exceptions raised by ProxyLens

Hierarchy:
    ProxyLensError
    ├── AddressError
    │   ├── InvalidFormat       - text does not follow the address grammar
    │   ├── InvalidOctets       - wrong octet count or octet outside 0..255
    │   ├── InvalidParts        - wrong group count or group outside 0..0xffff
    │   ├── OutOfRange          - 32/128-bit overflow, bad prefix length
    │   ├── KindMismatch        - IPv4 compared with IPv6
    │   ├── NotIPv4Mapped       - IPv4 extraction from a generic address
    │   └── NeitherV4NorV6      - text has neither address shape
    ├── TrustError
    │   ├── InvalidIP                 - trust literal is not an address
    │   ├── InvalidRangeOnAddress     - trust literal prefix out of range
    │   └── UnsupportedTrustArgument  - trust spec of an unknown type
    └── MissingArgument               - required argument not given
"""


class ProxyLensError(ValueError):
    """Base class for every ProxyLens error"""


class AddressError(ProxyLensError):
    """Address construction, parsing or comparison failed"""


class InvalidFormat(AddressError):
    pass


class InvalidOctets(AddressError):
    pass


class InvalidParts(AddressError):
    pass


class OutOfRange(AddressError):
    pass


class KindMismatch(AddressError):
    pass


class NotIPv4Mapped(AddressError):
    pass


class NeitherV4NorV6(AddressError):
    pass


class TrustError(ProxyLensError):
    """Trust specification could not be compiled or applied"""


class InvalidIP(TrustError):
    pass


class InvalidRangeOnAddress(TrustError):
    pass


class UnsupportedTrustArgument(TrustError):
    pass


class MissingArgument(ProxyLensError):
    pass
