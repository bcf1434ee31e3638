"""
Forwarded chain walker

Builds the candidate address chain of a proxied request and walks it with
a trust predicate to find the originating client address.
"""

from typing import Optional

from ..exceptions import MissingArgument
from ..models import ChainHop
from .compiler import TrustSpec, compile_trust


def forwarded_addresses(request) -> list[str]:
    """
    All addresses of a request, nearest to the server first.

    The transport peer comes first, followed by the forwarded-for tokens
    in reverse header order. Blank tokens are dropped.

    Args:
        request: Object with ``remote_address`` and ``forwarded_for``
    """
    if request is None:
        raise MissingArgument("argument req is required")

    header = request.forwarded_for or ''
    tokens = [token.strip() for token in header.split(',')]
    return [request.remote_address] + [token for token in reversed(tokens) if token]


def walk(request, trust: TrustSpec) -> list[ChainHop]:
    """
    Walk the forwarded chain until the first untrusted element.

    Every element but the last is submitted to the predicate as
    ``(address, index)`` with a 1-based index. The walk stops after the
    first rejected element, which is kept. The last element is kept
    without being submitted.

    Raw specs are compiled on every call; pass a compiled predicate to
    resolve many requests against the same spec.
    """
    addresses = forwarded_addresses(request)
    predicate = compile_trust(trust)
    hops: list[ChainHop] = []

    for index, address in enumerate(addresses, start=1):
        if index == len(addresses):
            hops.append(ChainHop(index=index, address=address))
            break
        trusted = bool(predicate(address, index))
        hops.append(ChainHop(index=index, address=address, trusted=trusted))
        if not trusted:
            break

    return hops


def all_addresses(request, trust: Optional[TrustSpec] = None) -> list[str]:
    """Chain addresses up to the first untrusted one; the full chain without trust"""
    if trust is None:
        return forwarded_addresses(request)
    return [hop.address for hop in walk(request, trust)]


def resolve(request, trust: TrustSpec) -> str:
    """
    Determine the originating address of a proxied request.

    Returns:
        The first untrusted chain element, or the furthest one when every
        proxy in between is trusted
    """
    if request is None:
        raise MissingArgument("req argument is required")
    if trust is None:
        raise MissingArgument("trust argument is required")
    return all_addresses(request, trust)[-1]
