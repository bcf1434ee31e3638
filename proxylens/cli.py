import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .address import parse
from .exceptions import ProxyLensError
from .models import ChainReport, ProxiedRequest
from .output import ConsoleOutput
from .output.json_export import export_json
from .trust import compile_trust, walk


console = Console()


@click.group()
@click.version_option(version=__version__)
def main():
    """
    ProxyLens - Proxy chain client address resolution.

    Examples:

        proxylens inspect 0xc0a80101 ::ffff:10.0.0.1 fe80::/10

        proxylens resolve 10.0.0.1 -f "192.168.0.1, 10.0.0.2" -t 10.0.0.0/8

        proxylens resolve ::1 -f "2002:c000:203::1" -t loopback --json walk.json
    """


@main.command()
@click.argument('addresses', nargs=-1, required=True)
@click.option('--cidr', type=int, default=None,
              help='Prefix length for addresses written without one')
def inspect(addresses: tuple[str, ...], cidr: Optional[int]):
    """Parse and classify ADDRESSES."""
    output = ConsoleOutput(console)
    rows = []
    failed = False

    for text in addresses:
        try:
            rows.append((text, parse(text, cidr), None))
        except ProxyLensError as e:
            rows.append((text, None, str(e)))
            failed = True

    output.print_addresses(rows)
    if failed:
        sys.exit(1)


@main.command()
@click.argument('peer')
@click.option('-f', '--forwarded-for', default=None,
              help='Raw X-Forwarded-For header value')
@click.option('-t', '--trust', multiple=True, required=True, envvar='PROXYLENS_TRUST',
              help='Trusted proxy address, CIDR, netmask or alias '
                   '(loopback, linklocal, uniquelocal); repeatable')
@click.option('--json', 'json_path', type=click.Path(),
              help='Export the walked chain to a JSON file')
def resolve(peer: str, forwarded_for: Optional[str], trust: tuple[str, ...],
            json_path: Optional[str]):
    """Walk the forwarded chain of a request received from PEER."""
    output = ConsoleOutput(console)
    report = ChainReport(remote_address=peer, forwarded_for=forwarded_for,
                         trust=list(trust))

    try:
        predicate = compile_trust(list(trust))
        report.hops = walk(ProxiedRequest(peer, forwarded_for), predicate)
    except ProxyLensError as e:
        output.print_error(str(e))
        sys.exit(1)

    output.print_header(report)
    output.print_chain(report)

    if json_path:
        json_file = Path(json_path)
        export_json(report, json_file)
        console.print(f"\n[dim]Report exported to:[/] {escape(str(json_file.absolute()))}")


if __name__ == '__main__':
    main()
