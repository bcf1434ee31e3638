"""
Rich console output for ProxyLens
"""

from typing import Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from rich import box
from rich.markup import escape

from ..address import AddressClassifier
from ..models import Address, ChainHop, ChainReport, IPKind


# Verdict styling
VERDICT_STYLES = {
    'trusted': ('trusted', 'green'),
    'untrusted': ('untrusted', 'bold red'),
    'terminal': ('end of chain', 'yellow'),
}


class ConsoleOutput:
    """
    Rich console output for address inspection and chain walks.

    Features:
    - Address table with kind, prefix and reserved range
    - Chain table with per-hop trust verdict
    - Resolution summary panel
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def print_header(self, report: ChainReport):
        """Print walk header"""
        content = Text()
        content.append("ProxyLens", style="bold cyan")
        content.append("\n")
        content.append("Peer: ", style="dim")
        content.append(report.remote_address, style="bold")
        content.append("\n")
        content.append("Forwarded-For: ", style="dim")
        content.append(report.forwarded_for or "-")
        content.append("\n")
        content.append("Trust: ", style="dim")
        content.append(", ".join(report.trust) or "-")

        self.console.print(Panel(content, border_style="cyan", padding=(0, 1)))

    def print_addresses(self, rows: list[tuple[str, Optional[Address], Optional[str]]]):
        """
        Print inspected addresses.

        Args:
            rows: (input text, parsed address or None, error message or None)
        """
        table = Table(
            show_header=True,
            header_style="bold magenta",
            box=box.ROUNDED,
            border_style="dim",
            padding=(0, 1)
        )

        table.add_column("Input")
        table.add_column("Kind", width=5)
        table.add_column("Normalized")
        table.add_column("Prefix", justify="right", width=6)
        table.add_column("Range", width=12)
        table.add_column("Mapped")

        for text, address, error in rows:
            if address is None:
                table.add_row(Text(text), "-", Text(error or "invalid", style="red"), "-", "-", "-")
                continue
            table.add_row(
                Text(text),
                address.kind.value,
                str(address),
                str(address.prefix_length),
                address.range().value,
                self._format_mapped(address)
            )

        self.console.print(table)

    def print_chain(self, report: ChainReport):
        """Print walked chain and resolved address"""
        table = Table(
            show_header=True,
            header_style="bold magenta",
            box=box.ROUNDED,
            border_style="dim",
            padding=(0, 1)
        )

        # Columns: # | Address | Range | Verdict
        table.add_column("#", style="dim", width=3, justify="right")
        table.add_column("Address")
        table.add_column("Range", width=12)
        table.add_column("Verdict", width=14)

        for hop in report.hops:
            table.add_row(
                str(hop.index),
                Text(hop.address),
                self._format_range(hop.address),
                self._format_verdict(hop)
            )

        self.console.print(table)

        content = Text()
        content.append("Resolved: ", style="bold")
        content.append(report.resolved or "-", style="bold green")
        self.console.print(Panel(content, border_style="green", padding=(0, 1)))

    def print_error(self, message: str):
        """Print error message"""
        self.console.print(f"[bold red]Error:[/] {escape(message)}")

    def _format_range(self, text: str) -> str:
        name = AddressClassifier.classify(text)
        return name.value if name else "not an ip"

    def _format_mapped(self, address: Address) -> str:
        """Counterpart across the IPv4-mapped bridge"""
        if address.is_ipv4_mapped():
            return str(address.to_ipv4())
        if address.kind is IPKind.V4:
            return str(address.to_ipv4_mapped())
        return "-"

    def _format_verdict(self, hop: ChainHop) -> Text:
        if hop.terminal:
            label, style = VERDICT_STYLES['terminal']
        elif hop.trusted:
            label, style = VERDICT_STYLES['trusted']
        else:
            label, style = VERDICT_STYLES['untrusted']
        return Text(label, style=style)
