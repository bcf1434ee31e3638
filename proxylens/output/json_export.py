"""
JSON export for ProxyLens
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..address import AddressClassifier
from ..models import ChainHop, ChainReport
from .. import __version__


class JsonExporter:
    """
    Export chain walk reports to JSON format.

    Output format is designed to be both human-readable
    and machine-parseable.
    """

    def export(self, report: ChainReport, output_path: Optional[Path] = None) -> dict:
        """
        Export a chain report to JSON.

        Args:
            report: Walked chain
            output_path: Optional file path to write

        Returns:
            JSON-serializable dict
        """
        data = {
            "meta": {
                "version": __version__,
                "generator": "ProxyLens",
                "generated_at": datetime.now().isoformat()
            },
            "remote_address": report.remote_address,
            "forwarded_for": report.forwarded_for,
            "trust": report.trust,
            "hops": [self._serialize_hop(hop) for hop in report.hops],
            "resolved": report.resolved
        }

        if output_path:
            self._write_file(data, output_path)

        return data

    def _serialize_hop(self, hop: ChainHop) -> dict:
        """Serialize a single hop"""
        name = AddressClassifier.classify(hop.address)
        return {
            "index": hop.index,
            "address": hop.address,
            "range": name.value if name else None,
            "trusted": hop.trusted,
            "terminal": hop.terminal
        }

    def _write_file(self, data: dict, path: Path):
        """Write JSON to file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)


def export_json(report: ChainReport, output_path: Optional[Path] = None) -> dict:
    """Convenience function for JSON export"""
    exporter = JsonExporter()
    return exporter.export(report, output_path)
