"""JSON report export tests"""

import json

from proxylens.models import ChainReport, ProxiedRequest
from proxylens.output import JsonExporter
from proxylens.output.json_export import export_json
from proxylens.trust import walk


def create_report(peer, forwarded_for, trust):
    report = ChainReport(remote_address=peer, forwarded_for=forwarded_for, trust=list(trust))
    report.hops = walk(ProxiedRequest(peer, forwarded_for), list(trust))
    return report


class TestJsonExporter:

    def test_structure(self):
        report = create_report('127.0.0.1', 'localhost, 10.0.0.1', ['loopback'])
        data = JsonExporter().export(report)

        assert data['meta']['generator'] == 'ProxyLens'
        assert data['remote_address'] == '127.0.0.1'
        assert data['forwarded_for'] == 'localhost, 10.0.0.1'
        assert data['trust'] == ['loopback']
        assert data['resolved'] == '10.0.0.1'

    def test_hops(self):
        report = create_report('10.0.0.1', '8.8.8.8, localhost', ['10.0.0.0/8'])
        hops = JsonExporter().export(report)['hops']

        assert hops == [
            {'index': 1, 'address': '10.0.0.1', 'range': 'private',
             'trusted': True, 'terminal': False},
            {'index': 2, 'address': 'localhost', 'range': None,
             'trusted': False, 'terminal': False},
        ]

    def test_terminal_hop(self):
        report = create_report('127.0.0.1', '2002:c000:203::1', ['loopback'])
        hop = JsonExporter().export(report)['hops'][-1]
        assert hop['range'] == '6to4'
        assert hop['trusted'] is None
        assert hop['terminal'] is True

    def test_writes_file(self, tmp_path):
        path = tmp_path / 'reports' / 'walk.json'
        report = create_report('127.0.0.1', '10.0.0.1', ['loopback'])
        data = export_json(report, path)

        with open(path, encoding='utf-8') as f:
            assert json.load(f) == data
