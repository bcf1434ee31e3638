"""Reserved range classification tests"""

import pytest

from proxylens.address import AddressClassifier, classify, parse
from proxylens.address.classifier import IPV4_RANGES, IPV6_RANGES, RangeName


@pytest.mark.parametrize('text,expected', [
    ('0.1.0.0', 'unspecified'),
    ('255.255.255.255', 'broadcast'),
    ('224.100.0.1', 'multicast'),
    ('239.255.255.250', 'multicast'),
    ('169.254.50.50', 'linkLocal'),
    ('127.0.0.1', 'loopback'),
    ('127.100.1.1', 'loopback'),
    ('10.1.2.3', 'private'),
    ('172.16.0.1', 'private'),
    ('172.31.255.255', 'private'),
    ('192.168.2.1', 'private'),
    ('192.0.2.1', 'reserved'),
    ('198.51.100.7', 'reserved'),
    ('240.0.0.1', 'reserved'),
    ('240.1.2.3', 'reserved'),
    ('172.32.0.1', 'unicast'),
    ('8.8.8.8', 'unicast'),
    ('77.88.21.11', 'unicast'),
])
def test_ipv4_ranges(text, expected):
    assert parse(text).range() == expected


@pytest.mark.parametrize('text,expected', [
    ('::', 'unspecified'),
    ('fe80::1234:5678:abcd:0123', 'linkLocal'),
    ('ff00::1234', 'multicast'),
    ('ff02::1', 'multicast'),
    ('::1', 'loopback'),
    ('fc00::', 'uniqueLocal'),
    ('fd12:3456::1', 'uniqueLocal'),
    ('::ffff:192.168.1.10', 'ipv4Mapped'),
    ('::ffff:0:192.168.1.10', 'rfc6145'),
    ('64:ff9b::1234', 'rfc6052'),
    ('2002:c000:203::1', '6to4'),
    ('2001::4242', 'teredo'),
    ('2001:db8::3210', 'reserved'),
    ('2001:470:8:66::1', 'unicast'),
    ('2a02:6b8::feed', 'unicast'),
])
def test_ipv6_ranges(text, expected):
    assert parse(text).range() == expected


class TestClassify:

    def test_prefix_of_input_is_ignored(self):
        assert classify(parse('127.0.0.0/1')) is RangeName.LOOPBACK

    def test_custom_default(self):
        assert classify(parse('8.8.8.8'), default=RangeName.RESERVED) is RangeName.RESERVED

    def test_names_compare_as_strings(self):
        assert RangeName.SIX_TO_FOUR == '6to4'
        assert RangeName.LINK_LOCAL.value == 'linkLocal'

    def test_table_order(self):
        """First matching entry wins, so the order is part of the contract"""
        assert [name for name, _ in IPV4_RANGES] == [
            'unspecified', 'broadcast', 'multicast', 'linkLocal', 'loopback',
            'private', 'reserved',
        ]
        assert [name for name, _ in IPV6_RANGES] == [
            'unspecified', 'linkLocal', 'multicast', 'loopback', 'uniqueLocal',
            'ipv4Mapped', 'rfc6145', 'rfc6052', '6to4', 'teredo', 'reserved',
        ]


class TestAddressClassifier:

    def test_classify_text(self):
        assert AddressClassifier.classify('10.0.0.1') is RangeName.PRIVATE
        assert AddressClassifier.classify('fe80::1') is RangeName.LINK_LOCAL

    def test_classify_invalid(self):
        assert AddressClassifier.classify('not-an-ip') is None
        assert AddressClassifier.classify('') is None
        assert AddressClassifier.classify('1024.0.0.1') is None
