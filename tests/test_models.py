"""Address value tests

Construction invariants, text rendering and prefix rebinding.
"""

import pytest

from proxylens.exceptions import InvalidOctets, InvalidParts, OutOfRange
from proxylens.models import Address, ChainHop, ChainReport, IPKind, TrustSubnet, v4, v6


class TestV4Construction:

    def test_construct_from_octets(self):
        addr = v4([192, 168, 1, 2])
        assert addr.kind is IPKind.V4
        assert addr.octets == (192, 168, 1, 2)
        assert addr.parts == ()
        assert addr.prefix_length == 32

    def test_refuses_octet_over_255(self):
        with pytest.raises(InvalidOctets):
            v4([300, 1, 3, 3])

    def test_refuses_wrong_octet_count(self):
        with pytest.raises(InvalidOctets):
            v4([8, 8, 8])

    def test_refuses_negative_octet(self):
        with pytest.raises(InvalidOctets):
            v4([-1, 0, 0, 0])

    def test_octet_access(self):
        assert v4([42, 0, 0, 0]).octets[0] == 42

    def test_to_string(self):
        assert str(v4([192, 168, 1, 1])) == '192.168.1.1'

    def test_prefix_length_out_of_range(self):
        with pytest.raises(OutOfRange):
            v4([10, 0, 0, 0], 33)


class TestV6Construction:

    def test_construct_from_parts(self):
        addr = v6([0x2001, 0xdb8, 0xf53a, 0, 0, 0, 0, 1])
        assert addr.kind is IPKind.V6
        assert addr.octets == ()
        assert addr.prefix_length == 128

    def test_refuses_part_over_16_bits(self):
        with pytest.raises(InvalidParts):
            v6([0xfffff, 0, 0, 0, 0, 0, 0, 1])

    def test_refuses_wrong_part_count(self):
        with pytest.raises(InvalidParts):
            v6([0xfffff, 0, 0, 0, 0, 0, 1])

    def test_part_access(self):
        assert v6([0x2001, 0xdb8, 0xf53a, 0, 0, 42, 0, 1]).parts[5] == 42

    def test_embedded_octets_must_mirror_last_groups(self):
        addr = v6([0, 0, 0, 0, 0, 0xffff, 0xc0a8, 0x0101], embedded=[192, 168, 1, 1])
        assert addr.embedded == (192, 168, 1, 1)
        with pytest.raises(InvalidParts):
            v6([0, 0, 0, 0, 0, 0xffff, 0xc0a8, 0x0101], embedded=[10, 0, 0, 1])

    def test_prefix_length_out_of_range(self):
        with pytest.raises(OutOfRange):
            v6([0] * 8, 129)

    def test_kind_must_match_representation(self):
        with pytest.raises(InvalidParts):
            Address(IPKind.V6, octets=(1, 2, 3, 4))


class TestV6Formatting:
    """Lowercase groups, the first longest zero run collapsed"""

    def test_loopback(self):
        assert str(v6([0, 0, 0, 0, 0, 0, 0, 1])) == '::1'

    def test_trailing_zero_run(self):
        assert str(v6([0x2001, 0xdb8, 0, 0, 0, 0, 0, 0])) == '2001:db8::'

    def test_inner_zero_run(self):
        assert str(v6([0x2001, 0xdb8, 0xf53a, 0, 0, 0, 0, 1])) == '2001:db8:f53a::1'

    def test_all_zero(self):
        assert str(v6([0] * 8)) == '::'

    def test_no_zero(self):
        assert str(v6([1, 2, 3, 4, 5, 6, 7, 8])) == '1:2:3:4:5:6:7:8'

    def test_longest_run_wins(self):
        assert str(v6([0, 1, 0, 0, 0, 0, 0, 0])) == '0:1::'
        assert str(v6([1, 0, 2, 0, 0, 0, 3, 4])) == '1:0:2::3:4'

    def test_first_run_wins_on_tie(self):
        assert str(v6([1, 0, 0, 2, 0, 0, 3, 4])) == '1::2:0:0:3:4'

    def test_lowercase(self):
        assert str(v6([0xABCD, 0, 0, 0, 0, 0, 0, 0xEF])) == 'abcd::ef'


class TestPrefixRebinding:

    def test_with_prefix_returns_new_value(self):
        addr = v4([10, 5, 0, 1])
        wider = addr.with_prefix(8)
        assert wider.prefix_length == 8
        assert addr.prefix_length == 32
        assert wider.octets == addr.octets

    def test_with_prefix_validates(self):
        with pytest.raises(OutOfRange):
            v6([0] * 8).with_prefix(200)

    def test_addresses_are_unhashable(self):
        with pytest.raises(TypeError):
            hash(v4([1, 2, 3, 4]))

    def test_compare_with_other_types(self):
        assert (v4([1, 2, 3, 4]) == '1.2.3.4') is False

    def test_repr(self):
        assert repr(v4([10, 0, 0, 0], 8)) == "Address('10.0.0.0/8')"


class TestReportModels:

    def test_trust_subnet_string(self):
        assert str(TrustSubnet(v4([10, 0, 0, 0], 8), 8)) == '10.0.0.0/8'

    def test_terminal_hop(self):
        assert ChainHop(index=3, address='1.2.3.4').terminal is True
        assert ChainHop(index=1, address='1.2.3.4', trusted=False).terminal is False

    def test_report_resolved(self):
        report = ChainReport(remote_address='127.0.0.1')
        assert report.resolved is None
        report.hops = [
            ChainHop(index=1, address='127.0.0.1', trusted=True),
            ChainHop(index=2, address='10.0.0.1'),
        ]
        assert report.resolved == '10.0.0.1'
