"""Tests for the IPv4 subnet calculator."""

import pytest

from tools.subnet import (
    compute_subnet,
    int_to_ipv4,
    mask_to_prefix,
    parse_ipv4,
    parse_mask,
    prefix_to_mask,
)


class TestAddressParsing:

    def test_parse_and_format(self):
        n = parse_ipv4("192.168.1.10")

        assert n == 0xC0A8010A
        assert int_to_ipv4(n) == "192.168.1.10"

    def test_leading_zeros_accepted(self):
        assert parse_ipv4("010.001.000.007") == parse_ipv4("10.1.0.7")

    @pytest.mark.parametrize("text", ["", "1.2.3", "1.2.3.4.5", "256.0.0.1", "a.b.c.d", "1.2.3.1234", "1..2.3"])
    def test_invalid_addresses(self, text):
        assert parse_ipv4(text) is None


class TestMasks:

    def test_prefix_to_mask(self):
        assert prefix_to_mask(0) == 0
        assert prefix_to_mask(24) == 0xFFFFFF00
        assert prefix_to_mask(32) == 0xFFFFFFFF

    def test_prefix_to_mask_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            prefix_to_mask(33)

    def test_mask_to_prefix(self):
        assert mask_to_prefix("255.255.255.0") == 24
        assert mask_to_prefix("255.255.255.252") == 30
        assert mask_to_prefix("0.0.0.0") == 0

    def test_non_contiguous_mask(self):
        assert mask_to_prefix("255.0.255.0") is None

    @pytest.mark.parametrize("text,prefix", [("24", 24), ("/16", 16), ("255.255.240.0", 20), (" /8 ", 8)])
    def test_parse_mask_forms(self, text, prefix):
        assert parse_mask(text)[0] == prefix

    @pytest.mark.parametrize("text,message", [
        ("", "Empty mask"),
        ("/33", "Prefix length must be 0-32"),
        ("255.0.255.0", "Invalid dotted netmask"),
        ("abc", "Invalid dotted netmask"),
    ])
    def test_parse_mask_errors(self, text, message):
        with pytest.raises(ValueError, match=message):
            parse_mask(text)


class TestComputeSubnet:

    def test_class_c_private(self):
        info = compute_subnet("192.168.1.10", "/24")

        assert info.network == "192.168.1.0"
        assert info.broadcast == "192.168.1.255"
        assert info.mask == "255.255.255.0"
        assert info.wildcard == "0.0.0.255"
        assert info.first_host == "192.168.1.1"
        assert info.last_host == "192.168.1.254"
        assert info.total == 256
        assert info.usable == 254
        assert info.range == "192.168.1.1 - 192.168.1.254"
        assert info.address_class == "C"
        assert info.flags.is_private_rfc1918
        assert not info.flags.is_loopback

    def test_input_is_echoed_and_ip_normalized(self):
        info = compute_subnet("010.0.0.1", "255.0.0.0")

        assert info.input_ip == "010.0.0.1"
        assert info.input_mask == "255.0.0.0"
        assert info.ip == "10.0.0.1"
        assert info.prefix == 8

    def test_point_to_point_31(self):
        info = compute_subnet("10.0.0.0", "31")

        assert info.usable == 2
        assert info.first_host == "10.0.0.0"
        assert info.last_host == "10.0.0.1"
        assert info.range == "10.0.0.0 - 10.0.0.1"

    def test_single_host_32(self):
        info = compute_subnet("8.8.8.8", "32")

        assert info.total == 1
        assert info.usable == 1
        assert info.range == "8.8.8.8 - 8.8.8.8"

    def test_whole_internet(self):
        info = compute_subnet("1.2.3.4", "0")

        assert info.network == "0.0.0.0"
        assert info.broadcast == "255.255.255.255"
        assert info.total == 2 ** 32

    @pytest.mark.parametrize("ip,flag", [
        ("127.0.0.1", "is_loopback"),
        ("169.254.10.1", "is_link_local"),
        ("224.0.0.5", "is_multicast"),
        ("0.1.2.3", "is_reserved"),
        ("172.20.0.1", "is_private_rfc1918"),
    ])
    def test_flags(self, ip, flag):
        assert getattr(compute_subnet(ip, "32").flags, flag)

    @pytest.mark.parametrize("ip,cls", [
        ("10.0.0.1", "A"), ("172.16.0.1", "B"), ("192.0.2.1", "C"), ("239.1.1.1", "D"), ("250.0.0.1", "E"),
    ])
    def test_address_class(self, ip, cls):
        assert compute_subnet(ip, "32").address_class == cls

    def test_invalid_address(self):
        with pytest.raises(ValueError, match="Invalid IPv4 address"):
            compute_subnet("300.1.1.1", "24")
