"""Tests for the resolv.conf codec and ownership heuristics."""
import ipaddress

import pytest

from dnsdirect.core.errors import InvalidDomainError, ResolvConfFormatError
from dnsdirect.core.resolv_conf import (
    is_owned_content,
    read_resolv,
    resolv_owner,
    write_resolv_conf,
)
from dnsdirect.core.types import OSConfig

HEADER = (
    "# resolv.conf(5) file generated by tailscale\n"
    "# DO NOT EDIT THIS FILE BY HAND -- CHANGES WILL BE OVERWRITTEN\n"
    "\n"
)


def ip(s):
    return ipaddress.ip_address(s)


class TestWriteResolvConf:
    def test_single_nameserver_and_domain(self):
        """Test exact output for one nameserver and one domain."""
        out = write_resolv_conf([ip("100.100.100.100")], ["corp.example."])
        assert out == HEADER + "nameserver 100.100.100.100\nsearch corp.example\n"

    def test_no_search_line_without_domains(self):
        """Test search line is omitted when there are no domains."""
        out = write_resolv_conf([ip("8.8.8.8"), ip("1.1.1.1")], [])
        assert out == HEADER + "nameserver 8.8.8.8\nnameserver 1.1.1.1\n"
        assert "search" not in out

    def test_multiple_domains_keep_order(self):
        """Test all domains go on one line in input order."""
        out = write_resolv_conf([ip("100.100.100.100")], ["b.example.", "a.example."])
        assert out.endswith("search b.example a.example\n")

    def test_ipv6_nameserver(self):
        """Test IPv6 addresses are written in compressed form."""
        out = write_resolv_conf([ip("fd7a:115c:a1e0:0:0:0:0:53")], [])
        assert "nameserver fd7a:115c:a1e0::53\n" in out


class TestReadResolv:
    def test_round_trip(self):
        """Test decode(encode(cfg)) == cfg for single-token domains."""
        cfg = OSConfig(
            nameservers=[ip("100.100.100.100"), ip("fd7a:115c:a1e0::53")],
            search_domains=["corp.example."],
        )
        assert read_resolv(write_resolv_conf(cfg.nameservers, cfg.search_domains)) == cfg

    def test_round_trip_without_domains(self):
        cfg = OSConfig(nameservers=[ip("10.0.0.1")])
        assert read_resolv(write_resolv_conf(cfg.nameservers, cfg.search_domains)) == cfg

    def test_accepts_bytes(self):
        cfg = read_resolv(b"nameserver 192.168.1.1\n")
        assert cfg.nameservers == [ip("192.168.1.1")]

    def test_trailing_comment_ignored(self):
        """Test a comment after a valid nameserver line is stripped."""
        cfg = read_resolv("nameserver 8.8.8.8 # google\n")
        assert cfg.nameservers == [ip("8.8.8.8")]

    def test_tab_separator(self):
        cfg = read_resolv("nameserver\t9.9.9.9\nsearch\thome.arpa\n")
        assert cfg.nameservers == [ip("9.9.9.9")]
        assert cfg.search_domains == ["home.arpa."]

    def test_missing_space_after_nameserver(self):
        """Test 'nameserverX' is rejected."""
        with pytest.raises(ResolvConfFormatError):
            read_resolv("nameserverX\n")

    def test_nameserver_glued_to_address(self):
        with pytest.raises(ResolvConfFormatError):
            read_resolv("nameserver1.2.3.4\n")

    def test_bare_search_line(self):
        """Test a search line with no domain is rejected."""
        with pytest.raises(ResolvConfFormatError):
            read_resolv("search\n")

    def test_invalid_address(self):
        with pytest.raises(ResolvConfFormatError):
            read_resolv("nameserver not-an-ip\n")

    def test_multiple_search_domains_on_one_line_fail(self):
        """Test a multi-domain search line is not split into domains."""
        with pytest.raises(InvalidDomainError):
            read_resolv("search a.example b.example\n")

    def test_unknown_lines_ignored(self):
        cfg = read_resolv("# comment\noptions edns0 trust-ad\ndomain lan\nsortlist 10.0.0.0\n\n")
        assert cfg.is_zero()

    def test_empty_content(self):
        cfg = read_resolv("")
        assert cfg == OSConfig()
        assert cfg.is_zero()

    def test_comment_only_nameserver_line(self):
        """Test a commented-out nameserver is ignored."""
        assert read_resolv("# nameserver 1.1.1.1\n").is_zero()

    def test_only_newline_splits_lines(self):
        """Test a form feed inside a comment does not start a new line."""
        cfg = read_resolv("# note\x0cnameserver bogus\nnameserver 1.1.1.1\n")
        assert cfg.nameservers == [ip("1.1.1.1")]

    def test_unicode_line_separator_stays_in_comment(self):
        cfg = read_resolv("# note\u2028search bad domain\nsearch corp.example\n")
        assert cfg.search_domains == ["corp.example."]

    def test_crlf_line_endings(self):
        cfg = read_resolv("nameserver 1.1.1.1\r\nsearch corp.example\r\n")
        assert cfg.nameservers == [ip("1.1.1.1")]
        assert cfg.search_domains == ["corp.example."]


class TestOwnership:
    def test_marker_anywhere_is_owned(self):
        """Test the marker substring is enough, regardless of context."""
        assert is_owned_content(b"nameserver 1.1.1.1\n# this was generated by tailscale, honest\n")
        assert is_owned_content(HEADER.encode())

    def test_no_marker_is_not_owned(self):
        assert not is_owned_content(b"# Generated by NetworkManager\nnameserver 192.168.1.1\n")
        assert not is_owned_content(b"")

    def test_marker_is_case_sensitive(self):
        assert not is_owned_content(b"# Generated By Tailscale\n")


class TestResolvOwner:
    def test_systemd_resolved(self):
        content = (
            "# This is /run/systemd/resolve/stub-resolv.conf managed by man:systemd-resolved(8).\n"
            "# Do not edit.\n"
            "nameserver 127.0.0.53\n"
        )
        assert resolv_owner(content) == "systemd-resolved"

    def test_network_manager(self):
        assert resolv_owner(b"# Generated by NetworkManager\nnameserver 192.168.1.1\n") == "NetworkManager"

    def test_resolvconf(self):
        content = (
            "# Dynamic resolv.conf(5) file for glibc resolver(3) generated by resolvconf(8)\n"
            "#     DO NOT EDIT THIS FILE BY HAND -- YOUR CHANGES WILL BE OVERWRITTEN\n"
            "nameserver 10.0.0.1\n"
        )
        assert resolv_owner(content) == "resolvconf"

    def test_first_match_wins(self):
        assert resolv_owner("# systemd-resolved\n\n# NetworkManager\n") == "systemd-resolved"

    def test_stops_at_first_config_line(self):
        """Test comments after the first real line are not inspected."""
        assert resolv_owner("nameserver 1.1.1.1\n# Generated by NetworkManager\n") == ""

    def test_form_feed_does_not_end_comment_block(self):
        assert resolv_owner("# header\x0cnameserver 1.1.1.1\n# Generated by NetworkManager\n") == "NetworkManager"

    def test_unknown(self):
        assert resolv_owner(HEADER) == ""
        assert resolv_owner("") == ""
