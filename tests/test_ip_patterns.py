import pytest

from akiutils.errors import BasicStringError
from akiutils.ip_patterns import (
    PatternMode,
    cidr_pattern,
    ip_and_cidr_or_port_pattern,
    ip_pattern,
    ipv4_pattern,
    ipv6_full_comb_ipv4_pattern,
    ipv6_full_pattern,
    ipv6_pattern,
    ipv6_short_comb_ipv4_pattern,
    ipv6_short_pattern,
    port_pattern,
)

IPV4 = ["0.0.0.0", "12.34.56.78"]
IPV6 = [
    "0123:4567:89ab:cdef:0123:4567:89ab:cdf0",
    "0123:4567:89ab::cdef",
    "::ffff:192.0.2.128",
    "2345:0425:2CA1:0000:0000:0567:5673:23b5",
    "2345:0425:2CA1::0567:5673:23b5",
    "2266:25::12:0:ad12",
]


@pytest.mark.parametrize(
    "text, matches",
    [
        ("8.8.8.8", True),
        ("a.b.c.d", False),
        ("8.8.888.8", True),
        ("111.222.333.444", True),
        ("8.8.8888.8", False),
    ],
)
def test_ipv4_pattern_cases(text, matches):
    assert (ipv4_pattern().match(text) is not None) is matches


def test_ipv4_octet_groups():
    m = ipv4_pattern().fullmatch("111.222.333.444")
    assert [m.group(f"octet{i}") for i in range(1, 5)] == ["111", "222", "333", "444"]


@pytest.mark.parametrize("text", IPV4)
def test_ip_pattern_ipv4(text):
    m = ip_pattern().fullmatch(text)
    assert m.group("ipv4") == text
    assert m.group("ipv6") is None


@pytest.mark.parametrize("text", IPV6)
def test_ipv6_pattern_matches_examples(text):
    m = ipv6_pattern().fullmatch(text)
    assert m.group("ipv6") == text


@pytest.mark.parametrize("text", IPV6)
def test_ip_pattern_ipv6(text):
    m = ip_pattern().fullmatch(text)
    assert m.group("ipv6") == text
    assert m.group("ipv4") is None


def test_full_form_is_preferred():
    text = "2345:0425:2CA1:0000:0000:0567:5673:23b5"
    m = ipv6_pattern().fullmatch(text)
    assert m.group("ipv6_full") == text
    assert m.group("ipv6_short") is None


def test_short_form_with_ipv4_tail():
    m = ipv6_pattern().fullmatch("::ffff:192.0.2.128")
    assert m.group("short_comb_ipv4") == "192.0.2.128"
    assert m.group("short_comb_octet4") == "128"


def test_full_form_with_ipv4_tail():
    text = "0:0:0:0:0:ffff:192.0.2.128"
    m = ipv6_full_comb_ipv4_pattern().fullmatch(text)
    assert m.group("full_comb_ipv4") == "192.0.2.128"
    assert ipv6_pattern().fullmatch(text).group("ipv6_full_comb") == text


def test_ipv6_full_needs_eight_groups():
    assert ipv6_full_pattern().fullmatch("0123:4567:89ab::cdef") is None
    assert ipv6_short_pattern().fullmatch("0123:4567:89ab::cdef") is not None


def test_ipv6_short_comb_requires_ipv4():
    assert ipv6_short_comb_ipv4_pattern().fullmatch("2266:25::12:0:ad12") is None


def test_bracketed_ipv6_excludes_brackets():
    m = ipv6_pattern().fullmatch("[0123:4567:89ab::cdef]")
    assert m.group("ipv6") == "0123:4567:89ab::cdef"


def test_port_and_cidr_patterns():
    assert port_pattern().fullmatch(":9050").group("port") == "9050"
    assert cidr_pattern().fullmatch("/24").group("cidr") == "24"
    assert port_pattern().fullmatch("/24") is None
    assert cidr_pattern().fullmatch(":9050") is None


def test_must_cidr():
    pat = ip_and_cidr_or_port_pattern(PatternMode.IP_AND_MUST_CIDR)
    m = pat.fullmatch("12.34.56.78/24")
    assert m.group("ip") == "12.34.56.78"
    assert m.group("cidr") == "24"
    assert pat.fullmatch("12.34.56.78") is None


def test_must_port_with_bracketed_ipv6():
    pat = ip_and_cidr_or_port_pattern(PatternMode.IP_AND_MUST_PORT)
    m = pat.fullmatch("[0123:4567:89ab::cdef]:9050")
    assert m.group("ipv6") == "0123:4567:89ab::cdef"
    assert m.group("port") == "9050"


def test_must_cidr_or_port_accepts_either():
    pat = ip_and_cidr_or_port_pattern(PatternMode.IP_AND_MUST_CIDR_OR_PORT)
    assert pat.fullmatch("12.34.56.78:9050").group("port") == "9050"
    assert pat.fullmatch("12.34.56.78/24").group("cidr") == "24"
    assert pat.fullmatch("12.34.56.78") is None


@pytest.mark.parametrize(
    "mode",
    [PatternMode.IP_AND_OPT_CIDR_OR_PORT, PatternMode.IP_AND_OPT_CIDR, PatternMode.IP_AND_OPT_PORT],
)
def test_optional_modes_accept_plain_ip(mode):
    m = ip_and_cidr_or_port_pattern(mode).fullmatch("0.0.0.0")
    assert m.group("ip") == "0.0.0.0"
    assert m.group("port_or_cidr") is None


def test_opt_port_rejects_cidr():
    pat = ip_and_cidr_or_port_pattern(PatternMode.IP_AND_OPT_PORT)
    assert pat.fullmatch("12.34.56.78/24") is None


def test_ip_only():
    pat = ip_and_cidr_or_port_pattern(PatternMode.IP_ONLY)
    assert pat.fullmatch("12.34.56.78/24") is None
    assert pat.match("12.34.56.78/24").group("ip") == "12.34.56.78"


def test_invalid_mode_raises():
    with pytest.raises(BasicStringError) as info:
        ip_and_cidr_or_port_pattern("bogus")
    assert info.value.text == "invalid mode"


def test_patterns_are_cached():
    first = ipv6_pattern()
    second = ipv6_pattern()
    assert first is second
    text = "2266:25::12:0:ad12"
    assert second.fullmatch(text).group("ipv6") == text