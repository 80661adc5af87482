"""Regular expressions for IP addresses with an optional port or CIDR suffix.

Named groups:

* ``port`` and ``cidr`` hold the digits of a ``:port`` or ``/cidr`` suffix.
* ``ipv4`` holds a whole dotted address, ``octet1`` .. ``octet4`` its parts.
* ``ipv6`` holds an IPv6 address without brackets; exactly one of
  ``ipv6_full``, ``ipv6_full_comb``, ``ipv6_short_comb`` and ``ipv6_short``
  tells which form matched.  The IPv4 tail of a combined form is in
  ``full_comb_ipv4`` or ``short_comb_ipv4`` (octets ``full_comb_octet1`` and
  so on).
* ``ip`` holds the address in :func:`ip_pattern` and the combined patterns,
  and ``port_or_cidr`` holds the suffix.
"""

from __future__ import annotations

import re
from enum import Enum
from functools import lru_cache

from akiutils import errors

__all__ = [
    "PatternMode",
    "port_pattern",
    "cidr_pattern",
    "ipv4_pattern",
    "ipv6_full_pattern",
    "ipv6_full_comb_ipv4_pattern",
    "ipv6_short_pattern",
    "ipv6_short_comb_ipv4_pattern",
    "ipv6_pattern",
    "ip_pattern",
    "ip_and_cidr_or_port_pattern",
]

_HEX = "[0-9A-Fa-f]"


class PatternMode(Enum):
    """Which suffix the combined address pattern requires or allows."""

    IP_AND_MUST_CIDR_OR_PORT = "ip_and_must_cidr_or_port"
    IP_AND_MUST_CIDR = "ip_and_must_cidr"
    IP_AND_MUST_PORT = "ip_and_must_port"
    IP_AND_OPT_CIDR_OR_PORT = "ip_and_opt_cidr_or_port"
    IP_AND_OPT_CIDR = "ip_and_opt_cidr"
    IP_AND_OPT_PORT = "ip_and_opt_port"
    IP_ONLY = "ip_only"


def _port_source() -> str:
    return r":(?P<port>[0-9]+)"


def _cidr_source() -> str:
    return r"/(?P<cidr>[0-9]+)"


def _ipv4_source(prefix: str = "") -> str:
    octets = r"\.".join(f"(?P<{prefix}octet{i}>[0-9]{{1,3}})" for i in range(1, 5))
    return f"(?P<{prefix}ipv4>{octets})"


def _ipv6_full_source() -> str:
    return f"(?P<ipv6_full>(?:{_HEX}{{1,4}}:){{7}}{_HEX}{{1,4}})"


def _ipv6_full_comb_source() -> str:
    return f"(?P<ipv6_full_comb>(?:{_HEX}{{1,4}}:){{6}}{_ipv4_source('full_comb_')})"


def _ipv6_short_source() -> str:
    return f"(?P<ipv6_short>(?:{_HEX}{{0,4}}:{{1,2}}){{1,8}}{_HEX}{{0,4}})"


def _ipv6_short_comb_source() -> str:
    return f"(?P<ipv6_short_comb>(?:{_HEX}{{0,4}}:{{1,2}}){{1,6}}{_ipv4_source('short_comb_')})"


def _ipv6_source() -> str:
    forms = "|".join(
        (
            _ipv6_full_source(),
            _ipv6_full_comb_source(),
            _ipv6_short_comb_source(),
            _ipv6_short_source(),
        )
    )
    return rf"\[?(?P<ipv6>{forms})\]?"


def _ip_source() -> str:
    return f"(?P<ip>{_ipv4_source()}|{_ipv6_source()})"


@lru_cache(maxsize=None)
def _compile(source: str) -> re.Pattern[str]:
    return re.compile(source)


def port_pattern() -> re.Pattern[str]:
    """``:`` followed by port digits."""
    return _compile(_port_source())


def cidr_pattern() -> re.Pattern[str]:
    """``/`` followed by prefix-length digits."""
    return _compile(_cidr_source())


def ipv4_pattern() -> re.Pattern[str]:
    """Dotted IPv4 address of four groups of one to three digits."""
    return _compile(_ipv4_source())


def ipv6_full_pattern() -> re.Pattern[str]:
    """IPv6 address written as eight hex groups."""
    return _compile(_ipv6_full_source())


def ipv6_full_comb_ipv4_pattern() -> re.Pattern[str]:
    """IPv6 address of six hex groups followed by a dotted IPv4 address."""
    return _compile(_ipv6_full_comb_source())


def ipv6_short_pattern() -> re.Pattern[str]:
    """IPv6 address that may use the ``::`` shorthand."""
    return _compile(_ipv6_short_source())


def ipv6_short_comb_ipv4_pattern() -> re.Pattern[str]:
    """Shortened IPv6 address ending in a dotted IPv4 address."""
    return _compile(_ipv6_short_comb_source())


def ipv6_pattern() -> re.Pattern[str]:
    """Any IPv6 form, optionally in square brackets."""
    return _compile(_ipv6_source())


def ip_pattern() -> re.Pattern[str]:
    """An IPv4 or IPv6 address."""
    return _compile(_ip_source())


_SUFFIXES = {
    PatternMode.IP_AND_MUST_CIDR_OR_PORT: (f"(?:{_port_source()}|{_cidr_source()})", False),
    PatternMode.IP_AND_MUST_CIDR: (_cidr_source(), False),
    PatternMode.IP_AND_MUST_PORT: (_port_source(), False),
    PatternMode.IP_AND_OPT_CIDR_OR_PORT: (f"(?:{_port_source()}|{_cidr_source()})", True),
    PatternMode.IP_AND_OPT_CIDR: (_cidr_source(), True),
    PatternMode.IP_AND_OPT_PORT: (_port_source(), True),
}


def ip_and_cidr_or_port_pattern(mode: PatternMode) -> re.Pattern[str]:
    """An address followed by a port or CIDR suffix as ``mode`` demands."""
    if mode is PatternMode.IP_ONLY:
        return ip_pattern()
    try:
        suffix, optional = _SUFFIXES[mode]
    except (KeyError, TypeError):
        raise errors.new("invalid mode") from None
    quantifier = "?" if optional else ""
    return _compile(f"{_ip_source()}(?P<port_or_cidr>{suffix}){quantifier}")