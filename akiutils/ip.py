"""IPv4 and IPv6 address values parsed from and formatted to text.

Addresses are kept in network byte order: the first byte of
:meth:`IPv4.to_bytes` is the leftmost number of the dotted form, and the
first word of :meth:`IPv6.to_words16` is the leftmost hex group.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from itertools import groupby
from typing import Iterable, Optional, Union

from akiutils import errors
from akiutils.ip_patterns import ipv4_pattern, ipv6_pattern

__all__ = [
    "IPv4",
    "IPv6",
    "IPCombine",
    "number_from_port_match",
    "number_from_cidr_match",
    "ipv4_bytes_from_match",
    "ipv6_bytes_from_match",
]

_IPV6_FORMS = (
    ("ipv6_full", None),
    ("ipv6_full_comb", "full_comb_"),
    ("ipv6_short_comb", "short_comb_"),
    ("ipv6_short", None),
)


def _fits_1_byte(value: int) -> bool:
    return 0 <= value <= 255


def _fits_2_bytes(value: int) -> bool:
    return 0 <= value <= 65535


def _require_match(match: Optional[re.Match]) -> re.Match:
    if match is None:
        raise errors.new("text did not match the pattern")
    return match


def _group(match: re.Match, name: str) -> Optional[str]:
    return match.groupdict().get(name)


def _number_from_match(match: Optional[re.Match], name: str) -> int:
    match = _require_match(match)
    digits = _group(match, name)
    if digits is None:
        raise errors.new(f"no {name} number in match")
    value = int(digits)
    if not _fits_2_bytes(value):
        raise errors.new(f"{name} value too high")
    return value


def number_from_port_match(match: Optional[re.Match]) -> int:
    """Return the port of a ``:port`` match, checked to fit in 16 bits."""
    return _number_from_match(match, "port")


def number_from_cidr_match(match: Optional[re.Match]) -> int:
    """Return the prefix length of a ``/cidr`` match, checked to fit in 16 bits."""
    return _number_from_match(match, "cidr")


def _octets(match: re.Match, prefix: str = "") -> bytes:
    values = []
    for i in range(1, 5):
        text = _group(match, f"{prefix}octet{i}")
        if text is None:
            raise errors.new("match holds no IPv4 address")
        value = int(text)
        if not _fits_1_byte(value):
            raise errors.new(f"IPv4 number out of range: {text}")
        values.append(value)
    return bytes(values)


def ipv4_bytes_from_match(match: Optional[re.Match]) -> bytes:
    """Return the four bytes of a dotted IPv4 address match."""
    return _octets(_require_match(match))


def _hex_groups(part: str) -> list[int]:
    if not part:
        return []
    words = []
    for piece in part.split(":"):
        if not piece or len(piece) > 4:
            raise errors.new(f"invalid IPv6 group in {part!r}")
        words.append(int(piece, 16))
    return words


def _parse_words(text: str, count: int) -> list[int]:
    if "::" in text:
        left, right = text.split("::", 1)
        left_words = _hex_groups(left)
        right_words = _hex_groups(right)
        explicit = len(left_words) + len(right_words)
        if explicit >= count:
            raise errors.new(f"too many IPv6 groups in {text!r}")
        return left_words + [0] * (count - explicit) + right_words
    words = _hex_groups(text)
    if len(words) != count:
        raise errors.new(f"wrong number of IPv6 groups in {text!r}")
    return words


def _words_to_bytes(words: Iterable[int]) -> bytes:
    return b"".join(word.to_bytes(2, "big") for word in words)


def ipv6_bytes_from_match(match: Optional[re.Match]) -> tuple[bytes, bool]:
    """Return the sixteen bytes of an IPv6 match and whether it ends in IPv4 form."""
    match = _require_match(match)
    for name, ipv4_prefix in _IPV6_FORMS:
        text = _group(match, name)
        if text is None:
            continue
        if ipv4_prefix is None:
            return _words_to_bytes(_parse_words(text, 8)), False
        tail = _octets(match, ipv4_prefix)
        head = text[: len(text) - len(_group(match, f"{ipv4_prefix}ipv4"))]
        if not head.endswith("::"):
            head = head[:-1]
        return _words_to_bytes(_parse_words(head, 6)) + tail, True
    raise errors.new("match holds no IPv6 address")


def _to_bytes(data: Iterable[int], size: int) -> bytes:
    try:
        packed = bytes(data)
    except (TypeError, ValueError):
        raise errors.new("invalid byte values") from None
    if len(packed) != size:
        raise errors.new("invalid vector size")
    return packed


def _check_words(words: Iterable[int], count: int, bits: int) -> list[int]:
    values = list(words)
    if len(values) != count:
        raise errors.new("invalid vector size")
    limit = 1 << bits
    if any(not 0 <= value < limit for value in values):
        raise errors.new(f"value does not fit in {bits} bits")
    return values


@dataclass(frozen=True)
class IPv4:
    """An IPv4 address."""

    packed: bytes = bytes(4)

    def __post_init__(self) -> None:
        object.__setattr__(self, "packed", _to_bytes(self.packed, 4))

    @classmethod
    def from_bytes(cls, data: Iterable[int]) -> "IPv4":
        """Build from four bytes, leftmost number first."""
        return cls(_to_bytes(data, 4))

    @classmethod
    def from_string(cls, text: str) -> "IPv4":
        """Parse the dotted address at the start of ``text``."""
        return cls(ipv4_bytes_from_match(ipv4_pattern().match(text)))

    def to_bytes(self) -> bytes:
        return self.packed

    def __str__(self) -> str:
        return ".".join(str(b) for b in self.packed)


@dataclass
class IPv6:
    """An IPv6 address; ``ipv4_comb`` records that it was written with an IPv4 tail."""

    packed: bytes = bytes(16)
    ipv4_comb: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        self.packed = _to_bytes(self.packed, 16)

    @classmethod
    def from_bytes(cls, data: Iterable[int]) -> "IPv6":
        """Build from sixteen bytes in network order."""
        return cls(_to_bytes(data, 16))

    @classmethod
    def from_words16(cls, words: Iterable[int]) -> "IPv6":
        """Build from eight 16-bit groups, leftmost first."""
        return cls(_words_to_bytes(_check_words(words, 8, 16)))

    @classmethod
    def from_words32(cls, words: Iterable[int]) -> "IPv6":
        """Build from four 32-bit words, most significant first."""
        values = _check_words(words, 4, 32)
        return cls(b"".join(value.to_bytes(4, "big") for value in values))

    @classmethod
    def from_string(cls, text: str) -> "IPv6":
        """Parse the IPv6 address, optionally bracketed, at the start of ``text``."""
        packed, comb = ipv6_bytes_from_match(ipv6_pattern().match(text))
        return cls(packed, comb)

    def to_bytes(self) -> bytes:
        return self.packed

    def to_words16(self) -> tuple[int, ...]:
        return tuple(int.from_bytes(self.packed[i : i + 2], "big") for i in range(0, 16, 2))

    def to_words32(self) -> tuple[int, ...]:
        return tuple(int.from_bytes(self.packed[i : i + 4], "big") for i in range(0, 16, 4))

    def to_string_long(self) -> str:
        """All eight groups in hex, without leading zeros."""
        return ":".join(f"{word:x}" for word in self.to_words16())

    def to_string_short(self) -> str:
        """Like :meth:`to_string_long` with the longest run of zero groups as ``::``."""
        words = self.to_words16()
        best_start, best_length = 0, 0
        position = 0
        for is_zero, run in groupby(words, key=lambda word: word == 0):
            length = len(list(run))
            if is_zero and length > best_length:
                best_start, best_length = position, length
            position += length
        if best_length == 0:
            return self.to_string_long()
        head = ":".join(f"{word:x}" for word in words[:best_start])
        tail = ":".join(f"{word:x}" for word in words[best_start + best_length :])
        return f"{head}::{tail}"

    def __str__(self) -> str:
        return self.to_string_short()

    def set_ipv4_part(self, part: IPv4) -> None:
        """Replace the last four bytes with the given IPv4 address."""
        self.packed = self.packed[:12] + part.to_bytes()

    def get_ipv4_part(self) -> IPv4:
        """Return the last four bytes as an IPv4 address."""
        return IPv4(self.packed[12:])


@dataclass
class IPCombine:
    """An address together with an optional port and an optional CIDR prefix."""

    ip: Optional[Union[IPv4, IPv6]] = None
    port: Optional[int] = None
    cidr: Optional[int] = None

    def __post_init__(self) -> None:
        for name, value in (("port", self.port), ("cidr", self.cidr)):
            if value is not None and not _fits_2_bytes(value):
                raise errors.new(f"{name} value out of range")