# akiutils

A small library of building blocks. It has no runtime dependencies and
needs Python 3.10 or later.

## Modules

### `akiutils.errors`

- `BasicStringError` – an exception holding `text`, `file` and `line`.
  When `file` or `line` is left out, the place where the error object is
  created is filled in. `error()` (and `str()`) gives `file:line text`.
- `new(text, file=None, line=None)` – builds a `BasicStringError`; without
  `file` and `line` the caller's file and line are used.

```python
from akiutils.errors import new

err = new("something went wrong", "worker.py", 42)
print(err.error())   # worker.py:42 something went wrong
```

### `akiutils.logger`

- `LoggerMSGType` – message kinds: `STATUS`, `TEXT`, `INFO`, `WARNING`,
  `ERROR`, `FAILURE`, `EXPECTED_FAILURE`, `SUCCESS`, `UNEXPECTED_SUCCESS`,
  `TODO`, `FIXME`.
- `icon_by_type(t)` – a three-character icon (`" ? "` for unknown kinds).
- `string_for_type(t)` – a word for the kind (`"undefined"` for unknown kinds).
- `timestamp()` – current UTC time as `YYYY-MM-DDTHH:MM:SS.ffffffz`.
- `Logger` – the abstract interface with `log`, `log_all` and
  `log_split_lines`.
- `TerminalLogger(stream=None)` – prints each message as
  `[icon] [timestamp] text` to `stream`, or to standard output when none is
  given. `log(t)` without a message prints the word for the kind;
  `log_all(t, msgs)` logs each message; `log_split_lines(t, msg)` logs each
  line of `msg` separately.

```python
from akiutils.logger import LoggerMSGType, TerminalLogger

log = TerminalLogger()
log.log(LoggerMSGType.INFO, "hello")
log.log_split_lines(LoggerMSGType.STATUS, "first line\nsecond line")
```

### `akiutils.ip_patterns`

Compiled `re` patterns with named groups:

- `port_pattern()` (`:` and digits, group `port`) and `cidr_pattern()`
  (`/` and digits, group `cidr`).
- `ipv4_pattern()` – groups `ipv4` and `octet1` … `octet4`.
- `ipv6_full_pattern()`, `ipv6_full_comb_ipv4_pattern()`,
  `ipv6_short_pattern()`, `ipv6_short_comb_ipv4_pattern()` – the single
  IPv6 forms.
- `ipv6_pattern()` – any of those forms, optionally in square brackets;
  group `ipv6`.
- `ip_pattern()` – IPv4 or IPv6; group `ip`.
- `ip_and_cidr_or_port_pattern(mode)` – an address followed by a port or
  CIDR suffix in group `port_or_cidr`, required or optional as the
  `PatternMode` says (`IP_ONLY` gives `ip_pattern()`).

```python
from akiutils.ip_patterns import PatternMode, ip_and_cidr_or_port_pattern

m = ip_and_cidr_or_port_pattern(PatternMode.IP_AND_MUST_PORT).match("12.34.56.78:9050")
print(m.group("ip"), m.group("port"))   # 12.34.56.78 9050
```

### `akiutils.ip`

- `IPv4` – an immutable address of four bytes, leftmost number first.
  `IPv4.from_bytes(data)`, `IPv4.from_string(text)`, `to_bytes()`, `str()`.
- `IPv6` – an address of sixteen bytes in network order, with an
  `ipv4_comb` flag set when it was written with an IPv4 tail.
  `from_bytes`, `from_words16`, `from_words32`, `from_string`, `to_bytes`,
  `to_words16`, `to_words32`, `to_string_long`, `to_string_short` (also
  `str()`), and `set_ipv4_part` / `get_ipv4_part` for the last four bytes.
- `IPCombine(ip=None, port=None, cidr=None)` – an address with an optional
  port and CIDR prefix; port and prefix must fit in 16 bits.
- `number_from_port_match`, `number_from_cidr_match`,
  `ipv4_bytes_from_match`, `ipv6_bytes_from_match` – turn pattern matches
  into numbers and bytes.

Invalid input raises `BasicStringError`.

```python
from akiutils.ip import IPv4, IPv6

print(IPv4.from_string("192.0.2.1").to_bytes())          # b'\xc0\x00\x02\x01'
addr = IPv6.from_string("::ffff:192.0.2.128")
print(addr.ipv4_comb, addr.to_string_short())            # True ::ffff:c000:280
print(addr.get_ipv4_part())                              # 192.0.2.128
```

`to_string_short` and `to_string_long` always write hex groups; an IPv4
tail is not written back in dotted form.

### `akiutils.osutil`

- `remove(name)` – deletes a file or an empty directory and raises
  `BasicStringError` (“couldn't remove file: …”) when it cannot.

### `akiutils.net`

- `Addr` – abstract address with a `network` name and a text form.
- `UnixAddr(name, net="unix")` – a UNIX socket path.
- `SocketAddr` – `SocketAddr.for_local(sock)` and
  `SocketAddr.for_peer(sock)` describe a socket's ends as `unix`,
  `unixgram`, `tcp4`, `udp4`, `tcp6` or `udp6` with `host:port`
  (`[host]:port` for IPv6) or the socket path.
- `SocketConn(sock)` – wraps a socket: `read`, `write`, `read_from`,
  `write_to`, `local_addr`, `remote_addr`, `close`, a `non_blocking`
  property, and `set_deadline`, `set_read_deadline`, `set_write_deadline`
  taking a `datetime`, a POSIX timestamp or `None`. It is a context manager.
- `NetError` – a `BasicStringError` whose `timeout` attribute tells whether
  a deadline ran out.
- `listen_unix(network, laddr)` – `network` must be `"unix"`; opens a UNIX
  stream socket, binds and listens on `laddr` when one is given, and returns
  it as a `SocketConn`.

## What this package does not do

There is no server or client command. `akiutils.net` has no call to accept
connections on the socket `listen_unix` returns and no dialing function;
use the `socket` object in `SocketConn.sock` for that. Deadlines only
apply while the connection is blocking.

## Tests

```
pip install ".[test]"
pytest
```