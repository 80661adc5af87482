"""Connections and addresses over POSIX sockets.

Besides reading and writing, a connection can be switched into
non-blocking mode and given deadlines after which blocked operations fail
with a timeout error.
"""

from __future__ import annotations

import os
import socket
import sys
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from akiutils.errors import BasicStringError

__all__ = [
    "NetError",
    "Addr",
    "SocketAddr",
    "UnixAddr",
    "SocketConn",
    "listen_unix",
]

Deadline = Union[datetime, float, int, None]


class NetError(BasicStringError):
    """A network error; ``timeout`` tells whether a deadline was exceeded."""

    def __init__(
        self,
        text: str,
        file: Optional[str] = None,
        line: Optional[int] = None,
        *,
        timeout: bool = False,
    ):
        super().__init__(text, file, line)
        self.timeout = timeout


def _error(text: str, *, timeout: bool = False) -> NetError:
    frame = sys._getframe(1)
    return NetError(text, frame.f_code.co_filename, frame.f_lineno, timeout=timeout)


class Addr(ABC):
    """A network end point: a network name and an address string."""

    @property
    @abstractmethod
    def network(self) -> str:
        """Name of the network, such as ``"tcp4"`` or ``"unix"``."""

    @abstractmethod
    def __str__(self) -> str:
        """The address in text form."""


@dataclass(frozen=True)
class UnixAddr(Addr):
    """Address of a UNIX domain socket."""

    name: str
    net: str = "unix"

    @property
    def network(self) -> str:
        return self.net

    def __str__(self) -> str:
        return self.name


_NETWORKS = {
    socket.AF_UNIX: {socket.SOCK_STREAM: "unix", socket.SOCK_DGRAM: "unixgram"},
    socket.AF_INET: {socket.SOCK_STREAM: "tcp4", socket.SOCK_DGRAM: "udp4"},
    socket.AF_INET6: {socket.SOCK_STREAM: "tcp6", socket.SOCK_DGRAM: "udp6"},
}


def _describe(family: int, sock_type: int, raw) -> tuple[str, str]:
    by_type = _NETWORKS.get(family)
    if by_type is None:
        raise _error("unsupported address family")
    network = by_type.get(sock_type)
    if network is None:
        raise _error("unsupported socket type")
    if family == socket.AF_UNIX:
        if isinstance(raw, bytes):
            text = os.fsdecode(raw)
        else:
            text = raw or ""
    elif family == socket.AF_INET:
        host, port = raw[0], raw[1]
        text = f"{host}:{port}"
    else:
        host, port = raw[0], raw[1]
        text = f"[{host}]:{port}"
    return network, text


@dataclass(frozen=True)
class SocketAddr(Addr):
    """Address read from a socket's own or peer end."""

    net: str
    address: str

    @property
    def network(self) -> str:
        return self.net

    def __str__(self) -> str:
        return self.address

    @classmethod
    def _for(cls, sock: socket.socket, remote: bool) -> "SocketAddr":
        try:
            raw = sock.getpeername() if remote else sock.getsockname()
        except OSError as exc:
            raise _error(f"couldn't get socket address: {exc}") from exc
        network, text = _describe(sock.family, sock.type, raw)
        return cls(network, text)

    @classmethod
    def for_local(cls, sock: socket.socket) -> "SocketAddr":
        """The address the socket is bound to."""
        return cls._for(sock, False)

    @classmethod
    def for_peer(cls, sock: socket.socket) -> "SocketAddr":
        """The address of the socket's peer."""
        return cls._for(sock, True)


def _deadline_seconds(t: Deadline) -> Optional[float]:
    if t is None:
        return None
    if isinstance(t, datetime):
        return t.timestamp()
    if isinstance(t, (int, float)):
        return float(t)
    raise TypeError(f"deadline must be a datetime, a number or None, not {type(t).__name__}")


def _sockaddr_for(addr: Addr, family: int):
    text = str(addr)
    if family == socket.AF_UNIX:
        return text
    host, sep, port = text.rpartition(":")
    if not sep:
        raise _error(f"invalid address: {text}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        return host, int(port)
    except ValueError:
        raise _error(f"invalid address: {text}") from None


class SocketConn:
    """A stream or packet connection over a socket."""

    def __init__(self, sock: Optional[socket.socket] = None):
        self._sock = sock
        self._non_blocking = False
        self._read_deadline: Optional[float] = None
        self._write_deadline: Optional[float] = None

    @property
    def sock(self) -> Optional[socket.socket]:
        """The underlying socket, or ``None`` once closed."""
        return self._sock

    def __enter__(self) -> "SocketConn":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the socket; closing twice does nothing."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def local_addr(self) -> Optional[Addr]:
        """Address of this end, or ``None`` if it can't be told."""
        if self._sock is None:
            return None
        try:
            return SocketAddr.for_local(self._sock)
        except NetError:
            return None

    def remote_addr(self) -> Optional[Addr]:
        """Address of the peer, or ``None`` if it can't be told."""
        if self._sock is None:
            return None
        try:
            return SocketAddr.for_peer(self._sock)
        except NetError:
            return None

    def supports_non_blocking(self) -> bool:
        return True

    @property
    def non_blocking(self) -> bool:
        """Whether operations return at once instead of waiting."""
        return self._non_blocking

    @non_blocking.setter
    def non_blocking(self, value: bool) -> None:
        self._non_blocking = bool(value)
        if self._sock is not None:
            self._sock.setblocking(not self._non_blocking)

    def set_deadline(self, t: Deadline) -> None:
        """Set both the read and the write deadline; ``None`` clears them."""
        seconds = _deadline_seconds(t)
        self._read_deadline = seconds
        self._write_deadline = seconds

    def set_read_deadline(self, t: Deadline) -> None:
        self._read_deadline = _deadline_seconds(t)

    def set_write_deadline(self, t: Deadline) -> None:
        self._write_deadline = _deadline_seconds(t)

    def _io(self, deadline: Optional[float], op):
        sock = self._sock
        if sock is None:
            raise _error("use of closed connection")
        if self._non_blocking:
            try:
                return op(sock)
            except BlockingIOError as exc:
                raise _error("operation would block") from exc
            except OSError as exc:
                raise _error(str(exc)) from exc
        if deadline is None:
            timeout = None
        else:
            timeout = deadline - time.time()
            if timeout <= 0:
                raise _error("i/o timeout", timeout=True)
        sock.settimeout(timeout)
        try:
            return op(sock)
        except socket.timeout as exc:
            raise _error("i/o timeout", timeout=True) from exc
        except OSError as exc:
            raise _error(str(exc)) from exc
        finally:
            if self._sock is not None:
                self._sock.settimeout(None)

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes; an empty result means end of stream."""
        return self._io(self._read_deadline, lambda s: s.recv(size))

    def write(self, data: bytes) -> int:
        """Write all of ``data`` and return its length."""
        payload = bytes(data)
        self._io(self._write_deadline, lambda s: s.sendall(payload))
        return len(payload)

    def read_from(self, size: int) -> tuple[bytes, Addr]:
        """Read one packet of at most ``size`` bytes and the address it came from."""

        def op(s: socket.socket):
            data, raw = s.recvfrom(size)
            network, text = _describe(s.family, s.type, raw)
            return data, SocketAddr(network, text)

        return self._io(self._read_deadline, op)

    def write_to(self, data: bytes, addr: Addr) -> int:
        """Send ``data`` to ``addr`` and return the number of bytes sent."""
        payload = bytes(data)

        def op(s: socket.socket):
            return s.sendto(payload, _sockaddr_for(addr, s.family))

        return self._io(self._write_deadline, op)


def listen_unix(network: str, laddr: Optional[UnixAddr]) -> SocketConn:
    """Open a UNIX stream socket, listening on ``laddr`` when it is given."""
    if network != "unix":
        raise _error("invalid 'network'")
    try:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM, 0)
    except OSError as exc:
        raise _error("couldn't create UNIX socket") from exc
    if laddr is not None:
        try:
            sock.bind(laddr.name)
            sock.listen()
        except OSError as exc:
            sock.close()
            raise _error(f"couldn't listen on UNIX socket: {laddr.name}") from exc
    return SocketConn(sock)