"""Allocation of the public ports that proxies listen on."""

from __future__ import annotations

import os
import random
import socket
import threading
import time
import weakref
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Set

MIN_PORT = 1
MAX_PORT = 65535
MAX_PORT_RESERVED_DURATION = 24 * 3600.0
CLEAN_RESERVED_PORTS_INTERVAL = 3600.0
_MAX_TRY_TIMES = 5


class PortError(Exception):
    """Base class for port allocation errors."""

    message = "port error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.message)


class PortAlreadyUsed(PortError):
    message = "port already used"


class PortNotAllowed(PortError):
    message = "port not allowed"


class PortUnavailable(PortError):
    message = "port unavailable"


class NoAvailablePort(PortError):
    message = "no available port"


@dataclass
class PortContext:
    """Bookkeeping for one port handed to a proxy."""

    proxy_name: str
    port: int = 0
    closed: bool = False
    update_time: float = field(default_factory=time.monotonic)


def _family(addr: str) -> socket.AddressFamily:
    return socket.AF_INET6 if ":" in addr else socket.AF_INET


def _clean_loop(ref: "weakref.ReferenceType[PortManager]", interval: float) -> None:
    while True:
        time.sleep(interval)
        manager = ref()
        if manager is None:
            return
        manager.clean_reserved()
        del manager


class PortManager:
    """Hands out ports from an allowed set, remembering each proxy's last port."""

    def __init__(
        self,
        net_type: str,
        bind_addr: str,
        allow_ports: Optional[Iterable[int]] = None,
        *,
        clean_interval: Optional[float] = CLEAN_RESERVED_PORTS_INTERVAL,
    ) -> None:
        self.net_type = net_type
        self.bind_addr = bind_addr
        self.reserved_ports: Dict[str, PortContext] = {}
        self.used_ports: Dict[int, PortContext] = {}
        allowed = set(allow_ports or ())
        self.free_ports: Set[int] = allowed or set(range(MIN_PORT, MAX_PORT + 1))
        self._lock = threading.Lock()
        if clean_interval is not None:
            threading.Thread(
                target=_clean_loop,
                args=(weakref.ref(self), clean_interval),
                daemon=True,
            ).start()

    def acquire(self, name: str, port: int) -> int:
        """Take a port for proxy ``name``; port 0 asks for any free port."""
        ctx = PortContext(proxy_name=name)
        with self._lock:
            real_port = self._acquire(name, port, ctx)
            ctx.port = real_port
            return real_port

    def _take(self, port: int, name: str, ctx: PortContext) -> int:
        self.used_ports[port] = ctx
        self.reserved_ports[name] = ctx
        self.free_ports.discard(port)
        return port

    def _acquire(self, name: str, port: int, ctx: PortContext) -> int:
        if port == 0:
            reserved = self.reserved_ports.get(name)
            if reserved is not None and self.is_port_available(reserved.port):
                return self._take(reserved.port, name, ctx)
            if self.free_ports:
                count = min(_MAX_TRY_TIMES, len(self.free_ports))
                for candidate in random.sample(tuple(self.free_ports), count):
                    if self.is_port_available(candidate):
                        return self._take(candidate, name, ctx)
            raise NoAvailablePort()

        if port in self.free_ports:
            if self.is_port_available(port):
                return self._take(port, name, ctx)
            raise PortUnavailable()
        if port in self.used_ports:
            raise PortAlreadyUsed()
        raise PortNotAllowed()

    def is_port_available(self, port: int) -> bool:
        """Tell whether the port can be bound on the bind address right now."""
        udp = self.net_type == "udp"
        kind = socket.SOCK_DGRAM if udp else socket.SOCK_STREAM
        try:
            with socket.socket(_family(self.bind_addr), kind) as sock:
                if not udp and os.name != "nt":
                    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
                sock.bind((self.bind_addr, port))
                if not udp:
                    sock.listen()
        except (OSError, OverflowError):
            return False
        return True

    def release(self, port: int) -> None:
        """Give a used port back to the free set."""
        with self._lock:
            ctx = self.used_ports.pop(port, None)
            if ctx is not None:
                self.free_ports.add(port)
                ctx.closed = True
                ctx.update_time = time.monotonic()

    def clean_reserved(self) -> None:
        """Forget reservations of ports closed more than a day ago."""
        now = time.monotonic()
        with self._lock:
            stale = [
                name
                for name, ctx in self.reserved_ports.items()
                if ctx.closed and now - ctx.update_time > MAX_PORT_RESERVED_DURATION
            ]
            for name in stale:
                del self.reserved_ports[name]