"""Server-wide metrics hooks."""

from __future__ import annotations

import threading
from collections import Counter


class ServerMetrics:
    """Receives server events and keeps simple in-memory counters of them."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.client_count = 0
        self.proxy_type_counts: Counter[str] = Counter()
        self.current_connections: Counter[str] = Counter()
        self.traffic_in: Counter[str] = Counter()
        self.traffic_out: Counter[str] = Counter()

    def new_client(self) -> None:
        """A client logged in."""
        with self._lock:
            self.client_count += 1

    def close_client(self) -> None:
        """A client went away."""
        with self._lock:
            self.client_count -= 1

    def new_proxy(self, name: str, proxy_type: str) -> None:
        """A proxy was registered."""
        with self._lock:
            self.proxy_type_counts[proxy_type] += 1

    def close_proxy(self, name: str, proxy_type: str) -> None:
        """A proxy was closed."""
        with self._lock:
            self.proxy_type_counts[proxy_type] -= 1

    def open_connection(self, name: str, proxy_type: str) -> None:
        """A user connection was opened through a proxy."""
        with self._lock:
            self.current_connections[name] += 1

    def close_connection(self, name: str, proxy_type: str) -> None:
        """A user connection through a proxy was closed."""
        with self._lock:
            self.current_connections[name] -= 1

    def add_traffic_in(self, name: str, proxy_type: str, traffic_bytes: int) -> None:
        """Bytes were received for a proxy."""
        with self._lock:
            self.traffic_in[name] += traffic_bytes

    def add_traffic_out(self, name: str, proxy_type: str, traffic_bytes: int) -> None:
        """Bytes were sent for a proxy."""
        with self._lock:
            self.traffic_out[name] += traffic_bytes


class _Registry:
    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.current: ServerMetrics = ServerMetrics()
        self.registered = False


_registry = _Registry()


def register(metrics: ServerMetrics) -> None:
    """Install the metrics sink; only the first call has any effect."""
    with _registry.lock:
        if not _registry.registered:
            _registry.current = metrics
            _registry.registered = True


def server() -> ServerMetrics:
    """Return the metrics sink in use."""
    return _registry.current