"""Registry of the proxies running on the server, indexed by proxy name."""

from __future__ import annotations

import threading
from typing import Any, Dict, Iterator, List, Optional


class ProxyNameInUse(Exception):
    """A proxy with the same name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"proxy name [{name}] is already in use")
        self.name = name


class ProxyRegistry:
    """Thread-safe map from proxy name to the running proxy."""

    def __init__(self) -> None:
        self._proxies: Dict[str, Any] = {}
        self._lock = threading.RLock()

    def add(self, name: str, proxy: Any) -> None:
        """Register a proxy; raise ProxyNameInUse if the name is taken."""
        with self._lock:
            if name in self._proxies:
                raise ProxyNameInUse(name)
            self._proxies[name] = proxy

    def delete(self, name: str) -> None:
        """Forget the proxy of that name, if there is one."""
        with self._lock:
            self._proxies.pop(name, None)

    def get(self, name: str) -> Optional[Any]:
        """Return the proxy of that name, or None."""
        with self._lock:
            return self._proxies.get(name)

    def names(self) -> List[str]:
        """Names of all registered proxies."""
        with self._lock:
            return list(self._proxies)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._proxies

    def __len__(self) -> int:
        with self._lock:
            return len(self._proxies)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())