"""Registry of the client control sessions, indexed by run id."""

from __future__ import annotations

import threading
from typing import Dict, Iterator, List, Optional, Protocol


class Control(Protocol):
    """What the registry needs from a client control session."""

    def replaced(self, new_control: "Control") -> None:
        """Shut down because a newer session with the same run id logged in."""


class ControlRegistry:
    """Thread-safe map from run id to the control session of a client."""

    def __init__(self) -> None:
        self._controls: Dict[str, Control] = {}
        self._lock = threading.RLock()

    def add(self, run_id: str, control: Control) -> Optional[Control]:
        """Register a session; an older one with the same run id is told it
        was replaced and is returned."""
        with self._lock:
            old = self._controls.get(run_id)
            if old is not None:
                old.replaced(control)
            self._controls[run_id] = control
            return old

    def delete(self, run_id: str, control: Control) -> None:
        """Forget the session, but only if it is still the one registered."""
        with self._lock:
            if self._controls.get(run_id) is control:
                del self._controls[run_id]

    def get(self, run_id: str) -> Optional[Control]:
        """Return the session for the run id, or None."""
        with self._lock:
            return self._controls.get(run_id)

    def run_ids(self) -> List[str]:
        """Run ids of all registered sessions."""
        with self._lock:
            return list(self._controls)

    def __contains__(self, run_id: object) -> bool:
        with self._lock:
            return run_id in self._controls

    def __len__(self) -> int:
        with self._lock:
            return len(self._controls)

    def __iter__(self) -> Iterator[str]:
        return iter(self.run_ids())