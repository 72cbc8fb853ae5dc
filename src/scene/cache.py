"""Per-mode memo for frame results.

Scaling constants depend on the active modes, so an entry is only valid for
the (display mode, view mode) pair it was computed under.  Any change of
that pair drops the whole cache.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Hashable

from viewstate.store import ModeState

logger = logging.getLogger("starscale.cache")


class FrameCache:
    """Memoizes results keyed by ``(display_mode, view_mode, key)``."""

    def __init__(self, max_entries: int = 4096) -> None:
        self._entries: dict[tuple, Any] = {}
        self._modes: tuple | None = None
        self._max_entries = max_entries
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: tuple) -> bool:
        return key in self._entries

    def _sync_modes(self, state: ModeState) -> tuple:
        modes = (state.mode, state.view_mode)
        if modes != self._modes:
            if self._entries:
                logger.debug("Mode change %s -> %s, dropping %d cached entries",
                             self._modes, modes, len(self._entries))
            self._entries.clear()
            self._modes = modes
        return modes

    def get_or_compute(self, state: ModeState, key: Hashable, compute: Callable[[], Any]) -> Any:
        with self._lock:
            full_key = (*self._sync_modes(state), key)
            if full_key in self._entries:
                self.hits += 1
                return self._entries[full_key]
        value = compute()
        with self._lock:
            if self._sync_modes(state) == full_key[:2]:
                if len(self._entries) >= self._max_entries:
                    self._entries.clear()
                self._entries[full_key] = value
            self.misses += 1
        return value

    def invalidate(self) -> None:
        with self._lock:
            self._entries.clear()
            self._modes = None
