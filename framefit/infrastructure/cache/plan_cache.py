from __future__ import annotations

import threading
from collections import OrderedDict
from collections.abc import Hashable

from framefit.domain.entities.optimized_config import OptimizedConfig, Strategy

# (image hash, device id, requested strategy, planning context)
PlanKey = tuple[str, str, str, Hashable]


class PlanCache:
    """Bounded LRU of computed configs.

    Entries are immutable value objects, so a hit can be shared freely. The
    key must include the requested strategy, not the resolved one, and the
    context the plan was computed in (frame spec and policy), so a reloaded
    catalog or policy never serves an older plan.
    """

    def __init__(self, max_entries: int = 256) -> None:
        self.max_entries = max(0, max_entries)
        self._entries: OrderedDict[PlanKey, OptimizedConfig] = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def key(image_hash: str, device_id: str, strategy: Strategy | str, context: Hashable = None) -> PlanKey:
        return (image_hash, device_id, Strategy(strategy).value, context)

    def get(self, key: PlanKey) -> OptimizedConfig | None:
        with self._lock:
            config = self._entries.get(key)
            if config is not None:
                self._entries.move_to_end(key)
            return config

    def put(self, key: PlanKey, config: OptimizedConfig) -> None:
        if self.max_entries == 0:
            return
        with self._lock:
            self._entries[key] = config
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
