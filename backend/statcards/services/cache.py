import json
import time
from typing import Any, Callable, Dict, Optional, Tuple

from ..config import get_settings


class InMemoryCache:
    """Process-local TTL cache; values are kept as JSON text.

    Expiry is lazy: an entry is dropped by the first ``get`` at or after
    ``write_time + ttl``.
    """

    def __init__(self, ttl_seconds: Optional[float] = None, clock: Callable[[], float] = time.time):
        self.ttl = ttl_seconds if ttl_seconds is not None else get_settings().cache_ttl_seconds
        self.clock = clock
        self.store: Dict[str, Tuple[float, str]] = {}

    def get(self, key: str) -> Any:
        entry = self.store.get(key)
        if not entry:
            return None
        expires_at, payload = entry
        if self.clock() >= expires_at:
            self.store.pop(key, None)
            return None
        return json.loads(payload)

    def set(self, key: str, value: Any) -> None:
        self.store[key] = (self.clock() + self.ttl, json.dumps(value))

    def clear(self) -> None:
        self.store.clear()

    def __len__(self) -> int:
        return len(self.store)
