# =============================================================================
# File: concurrent_dict.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from threading import RLock
from typing import Any, Callable, Dict, List, Optional, Tuple


class ConcurrentDict:
    """
    Thread-safe dictionary for concurrent access.
    Provides atomic lookup and get_or_add operations.
    """

    def __init__(self, created_for: Any = None):
        self._lock = RLock()
        self._dict: Dict[Any, Any] = {}
        self.created_for = created_for

    def get(self, key: Any, default: Optional[Any] = None) -> Any:
        with self._lock:
            return self._dict.get(key, default)

    def get_or_add(self, key: Any, factory: Callable[[], Any]) -> Tuple[Any, bool]:
        """
        Atomically gets the value for the key, or adds it using the factory if not present.
        Returns ``(value, added)``.
        """
        with self._lock:
            if key in self._dict:
                return self._dict[key], False
            value = factory()
            self._dict[key] = value
            return value, True

    def contains(self, key: Any) -> bool:
        with self._lock:
            return key in self._dict

    def keys(self) -> List[Any]:
        with self._lock:
            return list(self._dict.keys())

    def values(self) -> List[Any]:
        with self._lock:
            return list(self._dict.values())

    def size(self) -> int:
        with self._lock:
            return len(self._dict)
