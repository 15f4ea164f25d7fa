from __future__ import annotations
import os
from typing import Dict, List, Optional
from .models import SiblingEntry

class NavigationCache:
    """Results of level scans keyed by absolute path.

    Entries never expire: a hit may be stale until ``invalidate`` is called
    for that exact path. Subfolders of an invalidated path keep their entries.
    """

    def __init__(self):
        self._entries: Dict[str, List[SiblingEntry]] = {}

    @staticmethod
    def _key(path: str) -> str:
        return os.path.abspath(path)

    def get(self, path: str) -> Optional[List[SiblingEntry]]:
        return self._entries.get(self._key(path))

    def put(self, path: str, entries: List[SiblingEntry]) -> None:
        self._entries[self._key(path)] = entries

    def invalidate(self, path: str) -> None:
        self._entries.pop(self._key(path), None)

    def __contains__(self, path: str) -> bool:
        return self._key(path) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

class History:
    def __init__(self):
        self._stack: List[str] = []

    def push(self, path: str) -> None:
        self._stack.append(path)

    def pop(self) -> Optional[str]:
        if not self._stack:
            return None
        return self._stack.pop()

    def __len__(self) -> int:
        return len(self._stack)

    def __bool__(self) -> bool:
        return bool(self._stack)
