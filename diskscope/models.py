from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

@dataclass
class FolderNode:
    name: str
    path: str
    size: int = 0
    children: List["FolderNode"] = field(default_factory=list)
    access_denied: bool = False

@dataclass
class SiblingEntry:
    name: str
    path: str
    size: int = 0
