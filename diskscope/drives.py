from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import List
import psutil

logger = logging.getLogger(__name__)

@dataclass
class Drive:
    root: str
    fstype: str = ""
    total: int = 0
    free: int = 0

def default_root() -> str:
    return os.path.abspath(os.sep)

def list_drives() -> List[Drive]:
    """Mounted volumes that can be scanned, falling back to the filesystem root."""
    drives: List[Drive] = []
    seen = set()
    for part in psutil.disk_partitions(all=False):
        if not part.mountpoint:
            continue
        root = os.path.abspath(part.mountpoint)
        if root in seen:
            continue
        seen.add(root)
        try:
            usage = psutil.disk_usage(root)
        except OSError as e:
            # CD-ROM без диска и т.п.
            logger.debug("skipping %s: %s", root, e)
            continue
        drives.append(Drive(root=root, fstype=part.fstype,
                            total=int(usage.total), free=int(usage.free)))
    drives.sort(key=lambda d: d.root.lower())
    return drives or [Drive(root=default_root())]
