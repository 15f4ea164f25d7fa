from __future__ import annotations
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple
from .models import FolderNode, SiblingEntry

logger = logging.getLogger(__name__)

def display_name(path: str) -> str:
    # "/" и "C:\" не имеют последнего сегмента
    return os.path.basename(path.rstrip("\\/")) or path

def _list_dir(path: str) -> Optional[List[os.DirEntry]]:
    try:
        with os.scandir(path) as it:
            return list(it)
    except OSError as e:
        logger.debug("cannot list %s: %s", path, e)
        return None

def _file_size(entry: os.DirEntry) -> int:
    try:
        return int(entry.stat(follow_symlinks=False).st_size)
    except OSError as e:
        logger.debug("cannot stat %s: %s", entry.path, e)
        return 0

def _is_symlink(entry: os.DirEntry) -> bool:
    try:
        return entry.is_symlink()
    except OSError:
        return True

def compute_size(path: str) -> int:
    """Total apparent size of everything below ``path``.

    Unreadable directories and files contribute 0, symlinks are never
    followed. Walks with an explicit stack, so nesting depth is not bounded
    by the interpreter recursion limit.
    """
    total = 0
    pending = [path]
    while pending:
        entries = _list_dir(pending.pop())
        if entries is None:
            continue
        for entry in entries:
            if _is_symlink(entry):
                continue
            try:
                if entry.is_dir(follow_symlinks=False):
                    pending.append(entry.path)
                elif entry.is_file(follow_symlinks=False):
                    total += _file_size(entry)
            except OSError:
                continue
    return total

def build_tree(path: str) -> FolderNode:
    root = FolderNode(name=display_name(path), path=path)
    # (node, parent) в порядке обхода: родитель всегда раньше детей
    visited: List[Tuple[FolderNode, Optional[FolderNode]]] = []
    pending: List[Tuple[FolderNode, Optional[FolderNode]]] = [(root, None)]

    while pending:
        node, parent = pending.pop()
        visited.append((node, parent))
        entries = _list_dir(node.path)
        if entries is None:
            node.access_denied = True
            continue
        for entry in entries:
            if _is_symlink(entry):
                continue
            try:
                if entry.is_dir(follow_symlinks=False):
                    child = FolderNode(name=entry.name, path=entry.path)
                    node.children.append(child)
                    pending.append((child, node))
                elif entry.is_file(follow_symlinks=False):
                    node.size += _file_size(entry)
            except OSError:
                continue

    for node, parent in reversed(visited):
        if parent is not None:
            parent.size += node.size
    return root

def sort_by_size(node: FolderNode) -> None:
    pending = [node]
    while pending:
        current = pending.pop()
        current.children.sort(key=lambda c: c.size, reverse=True)
        pending.extend(current.children)

def _subdirectories(path: str) -> Optional[List[os.DirEntry]]:
    entries = _list_dir(path)
    if entries is None:
        return None
    dirs = []
    for entry in entries:
        if _is_symlink(entry):
            continue
        try:
            if entry.is_dir(follow_symlinks=False):
                dirs.append(entry)
        except OSError:
            continue
    return dirs

def scan_level(path: str, max_workers: Optional[int] = None) -> List[SiblingEntry]:
    """Sizes of the immediate subfolders of ``path``, largest first.

    Every subfolder is sized in its own worker and the result is built only
    after all of them finished. ``max_workers`` caps the number of threads,
    ``None`` means one thread per subfolder.
    """
    t0 = time.time()
    dirs = _subdirectories(path)
    if not dirs:
        return []

    workers = len(dirs) if max_workers is None else max(1, min(max_workers, len(dirs)))
    logger.debug("scanning %d subfolders of %s with %d workers", len(dirs), path, workers)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [(entry, executor.submit(compute_size, entry.path)) for entry in dirs]
        folders = [SiblingEntry(name=entry.name, path=entry.path, size=fut.result())
                   for entry, fut in futures]

    # sort() устойчив, при равных размерах порядок каталога сохраняется
    folders.sort(key=lambda f: f.size, reverse=True)
    logger.info("scanned %s in %.2fs", path, time.time() - t0)
    return folders
