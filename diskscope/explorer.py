from __future__ import annotations
import logging
import os
import sys
from typing import Callable, List, Optional, TextIO
from .drives import Drive, list_drives
from .models import SiblingEntry
from .navigation import History, NavigationCache
from .scanner import scan_level
from .utils import (InvalidPathError, NAME_WIDTH, clear_screen, format_size,
                    truncate_name, validate_directory)

logger = logging.getLogger(__name__)

SIZE_WIDTH = 12
HEAVY_RULE = "=" * 60
LIGHT_RULE = "-" * 60
TITLE = "  DiskScope - Interactive Disk Explorer"
CONTROLS = "  [num] = enter | 'b' = back | 'r' = refresh | 'q' = quit"

ReadLine = Callable[[str], str]

def render_level(path: str, folders: List[SiblingEntry]) -> str:
    lines = [HEAVY_RULE, TITLE, HEAVY_RULE, "", f"Current: {path}", LIGHT_RULE, ""]
    if not folders:
        lines.append("  (No subfolders found)")
    else:
        width = min(max(len(f.name) for f in folders), NAME_WIDTH) + 2
        for i, f in enumerate(folders):
            name = truncate_name(f.name)
            lines.append(f"  [{i:2d}] {name:<{width}}{format_size(f.size):>{SIZE_WIDTH}}")
    lines += ["", LIGHT_RULE, CONTROLS, LIGHT_RULE]
    return "\n".join(lines) + "\n"

def render_drives(drives: List[Drive]) -> str:
    lines = ["", HEAVY_RULE, TITLE, HEAVY_RULE, "", "Available drives:", LIGHT_RULE, ""]
    for i, d in enumerate(drives):
        line = f"  [{i}] {d.root}"
        if d.total:
            line += f"  ({format_size(d.free)} free of {format_size(d.total)})"
        lines.append(line)
    lines += ["", LIGHT_RULE]
    return "\n".join(lines) + "\n"

def select_root(read_line: ReadLine = input, out: Optional[TextIO] = None,
                drives: Optional[List[Drive]] = None) -> str:
    """Ask for a drive number or a literal path.

    An unknown number, empty input or end of input selects the first drive.
    """
    out = out or sys.stdout
    drives = drives if drives is not None else list_drives()
    out.write(render_drives(drives))
    out.flush()
    try:
        choice = read_line("Select drive number or type a path: ").strip()
    except EOFError:
        choice = ""

    if choice.isascii() and choice.isdigit():
        index = int(choice)
        if index < len(drives):
            return drives[index].root
        return drives[0].root
    if choice:
        return choice
    return drives[0].root

class Explorer:
    """Drill-down loop over one directory level at a time.

    Owns the navigation cache and the back history for the whole session;
    both are touched only from the loop, after a level scan has completed.
    """

    def __init__(self, start_path: str,
                 read_line: ReadLine = input,
                 out: Optional[TextIO] = None,
                 clear: Callable[[], None] = clear_screen,
                 choose_root: Optional[Callable[[], str]] = None,
                 scan: Callable[..., List[SiblingEntry]] = scan_level,
                 max_workers: Optional[int] = None):
        self.path = os.path.abspath(start_path)
        self.cache = NavigationCache()
        self.history = History()
        self.read_line = read_line
        self.out = out or sys.stdout
        self.clear = clear
        self.choose_root = choose_root or (lambda: select_root(self.read_line, self.out))
        self.scan = scan
        self.max_workers = max_workers

    def current_entries(self) -> List[SiblingEntry]:
        cached = self.cache.get(self.path)
        if cached is not None:
            return cached
        self.out.write("\n  Scanning subfolders...\n")
        self.out.flush()
        folders = self.scan(self.path, max_workers=self.max_workers)
        self.cache.put(self.path, folders)
        return folders

    def enter(self, index: int) -> bool:
        folders = self.current_entries()
        if not 0 <= index < len(folders):
            return False
        self.history.push(self.path)
        self.path = folders[index].path
        logger.debug("enter %s", self.path)
        return True

    def back(self) -> None:
        previous = self.history.pop()
        if previous is not None:
            self.path = previous
            return
        try:
            self.path = validate_directory(self.choose_root())
        except InvalidPathError as e:
            logger.debug("root selection rejected: %s", e)
            self._notice(f"{e}.")

    def refresh(self) -> None:
        logger.debug("refresh %s", self.path)
        self.cache.invalidate(self.path)

    def _notice(self, text: str) -> None:
        try:
            self.read_line(f"{text} Press Enter to continue...")
        except EOFError:
            pass

    def handle(self, line: str) -> bool:
        """Apply one input line. Returns False when the session should end."""
        cmd = line.strip()
        if not cmd:
            return True
        if cmd in ("q", "Q"):
            return False
        if cmd in ("b", "B"):
            self.back()
        elif cmd in ("r", "R"):
            self.refresh()
        elif cmd.isascii() and cmd.isdigit():
            if not self.enter(int(cmd)):
                self._notice("Invalid selection.")
        else:
            self._notice("Invalid input.")
        return True

    def run(self) -> None:
        while True:
            folders = self.current_entries()
            self.clear()
            self.out.write(render_level(self.path, folders))
            self.out.flush()
            try:
                if not self.handle(self.read_line("> ")):
                    break
            except EOFError:
                break
