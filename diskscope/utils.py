from __future__ import annotations
import os
import sys

UNITS = ["B", "KB", "MB", "GB", "TB"]
NAME_WIDTH = 40

def format_size(num: int) -> str:
    x = float(num)
    i = 0
    while x >= 1024.0 and i < len(UNITS) - 1:
        x /= 1024.0
        i += 1
    return f"{x:.2f} {UNITS[i]}"

def truncate_name(name: str, width: int = NAME_WIDTH) -> str:
    if len(name) <= width:
        return name
    return name[:width - 3] + "..."

def clear_screen() -> None:
    os.system("cls" if sys.platform.startswith("win") else "clear")

def setup_console() -> None:
    """Switch the Windows console to UTF-8 and ANSI escapes. No-op elsewhere."""
    if not sys.platform.startswith("win"):
        return
    for stream in (sys.stdout, sys.stderr):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(encoding="utf-8")
    # пустая команда включает ENABLE_VIRTUAL_TERMINAL_PROCESSING в cmd.exe
    os.system("")

class InvalidPathError(ValueError):
    pass

def validate_directory(path: str) -> str:
    """Absolute form of ``path``; raises InvalidPathError unless it is an existing directory."""
    ap = os.path.abspath(path)
    if not os.path.exists(ap):
        raise InvalidPathError(f"Path does not exist: {ap}")
    if not os.path.isdir(ap):
        raise InvalidPathError(f"Path is not a directory: {ap}")
    return ap
