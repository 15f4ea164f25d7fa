from __future__ import annotations
import sys
from typing import List, Optional, TextIO
from .models import FolderNode
from .utils import format_size

RULE = "=" * 43
BRANCH = "+-- "
PIPE = "|   "
BLANK = "    "

def _node_label(node: FolderNode) -> str:
    if node.access_denied:
        return f"{node.name} [ACCESS DENIED]"
    return f"{node.name} [{format_size(node.size)}]"

def tree_lines(node: FolderNode, prefix: str = "", is_last: bool = True) -> List[str]:
    lines = []
    pending = [(node, prefix, is_last)]
    while pending:
        current, pre, last = pending.pop()
        lines.append(pre + BRANCH + _node_label(current))
        child_prefix = pre + (BLANK if last else PIPE)
        count = len(current.children)
        # в обратном порядке, чтобы первый ребёнок снялся со стека первым
        for i in range(count - 1, -1, -1):
            pending.append((current.children[i], child_prefix, i == count - 1))
    return lines

def render_report(root: FolderNode) -> str:
    lines = [
        "",
        RULE,
        "           DiskScope Results",
        RULE,
        "",
        f"{root.path} [{format_size(root.size)}]",
    ]
    for i, child in enumerate(root.children):
        lines.extend(tree_lines(child, "", i == len(root.children) - 1))
    lines += [
        "",
        RULE,
        f"Total: {format_size(root.size)}",
        f"Folders scanned: {len(root.children)}",
        RULE,
    ]
    return "\n".join(lines) + "\n"

def print_results(root: FolderNode, out: Optional[TextIO] = None) -> None:
    (out or sys.stdout).write(render_report(root))
