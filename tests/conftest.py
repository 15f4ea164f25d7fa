from __future__ import annotations
import os
import pytest

def write_file(path, size: int):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path

@pytest.fixture
def sample_tree(tmp_path):
    """root/
         big/       3000 (a: 1000, nested/b: 2000)
         small/     10
         empty/
         top.bin    100
    """
    root = tmp_path / "root"
    write_file(root / "big" / "a.dat", 1000)
    write_file(root / "big" / "nested" / "b.dat", 2000)
    write_file(root / "small" / "c.dat", 10)
    (root / "empty").mkdir()
    write_file(root / "top.bin", 100)
    return root

@pytest.fixture
def deny_listing(monkeypatch):
    """Make os.scandir fail with PermissionError for the given paths."""
    denied = set()
    real_scandir = os.scandir

    def fake_scandir(path="."):
        if os.fspath(path) in denied:
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)
    return lambda p: denied.add(os.fspath(p))

DEEP_LEVELS = 1100

@pytest.fixture
def deep_tree(tmp_path):
    """root/top/d/d/.../d/leaf.bin (7 bytes), deeper than the recursion limit."""
    root = str(tmp_path / "deep")
    os.mkdir(root)
    chain = [os.path.join(root, "top")]
    os.mkdir(chain[0])
    for _ in range(DEEP_LEVELS - 1):
        chain.append(os.path.join(chain[-1], "d"))
        os.mkdir(chain[-1])
    leaf = os.path.join(chain[-1], "leaf.bin")
    with open(leaf, "wb") as f:
        f.write(b"x" * 7)
    yield root
    os.remove(leaf)
    for path in reversed(chain):
        os.rmdir(path)
