import shutil

import pytest

requires_node = pytest.mark.skipif(shutil.which("node") is None, reason="node is not installed")
requires_gxx = pytest.mark.skipif(shutil.which("g++") is None, reason="g++ is not installed")


def assert_empty(directory):
    leftovers = sorted(p.name for p in directory.iterdir())
    assert leftovers == [], f"workspace files left behind: {leftovers}"
