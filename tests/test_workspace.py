import re
from pathlib import Path

import pytest

from sandbox.registry import lookup
from sandbox.workspace import Workspace, allocate, prepare_scratch_dir, workspace_scope


def test_interpreted_workspace_has_no_binary(scratch_dir):
    workspace = allocate(lookup("python"), scratch_dir)
    assert workspace.binary_path is None
    assert workspace.paths == (workspace.source_path,)
    assert workspace.source_path.parent == scratch_dir
    assert re.fullmatch(r"[0-9a-f]{32}\.py", workspace.source_path.name)


def test_compiled_workspace_uses_a_separate_token(scratch_dir):
    workspace = allocate(lookup("cpp"), scratch_dir)
    assert workspace.source_path.suffix == ".cpp"
    assert re.fullmatch(r"out_[0-9a-f]{32}", workspace.binary_path.name)
    assert workspace.binary_path.name[len("out_"):] != workspace.source_path.stem


def test_allocation_does_not_touch_the_filesystem(scratch_dir):
    allocate(lookup("cpp"), scratch_dir)
    assert list(scratch_dir.iterdir()) == []


def test_allocations_for_the_same_request_are_disjoint(scratch_dir):
    config = lookup("cpp")
    first = allocate(config, scratch_dir)
    second = allocate(config, scratch_dir)
    assert set(first.paths).isdisjoint(second.paths)


def test_many_allocations_never_collide(scratch_dir):
    config = lookup("cpp")
    seen = set()
    for _ in range(1000):
        paths = set(allocate(config, scratch_dir).paths)
        assert seen.isdisjoint(paths)
        seen |= paths


def test_release_removes_every_path(scratch_dir):
    workspace = allocate(lookup("cpp"), scratch_dir)
    workspace.source_path.write_text("int main() {}")
    workspace.binary_path.write_bytes(b"\x7fELF")

    workspace.release()

    assert not workspace.source_path.exists()
    assert not workspace.binary_path.exists()


def test_release_ignores_paths_that_were_never_created(scratch_dir):
    workspace = allocate(lookup("cpp"), scratch_dir)
    workspace.source_path.write_text("int main() {}")

    workspace.release()

    assert list(scratch_dir.iterdir()) == []


def test_release_swallows_deletion_errors(scratch_dir, monkeypatch):
    workspace = allocate(lookup("python"), scratch_dir)
    workspace.source_path.write_text("print(1)")

    def refuse(self, missing_ok=False):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "unlink", refuse)
    workspace.release()
    monkeypatch.undo()

    assert workspace.source_path.exists()


def test_scope_releases_when_the_body_raises(scratch_dir):
    with pytest.raises(RuntimeError):
        with workspace_scope(lookup("python"), scratch_dir) as workspace:
            workspace.source_path.write_text("print(1)")
            raise RuntimeError("boom")

    assert not workspace.source_path.exists()


def test_prepare_scratch_dir_creates_missing_parents(tmp_path):
    target = tmp_path / "a" / "b" / "scratch"
    result = prepare_scratch_dir(target)
    assert result.is_dir()
    assert result == target.resolve()
    # running it twice is harmless
    assert prepare_scratch_dir(target) == result


def test_workspace_is_immutable(scratch_dir):
    workspace = Workspace(source_path=scratch_dir / "x.py")
    with pytest.raises(AttributeError):
        workspace.source_path = scratch_dir / "y.py"
