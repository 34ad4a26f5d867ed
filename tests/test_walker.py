# tests/test_walker.py
import io
import os
import pytest
from pathlib import Path

from lexcount.core import walker as walker_mod
from lexcount.core.buffer import ContentBuffer
from lexcount.core.ignore import load_ignore_spec
from lexcount.core.scanner import PathScanner
from lexcount.core.walker import DirectoryWalker
from lexcount.utils.matcher import compile_pattern

# --- Fixtures ---

@pytest.fixture
def project(tmp_path):
    """
    root/
      a.txt          "cat dog"
      docs/b.txt     "cat bird"
      docs/deep/c.md "cat"
      empty.txt      ""
    """
    root = tmp_path / "root"
    (root / "docs" / "deep").mkdir(parents=True)
    (root / "a.txt").write_text("cat dog", encoding="utf-8")
    (root / "docs" / "b.txt").write_text("cat bird", encoding="utf-8")
    (root / "docs" / "deep" / "c.md").write_text("cat", encoding="utf-8")
    (root / "empty.txt").write_bytes(b"")
    return root

def _rel(paths, root):
    return sorted(p.relative_to(root).as_posix() for p in paths)

# --- Test 1: Directory Walker ---

def test_walk_yields_all_regular_files(project):
    files = list(DirectoryWalker(project).walk())
    assert _rel(files, project) == ["a.txt", "docs/b.txt", "docs/deep/c.md", "empty.txt"]

def test_walk_root_file_is_yielded_directly(project):
    target = project / "a.txt"
    assert list(DirectoryWalker(target).walk()) == [target]

def test_walk_missing_root_is_reported(tmp_path):
    err = io.StringIO()
    files = list(DirectoryWalker(tmp_path / "nope", err=err).walk())
    assert files == []
    assert "nope" in err.getvalue()

def test_walk_unreadable_directory_is_isolated(project, monkeypatch):
    bad_dir = project / "docs"
    real_scandir = os.scandir

    def fake_scandir(path):
        if Path(path) == bad_dir:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(walker_mod.os, "scandir", fake_scandir)
    err = io.StringIO()
    files = list(DirectoryWalker(project, err=err).walk())

    assert _rel(files, project) == ["a.txt", "empty.txt"]
    assert err.getvalue().count("Error reading directory") == 1

def test_walk_broken_symlink_is_reported(project):
    os.symlink(project / "gone.txt", project / "dangling")
    err = io.StringIO()
    files = list(DirectoryWalker(project, err=err).walk())

    assert len(files) == 4
    assert "dangling" in err.getvalue()

def test_walk_follows_symlinks(project, tmp_path):
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "x.txt").write_text("fish")
    os.symlink(outside, project / "linked_dir")
    os.symlink(outside / "x.txt", project / "linked_file")

    followed = _rel(DirectoryWalker(project, follow_links=True).walk(), project)
    assert "linked_dir/x.txt" in followed
    assert "linked_file" in followed

    not_followed = _rel(DirectoryWalker(project, follow_links=False).walk(), project)
    assert "linked_dir/x.txt" not in not_followed
    assert "linked_file" not in not_followed

def test_walk_symlink_loop_is_reported(project):
    os.symlink(project, project / "docs" / "loop")
    err = io.StringIO()
    files = list(DirectoryWalker(project, err=err).walk())

    assert len(files) == 4
    assert "loop" in err.getvalue()

def test_walk_exclusion_rules(project):
    spec = load_ignore_spec(extra_patterns=["*.md", "docs/"])
    files = list(DirectoryWalker(project, ignore_spec=spec).walk())
    assert _rel(files, project) == ["a.txt", "empty.txt"]

def test_walk_excluded_entries_are_not_stated(project):
    os.symlink(project / "gone.txt", project / "dangling")
    os.symlink(project / "gone_dir", project / "dangling_dir")
    spec = load_ignore_spec(extra_patterns=["dangling*"])
    err = io.StringIO()

    files = list(DirectoryWalker(project, ignore_spec=spec, err=err).walk())

    assert len(files) == 4
    assert err.getvalue() == ""

def test_walk_directory_rule_prunes_subtree(project, monkeypatch):
    real_scandir = os.scandir
    listed = []

    def recording_scandir(path):
        listed.append(Path(path))
        return real_scandir(path)

    monkeypatch.setattr(walker_mod.os, "scandir", recording_scandir)
    spec = load_ignore_spec(extra_patterns=["deep/"])
    files = list(DirectoryWalker(project, ignore_spec=spec).walk())

    assert _rel(files, project) == ["a.txt", "docs/b.txt", "empty.txt"]
    assert project / "docs" / "deep" not in listed

def test_load_ignore_spec_from_file(tmp_path):
    ignore_file = tmp_path / ".lexignore"
    ignore_file.write_text("# comment\n*.log\n", encoding="utf-8")

    spec = load_ignore_spec(ignore_file, extra_patterns=["build/"])
    assert spec.match_file("app.log")
    assert spec.match_file("build/")
    assert not spec.match_file("main.py")

    assert load_ignore_spec(None, ["# only a comment", ""]) is None

# --- Test 2: Per-path scanning ---

def test_scan_counts_across_files(project):
    counts = PathScanner(compile_pattern()).scan(project)
    assert counts == {b"cat": 3, b"dog": 1, b"bird": 1}

def test_scan_is_idempotent(project):
    scanner = PathScanner(compile_pattern())
    assert scanner.scan(project) == scanner.scan(project)

def test_scan_file_without_matches_adds_nothing(tmp_path):
    target = tmp_path / "punct.txt"
    target.write_text("! ? . a b", encoding="utf-8")
    assert PathScanner(compile_pattern()).scan(target) == {}

def test_scan_skips_unopenable_file(project, monkeypatch):
    bad_file = project / "docs" / "b.txt"
    real_open = open

    def fake_open(path, *args, **kwargs):
        if Path(path) == bad_file:
            raise PermissionError(13, "Permission denied", str(path))
        return real_open(path, *args, **kwargs)

    monkeypatch.setattr("lexcount.core.reader.open", fake_open, raising=False)
    err = io.StringIO()
    counts = PathScanner(compile_pattern(), err=err).scan(project)

    assert counts == {b"cat": 2, b"dog": 1}
    assert err.getvalue().count("Error opening") == 1

@pytest.mark.skipif(hasattr(os, "geteuid") and os.geteuid() == 0, reason="root ignores file permissions")
def test_scan_permission_denied_file(project):
    locked = project / "docs" / "b.txt"
    locked.chmod(0)
    try:
        err = io.StringIO()
        counts = PathScanner(compile_pattern(), err=err).scan(project)
    finally:
        locked.chmod(0o644)

    assert counts == {b"cat": 2, b"dog": 1}
    assert "Permission denied" in err.getvalue()

def test_scan_allocation_failure_abandons_path(tmp_path, monkeypatch):
    root = tmp_path / "root"
    root.mkdir()
    (root / "a.txt").write_text("one two")
    (root / "b.txt").write_text("big " * 25)
    (root / "c.txt").write_text("three four")

    real_allocate = ContentBuffer._allocate

    def limited_allocate(self, size):
        if size > 50:
            raise MemoryError()
        return real_allocate(self, size)

    monkeypatch.setattr(ContentBuffer, "_allocate", limited_allocate)
    err = io.StringIO()
    counts = PathScanner(compile_pattern(), err=err).scan(root)

    # Files are visited in name order: a.txt is counted, b.txt fails, c.txt is never reached
    assert counts == {b"one": 1, b"two": 1}
    assert "Memory allocation of 100 bytes failed" in err.getvalue()
    assert "Aborting" in err.getvalue()
