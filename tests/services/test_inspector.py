from __future__ import annotations

import os
from pathlib import Path

from bedrock_workspace.services.fs import OsFileSystem
from bedrock_workspace.services.inspector import iter_files, path_age, path_exists, path_mtime, path_size
from tests.factories import write_file


class TestPathSize:
    def test_file(self, tmp_path: Path) -> None:
        assert path_size(write_file(tmp_path / "a.bin", 100)) == 100

    def test_missing_is_zero(self, tmp_path: Path) -> None:
        assert path_size(tmp_path / "nope") == 0

    def test_empty_directory(self, tmp_path: Path) -> None:
        (tmp_path / "empty").mkdir()
        assert path_size(tmp_path / "empty") == 0

    def test_additive_over_children(self, tmp_path: Path) -> None:
        write_file(tmp_path / "root/a.txt", 10)
        write_file(tmp_path / "root/sub/b.txt", 20)
        write_file(tmp_path / "root/sub/deep/c.txt", 5)
        total = path_size(tmp_path / "root")
        assert total == 35
        assert total == path_size(tmp_path / "root/a.txt") + path_size(tmp_path / "root/sub")

    def test_symlink_cycle_terminates(self, tmp_path: Path) -> None:
        write_file(tmp_path / "root/a.txt", 5)
        (tmp_path / "root/sub").mkdir()
        os.symlink(tmp_path / "root", tmp_path / "root/sub/loop")
        assert path_size(tmp_path / "root") == 5

    def test_symlink_to_outside_directory_is_followed(self, tmp_path: Path) -> None:
        write_file(tmp_path / "other/data.bin", 7)
        write_file(tmp_path / "root/a.txt", 3)
        os.symlink(tmp_path / "other", tmp_path / "root/link")
        assert path_size(tmp_path / "root") == 10

    def test_dangling_symlink_is_zero(self, tmp_path: Path) -> None:
        (tmp_path / "root").mkdir()
        os.symlink(tmp_path / "gone", tmp_path / "root/dangling")
        assert path_size(tmp_path / "root") == 0


class TestPathAge:
    def test_age_from_creation_time(self, tmp_path: Path) -> None:
        target = write_file(tmp_path / "a.txt", 1)
        created = OsFileSystem().stat(target).created
        age = path_age(target, now=created + 2 * 86400 + 60)
        assert age is not None
        assert age.days == 2

    def test_missing_has_no_age(self, tmp_path: Path) -> None:
        assert path_age(tmp_path / "missing") is None

    def test_clock_skew_is_not_negative(self, tmp_path: Path) -> None:
        target = write_file(tmp_path / "a.txt", 1)
        age = path_age(target, now=0.0)
        assert age is not None
        assert age.total_seconds() == 0


def test_path_mtime(tmp_path: Path) -> None:
    target = write_file(tmp_path / "a.txt", 1)
    os.utime(target, (1_000_000, 1_000_000))
    assert path_mtime(target) == 1_000_000
    assert path_mtime(tmp_path / "missing") is None


def test_path_exists(tmp_path: Path) -> None:
    assert path_exists(tmp_path)
    assert not path_exists(tmp_path / "missing")


class TestIterFiles:
    def test_sorted_depth_first(self, tmp_path: Path) -> None:
        write_file(tmp_path / "b.txt")
        write_file(tmp_path / "a/z.txt")
        write_file(tmp_path / "a/y.txt")
        names = [p.relative_to(tmp_path).as_posix() for p in iter_files(tmp_path)]
        assert names == ["a/y.txt", "a/z.txt", "b.txt"]

    def test_skip_directories(self, tmp_path: Path) -> None:
        write_file(tmp_path / "keep.log")
        write_file(tmp_path / "node_modules/pkg/skip.log")
        found = [p.name for p in iter_files(tmp_path, skip=frozenset({"node_modules"}))]
        assert found == ["keep.log"]

    def test_cycle_terminates(self, tmp_path: Path) -> None:
        write_file(tmp_path / "root/a.txt")
        os.symlink(tmp_path / "root", tmp_path / "root/loop")
        assert [p.name for p in iter_files(tmp_path / "root")] == ["a.txt"]

    def test_links_are_skipped_when_not_following(self, tmp_path: Path) -> None:
        write_file(tmp_path / "outside/far.log")
        write_file(tmp_path / "root/near.log")
        os.symlink(tmp_path / "outside", tmp_path / "root/linked")
        os.symlink(tmp_path / "outside/far.log", tmp_path / "root/alias.log")
        assert [p.name for p in iter_files(tmp_path / "root", follow_links=False)] == ["near.log"]
        assert [p.name for p in iter_files(tmp_path / "root")] == ["alias.log", "far.log", "near.log"]
