# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the filesystem and container image views."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from invscan.fs.base import ScanRoot, clean_path
from invscan.fs.local import DirFS, dir_scan_root
from invscan.fs.memory import MemoryFS
from invscan.image.memory import LayerSpec, MemoryImage


class TestCleanPath:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("", ""),
            ("/", ""),
            ("./a/b", "a/b"),
            ("/a//b/", "a/b"),
            ("a/../b", "b"),
            ("../../etc", "etc"),
            ("a\\b", "a/b"),
        ],
    )
    def test_normalises(self, raw: str, expected: str) -> None:
        assert clean_path(raw) == expected


class TestMemoryFS:
    def test_implied_directories(self) -> None:
        fs = MemoryFS({"usr/lib/python3/site.py": b"x"})
        assert fs.listdir("") == ["usr"]
        assert fs.listdir("usr/lib") == ["python3"]
        assert fs.is_dir("usr/lib/python3")
        assert not fs.is_dir("usr/lib/python3/site.py")

    def test_stat_and_open(self) -> None:
        fs = MemoryFS({"a/b.txt": "hello"})
        info = fs.stat("/a/b.txt")
        assert (info.name, info.size, info.is_dir) == ("b.txt", 5, False)
        with fs.open("a/b.txt") as f:
            assert f.read() == b"hello"

    def test_missing_paths(self) -> None:
        fs = MemoryFS({"a/b.txt": "hello"})
        assert not fs.exists("a/c.txt")
        with pytest.raises(FileNotFoundError):
            fs.stat("nope")
        with pytest.raises(FileNotFoundError):
            fs.open("a")
        with pytest.raises(NotADirectoryError):
            fs.listdir("a/b.txt")

    def test_virtual_root(self) -> None:
        assert ScanRoot(fs=MemoryFS()).is_virtual
        assert not ScanRoot(fs=MemoryFS(), path="/scan").is_virtual


class TestDirFS:
    def test_reads_local_directory(self, tmp_path: Path) -> None:
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "f.txt").write_text("data")
        fs = DirFS(tmp_path)

        assert fs.listdir("") == ["sub"]
        assert fs.is_dir("sub")
        assert fs.stat("sub/f.txt").size == 4
        with fs.open("/sub/f.txt") as f:
            assert f.read() == b"data"

    def test_dir_scan_root(self, tmp_path: Path) -> None:
        root = dir_scan_root(tmp_path)
        assert root.path == str(tmp_path)
        assert not root.is_virtual


class TestMemoryImage:
    def test_layers_are_cumulative_with_deletions(self) -> None:
        image = MemoryImage(
            [
                LayerSpec(files={"etc/os-release": "debian"}),
                LayerSpec(files={"app/a.pkg": "a@1", "app/tmp/x": "x"}),
                LayerSpec(deleted=["app/tmp"]),
            ]
        )
        layers = image.chain_layers()

        assert [layer.index for layer in layers] == [0, 1, 2]
        assert not layers[0].fs.exists("app/a.pkg")
        assert layers[1].fs.exists("app/tmp/x")
        assert not layers[2].fs.exists("app/tmp/x")
        assert image.fs().exists("etc/os-release")
        assert image.fs() is layers[-1].fs

    def test_chain_ids(self) -> None:
        image = MemoryImage(
            [
                LayerSpec(diff_id="sha256:aaa", command="FROM scratch"),
                LayerSpec(diff_id="sha256:bbb", command="RUN pip install"),
            ]
        )
        first, second = image.chain_layers()

        assert first.chain_id == "sha256:aaa"
        expected = "sha256:" + hashlib.sha256(b"sha256:aaa sha256:bbb").hexdigest()
        assert second.chain_id == expected
        assert second.command == "RUN pip install"

    def test_computed_diff_ids_differ_per_layer(self) -> None:
        image = MemoryImage([LayerSpec(files={"a": "1"}), LayerSpec(files={"b": "2"})])
        first, second = image.chain_layers()
        assert first.diff_id.startswith("sha256:")
        assert first.diff_id != second.diff_id

    def test_empty_image(self) -> None:
        image = MemoryImage([])
        assert image.chain_layers() == []
        assert image.fs().listdir("") == []
