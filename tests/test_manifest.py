"""
Tests for manifest persistence — round trip, deletion, migration, corruption.
"""

import gzip
import json
import os
import time
from pathlib import Path

from protobuild.core.models.manifest import Manifest
from protobuild.core.persistence.manifest_file import (
    MANIFEST_VSN,
    load_manifest,
    manifest_path,
    save_manifest,
)


def _write_raw(path: Path, record) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(gzip.compress(json.dumps(record).encode()))


class TestSaveAndLoad:
    def test_round_trip(self, tmp_path: Path):
        path = manifest_path(tmp_path / "_build" / "protobuild")
        manifest = Manifest(
            sources={"proto/a.proto", "proto/b.proto"},
            targets={"lib/a.pb.ex", "lib/b.pb.ex"},
        )

        save_manifest(path, manifest, time.time())
        loaded = load_manifest(path)

        assert loaded.sources == manifest.sources
        assert loaded.targets == manifest.targets

    def test_empty_targets_removes_file(self, tmp_path: Path):
        path = tmp_path / "compile.proto.manifest"
        save_manifest(path, Manifest(sources={"a"}, targets={"x"}), time.time())
        assert path.is_file()

        save_manifest(path, Manifest(sources={"a"}), time.time())
        assert not path.exists()

    def test_empty_targets_without_file_is_noop(self, tmp_path: Path):
        path = tmp_path / "compile.proto.manifest"
        save_manifest(path, Manifest(), time.time())
        assert not path.exists()

    def test_mtime_is_logical_build_time(self, tmp_path: Path):
        path = tmp_path / "compile.proto.manifest"
        build_started = float(int(time.time()) - 3600)

        save_manifest(path, Manifest(targets={"x"}), build_started)

        assert os.stat(path).st_mtime == build_started

    def test_creates_parent_directories(self, tmp_path: Path):
        path = tmp_path / "deep" / "nested" / "compile.proto.manifest"
        save_manifest(path, Manifest(targets={"x"}), time.time())
        assert path.is_file()

    def test_written_with_current_schema(self, tmp_path: Path):
        path = tmp_path / "compile.proto.manifest"
        save_manifest(path, Manifest(sources={"b", "a"}, targets={"y"}), time.time())

        record = json.loads(gzip.decompress(path.read_bytes()))
        assert record == {"vsn": MANIFEST_VSN, "sources": ["a", "b"], "targets": ["y"]}

    def test_no_temp_files_left(self, tmp_path: Path):
        path = tmp_path / "compile.proto.manifest"
        save_manifest(path, Manifest(targets={"x"}), time.time())
        assert list(tmp_path.glob(".manifest_*.tmp")) == []


class TestLoadFailsSoft:
    def test_missing(self, tmp_path: Path):
        assert load_manifest(tmp_path / "nope") == Manifest()

    def test_not_gzip(self, tmp_path: Path):
        path = tmp_path / "compile.proto.manifest"
        path.write_bytes(b"not a manifest at all")
        assert load_manifest(path) == Manifest()

    def test_gzip_but_not_json(self, tmp_path: Path):
        path = tmp_path / "compile.proto.manifest"
        path.write_bytes(gzip.compress(b"{{{"))
        assert load_manifest(path) == Manifest()

    def test_unknown_schema(self, tmp_path: Path):
        path = tmp_path / "compile.proto.manifest"
        _write_raw(path, {"vsn": 99, "sources": ["a"], "targets": ["b"]})
        assert load_manifest(path) == Manifest()

    def test_wrong_shape(self, tmp_path: Path):
        path = tmp_path / "compile.proto.manifest"
        _write_raw(path, {"vsn": 1, "data": ["not", "a", "mapping"]})
        assert load_manifest(path) == Manifest()


class TestMigration:
    def test_schema_1_is_flattened(self, tmp_path: Path):
        path = tmp_path / "compile.proto.manifest"
        _write_raw(path, {
            "vsn": 1,
            "data": {
                "proto/a.proto": ["lib/a.pb.ex", "lib/shared.pb.ex"],
                "proto/b.proto": ["lib/b.pb.ex", "lib/shared.pb.ex"],
            },
        })

        loaded = load_manifest(path)

        assert loaded.sources == {"proto/a.proto", "proto/b.proto"}
        assert loaded.targets == {"lib/a.pb.ex", "lib/b.pb.ex", "lib/shared.pb.ex"}

    def test_migrated_manifest_saved_in_current_schema(self, tmp_path: Path):
        path = tmp_path / "compile.proto.manifest"
        _write_raw(path, {"vsn": 1, "data": {"a.proto": ["a.pb.ex"]}})

        save_manifest(path, load_manifest(path), time.time())

        record = json.loads(gzip.decompress(path.read_bytes()))
        assert record["vsn"] == MANIFEST_VSN
        assert "data" not in record
