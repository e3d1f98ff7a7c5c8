"""
Tests for configuration loading — protobuild.yml parsing and option resolution.
"""

import textwrap
from pathlib import Path

import pytest

from protobuild.core.config.loader import (
    ConfigError,
    find_config_file,
    load_config,
    metadata_dir,
    resolve_options,
)
from protobuild.core.models.options import VersionPolicy


@pytest.fixture
def full_config(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        version: 1
        source_dirs: [lib, web]
        build_dir: _build/dev

        protoc:
          paths: [proto]
          sources: [extra/one.proto]
          dest: lib/generated
          includes: [/usr/include]
          plugins: [grpc]
          gen_descriptors: true
          package_prefix: my_app
          transform_module: MyApp.Transform
          one_file_per_module: true

        toolchain:
          plugin_version: "0.12"
          version_policy: fail
          install_dir: /opt/escripts
          required_executables: [buf]
    """)
    path = tmp_path / "protobuild.yml"
    path.write_text(content)
    return path


class TestLoadConfig:
    def test_full(self, full_config: Path):
        config = load_config(full_config)
        assert config.source_dirs == ["lib", "web"]
        assert config.protoc.plugins == ["grpc"]
        assert config.toolchain.plugin_version == "0.12"
        assert config.toolchain.version_policy is VersionPolicy.FAIL
        assert config.toolchain.required_executables == ("buf",)

    def test_empty_file_is_all_defaults(self, tmp_path: Path):
        path = tmp_path / "protobuild.yml"
        path.write_text("")
        config = load_config(path)
        assert config.source_dirs == ["lib"]
        assert config.toolchain.generator == "protoc"
        assert config.toolchain.version_policy is VersionPolicy.WARN

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "protobuild.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "protobuild.yml"
        path.write_text("protoc: [unclosed")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "protobuild.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_config(path)

    def test_invalid_policy(self, tmp_path: Path):
        path = tmp_path / "protobuild.yml"
        path.write_text("toolchain:\n  version_policy: sometimes\n")
        with pytest.raises(ConfigError, match="Invalid build configuration"):
            load_config(path)


class TestFindConfigFile:
    def test_walks_up(self, full_config: Path):
        nested = full_config.parent / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == full_config.resolve()

    def test_not_found(self, tmp_path: Path):
        assert find_config_file(tmp_path / "nowhere") is None


class TestResolveOptions:
    def test_paths_anchored_at_root(self, full_config: Path):
        root = full_config.parent
        opts = resolve_options(load_config(full_config), root)

        assert opts.paths == (str(root / "proto"),)
        assert opts.sources == (str(root / "extra" / "one.proto"),)
        assert opts.dest == str(root / "lib" / "generated")
        assert opts.includes == ("/usr/include",)
        assert opts.plugins == ("grpc",)
        assert opts.gen_descriptors is True
        assert opts.transform_module == "MyApp.Transform"

    def test_defaults_from_source_dirs(self, tmp_path: Path):
        path = tmp_path / "protobuild.yml"
        path.write_text("source_dirs: [src, more]\n")
        opts = resolve_options(load_config(path), tmp_path)

        assert opts.paths == (str(tmp_path / "src"), str(tmp_path / "more"))
        assert opts.dest == str(tmp_path / "src")

    def test_no_destination(self, tmp_path: Path):
        path = tmp_path / "protobuild.yml"
        path.write_text("source_dirs: []\n")
        with pytest.raises(ConfigError, match="No destination"):
            resolve_options(load_config(path), tmp_path)

    def test_options_are_frozen(self, full_config: Path):
        opts = resolve_options(load_config(full_config), full_config.parent)
        with pytest.raises(Exception):
            opts.dest = "elsewhere"

    def test_metadata_dir(self, full_config: Path):
        root = full_config.parent
        assert metadata_dir(load_config(full_config), root) == root / "_build" / "dev" / "protobuild"
