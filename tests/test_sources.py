"""
Tests for source set resolution and validation.
"""

from pathlib import Path

from protobuild.core.errors import MissingSource, SourceExtensionMismatch
from protobuild.core.models.options import Options
from protobuild.core.services.sources import resolve_sources, validate_sources


def _files(root: Path, *rels: str) -> list[str]:
    out = []
    for rel in rels:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")
        out.append(str(path))
    return out


class TestResolveSources:
    def test_recursive_glob(self, tmp_path: Path):
        a, b = _files(tmp_path, "proto/a.proto", "proto/sub/deep/b.proto")
        _files(tmp_path, "proto/readme.md")
        opts = Options(dest="lib", paths=(str(tmp_path / "proto"),))
        assert resolve_sources(opts) == [a, b]

    def test_explicit_and_globbed_counted_once(self, tmp_path: Path):
        (a,) = _files(tmp_path, "proto/a.proto")
        opts = Options(dest="lib", paths=(str(tmp_path / "proto"),), sources=(a,))
        assert resolve_sources(opts) == [a]

    def test_explicit_sources_appended(self, tmp_path: Path):
        a, extra = _files(tmp_path, "proto/a.proto", "other/x.proto")
        opts = Options(dest="lib", paths=(str(tmp_path / "proto"),), sources=(extra,))
        assert resolve_sources(opts) == [a, extra]

    def test_overlapping_search_paths(self, tmp_path: Path):
        (a,) = _files(tmp_path, "proto/sub/a.proto")
        opts = Options(
            dest="lib",
            paths=(str(tmp_path / "proto"), str(tmp_path / "proto" / "sub")),
        )
        assert resolve_sources(opts) == [a]

    def test_deterministic(self, tmp_path: Path):
        _files(tmp_path, "proto/z.proto", "proto/a.proto", "proto/m.proto")
        opts = Options(dest="lib", paths=(str(tmp_path / "proto"),))
        assert resolve_sources(opts) == resolve_sources(opts)
        assert [Path(s).name for s in resolve_sources(opts)] == ["a.proto", "m.proto", "z.proto"]

    def test_empty_is_valid(self, tmp_path: Path):
        opts = Options(dest="lib", paths=(str(tmp_path / "nothing-here"),))
        assert resolve_sources(opts) == []


class TestValidateSources:
    def test_valid(self, tmp_path: Path):
        (a,) = _files(tmp_path, "a.proto")
        assert validate_sources(Options(dest="lib", sources=(a,))) == []

    def test_missing(self, tmp_path: Path):
        missing = str(tmp_path / "gone.proto")
        (error,) = validate_sources(Options(dest="lib", sources=(missing,)))
        assert isinstance(error, MissingSource)
        assert missing in str(error)

    def test_wrong_extension(self, tmp_path: Path):
        (txt,) = _files(tmp_path, "a.txt")
        (error,) = validate_sources(Options(dest="lib", sources=(txt,)))
        assert isinstance(error, SourceExtensionMismatch)

    def test_every_bad_source_reported(self, tmp_path: Path):
        (txt,) = _files(tmp_path, "a.txt")
        errors = validate_sources(
            Options(dest="lib", sources=(txt, str(tmp_path / "gone.proto")))
        )
        assert [type(e) for e in errors] == [SourceExtensionMismatch, MissingSource]
