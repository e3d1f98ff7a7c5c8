"""
Source set resolution — which .proto files take part in a build.

Search directories are globbed recursively and unioned with the
explicit source list. A file reached both ways counts once. The order
is deterministic (globbed files sorted per directory, then explicit
sources, first occurrence wins) so generator command lines are
reproducible.
"""

from __future__ import annotations

import logging
from pathlib import Path

from protobuild.core.errors import BuildError, MissingSource, SourceExtensionMismatch
from protobuild.core.models.options import Options

logger = logging.getLogger(__name__)

PROTO_EXTENSION = ".proto"


def resolve_sources(options: Options) -> list[str]:
    """Expand search paths and explicit sources into the source set.

    An empty result is valid and means there is nothing to build.
    """
    found: list[str] = []
    for srcdir in options.paths:
        matches = sorted(str(p) for p in Path(srcdir).glob(f"**/*{PROTO_EXTENSION}"))
        logger.debug("%d source(s) under %s", len(matches), srcdir)
        found.extend(matches)
    found.extend(options.sources)

    return list(dict.fromkeys(found))


def validate_sources(options: Options) -> list[BuildError]:
    """Check every explicitly configured source.

    Globbed sources exist and match by construction. Each bad explicit
    source yields one error; a single bad source fails the whole run.
    """
    errors: list[BuildError] = []
    for source in options.sources:
        path = Path(source)
        if path.suffix != PROTO_EXTENSION:
            errors.append(SourceExtensionMismatch(source, PROTO_EXTENSION))
        elif not path.is_file():
            errors.append(MissingSource(source))
    return errors
