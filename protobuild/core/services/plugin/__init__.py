"""
Plugin provisioning — package re-exports.

Layers: version_constraint (pure) → plugin_version (detection) →
provisioner (orchestration).
"""

from protobuild.core.services.plugin.plugin_version import (  # noqa: F401
    PluginProbe,
    PluginStatus,
    probe_plugin,
    query_version,
)
from protobuild.core.services.plugin.provisioner import (  # noqa: F401
    ensure_plugin,
    install_plugin,
)
from protobuild.core.services.plugin.version_constraint import (  # noqa: F401
    is_compatible,
    parse_version,
)
