"""Host build-graph integrations."""

from tblgen_rules.host.base import HostBuildGraph
from tblgen_rules.host.local import LocalBuildGraph

__all__ = ["HostBuildGraph", "LocalBuildGraph"]
