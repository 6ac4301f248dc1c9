"""Test doubles for tblgen_rules.

Usage::

    from tblgen_rules.testing import FakeBuildGraph

    host = FakeBuildGraph()                          # every input exists
    host = FakeBuildGraph(existing={"llvm/Foo.td"})  # only these inputs exist
"""

from __future__ import annotations

import posixpath

from tblgen_rules.build.rule import RuleParams
from tblgen_rules.exceptions import UnresolvedPathError
from tblgen_rules.host.base import HostBuildGraph, join_gen_path
from tblgen_rules.models.module import BuildAction, ModuleSpec


class FakeBuildGraph(HostBuildGraph):
    """In-memory host that records every registered build action.

    Parameters
    ----------
    existing:
        Source paths (module-dir joined, normalised) that resolve. ``None``
        (default) means every path resolves.
    gen_root:
        Prefix for per-module generated-output roots.
    """

    def __init__(self, *, existing: set[str] | None = None, gen_root: str = "gen") -> None:
        self._existing = existing
        self._gen_root = gen_root
        self.calls: list[tuple[RuleParams, BuildAction]] = []

    @property
    def actions(self) -> list[BuildAction]:
        return [action for _, action in self.calls]

    def module_dir(self, spec: ModuleSpec) -> str:
        return posixpath.normpath(spec.module_dir)

    def path_for_module_src(self, spec: ModuleSpec, rel: str) -> str:
        path = posixpath.normpath(posixpath.join(self.module_dir(spec), rel))
        if self._existing is not None and path not in self._existing:
            raise UnresolvedPathError(rel, module=spec.name)
        return path

    def path_for_module_gen(self, spec: ModuleSpec, rel: str = "") -> str:
        return join_gen_path(posixpath.join(self._gen_root, spec.name), rel, spec.name)

    def tool_path(self, variable: str) -> str:
        return variable

    def build(self, rule: RuleParams, action: BuildAction) -> None:
        self.calls.append((rule, action))
