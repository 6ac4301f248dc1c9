"""Host build-graph abstract interface."""

from __future__ import annotations

import posixpath
from abc import ABC, abstractmethod

from tblgen_rules.build.rule import RuleParams
from tblgen_rules.exceptions import ModuleConfigError
from tblgen_rules.models.module import BuildAction, ModuleSpec


def join_gen_path(root: str, rel: str, module: str) -> str:
    """Join ``rel`` onto a module's generated-output root.

    Raises:
        ModuleConfigError: ``rel`` is absolute or resolves outside ``root``.
    """
    root = posixpath.normpath(root)
    if posixpath.isabs(rel):
        raise ModuleConfigError(f"module {module!r}: output path {rel!r} must be relative")
    path = posixpath.normpath(posixpath.join(root, rel))
    if path != root and not path.startswith(root + "/"):
        raise ModuleConfigError(f"module {module!r}: output path {rel!r} is outside {root}")
    return path


class HostBuildGraph(ABC):
    """The slice of a build system that module types are allowed to touch.

    Implementations resolve paths for a module and accept build actions.
    They must not share mutable state between modules beyond the action
    list itself.
    """

    @abstractmethod
    def module_dir(self, spec: ModuleSpec) -> str:
        """Directory of the module, relative to the source root."""
        ...

    @abstractmethod
    def path_for_module_src(self, spec: ModuleSpec, rel: str) -> str:
        """Resolve a module-relative source path.

        Raises:
            UnresolvedPathError: The file does not exist.
        """
        ...

    @abstractmethod
    def path_for_module_gen(self, spec: ModuleSpec, rel: str = "") -> str:
        """Path under the module's generated-output root.

        Raises:
            ModuleConfigError: ``rel`` would leave the root.
        """
        ...

    @abstractmethod
    def tool_path(self, variable: str) -> str:
        """Resolve a host tool variable (e.g. ``llvmMinTblgen``) to a path."""
        ...

    @abstractmethod
    def build(self, rule: RuleParams, action: BuildAction) -> None:
        """Register one build action executed with ``rule``."""
        ...
