"""Module types and the registry the host uses to instantiate them."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Callable, Protocol, runtime_checkable

import structlog

from tblgen_rules.build.registrar import DEFAULT_INCLUDE_ROOTS, register
from tblgen_rules.exceptions import ModuleConfigError, TblgenRulesError
from tblgen_rules.host.base import HostBuildGraph
from tblgen_rules.models.module import ModuleSpec, PublishedArtifacts

log = structlog.get_logger("tblgen_rules.module")


@runtime_checkable
class SourceFileGenerator(Protocol):
    """Surface a generator module exports to the modules that depend on it."""

    def generated_header_dirs(self) -> list[str]: ...

    def generated_source_files(self) -> list[str]: ...

    def generated_deps(self) -> list[str]: ...


class MinTblgenModule:
    """An ``llvm_min_tblgen`` module: one .td input, many generated headers."""

    module_type = "llvm_min_tblgen"

    def __init__(
        self,
        spec: ModuleSpec,
        include_roots: Sequence[str] = DEFAULT_INCLUDE_ROOTS,
    ) -> None:
        self.spec = spec
        self.include_roots = tuple(include_roots)
        self._published: PublishedArtifacts | None = None
        self._evaluated = False

    @property
    def name(self) -> str:
        return self.spec.name

    def deps_mutator(self, host: HostBuildGraph) -> None:
        """No inter-module dependencies; the generator only reads .td files."""

    def generate_build_actions(self, host: HostBuildGraph) -> PublishedArtifacts:
        if self._evaluated:
            raise ModuleConfigError(f"module {self.name!r} was already evaluated")
        self._evaluated = True
        self._published = register(host, self.spec, include_roots=self.include_roots)
        return self._published

    def generated_header_dirs(self) -> list[str]:
        return list(self._published.include_dirs) if self._published else []

    def generated_source_files(self) -> list[str]:
        return []

    def generated_deps(self) -> list[str]:
        return list(self._published.outputs) if self._published else []


ModuleFactory = Callable[..., MinTblgenModule]

MODULE_TYPES: dict[str, ModuleFactory] = {}


def register_module_type(name: str, factory: ModuleFactory) -> None:
    """Register a module factory under the declaration ``type`` name."""
    MODULE_TYPES[name] = factory
    log.debug("module_type_registered", module_type=name)


def create_module(
    module_type: str,
    spec: ModuleSpec,
    include_roots: Sequence[str] = DEFAULT_INCLUDE_ROOTS,
) -> MinTblgenModule:
    factory = MODULE_TYPES.get(module_type)
    if factory is None:
        raise ModuleConfigError(
            f"module {spec.name!r}: unknown module type {module_type!r} "
            f"(known: {sorted(MODULE_TYPES)})"
        )
    return factory(spec, include_roots=include_roots)


def evaluate_modules(
    host: HostBuildGraph,
    modules: Iterable[MinTblgenModule],
) -> dict[str, PublishedArtifacts]:
    """Run every module's generate step against ``host``.

    Log events emitted while a module is evaluated carry its name. Stops
    at the first failing module and re-raises; reporting the error is
    left to the caller.
    """
    results: dict[str, PublishedArtifacts] = {}
    for module in modules:
        tokens = structlog.contextvars.bind_contextvars(module=module.name)
        try:
            module.deps_mutator(host)
            results[module.name] = module.generate_build_actions(host)
        except TblgenRulesError as e:
            log.debug("module_failed", error=str(e))
            raise
        finally:
            structlog.contextvars.reset_contextvars(**tokens)
    return results


register_module_type(MinTblgenModule.module_type, MinTblgenModule)
