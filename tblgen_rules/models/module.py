"""Data models for module declarations and the build actions they produce."""

from __future__ import annotations

from dataclasses import dataclass, field

IncludeSet = tuple[str, ...]


@dataclass(frozen=True)
class ModuleSpec:
    """Declared properties of one llvm_min_tblgen module."""

    name: str
    input: str  # path relative to the module directory
    outputs: tuple[str, ...] = ()
    module_dir: str = "."


@dataclass(frozen=True)
class GeneratorInvocation:
    """Generator mode selected for one output file."""

    mode: str  # e.g. "-gen-attrs"
    extra_flags: tuple[str, ...] = ()  # e.g. ("-intrinsic-prefix=aarch64",)

    @property
    def args(self) -> tuple[str, ...]:
        return (self.mode, *self.extra_flags)

    def render(self) -> str:
        return " ".join(self.args)


@dataclass(frozen=True)
class BuildAction:
    """One input -> output generator run handed to the host build graph."""

    module: str
    input: str
    output: str
    depfile: str
    invocation: GeneratorInvocation
    includes: IncludeSet

    @property
    def variables(self) -> dict[str, str]:
        """Per-action rule variables (see :mod:`tblgen_rules.build.rule`)."""
        return {
            "includes": " ".join(f"-I {d}" for d in self.includes),
            "generator": self.invocation.render(),
            "depfile": self.depfile,
        }


@dataclass
class PublishedArtifacts:
    """Exported surface of a module: generated files and header dirs."""

    outputs: list[str] = field(default_factory=list)
    include_dirs: list[str] = field(default_factory=list)
