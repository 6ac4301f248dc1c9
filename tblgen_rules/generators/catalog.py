"""Output-file -> generator mode catalog.

Every output an ``llvm_min_tblgen`` module may declare is listed here.
Lookup is on the basename only. Exact names are checked first; suffix
rules are only consulted once every exact entry has missed, so an exact
entry always wins over a suffix family that would also match it.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from enum import Enum

import structlog

from tblgen_rules.exceptions import UnrecognizedOutputError
from tblgen_rules.models.module import GeneratorInvocation

log = structlog.get_logger("tblgen_rules.generators")


class GeneratorMode(Enum):
    """Command-line mode flags understood by llvm-min-tblgen."""

    ATTRS = "-gen-attrs"
    INTRINSIC_ENUMS = "-gen-intrinsic-enums"
    INTRINSIC_IMPL = "-gen-intrinsic-impl"
    DIRECTIVE_DECL = "--gen-directive-decl"
    DIRECTIVE_IMPL = "--gen-directive-impl"
    VALUE_TYPES = "--gen-vt"
    RISCV_TARGET_DEF = "-gen-riscv-target-def"


@dataclass(frozen=True)
class CatalogEntry:
    """Exact output name and the invocation that produces it."""

    output: str
    mode: GeneratorMode
    intrinsic_prefix: str | None = None

    def invocation(self) -> GeneratorInvocation:
        extra: tuple[str, ...] = ()
        if self.intrinsic_prefix is not None:
            extra = (f"-intrinsic-prefix={self.intrinsic_prefix}",)
        return GeneratorInvocation(mode=self.mode.value, extra_flags=extra)


@dataclass(frozen=True)
class SuffixRule:
    """Family of outputs recognised by file-name suffix."""

    suffix: str
    mode: GeneratorMode

    def matches(self, output: str) -> bool:
        return output.endswith(self.suffix)

    def invocation(self) -> GeneratorInvocation:
        return GeneratorInvocation(mode=self.mode.value)


# Target name in IntrinsicsXXX.h -> intrinsic prefix used by the .td records
INTRINSIC_PREFIXES: dict[str, str] = {
    "AArch64": "aarch64",
    "AMDGPU": "amdgcn",
    "ARM": "arm",
    "BPF": "bpf",
    "DirectX": "dx",
    "Hexagon": "hexagon",
    "LoongArch": "loongarch",
    "Mips": "mips",
    "NVPTX": "nvvm",
    "PowerPC": "ppc",
    "R600": "r600",
    "RISCV": "riscv",
    "S390": "s390",
    "SPIRV": "spv",
    "WebAssembly": "wasm",
    "X86": "x86",
    "XCore": "xcore",
    "VE": "ve",
}

EXACT_CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry("Attributes.inc", GeneratorMode.ATTRS),
    CatalogEntry("AttributesCompatFunc.inc", GeneratorMode.ATTRS),
    CatalogEntry("IntrinsicEnums.inc", GeneratorMode.INTRINSIC_ENUMS),
    CatalogEntry("IntrinsicImpl.inc", GeneratorMode.INTRINSIC_IMPL),
    *(
        CatalogEntry(f"Intrinsics{target}.h", GeneratorMode.INTRINSIC_ENUMS, prefix)
        for target, prefix in INTRINSIC_PREFIXES.items()
    ),
    # OpenACC / OpenMP directive tables
    CatalogEntry("ACC.h.inc", GeneratorMode.DIRECTIVE_DECL),
    CatalogEntry("ACC.inc", GeneratorMode.DIRECTIVE_IMPL),
    CatalogEntry("OMP.h.inc", GeneratorMode.DIRECTIVE_DECL),
    CatalogEntry("OMP.inc", GeneratorMode.DIRECTIVE_IMPL),
    CatalogEntry("GenVT.inc", GeneratorMode.VALUE_TYPES),
)

SUFFIX_RULES: tuple[SuffixRule, ...] = (
    SuffixRule("RISCVTargetParserDef.inc", GeneratorMode.RISCV_TARGET_DEF),
)

_BY_NAME: dict[str, CatalogEntry] = {entry.output: entry for entry in EXACT_CATALOG}


def catalog_entries() -> list[CatalogEntry]:
    """Exact catalog entries in declaration order."""
    return list(EXACT_CATALOG)


def _lookup(output: str) -> GeneratorInvocation | None:
    name = posixpath.basename(output)
    entry = _BY_NAME.get(name)
    if entry is not None:
        return entry.invocation()
    for rule in SUFFIX_RULES:
        if rule.matches(name):
            return rule.invocation()
    return None


def is_recognized(output: str) -> bool:
    return _lookup(output) is not None


def classify(output: str, module: str | None = None) -> GeneratorInvocation:
    """Map a requested output file to the generator invocation producing it.

    Args:
        output: Output file name; any directory components are ignored.
        module: Owning module name, used only to attribute errors.

    Raises:
        UnrecognizedOutputError: No exact entry or suffix rule matches.
    """
    invocation = _lookup(output)
    if invocation is None:
        raise UnrecognizedOutputError(posixpath.basename(output), module=module)
    log.debug("output_classified", output=output, generator=invocation.render())
    return invocation
