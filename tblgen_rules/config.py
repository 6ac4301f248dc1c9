"""Declaration files and adapter settings."""

from __future__ import annotations

import json
import os
import posixpath
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tblgen_rules.build.registrar import DEFAULT_INCLUDE_ROOTS
from tblgen_rules.build.rule import DEFAULT_TOOL
from tblgen_rules.exceptions import ModuleConfigError
from tblgen_rules.models.module import ModuleSpec
from tblgen_rules.module import MinTblgenModule, create_module


@dataclass(frozen=True)
class AdapterSettings:
    """Where sources live, where outputs go and which generator binary to run."""

    source_root: Path = Path(".")
    out_dir: str = "out"
    tool: str = DEFAULT_TOOL
    include_roots: tuple[str, ...] = field(default=DEFAULT_INCLUDE_ROOTS)

    @classmethod
    def from_env(cls, **overrides: object) -> AdapterSettings:
        """Build settings from ``TBLGEN_RULES_*`` env vars; explicit overrides win.

        ``None`` overrides are ignored so CLI options can be passed straight through.
        """
        values: dict[str, object] = {}
        out_dir = os.environ.get("TBLGEN_RULES_OUT_DIR")
        if out_dir:
            values["out_dir"] = out_dir
        tool = os.environ.get("TBLGEN_RULES_TOOL")
        if tool:
            values["tool"] = tool
        values.update({k: v for k, v in overrides.items() if v is not None})
        if "source_root" in values:
            values["source_root"] = Path(values["source_root"])  # type: ignore[arg-type]
        return cls(**values)  # type: ignore[arg-type]


class ModuleDeclaration(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    type: str = MinTblgenModule.module_type
    name: str
    dir: str = "."
    input: str = Field(alias="in")
    outs: list[str] = Field(default_factory=list)

    @field_validator("name", "input", mode="before")
    @classmethod
    def _strip_whitespace(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v

    @field_validator("name", "input")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("outs", mode="before")
    @classmethod
    def _strip_outs(cls, v: list[str]) -> list[str]:
        if isinstance(v, list):
            return [out.strip() if isinstance(out, str) else out for out in v]
        return v

    @field_validator("outs")
    @classmethod
    def _check_outs(cls, v: list[str]) -> list[str]:
        seen: set[str] = set()
        for out in v:
            if not out:
                raise ValueError("output must not be empty")
            if posixpath.isabs(out):
                raise ValueError(f"output {out!r} must be relative")
            normalized = posixpath.normpath(out)
            if normalized in (".", "..") or normalized.startswith("../"):
                raise ValueError(f"output {out!r} is outside the module's gen directory")
            if out in seen:
                raise ValueError(f"duplicate output {out!r}")
            seen.add(out)
        return v

    def to_spec(self) -> ModuleSpec:
        return ModuleSpec(
            name=self.name,
            input=self.input,
            outputs=tuple(self.outs),
            module_dir=self.dir,
        )


class DeclarationFile(BaseModel):
    model_config = ConfigDict(extra="forbid")

    modules: list[ModuleDeclaration] = Field(default_factory=list)


DECLARATION_TEMPLATE = {
    "modules": [
        {
            "type": MinTblgenModule.module_type,
            "name": "llvm-gen-intrinsics",
            "dir": "external/llvm-project/llvm/include/llvm/IR",
            "in": "Intrinsics.td",
            "outs": ["IntrinsicEnums.inc", "IntrinsicImpl.inc", "IntrinsicsX86.h"],
        }
    ]
}


def parse_declarations(data: object) -> list[ModuleDeclaration]:
    try:
        decl = DeclarationFile.model_validate(data)
    except ValidationError as e:
        raise ModuleConfigError(f"invalid module declaration: {e}") from e

    names: set[str] = set()
    for module in decl.modules:
        if module.name in names:
            raise ModuleConfigError(f"duplicate module name {module.name!r}")
        names.add(module.name)
    return decl.modules


def load_declarations(path: str | Path) -> list[ModuleDeclaration]:
    """Read and validate a JSON declaration file."""
    try:
        data = json.loads(Path(path).read_text())
    except json.JSONDecodeError as e:
        raise ModuleConfigError(f"invalid JSON in {path}: {e}") from e
    return parse_declarations(data)


def build_modules(
    declarations: list[ModuleDeclaration],
    settings: AdapterSettings,
) -> list[MinTblgenModule]:
    return [
        create_module(d.type, d.to_spec(), include_roots=settings.include_roots)
        for d in declarations
    ]
