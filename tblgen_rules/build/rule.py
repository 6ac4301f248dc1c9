"""The static llvm-min-tblgen rule shared by every build action."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

TOOL_VARIABLE = "llvmMinTblgen"
DEFAULT_TOOL = "llvm-min-tblgen"

_VAR_RE = re.compile(r"\$\{(\w+)\}|\$(\w+)")


@dataclass(frozen=True)
class RuleParams:
    """Static rule definition; per-action values are filled in through ``args``."""

    name: str
    command: str
    description: str
    depfile: str
    deps: str
    restat: bool
    command_deps: tuple[str, ...]
    args: tuple[str, ...]  # per-action variables the command may reference
    tool_variable: str = TOOL_VARIABLE

    def expand(self, template: str, variables: Mapping[str, str]) -> str:
        """Substitute ``$var`` / ``${var}`` references; unknown names are left as-is."""

        def _sub(match: re.Match[str]) -> str:
            key = match.group(1) or match.group(2)
            return variables.get(key, match.group(0))

        return _VAR_RE.sub(_sub, template)

    def render_command(
        self,
        tool: str,
        input_path: str,
        output_path: str,
        variables: Mapping[str, str],
    ) -> str:
        unknown = set(variables) - set(self.args)
        if unknown:
            raise ValueError(f"rule {self.name} has no argument(s) {sorted(unknown)}")
        scope = {
            **variables,
            self.tool_variable: tool,
            "in": input_path,
            "out": output_path,
        }
        return self.expand(self.command, scope)


MIN_TBLGEN_RULE = RuleParams(
    name="min_tblgenRule",
    command="${llvmMinTblgen} ${includes} ${generator} -d ${depfile} -o ${out} ${in}",
    description="LLVM Min TableGen $in => $out",
    depfile="${out}.d",
    deps="gcc",
    restat=True,
    command_deps=("${llvmMinTblgen}",),
    args=("includes", "depfile", "generator"),
)

