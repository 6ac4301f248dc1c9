"""Filesystem-backed host build graph that emits a Ninja manifest."""

from __future__ import annotations

import posixpath
from pathlib import Path

import structlog

from tblgen_rules.build.rule import DEFAULT_TOOL, TOOL_VARIABLE, RuleParams
from tblgen_rules.exceptions import DuplicateOutputError, UnresolvedPathError
from tblgen_rules.host.base import HostBuildGraph, join_gen_path
from tblgen_rules.models.module import BuildAction, ModuleSpec

log = structlog.get_logger("tblgen_rules.host")


def _ninja_escape_path(path: str) -> str:
    return path.replace("$", "$$").replace(" ", "$ ").replace(":", "$:")


def _ninja_escape(value: str) -> str:
    return value.replace("$", "$$")


class LocalBuildGraph(HostBuildGraph):
    """Host rooted at a source tree.

    Paths handed out are relative to ``source_root`` so the generated
    manifest can be run from the top of the tree. Generated files for a
    module live under ``<out_dir>/.intermediates/<module_dir>/<name>/gen``.
    """

    def __init__(
        self,
        source_root: str | Path = ".",
        out_dir: str = "out",
        tools: dict[str, str] | None = None,
    ) -> None:
        self.source_root = Path(source_root)
        self.out_dir = posixpath.normpath(out_dir)
        self.tools = {TOOL_VARIABLE: DEFAULT_TOOL, **(tools or {})}
        self.rules: dict[str, RuleParams] = {}
        self.actions: list[BuildAction] = []
        self._owners: dict[str, str] = {}
        self._rule_names: dict[str, str] = {}

    def module_dir(self, spec: ModuleSpec) -> str:
        return posixpath.normpath(spec.module_dir)

    def path_for_module_src(self, spec: ModuleSpec, rel: str) -> str:
        path = posixpath.normpath(posixpath.join(self.module_dir(spec), rel))
        if not (self.source_root / path).is_file():
            raise UnresolvedPathError(rel, module=spec.name)
        return path

    def path_for_module_gen(self, spec: ModuleSpec, rel: str = "") -> str:
        root = posixpath.join(
            self.out_dir, ".intermediates", self.module_dir(spec), spec.name, "gen"
        )
        return join_gen_path(root, rel, spec.name)

    def tool_path(self, variable: str) -> str:
        return self.tools[variable]

    def build(self, rule: RuleParams, action: BuildAction) -> None:
        owner = self._owners.get(action.output)
        if owner is not None:
            raise DuplicateOutputError(action.output, owner, action.module)
        self._owners[action.output] = action.module
        self._rule_names[action.output] = rule.name
        self.rules.setdefault(rule.name, rule)
        self.actions.append(action)

    def rule_for(self, action: BuildAction) -> RuleParams:
        return self.rules[self._rule_names[action.output]]

    def command_for(self, action: BuildAction) -> str:
        """Fully expanded command line for one registered action."""
        rule = self.rule_for(action)
        return rule.render_command(
            self.tool_path(rule.tool_variable), action.input, action.output, action.variables
        )

    def render_ninja(self) -> str:
        lines = ["# Generated by tblgen-rules. Do not edit.", "ninja_required_version = 1.7", ""]
        for variable, tool in sorted(self.tools.items()):
            lines.append(f"{variable} = {_ninja_escape(tool)}")
        lines.append("")

        for rule in self.rules.values():
            lines.append(f"rule {rule.name}")
            lines.append(f"  command = {rule.command}")
            lines.append(f"  description = {rule.description}")
            lines.append(f"  depfile = {rule.depfile}")
            lines.append(f"  deps = {rule.deps}")
            if rule.restat:
                lines.append("  restat = 1")
            lines.append("")

        for action in self.actions:
            rule = self.rule_for(action)
            implicit = " ".join(rule.command_deps)
            lines.append(
                f"build {_ninja_escape_path(action.output)}: {rule.name} "
                f"{_ninja_escape_path(action.input)} | {implicit}"
            )
            for key, value in action.variables.items():
                lines.append(f"  {key} = {_ninja_escape(value)}")
            lines.append("")

        return "\n".join(lines)

    def write_ninja(self, path: str | Path) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.render_ninja())
        log.info("ninja_written", path=str(target), actions=len(self.actions))
        return target
