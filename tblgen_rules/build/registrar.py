"""Turn one module declaration into llvm-min-tblgen build actions."""

from __future__ import annotations

import posixpath
from collections.abc import Sequence

import structlog

from tblgen_rules.build.rule import MIN_TBLGEN_RULE, RuleParams
from tblgen_rules.generators.catalog import classify
from tblgen_rules.host.base import HostBuildGraph
from tblgen_rules.models.module import BuildAction, IncludeSet, ModuleSpec, PublishedArtifacts

log = structlog.get_logger("tblgen_rules.build")

DEFAULT_INCLUDE_ROOTS: tuple[str, str] = (
    "external/llvm-project/llvm/include",
    "external/llvm-project/llvm/lib/Target",
)


def compute_includes(
    module_dir: str,
    input_path: str,
    include_roots: Sequence[str] = DEFAULT_INCLUDE_ROOTS,
) -> IncludeSet:
    """Search roots passed to the generator, in precedence order.

    The module directory comes first, then the project-wide roots; the
    directory holding the input is searched last.
    """
    return (module_dir, *include_roots, posixpath.dirname(input_path) or ".")


def register(
    host: HostBuildGraph,
    spec: ModuleSpec,
    include_roots: Sequence[str] = DEFAULT_INCLUDE_ROOTS,
    rule: RuleParams = MIN_TBLGEN_RULE,
) -> PublishedArtifacts:
    """Register one build action per declared output of ``spec``.

    Outputs are processed in declaration order. The first unrecognised
    output stops registration; actions already handed to ``host`` stay
    registered.

    Raises:
        UnresolvedPathError: ``spec.input`` cannot be located.
        UnrecognizedOutputError: An output has no generator mode.
    """
    input_path = host.path_for_module_src(spec, spec.input)
    includes = compute_includes(host.module_dir(spec), input_path, include_roots)

    published = PublishedArtifacts()
    for out in spec.outputs:
        output_path = host.path_for_module_gen(spec, out)
        invocation = classify(out, module=spec.name)
        action = BuildAction(
            module=spec.name,
            input=input_path,
            output=output_path,
            depfile=f"{output_path}.d",
            invocation=invocation,
            includes=includes,
        )
        host.build(rule, action)
        log.debug(
            "action_registered",
            module=spec.name,
            output=output_path,
            generator=invocation.render(),
        )
        published.outputs.append(output_path)

    published.include_dirs.append(host.path_for_module_gen(spec))
    log.info("module_registered", module=spec.name, outputs=len(published.outputs))
    return published
