"""tblgen-rules: build-graph rules for llvm-min-tblgen generated headers."""

__version__ = "0.1.0"

from tblgen_rules.build.registrar import compute_includes, register
from tblgen_rules.build.rule import MIN_TBLGEN_RULE, RuleParams
from tblgen_rules.exceptions import (
    DuplicateOutputError,
    ModuleConfigError,
    TblgenRulesError,
    UnrecognizedOutputError,
    UnresolvedPathError,
)
from tblgen_rules.generators.catalog import GeneratorMode, classify
from tblgen_rules.host.base import HostBuildGraph
from tblgen_rules.host.local import LocalBuildGraph
from tblgen_rules.models.module import (
    BuildAction,
    GeneratorInvocation,
    ModuleSpec,
    PublishedArtifacts,
)
from tblgen_rules.module import MinTblgenModule, create_module, register_module_type

__all__ = [
    "BuildAction",
    "DuplicateOutputError",
    "GeneratorInvocation",
    "GeneratorMode",
    "HostBuildGraph",
    "LocalBuildGraph",
    "MIN_TBLGEN_RULE",
    "MinTblgenModule",
    "ModuleConfigError",
    "ModuleSpec",
    "PublishedArtifacts",
    "RuleParams",
    "TblgenRulesError",
    "UnrecognizedOutputError",
    "UnresolvedPathError",
    "classify",
    "compute_includes",
    "create_module",
    "register",
    "register_module_type",
]
