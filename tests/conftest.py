"""Shared pytest fixtures for tblgen-rules tests."""

from pathlib import Path

import pytest

from tblgen_rules.models.module import ModuleSpec
from tblgen_rules.testing import FakeBuildGraph

IR_DIR = "external/llvm-project/llvm/include/llvm/IR"


@pytest.fixture
def fake_host():
    return FakeBuildGraph()


@pytest.fixture
def intrinsics_spec():
    return ModuleSpec(
        name="llvm-gen-intrinsics",
        input="Intrinsics.td",
        outputs=("Attributes.inc", "IntrinsicEnums.inc"),
        module_dir=IR_DIR,
    )


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """A source root holding the .td inputs used by the declaration tests."""
    ir = tmp_path / IR_DIR
    ir.mkdir(parents=True)
    (ir / "Intrinsics.td").write_text("include \"llvm/IR/IntrinsicsX86.td\"\n")
    (ir / "Attributes.td").write_text("class Attr<string S>;\n")
    frontend = tmp_path / "external/llvm-project/llvm/include/llvm/Frontend/OpenMP"
    frontend.mkdir(parents=True)
    (frontend / "OMP.td").write_text("def OpenMP : DirectiveLanguage;\n")
    return tmp_path
