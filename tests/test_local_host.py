"""Tests for LocalBuildGraph — filesystem paths and Ninja emission."""

from __future__ import annotations

from pathlib import Path

import pytest

from tblgen_rules.build.registrar import register
from tblgen_rules.exceptions import (
    DuplicateOutputError,
    ModuleConfigError,
    UnresolvedPathError,
)
from tblgen_rules.host.local import LocalBuildGraph
from tblgen_rules.models.module import ModuleSpec

IR_DIR = "external/llvm-project/llvm/include/llvm/IR"
GEN = f"out/.intermediates/{IR_DIR}/llvm-gen-intrinsics/gen"


class TestPaths:
    def test_module_src_resolves(self, source_tree: Path, intrinsics_spec: ModuleSpec):
        host = LocalBuildGraph(source_tree)
        assert host.path_for_module_src(intrinsics_spec, "Intrinsics.td") == (
            f"{IR_DIR}/Intrinsics.td"
        )

    def test_module_src_missing(self, source_tree: Path, intrinsics_spec: ModuleSpec):
        host = LocalBuildGraph(source_tree)
        with pytest.raises(UnresolvedPathError):
            host.path_for_module_src(intrinsics_spec, "Missing.td")

    def test_directory_is_not_an_input(self, source_tree: Path):
        host = LocalBuildGraph(source_tree)
        spec = ModuleSpec(name="m", input="IR", module_dir="external/llvm-project/llvm/include/llvm")
        with pytest.raises(UnresolvedPathError):
            host.path_for_module_src(spec, spec.input)

    def test_module_gen_root(self, source_tree: Path, intrinsics_spec: ModuleSpec):
        host = LocalBuildGraph(source_tree)
        assert host.path_for_module_gen(intrinsics_spec) == GEN
        assert host.path_for_module_gen(intrinsics_spec, "A.inc") == f"{GEN}/A.inc"

    def test_custom_out_dir(self, source_tree: Path, intrinsics_spec: ModuleSpec):
        host = LocalBuildGraph(source_tree, out_dir="build/soong/")
        assert host.path_for_module_gen(intrinsics_spec).startswith("build/soong/.intermediates/")

    def test_default_tool(self, source_tree: Path):
        assert LocalBuildGraph(source_tree).tool_path("llvmMinTblgen") == "llvm-min-tblgen"

    def test_tool_override(self, source_tree: Path):
        host = LocalBuildGraph(source_tree, tools={"llvmMinTblgen": "prebuilts/bin/llvm-min-tblgen"})
        assert host.tool_path("llvmMinTblgen") == "prebuilts/bin/llvm-min-tblgen"

    def test_gen_path_rejects_parent_escape(self, source_tree: Path):
        host = LocalBuildGraph(source_tree)
        spec = ModuleSpec(name="m", input="Foo.td", module_dir="mod")
        with pytest.raises(ModuleConfigError, match="'m'"):
            host.path_for_module_gen(spec, "../../../../../../evil/Attributes.inc")

    def test_gen_path_rejects_absolute(self, source_tree: Path):
        host = LocalBuildGraph(source_tree)
        spec = ModuleSpec(name="m", input="Foo.td", module_dir="mod")
        with pytest.raises(ModuleConfigError, match="must be relative"):
            host.path_for_module_gen(spec, "/etc/GenVT.inc")

    def test_gen_path_allows_inner_parent(self, source_tree: Path):
        host = LocalBuildGraph(source_tree)
        spec = ModuleSpec(name="m", input="Foo.td", module_dir="mod")
        assert host.path_for_module_gen(spec, "a/../GenVT.inc") == (
            "out/.intermediates/mod/m/gen/GenVT.inc"
        )

    def test_escaping_output_registers_nothing(self, tmp_path: Path):
        (tmp_path / "mod").mkdir()
        (tmp_path / "mod" / "Foo.td").write_text("")
        host = LocalBuildGraph(tmp_path)
        spec = ModuleSpec(
            name="m",
            input="Foo.td",
            outputs=("../../../../../../evil/Attributes.inc", "/etc/GenVT.inc"),
            module_dir="mod",
        )
        with pytest.raises(ModuleConfigError):
            register(host, spec)
        assert host.actions == []


class TestRegistration:
    def test_command_for(self, source_tree: Path, intrinsics_spec: ModuleSpec):
        host = LocalBuildGraph(source_tree)
        register(host, intrinsics_spec)
        cmd = host.command_for(host.actions[0])
        assert cmd == (
            f"llvm-min-tblgen -I {IR_DIR} -I external/llvm-project/llvm/include "
            f"-I external/llvm-project/llvm/lib/Target -I {IR_DIR} -gen-attrs "
            f"-d {GEN}/Attributes.inc.d -o {GEN}/Attributes.inc {IR_DIR}/Intrinsics.td"
        )

    def test_duplicate_output_rejected(self, source_tree: Path, intrinsics_spec: ModuleSpec):
        host = LocalBuildGraph(source_tree)
        register(host, intrinsics_spec)
        with pytest.raises(DuplicateOutputError) as exc_info:
            register(host, intrinsics_spec)
        assert exc_info.value.output == f"{GEN}/Attributes.inc"
        assert len(host.actions) == 2

    def test_modules_do_not_collide(self, source_tree: Path):
        host = LocalBuildGraph(source_tree)
        for name in ("a", "b"):
            register(
                host,
                ModuleSpec(name=name, input="Attributes.td", outputs=("Attributes.inc",), module_dir=IR_DIR),
            )
        outputs = [a.output for a in host.actions]
        assert len(set(outputs)) == 2


class TestNinja:
    def test_render(self, source_tree: Path, intrinsics_spec: ModuleSpec):
        host = LocalBuildGraph(source_tree)
        register(host, intrinsics_spec)
        text = host.render_ninja()

        assert "llvmMinTblgen = llvm-min-tblgen" in text
        assert text.count("rule min_tblgenRule") == 1
        assert (
            "  command = ${llvmMinTblgen} ${includes} ${generator} -d ${depfile} -o ${out} ${in}"
            in text
        )
        assert "  description = LLVM Min TableGen $in => $out" in text
        assert "  depfile = ${out}.d" in text
        assert "  deps = gcc" in text
        assert "  restat = 1" in text
        assert (
            f"build {GEN}/Attributes.inc: min_tblgenRule {IR_DIR}/Intrinsics.td | ${{llvmMinTblgen}}"
            in text
        )
        assert "  generator = -gen-intrinsic-enums" in text
        assert text.count("\nbuild ") == 2

    def test_render_empty_graph(self, source_tree: Path):
        text = LocalBuildGraph(source_tree).render_ninja()
        assert "rule " not in text
        assert "build " not in text

    def test_escapes_spaces_in_paths(self, tmp_path: Path):
        mod = tmp_path / "my dir"
        mod.mkdir()
        (mod / "Foo.td").write_text("")
        host = LocalBuildGraph(tmp_path)
        register(host, ModuleSpec(name="m", input="Foo.td", outputs=("GenVT.inc",), module_dir="my dir"))
        text = host.render_ninja()
        assert "my$ dir/Foo.td" in text

    def test_write(self, source_tree: Path, intrinsics_spec: ModuleSpec):
        host = LocalBuildGraph(source_tree)
        register(host, intrinsics_spec)
        path = host.write_ninja(source_tree / "out" / "build.ninja")
        assert path.read_text() == host.render_ninja()
