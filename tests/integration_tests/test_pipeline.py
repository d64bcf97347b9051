"""Integration tests running the full conversion pipeline with a compiler double."""

from __future__ import annotations

from pathlib import Path

import pytest

from jsx_converter.application.results import CompileStatus
from jsx_converter.application.use_cases import (
    build_conversion_config,
    convert_project,
    write_stats_json,
)
from jsx_converter.errors import CompilerError, StructureError
from jsx_converter.schemas import ConversionConfig
from jsx_converter.verify import verify_output


def _snapshot(root: Path, skip: str | None = None) -> dict[str, bytes]:
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file() and (skip is None or path.relative_to(root).parts[0] != skip)
    }


def test_pipeline_produces_jsx_template(conversion_config: ConversionConfig, fake_compiler) -> None:
    """Convert the fixture project and check the resulting staging tree."""
    result = convert_project(conversion_config, compiler=fake_compiler)

    root = result.staging_root
    scripts = root / "resources/js"
    assert result.compile_result.status is CompileStatus.SUCCESS
    assert sorted(p.relative_to(scripts).as_posix() for p in scripts.rglob("*.js*")) == [
        "app.jsx",
        "components/button.jsx",
        "hooks/use-initials.js",
        "layouts/app-layout.jsx",
        "lib/badge.jsx",
        "lib/utils.js",
        "pages/welcome.jsx",
        "ssr.jsx",
    ]
    assert result.renamed == (Path("lib/badge.jsx"),)
    assert result.stats.source_files == 9
    assert result.stats.output_files == 8
    assert result.stats.total_output_files == 10
    assert result.file_errors == ()

    for entry in ("app.jsx", "ssr.jsx"):
        assert ".tsx" not in (scripts / entry).read_text(encoding="utf-8")
    assert ".tsx" not in (root / "resources/views/app.blade.php").read_text(encoding="utf-8")
    for leftover in (
        "vite.config.ts",
        "tsconfig.json",
        "tsconfig.node.json",
        "tsconfig.temp.json",
        "js",
        "resources/js/types",
    ):
        assert not (root / leftover).exists(), leftover
    assert (root / "vite.config.js").is_file()

    verification = verify_output(conversion_config)
    assert verification.ok
    assert verification.output_file_count == 8
    assert verification.warnings == ["Low number of converted files (8)"]


def test_pipeline_leaves_source_untouched(
    conversion_config: ConversionConfig, fake_compiler
) -> None:
    source = conversion_config.source_root
    before = _snapshot(source, skip="output")

    convert_project(conversion_config, compiler=fake_compiler)

    assert _snapshot(source, skip="output") == before


def test_pipeline_rerun_is_byte_identical(
    conversion_config: ConversionConfig, compiler_factory
) -> None:
    """Running twice on unchanged input yields the same staging tree."""
    first = convert_project(conversion_config, compiler=compiler_factory())
    snapshot = _snapshot(first.staging_root)

    second = convert_project(conversion_config, compiler=compiler_factory())

    assert _snapshot(second.staging_root) == snapshot


def test_pipeline_soft_compiler_failure_continues(
    conversion_config: ConversionConfig, compiler_factory
) -> None:
    compiler = compiler_factory(returncodes=(2,), emit=(True,))

    result = convert_project(conversion_config, compiler=compiler)

    assert result.compile_result.status is CompileStatus.SUCCESS_WITH_WARNINGS
    assert result.compile_result.attempts == 1
    assert result.stats.output_files == 8


def test_pipeline_fatal_compiler_leaves_copy_only(
    conversion_config: ConversionConfig, compiler_factory
) -> None:
    """No stage after the compiler runs when nothing was emitted."""
    compiler = compiler_factory(returncodes=(1, 1), emit=(False, False))

    with pytest.raises(CompilerError):
        convert_project(conversion_config, compiler=compiler)

    root = conversion_config.source_root / "output"
    assert (root / "resources/js/app.tsx").is_file()
    assert (root / "vite.config.ts").is_file()
    assert (root / "tsconfig.json").is_file()
    assert not (root / "vite.config.js").exists()
    assert not (root / "tsconfig.temp.json").exists()
    assert not (root / "js").exists()
    assert len(compiler.calls) == 2


def test_pipeline_requires_scripts_directory(tmp_path: Path, fake_compiler) -> None:
    config = build_conversion_config(tmp_path)
    with pytest.raises(StructureError, match="Source directory not found"):
        convert_project(config, compiler=fake_compiler)
    assert not (tmp_path / "output").exists()
    assert fake_compiler.calls == []


def test_write_stats_json(conversion_config: ConversionConfig, fake_compiler, tmp_path) -> None:
    import json

    result = convert_project(conversion_config, compiler=fake_compiler)
    path = write_stats_json(result, tmp_path / "reports" / "stats.json")

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["compile_status"] == "success"
    assert payload["compile_attempts"] == 1
    assert payload["output_files"] == 8
    assert payload["renamed"] == ["lib/badge.jsx"]
    assert (result.staging_root / "resources/js" / payload["renamed"][0]).is_file()
