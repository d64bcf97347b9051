"""Application use-cases orchestrating the conversion pipeline."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from jsx_converter.adapters.compiler import TscCompiler
from jsx_converter.application.options import RetryPolicy
from jsx_converter.application.ports import Compiler, Stage
from jsx_converter.application.results import CompileResult, CompileStatus, ConversionResult
from jsx_converter.application.staging import StagingTree
from jsx_converter.errors import ConfigError, StructureError
from jsx_converter.schemas import ConversionConfig
from jsx_converter.stages import default_stages
from jsx_converter.stages.cleanup import collect_stats

logger = logging.getLogger(__name__)


def build_conversion_config(source_root: Path, **overrides: object) -> ConversionConfig:
    """Use-case: validate pipeline configuration for ``source_root``."""
    try:
        return ConversionConfig(source_root=source_root, **overrides)
    except ValidationError as exc:
        raise ConfigError(f"Invalid conversion configuration: {exc}") from exc


def run_stages(tree: StagingTree, stages: Sequence[Stage]) -> StagingTree:
    """Run ``stages`` in order; the first raising stage halts the pipeline."""
    for stage in stages:
        logger.debug("stage: %s", stage.name)
        stage.run(tree)
    return tree


def convert_project(
    config: ConversionConfig,
    *,
    compiler: Compiler | None = None,
    policy: RetryPolicy | None = None,
    stages: Sequence[Stage] | None = None,
) -> ConversionResult:
    """Use-case: rebuild the staging tree as a JavaScript/JSX project.

    Raises
    ------
    StructureError
        If the source scripts directory does not exist.
    CopyError
        If any project file cannot be copied.
    CompilerError
        If the compiler emitted nothing, even after the permissive retry.
    """
    tree = StagingTree(config=config)
    if not tree.source_scripts.is_dir():
        raise StructureError(f"Source directory not found: {tree.source_scripts}")

    logger.info("Unified TypeScript to JavaScript Converter Started")
    logger.info("Source: %s", tree.source_scripts)
    logger.info("Output: %s", tree.root)

    if stages is None:
        compiler = compiler or TscCompiler(config.compiler_command, cwd=config.source_root)
        stages = default_stages(compiler, policy)
    run_stages(tree, stages)

    stats = tree.stats or collect_stats(tree)
    compile_result = tree.compile_result or CompileResult(CompileStatus.SUCCESS, attempts=0)
    logger.info("Complete JSX template generated successfully")
    return ConversionResult(
        staging_root=tree.root,
        compile_result=compile_result,
        stats=stats,
        renamed=tuple(path.relative_to(tree.intermediate) for path in tree.renamed),
        file_errors=tuple(tree.file_errors),
    )


def write_stats_json(result: ConversionResult, path: Path) -> Path:
    """Use-case: persist the conversion report as a JSON artifact."""
    payload = {
        "staging_root": str(result.staging_root),
        "compile_status": result.compile_result.status.value,
        "compile_attempts": result.compile_result.attempts,
        "renamed": [str(item) for item in result.renamed],
        "file_errors": list(result.file_errors),
        **result.stats.to_json(),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return path
