"""Application-layer use-cases and option objects."""

from __future__ import annotations

from pathlib import Path

from jsx_converter.application.options import DeployOptions, RetryPolicy, SelfTestOptions
from jsx_converter.application.ports import Compiler, Stage
from jsx_converter.application.results import (
    CompileResult,
    CompileStatus,
    ConversionResult,
    ConversionStats,
    VerificationResult,
)
from jsx_converter.schemas import ConversionConfig


def build_conversion_config(source_root: Path, **overrides: object) -> ConversionConfig:
    """Build validated pipeline configuration via lazy use-case import."""
    from jsx_converter.application.use_cases import build_conversion_config as _impl

    return _impl(source_root, **overrides)


def convert_project(
    config: ConversionConfig,
    *,
    compiler: Compiler | None = None,
    policy: RetryPolicy | None = None,
    stages: list[Stage] | None = None,
) -> ConversionResult:
    """Run the conversion pipeline via lazy use-case import."""
    from jsx_converter.application.use_cases import convert_project as _impl

    return _impl(config, compiler=compiler, policy=policy, stages=stages)


__all__ = [
    "CompileResult",
    "CompileStatus",
    "ConversionResult",
    "ConversionStats",
    "DeployOptions",
    "RetryPolicy",
    "SelfTestOptions",
    "VerificationResult",
    "build_conversion_config",
    "convert_project",
]
