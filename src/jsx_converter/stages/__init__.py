"""Ordered pipeline stages operating on a shared staging tree."""

from __future__ import annotations

from jsx_converter.application.options import RetryPolicy
from jsx_converter.application.ports import Compiler, Stage
from jsx_converter.stages.classifier import ExtensionClassifier
from jsx_converter.stages.cleanup import Cleanup, StatsReporter
from jsx_converter.stages.compiler import CompilerInvoker
from jsx_converter.stages.config_rewriter import ConfigRewriter
from jsx_converter.stages.copier import TreeCopier
from jsx_converter.stages.references import (
    ReferenceRewriter,
    ScriptRelocator,
    TemplateRewriter,
)


def default_stages(compiler: Compiler, policy: RetryPolicy | None = None) -> list[Stage]:
    """Return the conversion stages in execution order.

    Nothing after ``compile`` runs when the compiler produces no output, so
    a fatal compiler failure leaves only the copied tree behind.
    """
    return [
        TreeCopier(),
        CompilerInvoker(compiler, policy),
        ExtensionClassifier(),
        ReferenceRewriter(),
        ScriptRelocator(),
        TemplateRewriter(),
        ConfigRewriter(),
        Cleanup(),
        StatsReporter(),
    ]


__all__ = [
    "Cleanup",
    "CompilerInvoker",
    "ConfigRewriter",
    "ExtensionClassifier",
    "ReferenceRewriter",
    "ScriptRelocator",
    "StatsReporter",
    "TemplateRewriter",
    "TreeCopier",
    "default_stages",
]
