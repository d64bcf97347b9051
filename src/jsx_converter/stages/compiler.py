"""Compiler Invoker: transient config, compiler run, single permissive retry."""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path

from jsx_converter.application.options import RetryPolicy
from jsx_converter.application.ports import Compiler
from jsx_converter.application.results import CompileResult, CompileStatus
from jsx_converter.application.staging import StagingTree
from jsx_converter.errors import CompilerError
from jsx_converter.types import JsonObject

logger = logging.getLogger(__name__)


def build_compiler_config(tree: StagingTree, permissive: bool = False) -> JsonObject:
    """Return the transient ``tsconfig`` for this run.

    ``jsx: preserve`` keeps markup untouched while types are stripped and
    module syntax is transformed. The permissive variant also disables
    ``isolatedModules``.
    """
    scripts = tree.source_scripts.as_posix()
    return {
        "compilerOptions": {
            "jsx": "preserve",
            "target": "ES2020",
            "lib": ["ES2020", "DOM", "DOM.Iterable"],
            "allowJs": True,
            "skipLibCheck": True,
            "esModuleInterop": True,
            "allowSyntheticDefaultImports": True,
            "strict": False,
            "forceConsistentCasingInFileNames": False,
            "noEmit": False,
            "module": "ESNext",
            "moduleResolution": "node",
            "resolveJsonModule": True,
            "isolatedModules": not permissive,
            "noEmitOnError": False,
            "declaration": False,
            "sourceMap": False,
            "baseUrl": tree.source_root.as_posix(),
            "paths": {"@/*": [f"{scripts}/*"]},
            "outDir": tree.intermediate.as_posix(),
            "rootDir": scripts,
            "noImplicitAny": False,
            "noImplicitReturns": False,
            "noImplicitThis": False,
            "noUnusedLocals": False,
            "noUnusedParameters": False,
        },
        "include": [scripts],
        "exclude": [
            (tree.source_root / "node_modules").as_posix(),
            tree.root.as_posix(),
            "**/*.d.ts",
        ],
    }


def write_compiler_config(tree: StagingTree, permissive: bool = False) -> Path:
    """Write the transient compiler config and return its path."""
    path = tree.transient_config
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(build_compiler_config(tree, permissive), indent=2) + "\n",
        encoding="utf-8",
    )
    return path


def has_output(directory: Path) -> bool:
    """Return ``True`` when ``directory`` exists and is non-empty."""
    return directory.is_dir() and any(directory.iterdir())


def invoke_compiler(
    tree: StagingTree,
    compiler: Compiler,
    policy: RetryPolicy | None = None,
) -> CompileResult:
    """Run the compiler, retrying exactly once with permissive settings.

    Diagnostics are non-fatal: any emitted output counts as a soft success.
    Only total absence of output after the retry yields ``FATAL``.
    """
    policy = policy or RetryPolicy()
    config_path = write_compiler_config(tree)
    first = compiler.compile(config_path, policy.flags)
    if first.ok:
        logger.info("TypeScript compilation completed successfully")
        return CompileResult(CompileStatus.SUCCESS, attempts=1)
    diagnostics = (first.stdout + first.stderr).strip()
    if has_output(tree.intermediate):
        logger.warning("TypeScript compilation reported errors; using emitted files")
        return CompileResult(CompileStatus.SUCCESS_WITH_WARNINGS, 1, diagnostics)

    logger.error("Conversion failed (exit %d)", first.returncode)
    logger.info("Retrying with permissive settings...")
    config_path = write_compiler_config(tree, permissive=True)
    retry = compiler.compile(config_path, policy.permissive_flags)
    retry_diagnostics = (retry.stdout + retry.stderr).strip()
    combined = "\n".join(part for part in (diagnostics, retry_diagnostics) if part)
    if retry.ok:
        logger.info("TypeScript compilation completed with permissive settings")
        return CompileResult(CompileStatus.SUCCESS_WITH_WARNINGS, 2, combined)
    if has_output(tree.intermediate):
        logger.warning(
            "TypeScript compilation had errors but files were generated successfully"
        )
        return CompileResult(CompileStatus.SUCCESS_WITH_WARNINGS, 2, combined)
    logger.error("Retry also failed (exit %d)", retry.returncode)
    return CompileResult(CompileStatus.FATAL, 2, combined)


class CompilerInvoker:
    """Stage wrapper around :func:`invoke_compiler`."""

    name = "compile"

    def __init__(self, compiler: Compiler, policy: RetryPolicy | None = None) -> None:
        self.compiler = compiler
        self.policy = policy or RetryPolicy()

    def run(self, tree: StagingTree) -> None:
        result = invoke_compiler(tree, self.compiler, self.policy)
        tree.compile_result = result
        if result.status is CompileStatus.FATAL:
            # Leave the staging tree exactly as the copier produced it.
            tree.transient_config.unlink(missing_ok=True)
            if tree.intermediate.exists():
                shutil.rmtree(tree.intermediate)
            detail = result.diagnostics.splitlines()[-1] if result.diagnostics else ""
            raise CompilerError(
                f"TypeScript conversion failed: no output in {tree.intermediate}"
                + (f" ({detail})" if detail else "")
            )
