"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from jsx_converter.types import JsonObject


@dataclass(frozen=True)
class ProcessResult:
    """Exit status and captured output of an external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CompileStatus(Enum):
    """Outcome of the compiler invocation."""

    SUCCESS = "success"
    SUCCESS_WITH_WARNINGS = "success_with_warnings"
    FATAL = "fatal"


@dataclass(frozen=True)
class CompileResult:
    """Structured compiler outcome."""

    status: CompileStatus
    attempts: int
    diagnostics: str = ""

    @property
    def produced_output(self) -> bool:
        return self.status is not CompileStatus.FATAL


@dataclass(frozen=True)
class ConversionStats:
    """Input/output counts reported at the end of a run."""

    source_files: int
    output_files: int
    config_files: int
    template_files: int

    @property
    def total_output_files(self) -> int:
        return self.output_files + self.config_files + self.template_files

    def to_json(self) -> JsonObject:
        return {
            "source_files": self.source_files,
            "output_files": self.output_files,
            "config_files": self.config_files,
            "template_files": self.template_files,
            "total_output_files": self.total_output_files,
        }


@dataclass(frozen=True)
class ConversionResult:
    """Structured conversion outcome.

    ``renamed`` holds paths relative to the converted scripts directory.
    """

    staging_root: Path
    compile_result: CompileResult
    stats: ConversionStats
    renamed: tuple[Path, ...] = ()
    file_errors: tuple[str, ...] = ()


@dataclass
class VerificationResult:
    """Errors (contract violations) and warnings found in a staging tree."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    output_file_count: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class DeployResult:
    """Outcome of mirroring the staging tree into a template checkout."""

    checkout: Path
    changed: bool
    commit_message: str | None = None
    pushed: bool = False
