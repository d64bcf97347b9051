"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from jsx_converter.application.results import ProcessResult
from jsx_converter.types import Command

if TYPE_CHECKING:
    from jsx_converter.application.staging import StagingTree


class CommandRunner(Protocol):
    """Run an external command to completion."""

    def run(self, command: Command, cwd: Path | None = None) -> ProcessResult:
        """Run command and return its exit status and output."""


class Compiler(Protocol):
    """Emit JavaScript for the sources described by a compiler config file."""

    def compile(self, config_path: Path, flags: tuple[str, ...]) -> ProcessResult:
        """Invoke the compiler once."""


class Stage(Protocol):
    """One sequential pass over the staging tree."""

    name: str

    def run(self, tree: StagingTree) -> None:
        """Apply the stage in place; raise to halt the pipeline."""
