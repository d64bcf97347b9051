"""TypeScript compiler adapter implementing the compiler port."""

from __future__ import annotations

from pathlib import Path

from jsx_converter.adapters.process import SubprocessRunner
from jsx_converter.application.ports import CommandRunner
from jsx_converter.application.results import ProcessResult


class TscCompiler:
    """Invoke ``tsc -p <config>`` through ``npx``."""

    def __init__(
        self,
        command: tuple[str, ...] = ("npx", "tsc"),
        runner: CommandRunner | None = None,
        cwd: Path | None = None,
    ) -> None:
        self.command = command
        self.runner = runner or SubprocessRunner()
        self.cwd = cwd

    def compile(self, config_path: Path, flags: tuple[str, ...]) -> ProcessResult:
        """Run the compiler once against ``config_path``.

        Parameters
        ----------
        config_path : Path
            Compiler configuration file.
        flags : tuple[str, ...]
            Extra command-line flags for this attempt.

        Returns
        -------
        ProcessResult
            Compiler exit status with diagnostics.
        """
        return self.runner.run(
            [*self.command, "-p", str(config_path), *flags],
            cwd=self.cwd,
        )
