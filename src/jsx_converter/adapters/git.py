"""Git adapter used for upstream checks and template deployment."""

from __future__ import annotations

from pathlib import Path

from jsx_converter.adapters.process import SubprocessRunner
from jsx_converter.application.ports import CommandRunner
from jsx_converter.application.results import ProcessResult
from jsx_converter.errors import DeployError


class GitClient:
    """Thin wrapper over the ``git`` executable for one working copy."""

    def __init__(self, cwd: Path | None = None, runner: CommandRunner | None = None) -> None:
        self.cwd = cwd
        self.runner = runner or SubprocessRunner()

    def run(self, *args: str) -> ProcessResult:
        return self.runner.run(["git", *args], cwd=self.cwd)

    def _checked(self, *args: str) -> str:
        result = self.run(*args)
        if not result.ok:
            raise DeployError(
                f"git {' '.join(args)} failed ({result.returncode}): {result.stderr.strip()}"
            )
        return result.stdout.strip()

    def rev_parse(self, ref: str) -> str:
        return self._checked("rev-parse", ref)

    def add_all(self) -> None:
        self._checked("add", ".")

    def has_staged_changes(self) -> bool:
        # `git diff --quiet` exits 1 when there are differences.
        result = self.run("diff", "--staged", "--quiet")
        if result.returncode not in (0, 1):
            raise DeployError(f"git diff failed: {result.stderr.strip()}")
        return result.returncode == 1

    def configure_identity(self, name: str, email: str) -> None:
        """Set the commit author for this working copy only."""
        self._checked("config", "user.name", name)
        self._checked("config", "user.email", email)

    def commit(self, message: str) -> None:
        self._checked("commit", "-m", message)

    def push(self, remote: str, branch: str) -> None:
        self._checked("push", remote, branch)

    def clone(self, url: str, destination: Path) -> None:
        result = self.run("clone", url, str(destination))
        if not result.ok:
            # The URL embeds the token; keep it out of the error message.
            raise DeployError(f"git clone into {destination} failed ({result.returncode})")
