"""Typed option objects shared across pipeline use-cases."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class RetryPolicy:
    """Compiler flags for the first attempt and the single permissive retry."""

    flags: tuple[str, ...] = ("--noEmitOnError", "false", "--skipLibCheck")
    permissive_flags: tuple[str, ...] = (
        "--noEmitOnError",
        "false",
        "--skipLibCheck",
        "--noImplicitAny",
        "false",
    )


@dataclass(frozen=True)
class DeployOptions:
    """Template repository deployment configuration."""

    commit_sha: str | None = None
    branch: str = "main"
    push: bool = True
    commit_prefix: str = "Auto Deploy JSX template"
    author_name: str = "github-actions[bot]"
    author_email: str = "github-actions[bot]@users.noreply.github.com"


@dataclass(frozen=True)
class SelfTestOptions:
    """Self-test configuration."""

    report_path: Path | None = None
    minimum_node_major: int = 18
