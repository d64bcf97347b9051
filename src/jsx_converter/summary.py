"""Markdown deployment summary for CI step-summary files."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from jsx_converter.schemas import RepositoryEnvironment

UTC = getattr(datetime, "UTC", timezone.utc)  # noqa: UP017


def render_deployment_summary(
    env: RepositoryEnvironment,
    converted_files: int,
    commit_sha: str | None = None,
    now: datetime | None = None,
) -> str:
    """Render the deployment summary as Markdown."""
    timestamp = (now or datetime.now(UTC)).strftime("%Y-%m-%d %H:%M:%S UTC")
    lines = [
        "## Deployment Summary",
        "",
        "### Successfully deployed JSX template",
        "",
        f"- **Source Repository**: `{env.upstream_repo}`",
        f"- **Development Repository**: `{env.dev_repo}`",
        f"- **Template Repository**: `{env.template_repo}`",
        "",
    ]
    if commit_sha:
        lines.append(f"- **Source Commit**: `{commit_sha}`")
    lines += [
        "",
        "### Conversion Statistics",
        f"- **Converted Files**: {converted_files} JavaScript/JSX files",
        f"- **Template Updated**: {timestamp}",
    ]
    return "\n".join(lines) + "\n"


def append_summary(path: Path, markdown: str) -> None:
    with path.open("a", encoding="utf-8") as handle:
        handle.write(markdown)
