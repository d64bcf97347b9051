"""Pydantic schemas for runtime validation of pipeline inputs and reports."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from jsx_converter.types import CheckStatus

DEFAULT_EXCLUDE_DIRS = (
    "output",
    "node_modules",
    "scripts",
    "vendor",
    "templates",
    "storage/logs",
    ".git",
)
DEFAULT_EXCLUDE_FILES = ("composer.lock", ".env", "workflow-test-report.json")
TYPESCRIPT_DEV_DEPENDENCIES = (
    "typescript",
    "@types/node",
    "@types/react",
    "@types/react-dom",
)


class ConversionConfig(BaseModel):
    """Validated configuration shared by every pipeline stage.

    Paths other than ``source_root`` are relative to the source root (or to
    the staging root for files that only exist in the output).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    source_root: Path
    staging_dir_name: str = "output"
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    exclude_files: tuple[str, ...] = DEFAULT_EXCLUDE_FILES
    workflows_dir: str = ".github/workflows"
    allowed_workflows: tuple[str, ...] = ("lint.yml", "tests.yml")
    template_workflow: str = "templates/workflows/auto-release.yml"
    scripts_dir: str = "resources/js"
    view_template: str = "resources/views/app.blade.php"
    bundler_config: str = "vite.config.ts"
    entry_files: tuple[str, ...] = ("app.jsx", "ssr.jsx")
    intermediate_dir_name: str = "js"
    transient_config_name: str = "tsconfig.temp.json"
    compiler_command: tuple[str, ...] = ("npx", "tsc")
    package_name_from: str = "react-starter-kit"
    package_name_to: str = "react-jsx-starter-kit"
    composer_name: str = "aliziodev/react-jsx-starter-kit"
    typescript_dev_dependencies: tuple[str, ...] = TYPESCRIPT_DEV_DEPENDENCIES
    minimum_output_files: int = Field(default=50, ge=0)

    @field_validator("source_root")
    @classmethod
    def _validate_source_root(cls, value: Path) -> Path:
        if not value.is_dir():
            raise ValueError(f"source_root is not a directory: {value}")
        return value.resolve()

    @field_validator("staging_dir_name", "intermediate_dir_name", "transient_config_name")
    @classmethod
    def _validate_plain_name(cls, value: str) -> str:
        if not value.strip() or "/" in value or "\\" in value or value in {".", ".."}:
            raise ValueError(f"expected a plain file or directory name, got '{value}'")
        return value

    @field_validator("compiler_command")
    @classmethod
    def _validate_command(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("compiler_command cannot be empty.")
        return value


class RepositoryEnvironment(BaseModel):
    """Repository identities and the push credential, read from the environment."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    upstream_repo: str = "laravel/react-starter-kit"
    dev_repo: str = "aliziodev/react-jsx-starter-kit-dev"
    template_repo: str = "aliziodev/react-jsx-starter-kit"
    template_token: SecretStr | None = None

    @field_validator("upstream_repo", "dev_repo", "template_repo")
    @classmethod
    def _validate_slug(cls, value: str) -> str:
        owner, sep, name = value.strip().partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(f"repository must look like 'owner/name', got '{value}'")
        return value.strip()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RepositoryEnvironment:
        """Build from ``UPSTREAM_REPO``, ``DEV_REPO``, ``TEMPLATE_REPO`` and
        ``TEMPLATE_REPO_TOKEN``; unset variables keep their defaults."""
        env = os.environ if environ is None else environ
        fields = {
            "upstream_repo": env.get("UPSTREAM_REPO"),
            "dev_repo": env.get("DEV_REPO"),
            "template_repo": env.get("TEMPLATE_REPO"),
            "template_token": env.get("TEMPLATE_REPO_TOKEN") or None,
        }
        return cls(**{key: value for key, value in fields.items() if value is not None})


class SelfTestSummary(BaseModel):
    """Per-phase outcome of the self-test."""

    prerequisites: CheckStatus
    structure: CheckStatus
    conversion: CheckStatus
    components: CheckStatus


class SelfTestReport(BaseModel):
    """JSON report written at the end of a self-test run."""

    timestamp: str
    project: str = "react-jsx-starter-kit-dev"
    workflow: str = "sync-and-deploy"
    status: Literal["completed", "failed"]
    summary: SelfTestSummary
