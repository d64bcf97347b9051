"""Self-test: prerequisites, project structure, conversion and tooling checks."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from jsx_converter.adapters.process import SubprocessRunner
from jsx_converter.application.options import SelfTestOptions
from jsx_converter.application.ports import CommandRunner, Compiler
from jsx_converter.errors import ConverterError
from jsx_converter.schemas import ConversionConfig, SelfTestReport, SelfTestSummary
from jsx_converter.types import CheckStatus, Command
from jsx_converter.verify import verify_output

logger = logging.getLogger(__name__)

UTC = getattr(datetime, "UTC", timezone.utc)  # noqa: UP017

REPORT_FILENAME = "workflow-test-report.json"
REQUIRED_SOURCE_FILES = (
    "package.json",
    "resources/js/app.tsx",
    "resources/js/ssr.tsx",
    "vite.config.ts",
    "resources/views/app.blade.php",
)
REQUIRED_SOURCE_DIRS = (
    "resources/js/components",
    "resources/js/pages",
    "resources/js/layouts",
    "resources/js/hooks",
)
COMPONENT_COMMANDS: tuple[tuple[str, Command], ...] = (
    ("Git status", ("git", "status", "--porcelain")),
    ("Git remote check", ("git", "remote", "-v")),
    ("Checking dependencies", ("npm", "list", "--depth=0")),
)


@dataclass(frozen=True)
class PrerequisiteCheck:
    """A tool that must be runnable, optionally with a version requirement."""

    name: str
    command: Command
    validator: Callable[[str], bool] | None = None


def node_major_at_least(minimum: int) -> Callable[[str], bool]:
    """Return a validator accepting ``node --version`` output of ``minimum`` or newer."""

    def _validate(output: str) -> bool:
        version = output.strip().lstrip("v")
        try:
            return int(version.split(".")[0]) >= minimum
        except ValueError:
            return False

    return _validate


def default_prerequisites(minimum_node_major: int = 18) -> list[PrerequisiteCheck]:
    return [
        PrerequisiteCheck(
            "Node.js version", ("node", "--version"), node_major_at_least(minimum_node_major)
        ),
        PrerequisiteCheck("npm availability", ("npm", "--version")),
        PrerequisiteCheck(
            "TypeScript compiler", ("npx", "-p", "typescript", "tsc", "--version")
        ),
        PrerequisiteCheck("Prettier availability", ("npx", "prettier", "--version")),
        PrerequisiteCheck("Git availability", ("git", "--version")),
    ]


def compiler_available(runner: CommandRunner | None = None) -> bool:
    """Return ``True`` when the TypeScript compiler can be started."""
    runner = runner or SubprocessRunner()
    return runner.run(("npx", "-p", "typescript", "tsc", "--version")).ok


def check_prerequisites(
    runner: CommandRunner, checks: list[PrerequisiteCheck]
) -> bool:
    """Run every prerequisite check; report each one and return the overall result."""
    logger.info("Checking prerequisites...")
    all_passed = True
    for check in checks:
        result = runner.run(check.command)
        if not result.ok:
            logger.error("%s: Not available", check.name)
            all_passed = False
        elif check.validator is not None and not check.validator(result.stdout):
            logger.warning("%s: Version requirement not met", check.name)
            all_passed = False
        else:
            logger.info("%s: OK", check.name)
    return all_passed


def check_project_structure(source_root: Path) -> bool:
    """Check that the files and directories the conversion relies on exist."""
    logger.info("Checking project structure...")
    all_exist = True
    for relative in REQUIRED_SOURCE_FILES:
        if (source_root / relative).is_file():
            logger.info("Required file exists: %s", relative)
        else:
            logger.error("Required file missing: %s", relative)
            all_exist = False
    for relative in REQUIRED_SOURCE_DIRS:
        if (source_root / relative).is_dir():
            logger.info("Required directory exists: %s", relative)
        else:
            logger.error("Required directory missing: %s", relative)
            all_exist = False
    return all_exist


def check_conversion(config: ConversionConfig, compiler: Compiler | None = None) -> bool:
    """Run the pipeline from a clean staging tree and verify its output."""
    from jsx_converter.application.use_cases import convert_project

    logger.info("Testing TypeScript to JSX conversion...")
    staging = config.source_root / config.staging_dir_name
    if staging.exists():
        shutil.rmtree(staging)
        logger.info("Cleaned existing output directory")
    try:
        convert_project(config, compiler=compiler)
    except ConverterError as exc:
        logger.error("Running conversion failed: %s", exc)
        return False
    return verify_output(config).ok


def check_components(runner: CommandRunner, cwd: Path) -> bool:
    """Run informational git/npm commands; failures are reported, not fatal."""
    logger.info("Testing workflow components...")
    for description, command in COMPONENT_COMMANDS:
        result = runner.run(command, cwd=cwd)
        if result.ok:
            logger.info("%s completed", description)
        else:
            logger.error("%s failed: %s", description, result.stderr.strip())
    return True


def _status(passed: bool) -> CheckStatus:
    return "passed" if passed else "failed"


def write_report(report: SelfTestReport, path: Path) -> Path:
    path.write_text(report.model_dump_json(indent=2) + "\n", encoding="utf-8")
    logger.info("Test report saved to: %s", path)
    return path


def run_self_test(
    config: ConversionConfig,
    *,
    runner: CommandRunner | None = None,
    compiler: Compiler | None = None,
    options: SelfTestOptions | None = None,
) -> SelfTestReport:
    """Run all self-test phases and write the JSON report.

    Parameters
    ----------
    config : ConversionConfig
        Pipeline configuration for the project under test.
    runner : CommandRunner | None, default=None
        Runner for tool and component checks.
    compiler : Compiler | None, default=None
        Compiler used by the conversion phase.
    options : SelfTestOptions | None, default=None
        Report location and version requirements.

    Returns
    -------
    SelfTestReport
        Report whose ``status`` is ``completed`` only when every phase passed.
    """
    runner = runner or SubprocessRunner()
    options = options or SelfTestOptions()

    logger.info("Starting Workflow Test Suite")
    prerequisites = check_prerequisites(
        runner, default_prerequisites(options.minimum_node_major)
    )
    if not prerequisites:
        logger.error("Prerequisites check failed")
    structure = check_project_structure(config.source_root)
    if not structure:
        logger.error("Project structure check failed")
    conversion = check_conversion(config, compiler)
    if not conversion:
        logger.error("Conversion test failed")
    components = check_components(runner, config.source_root)

    passed = prerequisites and structure and conversion and components
    report = SelfTestReport(
        timestamp=datetime.now(UTC).isoformat(),
        status="completed" if passed else "failed",
        summary=SelfTestSummary(
            prerequisites=_status(prerequisites),
            structure=_status(structure),
            conversion=_status(conversion),
            components=_status(components),
        ),
    )
    write_report(report, options.report_path or config.source_root / REPORT_FILENAME)
    if passed:
        logger.info("All tests passed! Workflow is ready for deployment.")
    else:
        logger.error("Some tests failed. Please review the issues above.")
    return report
