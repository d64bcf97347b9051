"""Output verification for a converted staging tree."""

from __future__ import annotations

import json
import logging

from jsx_converter.application.results import VerificationResult
from jsx_converter.application.staging import StagingTree
from jsx_converter.schemas import ConversionConfig
from jsx_converter.stages.classifier import iter_scripts

logger = logging.getLogger(__name__)

REQUIRED_OUTPUT_FILES = (
    "resources/js/app.jsx",
    "resources/js/ssr.jsx",
    "vite.config.js",
    "resources/views/app.blade.php",
    "package.json",
)
REQUIRED_SCRIPT_DIRS = ("components", "pages", "layouts", "hooks")


def verify_output(config: ConversionConfig) -> VerificationResult:
    """Check the artifact contract downstream consumers rely on.

    Missing required files or directories are errors. A low file count,
    leftover TypeScript dependencies or a leftover ``types`` directory are
    warnings.

    Parameters
    ----------
    config : ConversionConfig
        Configuration whose staging tree should be verified.

    Returns
    -------
    VerificationResult
        Collected errors, warnings and the JS/JSX file count.
    """
    tree = StagingTree(config=config)
    result = VerificationResult()
    if not tree.root.is_dir():
        result.errors.append(f"Output directory not found: {tree.root}")
        return result

    for relative in REQUIRED_OUTPUT_FILES:
        if tree.path(relative).is_file():
            logger.debug("Output file exists: %s", relative)
        else:
            result.errors.append(f"Output file missing: {relative}")
    for name in REQUIRED_SCRIPT_DIRS:
        relative = f"{config.scripts_dir}/{name}"
        if not tree.path(relative).is_dir():
            result.errors.append(f"Output directory missing: {relative}")

    result.output_file_count = len(iter_scripts(tree.scripts))
    logger.info("Found %d JavaScript/JSX files in output", result.output_file_count)
    if result.output_file_count < config.minimum_output_files:
        result.warnings.append(
            f"Low number of converted files ({result.output_file_count})"
        )

    package_json = tree.path("package.json")
    if package_json.is_file():
        try:
            package = json.loads(package_json.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            result.warnings.append(f"Could not verify package.json changes: {exc}")
        else:
            if "jsx" not in str(package.get("name", "")):
                result.warnings.append("package.json may not be properly updated")
            if "typescript" in (package.get("devDependencies") or {}):
                result.warnings.append(
                    "TypeScript dependencies still present in package.json"
                )

    if (tree.scripts / "types").exists():
        result.warnings.append("Types directory still exists in output")

    for message in result.errors:
        logger.error(message)
    for message in result.warnings:
        logger.warning(message)
    return result
