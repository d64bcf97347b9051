"""Cleanup and Stats: remove compiler artifacts and count the results."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from jsx_converter.application.results import ConversionStats
from jsx_converter.application.staging import StagingTree
from jsx_converter.stages.classifier import iter_scripts

logger = logging.getLogger(__name__)

TYPESCRIPT_CONFIG_FILES = ("tsconfig.json", "tsconfig.node.json")
SOURCE_SUFFIXES = (".ts", ".tsx")


def remove_path(path: Path) -> bool:
    """Delete a file or directory tree; return ``False`` when it did not exist."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()
    else:
        return False
    return True


class Cleanup:
    """Delete TypeScript-only files, the transient config and compiler output."""

    name = "cleanup"

    def run(self, tree: StagingTree) -> None:
        for name in TYPESCRIPT_CONFIG_FILES:
            if remove_path(tree.path(name)):
                logger.info("Removed: %s", name)
        types_dir = tree.scripts / "types"
        if remove_path(types_dir):
            logger.info("Removed: %s/types directory", tree.config.scripts_dir)
        for temporary in (tree.transient_config, tree.intermediate):
            if remove_path(temporary):
                logger.info("Removed temporary: %s", temporary.name)


def collect_stats(tree: StagingTree) -> ConversionStats:
    """Count sources and converted outputs for the run summary."""
    sources = (
        sum(
            1
            for path in tree.source_scripts.rglob("*")
            if path.suffix in SOURCE_SUFFIXES and path.is_file()
        )
        if tree.source_scripts.is_dir()
        else 0
    )
    bundler_output = Path(tree.config.bundler_config).with_suffix(".js")
    return ConversionStats(
        source_files=sources,
        output_files=len(iter_scripts(tree.scripts)),
        config_files=int(tree.path(bundler_output.as_posix()).is_file()),
        template_files=int(tree.path(tree.config.view_template).is_file()),
    )


class StatsReporter:
    name = "stats"

    def run(self, tree: StagingTree) -> None:
        stats = collect_stats(tree)
        tree.stats = stats
        logger.info("Conversion Statistics:")
        logger.info("  TypeScript source files: %d", stats.source_files)
        logger.info("  JavaScript output files: %d", stats.output_files)
        logger.info("  Configuration files: %d", stats.config_files)
        logger.info("  Template files: %d", stats.template_files)
        logger.info("  Total output files: %d", stats.total_output_files)
