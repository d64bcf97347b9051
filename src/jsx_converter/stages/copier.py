"""Tree Copier: mirror the project into a freshly created staging directory."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Collection
from pathlib import Path, PurePosixPath

from jsx_converter.application.staging import StagingTree
from jsx_converter.errors import CopyError

logger = logging.getLogger(__name__)


def _is_excluded(relative: PurePosixPath, excludes: Collection[str]) -> bool:
    """Match bare names at any depth and ``a/b`` entries against the relative path."""
    for entry in excludes:
        if "/" in entry:
            if relative.as_posix() == entry.strip("/"):
                return True
        elif relative.name == entry:
            return True
    return False


def _copy_file(source: Path, target: Path) -> None:
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, target)
    except OSError as exc:
        raise CopyError(f"Failed to copy {source} -> {target}: {exc}") from exc


def copy_project_files(
    source: Path,
    target: Path,
    exclude_dirs: Collection[str],
    exclude_files: Collection[str],
    skip: Collection[str] = (),
) -> int:
    """Recursively mirror ``source`` into ``target``.

    Parameters
    ----------
    source : Path
        Directory to copy from.
    target : Path
        Directory to copy into; created when missing.
    exclude_dirs : Collection[str]
        Directory names (or root-relative ``a/b`` paths) to skip.
    exclude_files : Collection[str]
        File names (or root-relative paths) to skip.
    skip : Collection[str], default=()
        Root-relative paths handled by a separate rule.

    Returns
    -------
    int
        Number of files copied.

    Raises
    ------
    CopyError
        If any directory cannot be listed or any file cannot be copied.
    """
    copied = 0
    pending = [PurePosixPath()]
    while pending:
        relative_dir = pending.pop()
        current = source / relative_dir
        try:
            entries = sorted(current.iterdir())
        except OSError as exc:
            raise CopyError(f"Failed to read directory {current}: {exc}") from exc
        for entry in entries:
            relative = relative_dir / entry.name
            if relative.as_posix() in skip:
                continue
            if entry.is_dir():
                if _is_excluded(relative, exclude_dirs):
                    continue
                (target / relative).mkdir(parents=True, exist_ok=True)
                pending.append(relative)
            elif not _is_excluded(relative, exclude_files):
                _copy_file(entry, target / relative)
                copied += 1
    return copied


class TreeCopier:
    """Recreate the staging directory and copy the project into it."""

    name = "copy"

    def run(self, tree: StagingTree) -> None:
        config = tree.config
        if tree.root.exists():
            shutil.rmtree(tree.root)
            logger.debug("removed previous staging tree %s", tree.root)
        tree.root.mkdir(parents=True)

        workflows = config.workflows_dir.strip("/")
        # Only the filtered workflows are published from ".github".
        workflow_root = PurePosixPath(workflows).parts[0]
        copied = copy_project_files(
            tree.source_root,
            tree.root,
            exclude_dirs={*config.exclude_dirs, config.staging_dir_name},
            exclude_files=config.exclude_files,
            skip={workflow_root},
        )
        copied += self._copy_workflows(tree, workflows)
        logger.info("Project structure copied (%d files)", copied)

    def _copy_workflows(self, tree: StagingTree, workflows: str) -> int:
        """Copy only allow-listed workflows plus the templated release workflow."""
        config = tree.config
        source_dir = tree.source_root / workflows
        target_dir = tree.path(workflows)
        copied = 0

        if source_dir.is_dir():
            for name in config.allowed_workflows:
                source_file = source_dir / name
                if source_file.is_file():
                    _copy_file(source_file, target_dir / name)
                    logger.info("Copied: %s/%s", workflows, name)
                    copied += 1

        template = tree.source_root / config.template_workflow
        if template.is_file():
            _copy_file(template, target_dir / template.name)
            logger.info("Copied: %s/%s (from template)", workflows, template.name)
            copied += 1
        return copied
