"""Extension Classifier: rename emitted ``.js`` files that contain markup."""

from __future__ import annotations

import logging
from pathlib import Path

from jsx_converter.application.staging import StagingTree
from jsx_converter.heuristics import looks_like_markup

logger = logging.getLogger(__name__)

SCRIPT_SUFFIXES = (".js", ".jsx")


def iter_scripts(directory: Path) -> list[Path]:
    """Return every ``.js``/``.jsx`` file below ``directory`` in sorted order."""
    if not directory.is_dir():
        return []
    return sorted(
        path
        for path in directory.rglob("*")
        if path.suffix in SCRIPT_SUFFIXES and path.is_file()
    )


def classify_scripts(tree: StagingTree, directory: Path) -> list[Path]:
    """Rename ``.js`` files whose contents look like markup to ``.jsx``.

    Read or rename failures are logged and recorded on ``tree``; the
    remaining files are still processed.

    Returns
    -------
    list[Path]
        New paths of the renamed files.
    """
    renamed: list[Path] = []
    for path in iter_scripts(directory):
        if path.suffix != ".js":
            continue
        try:
            if not looks_like_markup(path.read_text(encoding="utf-8")):
                continue
            target = path.with_suffix(".jsx")
            path.rename(target)
        except (OSError, UnicodeDecodeError) as exc:
            message = f"Error processing {path}: {exc}"
            logger.error(message)
            tree.record_error(message)
            continue
        logger.info("Renamed: %s -> %s", path.name, target.name)
        renamed.append(target)
    return renamed


class ExtensionClassifier:
    name = "classify"

    def run(self, tree: StagingTree) -> None:
        tree.renamed.extend(classify_scripts(tree, tree.intermediate))
