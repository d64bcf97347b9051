"""Reference Rewriter: patch entry files and the view template."""

from __future__ import annotations

import logging
import re
import shutil
from collections.abc import Callable
from pathlib import Path

from jsx_converter.application.staging import StagingTree

logger = logging.getLogger(__name__)

_TSX_REFERENCE = re.compile(r"\.tsx\b")
_VITE_DIRECTIVE = re.compile(
    r"@vite\(\['resources/js/app\.tsx',\s*"
    r"\"resources/js/pages/\{\$page\['component'\]\}\.tsx\"\]\)"
)
_VITE_DIRECTIVE_JSX = (
    "@vite(['resources/js/app.jsx', \"resources/js/pages/{$page['component']}.jsx\"])"
)


def rewrite_entry_references(text: str) -> str:
    """Point ``.tsx`` references (imports, globs, page resolvers) at ``.jsx``."""
    return _TSX_REFERENCE.sub(".jsx", text)


def rewrite_view_template(text: str) -> str:
    """Swap the known ``@vite([...])`` directive for its ``.jsx`` equivalent."""
    return _VITE_DIRECTIVE.sub(lambda _match: _VITE_DIRECTIVE_JSX, text)


def rewrite_text_file(
    tree: StagingTree, path: Path, rewrite: Callable[[str], str]
) -> bool:
    """Apply ``rewrite`` to a text file in place; return ``False`` when skipped."""
    if not path.is_file():
        return False
    try:
        original = path.read_text(encoding="utf-8")
        updated = rewrite(original)
        if updated != original:
            path.write_text(updated, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        message = f"Error updating {path}: {exc}"
        logger.error(message)
        tree.record_error(message)
        return False
    return True


class ReferenceRewriter:
    """Rewrite entry-file references inside the compiler output."""

    name = "references"

    def run(self, tree: StagingTree) -> None:
        for entry in tree.config.entry_files:
            if rewrite_text_file(tree, tree.intermediate / entry, rewrite_entry_references):
                logger.info("Updated file references in: %s", entry)


class ScriptRelocator:
    """Replace the staging scripts directory with the converted output."""

    name = "relocate"

    def run(self, tree: StagingTree) -> None:
        if tree.scripts.exists():
            shutil.rmtree(tree.scripts)
        if not tree.intermediate.is_dir():
            logger.warning("Compiler emitted no files; %s left empty", tree.config.scripts_dir)
            tree.scripts.mkdir(parents=True)
            return
        shutil.copytree(tree.intermediate, tree.scripts)
        logger.info("Replaced %s with converted JSX files", tree.config.scripts_dir)


class TemplateRewriter:
    """Rewrite the view template's bundler directive in the staging tree."""

    name = "template"

    def run(self, tree: StagingTree) -> None:
        if rewrite_text_file(tree, tree.path(tree.config.view_template), rewrite_view_template):
            logger.info("Updated: %s", tree.config.view_template)
