"""Config Rewriter: strip TypeScript references from project metadata.

Every rewrite here is a fixed point: applying it to already converted
content returns the content unchanged.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Collection
from pathlib import Path

from jsx_converter.application.staging import StagingTree
from jsx_converter.errors import RewriteError
from jsx_converter.heuristics import strip_type_imports
from jsx_converter.stages.references import rewrite_text_file
from jsx_converter.types import JsonObject

logger = logging.getLogger(__name__)

_BLANK_LINES = re.compile(r"^\s*\n", re.MULTILINE)
_NODE_PATH_IMPORT = re.compile(r"(import\s+\{[^}]*\}\s+from\s+['\"]node:path['\"];?)")
_FILE_URL_IMPORT = "import { fileURLToPath, URL } from 'node:url';"
_DIRNAME_REPLACEMENT = "fileURLToPath(new URL('.', import.meta.url))"
_IGNORES_ARRAY = re.compile(r"ignores:\s*\[([^\]]*)]")

README_TEMPLATE = """# Laravel + React JSX Starter Kit

## Introduction

Our React JSX starter kit provides a robust, modern starting point for building Laravel applications with a React frontend using [Inertia](https://inertiajs.com), using **JavaScript/JSX instead of TypeScript** for broader accessibility.

Inertia allows you to build modern, single-page React applications using classic server-side routing and controllers. This lets you enjoy the frontend power of React combined with the incredible backend productivity of Laravel and lightning-fast Vite compilation.

This React starter kit utilizes React 19, **JavaScript/JSX**, Tailwind, and the [shadcn/ui](https://ui.shadcn.com) and [radix-ui](https://www.radix-ui.com) component libraries.

> **Note:** This template is automatically generated from [aliziodev/react-jsx-starter-kit-dev](https://github.com/aliziodev/react-jsx-starter-kit-dev) based on the original Laravel React starter kit repository. The conversion process transforms TypeScript files to JavaScript/JSX for broader accessibility.

## Usage

```bash
laravel new my-app --using=aliziodev/react-jsx-starter-kit
```

## Official Documentation

Documentation for all Laravel starter kits can be found on the [Laravel website](https://laravel.com/docs/starter-kits).

## Contributing

Thank you for considering contributing to our starter kit! The contribution guide can be found in the [Laravel documentation](https://laravel.com/docs/contributions).

## Code of Conduct

In order to ensure that the Laravel community is welcoming to all, please review and abide by the [Code of Conduct](https://laravel.com/docs/contributions#code-of-conduct).

## License

The Laravel + React JSX starter kit is open-sourced software licensed under the MIT license.
"""


# -----------------------------
# Pure rewrites
# -----------------------------
def rewrite_bundler_config(text: str, scripts_dir: str = "resources/js") -> str:
    """Convert ``vite.config.ts`` source into plain JavaScript.

    Type-only imports are removed, the two entry points are retargeted to
    their ``.jsx`` counterparts, blank lines are dropped and ``__dirname`` is
    replaced with a file-URL based expression valid in ES modules.
    """
    text = strip_type_imports(text)
    for entry in ("app", "ssr"):
        text = text.replace(f"{scripts_dir}/{entry}.tsx", f"{scripts_dir}/{entry}.jsx")
    text = _BLANK_LINES.sub("", text)

    if "__dirname" in text:
        if "fileURLToPath" not in text:
            text = _NODE_PATH_IMPORT.sub(
                lambda match: f"{match.group(1)}\n{_FILE_URL_IMPORT}", text, count=1
            )
        text = text.replace("__dirname", _DIRNAME_REPLACEMENT)
    return text


def rewrite_package_metadata(
    data: JsonObject,
    name_from: str = "react-starter-kit",
    name_to: str = "react-jsx-starter-kit",
    dev_dependencies: Collection[str] = (),
) -> JsonObject:
    """Rename the package, retarget its description, drop TypeScript dev deps."""
    name = data.get("name")
    if isinstance(name, str) and name_from in name:
        data["name"] = name.replace(name_from, name_to)
    description = data.get("description")
    if isinstance(description, str) and description:
        data["description"] = description.replace("TypeScript", "JavaScript/JSX")
    dev = data.get("devDependencies")
    if isinstance(dev, dict):
        for dependency in dev_dependencies:
            dev.pop(dependency, None)
    return data


def rewrite_composer_manifest(data: JsonObject, name: str) -> JsonObject:
    data["name"] = name
    return data


def rewrite_component_registry(data: JsonObject) -> JsonObject:
    data["tsx"] = False
    return data


def _references_directory(entry: str, directory: str) -> bool:
    return any(
        f"{quote}{directory}{end}" in entry for quote in ("'", '"') for end in (quote, "/")
    )


def rewrite_lint_ignores(text: str, directory: str = "output") -> str:
    """Drop ``ignores`` entries naming ``directory``; keep the rest in order."""

    def _filter(match: re.Match[str]) -> str:
        entries = [item.strip() for item in match.group(1).split(",")]
        kept = [
            item for item in entries if item and not _references_directory(item, directory)
        ]
        return f"ignores: [{', '.join(kept)}]"

    return _IGNORES_ARRAY.sub(_filter, text, count=1)


# -----------------------------
# File helpers
# -----------------------------
def rewrite_json_file(
    path: Path, rewrite: Callable[[JsonObject], JsonObject], indent: int
) -> bool:
    """Load, rewrite and save a JSON object file; return ``False`` when absent.

    Raises
    ------
    RewriteError
        If the file is not a JSON object.
    """
    if not path.is_file():
        return False
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RewriteError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise RewriteError(f"Expected a JSON object in {path}")
    data = rewrite(data)
    path.write_text(json.dumps(data, indent=indent, ensure_ascii=False) + "\n", encoding="utf-8")
    return True


class ConfigRewriter:
    """Apply the metadata rewrites to well-known files in the staging tree."""

    name = "configs"

    def run(self, tree: StagingTree) -> None:
        self._convert_bundler_config(tree)
        self._rewrite_json(tree)
        if rewrite_text_file(
            tree,
            tree.path("eslint.config.js"),
            lambda text: rewrite_lint_ignores(text, tree.config.staging_dir_name),
        ):
            logger.info(
                "Updated: eslint.config.js (removed %s from ignores)",
                tree.config.staging_dir_name,
            )
        readme = tree.path("README.md")
        if readme.is_file():
            readme.write_text(README_TEMPLATE, encoding="utf-8")
            logger.info("Updated: README.md for JSX template")

    def _convert_bundler_config(self, tree: StagingTree) -> None:
        source = tree.path(tree.config.bundler_config)
        if not source.is_file():
            logger.warning("%s not found in staging tree", tree.config.bundler_config)
            return
        target = source.with_suffix(".js")
        try:
            text = source.read_text(encoding="utf-8")
            target.write_text(
                rewrite_bundler_config(text, tree.config.scripts_dir), encoding="utf-8"
            )
            source.unlink()
        except (OSError, UnicodeDecodeError) as exc:
            message = f"Error converting {source}: {exc}"
            logger.error(message)
            tree.record_error(message)
            return
        logger.info("Converted: %s -> %s", source.name, target.name)

    def _rewrite_json(self, tree: StagingTree) -> None:
        config = tree.config
        if rewrite_json_file(
            tree.path("package.json"),
            lambda data: rewrite_package_metadata(
                data,
                config.package_name_from,
                config.package_name_to,
                config.typescript_dev_dependencies,
            ),
            indent=2,
        ):
            logger.info("Updated: package.json for JSX template")
        if rewrite_json_file(
            tree.path("composer.json"),
            lambda data: rewrite_composer_manifest(data, config.composer_name),
            indent=4,
        ):
            logger.info("Updated: composer.json for JSX template")
        if rewrite_json_file(
            tree.path("components.json"), rewrite_component_registry, indent=4
        ):
            logger.info("Updated: components.json for JSX template")
