"""Shared pytest configuration, marker assignment and project fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from jsx_converter.application.results import ProcessResult
from jsx_converter.application.staging import StagingTree
from jsx_converter.schemas import ConversionConfig

VITE_CONFIG = """import { defineConfig } from 'vite';
import type { UserConfig } from 'vite';
import { type PluginOption } from 'vite';
import { resolve } from 'node:path';

import laravel from 'laravel-vite-plugin';

export default defineConfig({
    plugins: [
        laravel({
            input: 'resources/js/app.tsx',
            ssr: 'resources/js/ssr.tsx',
            refresh: true,
        }),
    ],
    resolve: {
        alias: {
            'ziggy-js': resolve(__dirname, 'vendor/tightenco/ziggy'),
        },
    },
});
"""

ESLINT_CONFIG = """export default [
    {
        ignores: ['vendor', 'node_modules', 'output', 'public', "output/**", 'bootstrap/ssr'],
    },
];
"""

BLADE_TEMPLATE = """<!DOCTYPE html>
<html>
    <head>
        @viteReactRefresh
        @vite(['resources/js/app.tsx', "resources/js/pages/{$page['component']}.tsx"])
        @inertiaHead
    </head>
    <body>
        @inertia
    </body>
</html>
"""

APP_ENTRY = """import { createInertiaApp } from '@inertiajs/react';
import { resolvePageComponent } from 'laravel-vite-plugin/inertia-helpers';
import { createRoot } from 'react-dom/client';

createInertiaApp({
    resolve: (name) =>
        resolvePageComponent(`./pages/${name}.tsx`, import.meta.glob('./pages/**/*.tsx')),
    setup({ el, App, props }) {
        createRoot(el).render(<App {...props} />);
    },
});
"""

SSR_ENTRY = """import { createInertiaApp } from '@inertiajs/react';
import createServer from '@inertiajs/react/server';

createServer((page) =>
    createInertiaApp({
        page,
        resolve: (name) => import(`./pages/${name}.tsx`),
        setup: ({ App, props }) => <App {...props} />,
    }),
);
"""


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def build_starter_kit(root: Path) -> Path:
    """Write a minimal Laravel + React TypeScript starter kit under ``root``."""
    _write(
        root / "package.json",
        json.dumps(
            {
                "name": "vendor/react-starter-kit",
                "description": "Laravel starter kit using TypeScript",
                "devDependencies": {
                    "@types/node": "^22.0.0",
                    "@types/react": "^19.0.0",
                    "@types/react-dom": "^19.0.0",
                    "typescript": "^5.7.0",
                    "vite": "^6.0.0",
                },
            },
            indent=2,
        ),
    )
    _write(root / "composer.json", json.dumps({"name": "laravel/react-starter-kit"}, indent=4))
    _write(root / "components.json", json.dumps({"style": "default", "tsx": True}, indent=4))
    _write(root / "eslint.config.js", ESLINT_CONFIG)
    _write(root / "README.md", "# Laravel + React Starter Kit\n")
    _write(root / "tsconfig.json", "{}\n")
    _write(root / "tsconfig.node.json", "{}\n")
    _write(root / "vite.config.ts", VITE_CONFIG)
    _write(root / "resources/views/app.blade.php", BLADE_TEMPLATE)

    _write(root / "resources/js/app.tsx", APP_ENTRY)
    _write(root / "resources/js/ssr.tsx", SSR_ENTRY)
    _write(
        root / "resources/js/components/button.tsx",
        "export function Button() {\n    return <button type=\"button\">Go</button>;\n}\n",
    )
    _write(
        root / "resources/js/pages/welcome.tsx",
        "export default function Welcome() {\n    return <div className=\"welcome\" />;\n}\n",
    )
    _write(
        root / "resources/js/layouts/app-layout.tsx",
        "export default ({ children }) => <main>{children}</main>;\n",
    )
    _write(
        root / "resources/js/hooks/use-initials.ts",
        "export function useInitials(name: string): string {\n"
        "    return name.slice(0, 1);\n}\n",
    )
    _write(
        root / "resources/js/lib/utils.ts",
        "export const cn = (...classes: string[]) => classes.join(' ');\n",
    )
    _write(
        root / "resources/js/lib/badge.ts",
        "export const badge = (label: string) => `<b>${label}</b>`;\n",
    )
    _write(root / "resources/js/types/index.d.ts", "export interface User { id: number }\n")

    _write(root / ".github/workflows/lint.yml", "name: lint\n")
    _write(root / ".github/workflows/tests.yml", "name: tests\n")
    _write(root / ".github/workflows/sync-and-deploy.yml", "name: sync\n")
    _write(root / ".github/dependabot.yml", "version: 2\n")
    _write(root / "templates/workflows/auto-release.yml", "name: release\n")

    _write(root / "node_modules/react/index.js", "module.exports = {};\n")
    _write(root / "scripts/run-conversion.js", "// legacy\n")
    _write(root / "vendor/autoload.php", "<?php\n")
    _write(root / "storage/logs/laravel.log", "log\n")
    _write(root / "storage/app/.gitignore", "*\n")
    _write(root / ".env", "APP_KEY=secret\n")
    _write(root / ".env.example", "APP_KEY=\n")
    _write(root / "composer.lock", "{}\n")
    _write(root / "workflow-test-report.json", "{}\n")
    return root


class FakeCompiler:
    """Compiler double that copies every source below ``rootDir`` to ``outDir``.

    Like ``tsc`` with ``jsx: preserve``, ``.tsx`` input is emitted as ``.jsx``
    and ``.ts`` input as ``.js``. ``returncodes`` and ``emit`` are consumed
    per attempt.
    """

    def __init__(
        self,
        returncodes: tuple[int, ...] = (0,),
        emit: tuple[bool, ...] = (True,),
    ) -> None:
        self.returncodes = list(returncodes)
        self.emit = list(emit)
        self.calls: list[tuple[dict[str, object], tuple[str, ...]]] = []

    def compile(self, config_path: Path, flags: tuple[str, ...]) -> ProcessResult:
        attempt = len(self.calls)
        config = json.loads(config_path.read_text(encoding="utf-8"))
        self.calls.append((config, flags))
        returncode = self.returncodes[min(attempt, len(self.returncodes) - 1)]
        if self.emit[min(attempt, len(self.emit) - 1)]:
            options = config["compilerOptions"]
            root_dir = Path(options["rootDir"])
            out_dir = Path(options["outDir"])
            for source in sorted(root_dir.rglob("*")):
                if source.suffix not in {".ts", ".tsx"} or source.name.endswith(".d.ts"):
                    continue
                suffix = ".jsx" if source.suffix == ".tsx" else ".js"
                target = (out_dir / source.relative_to(root_dir)).with_suffix(suffix)
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(source.read_text(encoding="utf-8"), encoding="utf-8")
        stderr = "" if returncode == 0 else "error TS2307: Cannot find module"
        return ProcessResult(returncode=returncode, stderr=stderr)


@pytest.fixture
def starter_kit(tmp_path: Path) -> Path:
    """Minimal TypeScript starter kit project root."""
    return build_starter_kit(tmp_path / "starter-kit")


@pytest.fixture
def fake_compiler() -> FakeCompiler:
    return FakeCompiler()


@pytest.fixture
def compiler_factory() -> type[FakeCompiler]:
    """Expose the compiler double for tests that script failing attempts."""
    return FakeCompiler


@pytest.fixture
def conversion_config(starter_kit: Path) -> ConversionConfig:
    return ConversionConfig(source_root=starter_kit)


@pytest.fixture
def staging_tree(conversion_config: ConversionConfig) -> StagingTree:
    """Staging handle whose root already exists."""
    tree = StagingTree(config=conversion_config)
    tree.root.mkdir(parents=True)
    return tree
