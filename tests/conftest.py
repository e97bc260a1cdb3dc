"""Shared pytest fixtures for the Nextellar test suite.

Provides reusable fixtures for:
- Throwaway template roots with typed, untyped and contracts templates
- Working directories to scaffold into
- Mocked installers reporting success or failure
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from nextellar.config import PackageManager
from nextellar.installer import InstallResult
from nextellar.scaffolder import TemplateLocator


# ---------------------------------------------------------------------------
# Template trees
# ---------------------------------------------------------------------------

TYPED_FILES: dict[str, str] = {
    "README.md": "# {{APP_NAME}}\n\nNetwork: {{NETWORK}}\n",
    ".env.example": "NEXT_PUBLIC_HORIZON_URL={{HORIZON_URL}}\nNEXT_PUBLIC_SOROBAN_URL={{SOROBAN_URL}}\n",
    "src/contexts/WalletProvider.tsx": "export const APP = \"{{APP_NAME}}\";\n",
    "src/lib/stellar-wallet-kit.ts": "export const WALLETS = {{WALLETS}};\n",
    "src/hooks/useSorobanContract.ts": "const URL = \"{{SOROBAN_URL}}\";\n",
    "src/app/page.tsx": "export default function Home() { return null; }\n",
}

UNTYPED_FILES: dict[str, str] = {
    "README.md": "# {{APP_NAME}}\n",
    ".env.example": "NEXT_PUBLIC_HORIZON_URL={{HORIZON_URL}}\n",
    "src/contexts/WalletProvider.jsx": "export const APP = \"{{APP_NAME}}\";\n",
    "src/lib/stellar-wallet-kit.js": "export const WALLETS = {{WALLETS}};\n",
    "src/hooks/useSorobanContract.js": "const URL = \"{{SOROBAN_URL}}\";\n",
}


def _manifest(name: str = "{{APP_NAME}}") -> str:
    return json.dumps(
        {"name": name, "version": "0.1.0", "scripts": {"dev": "next dev"}}, indent=2
    ) + "\n"


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Write ``{relative_path: content}`` under *root* and return *root*."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """A template root holding ``default``, ``js-template`` and ``contracts-template``."""
    root = tmp_path / "templates"
    write_tree(root / "default", {"package.json": _manifest(), **TYPED_FILES})
    write_tree(root / "js-template", {"package.json": _manifest(), **UNTYPED_FILES})
    write_tree(
        root / "contracts-template",
        {
            "contracts/Cargo.toml": "[workspace]\nmembers = [\"hello-world\"]\n",
            "contracts/hello-world/src/lib.rs": "#![no_std]\n",
        },
    )
    return root


@pytest.fixture
def bare_template_root(tmp_path: Path) -> Path:
    """A template root with only the typed ``default`` template (no contracts)."""
    root = tmp_path / "bare-templates"
    write_tree(root / "default", {"package.json": _manifest(), **TYPED_FILES})
    return root


@pytest.fixture
def locator(template_root: Path) -> TemplateLocator:
    """Locator whose only candidate is the fixture template root."""
    return TemplateLocator([template_root])


# ---------------------------------------------------------------------------
# Working directory
# ---------------------------------------------------------------------------


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Directory new projects are scaffolded into."""
    path = tmp_path / "work"
    path.mkdir()
    return path


# ---------------------------------------------------------------------------
# Installers
# ---------------------------------------------------------------------------


@pytest.fixture
def ok_installer() -> AsyncMock:
    """Installer that always reports success with npm."""
    return AsyncMock(
        return_value=InstallResult(success=True, package_manager=PackageManager.NPM, exit_code=0)
    )


@pytest.fixture
def failing_installer() -> AsyncMock:
    """Installer that always reports a failed pnpm install."""
    return AsyncMock(
        return_value=InstallResult(
            success=False,
            package_manager=PackageManager.PNPM,
            exit_code=1,
            errors=["ERR_PNPM_FETCH_404"],
        )
    )
