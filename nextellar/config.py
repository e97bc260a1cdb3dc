"""Nextellar configuration.

Typed request and settings models for the scaffolder. All models use
Pydantic v2 so invalid input is rejected at construction time, which is the
pipeline's validation stage.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_TEMPLATE = "default"
JS_TEMPLATE = "js-template"
CONTRACTS_TEMPLATE = "contracts-template"

DEFAULT_HORIZON_URL = "https://horizon-testnet.stellar.org"
DEFAULT_SOROBAN_URL = "https://soroban-testnet.stellar.org"
DEFAULT_WALLETS: tuple[str, ...] = ("freighter", "albedo", "lobstr")


class PackageManager(str, Enum):
    """Package managers the installer knows how to drive."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"


# ---------------------------------------------------------------------------
# Request model
# ---------------------------------------------------------------------------


class ScaffoldRequest(BaseModel):
    """Everything needed to scaffold one application."""

    app_name: str = Field(..., description="Name of the directory to create")
    use_ts: bool = Field(..., description="TypeScript (True) or JavaScript (False) variant")
    template: str = Field(default=DEFAULT_TEMPLATE, description="Template directory name")
    with_contracts: bool = Field(default=False, description="Overlay the contracts template")
    horizon_url: str | None = Field(default=None, description="Horizon endpoint URL")
    soroban_url: str | None = Field(default=None, description="Soroban RPC endpoint URL")
    wallets: list[str] = Field(default_factory=list, description="Wallet identifiers to enable")
    skip_install: bool = Field(default=False, description="Do not install dependencies")
    package_manager: PackageManager | None = Field(
        default=None, description="Force a package manager (auto-detected when unset)"
    )
    install_timeout: float | None = Field(
        default=None, gt=0, description="Install timeout in seconds"
    )

    @field_validator("app_name")
    @classmethod
    def _check_app_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("app name must not be empty")
        if name in (".", "..") or "/" in name or "\\" in name:
            raise ValueError(f"app name must be a single directory name, got {value!r}")
        return name

    @field_validator("template")
    @classmethod
    def _default_template(cls, value: str) -> str:
        return value.strip() or DEFAULT_TEMPLATE

    @field_validator("wallets")
    @classmethod
    def _strip_wallets(cls, value: list[str]) -> list[str]:
        return [w.strip() for w in value if w.strip()]


# ---------------------------------------------------------------------------
# Environment settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    """Process-wide defaults read from the environment.

    Recognised variables (all optional):
        NEXTELLAR_TEMPLATES_DIR    extra template roots, ``os.pathsep`` separated
        NEXTELLAR_PACKAGE_MANAGER  one of ``npm``, ``yarn``, ``pnpm``
        NEXTELLAR_INSTALL_TIMEOUT  install timeout in seconds
    """

    template_roots: list[Path] = Field(default_factory=list)
    package_manager: PackageManager | None = Field(default=None)
    install_timeout: float | None = Field(default=None, gt=0)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from ``NEXTELLAR_*`` environment variables."""
        roots_str = os.environ.get("NEXTELLAR_TEMPLATES_DIR", "")
        roots = [Path(p) for p in roots_str.split(os.pathsep) if p.strip()]

        manager = os.environ.get("NEXTELLAR_PACKAGE_MANAGER") or None

        timeout: float | None = None
        if os.environ.get("NEXTELLAR_INSTALL_TIMEOUT"):
            timeout = float(os.environ["NEXTELLAR_INSTALL_TIMEOUT"])

        return cls(
            template_roots=roots,
            package_manager=manager,
            install_timeout=timeout,
        )
