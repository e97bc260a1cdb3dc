"""Soroban smart-contract add-on.

When requested, the ``contracts-template`` directory is overlaid on the new
project and the generated ``package.json`` and ``.env.example`` are extended
so the contracts can be built and referenced.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

from nextellar.config import CONTRACTS_TEMPLATE
from nextellar.utils import write_text_atomic

from .errors import CopyFailureError, FileUpdateError
from .materializer import copy_tree

CONTRACT_SCRIPTS: dict[str, str] = {
    "contracts:build": "cd contracts && stellar contract build",
    "contracts:test": "cd contracts && cargo test",
}

ENV_CONTRACTS_BLOCK = (
    "\n# Soroban Smart Contracts\n"
    "NEXT_PUBLIC_HELLO_WORLD_CONTRACT_ID=C_REPLACE_WITH_YOUR_CONTRACT_ID\n"
)


async def apply_contracts_feature(target: Path, template_root: Path, enabled: bool) -> None:
    """Overlay the contracts template and wire it into the project config.

    Does nothing unless *enabled*.  A missing contracts template, manifest or
    env sample is skipped without error.

    Raises:
        CopyFailureError: If the overlay copy fails.
        FileUpdateError: If the manifest or env sample cannot be updated.
    """
    if not enabled:
        return

    target = Path(target)
    contracts_dir = Path(template_root) / CONTRACTS_TEMPLATE
    if await asyncio.to_thread(contracts_dir.is_dir):
        try:
            await asyncio.to_thread(copy_tree, contracts_dir, target, overlay=True)
        except OSError as exc:
            raise CopyFailureError(CONTRACTS_TEMPLATE, target, str(exc)) from exc

    for update, path in (
        (_add_contract_scripts, target / "package.json"),
        (_append_env_block, target / ".env.example"),
    ):
        try:
            await asyncio.to_thread(update, path)
        except (OSError, ValueError) as exc:
            raise FileUpdateError(path, str(exc)) from exc


def _add_contract_scripts(manifest_path: Path) -> None:
    """Add or overwrite the contract build/test scripts in ``package.json``."""
    if not manifest_path.exists():
        return

    manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
    if not isinstance(manifest, dict):
        raise ValueError("package.json must contain a JSON object")
    scripts = manifest.get("scripts")
    if not isinstance(scripts, dict):
        scripts = {}
        manifest["scripts"] = scripts
    scripts.update(CONTRACT_SCRIPTS)

    write_text_atomic(
        manifest_path, json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"
    )


def _append_env_block(env_path: Path) -> None:
    """Append the contract id placeholder to an existing env sample."""
    if not env_path.exists():
        return
    with env_path.open("a", encoding="utf-8") as handle:
        handle.write(ENV_CONTRACTS_BLOCK)
