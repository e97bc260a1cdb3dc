"""Placeholder token substitution for generated files.

Template files carry literal markers such as ``{{APP_NAME}}``.  After the
template is copied, a fixed set of files is rewritten in place with every
marker replaced by its resolved value.

Substitution is not idempotent when a resolved value itself contains a
marker; such values are substituted again on a second pass.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from nextellar.config import (
    DEFAULT_HORIZON_URL,
    DEFAULT_SOROBAN_URL,
    DEFAULT_WALLETS,
    ScaffoldRequest,
)
from nextellar.utils import write_bytes_atomic

from .errors import FileUpdateError

# Horizon URLs containing this marker point at the public network.
PUBLIC_NETWORK_MARKER = "public"


# ---------------------------------------------------------------------------
# Generated file roles
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FileRole:
    """A generated file that exists in a typed and an untyped flavour."""

    name: str
    typed_path: str
    untyped_path: str

    def path_for(self, use_ts: bool) -> str:
        return self.typed_path if use_ts else self.untyped_path


GENERATED_FILES: tuple[FileRole, ...] = (
    FileRole("manifest", "package.json", "package.json"),
    FileRole("readme", "README.md", "README.md"),
    FileRole(
        "wallet_provider",
        "src/contexts/WalletProvider.tsx",
        "src/contexts/WalletProvider.jsx",
    ),
    FileRole("wallet_kit", "src/lib/stellar-wallet-kit.ts", "src/lib/stellar-wallet-kit.js"),
    FileRole(
        "contract_hook",
        "src/hooks/useSorobanContract.ts",
        "src/hooks/useSorobanContract.js",
    ),
    FileRole("env_sample", ".env.example", ".env.example"),
)


def generated_files(target: Path, use_ts: bool) -> list[Path]:
    """Return the concrete paths of every generated file role under *target*."""
    return [Path(target) / role.path_for(use_ts) for role in GENERATED_FILES]


# ---------------------------------------------------------------------------
# Substitution map
# ---------------------------------------------------------------------------


def resolve_network(horizon_url: str | None) -> str:
    """Return ``"PUBLIC"`` for a public-network Horizon URL, else ``"TESTNET"``."""
    if horizon_url and PUBLIC_NETWORK_MARKER in horizon_url:
        return "PUBLIC"
    return "TESTNET"


def build_substitution_map(request: ScaffoldRequest) -> dict[str, str]:
    """Build the ordered token -> value mapping for *request*."""
    wallets = request.wallets or list(DEFAULT_WALLETS)
    return {
        "{{APP_NAME}}": request.app_name,
        "{{HORIZON_URL}}": request.horizon_url or DEFAULT_HORIZON_URL,
        "{{SOROBAN_URL}}": request.soroban_url or DEFAULT_SOROBAN_URL,
        "{{NETWORK}}": resolve_network(request.horizon_url),
        "{{WALLETS}}": json.dumps(wallets, separators=(",", ":")),
    }


# ---------------------------------------------------------------------------
# File rewriting
# ---------------------------------------------------------------------------


def replace_tokens(text: str, replacements: Mapping[str, str]) -> str:
    """Replace every occurrence of every token, in mapping order."""
    for token, value in replacements.items():
        text = text.replace(token, value)
    return text


def substitute_file(path: Path, replacements: Mapping[str, str]) -> bool:
    """Rewrite *path* in place.  Returns ``True`` if the file was changed.

    Missing files are skipped.  Files without any token are not rewritten, so
    their bytes and timestamps are untouched.  Invalid UTF-8 sequences are
    decoded as U+FFFD.

    Raises:
        FileUpdateError: If the file cannot be read or written.
    """
    if not path.is_file():
        return False

    try:
        original = path.read_bytes().decode("utf-8", errors="replace")
        updated = replace_tokens(original, replacements)
        if updated == original:
            return False

        write_bytes_atomic(path, updated.encode("utf-8"))
    except OSError as exc:
        raise FileUpdateError(path, str(exc)) from exc
    return True


async def substitute(
    file_paths: Iterable[Path], replacements: Mapping[str, str]
) -> list[Path]:
    """Substitute tokens in each of *file_paths*, one file at a time.

    Returns:
        The files that were rewritten.
    """
    written: list[Path] = []
    for path in file_paths:
        if await asyncio.to_thread(substitute_file, Path(path), replacements):
            written.append(Path(path))
    return written
