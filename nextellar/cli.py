"""Command-line entry point.

Usage::

    nextellar my-dapp
    nextellar my-dapp --javascript --skip-install
    nextellar my-dapp --with-contracts --wallets freighter,xbull
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence

from rich.markup import escape

from nextellar.config import DEFAULT_TEMPLATE, PackageManager, ScaffoldRequest, Settings
from nextellar.scaffolder import ScaffoldError, TemplateLocator, candidate_roots, scaffold
from nextellar.utils import print_error


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nextellar",
        description="Scaffold a Next.js + Stellar application",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  nextellar my-dapp\n"
            "  nextellar my-dapp --javascript --skip-install\n"
            "  nextellar my-dapp --with-contracts --package-manager pnpm\n"
        ),
    )

    parser.add_argument("app_name", help="Name of the project directory to create")
    parser.add_argument(
        "--javascript", "-j",
        action="store_true",
        help="Generate the JavaScript variant instead of TypeScript",
    )
    parser.add_argument(
        "--template", "-t",
        default=DEFAULT_TEMPLATE,
        help=f"Template to use (default: {DEFAULT_TEMPLATE})",
    )
    parser.add_argument(
        "--with-contracts",
        action="store_true",
        help="Include the Soroban smart contracts add-on",
    )
    parser.add_argument("--horizon-url", default=None, help="Custom Horizon endpoint URL")
    parser.add_argument("--soroban-url", default=None, help="Custom Soroban RPC endpoint URL")
    parser.add_argument(
        "--wallets",
        default="",
        help="Comma-separated wallet identifiers (default: freighter,albedo,lobstr)",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Do not install dependencies",
    )
    parser.add_argument(
        "--package-manager",
        choices=[pm.value for pm in PackageManager],
        default=None,
        help="Package manager to install with (auto-detected by default)",
    )
    parser.add_argument(
        "--install-timeout",
        type=float,
        default=None,
        help="Seconds to wait for dependency installation",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for ``nextellar``."""
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
        request = ScaffoldRequest(
            app_name=args.app_name,
            use_ts=not args.javascript,
            template=args.template,
            with_contracts=args.with_contracts,
            horizon_url=args.horizon_url,
            soroban_url=args.soroban_url,
            wallets=[w for w in args.wallets.split(",") if w.strip()],
            skip_install=args.skip_install,
            package_manager=args.package_manager or settings.package_manager,
            install_timeout=args.install_timeout or settings.install_timeout,
        )
    except ValueError as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)

    locator = TemplateLocator(candidate_roots(extra_roots=settings.template_roots))

    try:
        asyncio.run(scaffold(request, locator=locator))
    except ScaffoldError as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
