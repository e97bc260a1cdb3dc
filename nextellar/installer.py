"""Dependency installation for freshly scaffolded projects.

Runs ``<package manager> install`` inside the generated directory and
reports the outcome as an :class:`InstallResult`.  Failures (missing
binary, non-zero exit, timeout) are captured in the result rather than
raised; deciding whether a failure is fatal is up to the caller.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel

from nextellar.config import PackageManager
from nextellar.utils import console, format_duration, run_command

# Checked in order; the first lockfile present decides the package manager.
LOCKFILES: tuple[tuple[str, PackageManager], ...] = (
    ("pnpm-lock.yaml", PackageManager.PNPM),
    ("yarn.lock", PackageManager.YARN),
    ("package-lock.json", PackageManager.NPM),
)


@dataclass
class InstallResult:
    """Outcome of a dependency installation."""

    success: bool
    package_manager: PackageManager
    skipped: bool = False
    exit_code: int = -1
    duration_seconds: float = 0.0
    stdout: str = ""
    stderr: str = ""
    errors: list[str] = field(default_factory=list)


def detect_package_manager(cwd: str | Path) -> PackageManager:
    """Guess which package manager the user wants for *cwd*.

    The ``npm_config_user_agent`` variable (set when invoked through
    ``npx``/``pnpm dlx``/``yarn create``) wins, then lockfiles, then npm.
    """
    user_agent = os.environ.get("npm_config_user_agent", "")
    for manager in PackageManager:
        if user_agent.startswith(f"{manager.value}/"):
            return manager

    directory = Path(cwd)
    for lockfile, manager in LOCKFILES:
        if (directory / lockfile).exists():
            return manager

    return PackageManager.NPM


class Installer:
    """Installs project dependencies with npm, yarn or pnpm."""

    async def run(
        self,
        cwd: str | Path,
        *,
        skip_install: bool = False,
        package_manager: PackageManager | None = None,
        timeout: float | None = None,
    ) -> InstallResult:
        """Install dependencies in *cwd*.

        Args:
            cwd: Project directory containing ``package.json``.
            skip_install: Report success immediately without running anything.
            package_manager: Force a package manager; detected when ``None``.
            timeout: Seconds before the install process is killed.  ``None``
                waits indefinitely.

        Returns:
            InstallResult describing what happened.
        """
        manager = PackageManager(package_manager) if package_manager else detect_package_manager(cwd)

        if skip_install:
            return InstallResult(success=True, package_manager=manager, skipped=True)

        console.print(
            Panel(
                f"[cyan]Installing dependencies[/cyan]\n"
                f"  Package manager: {manager.value}\n"
                f"  Directory: {escape(str(cwd))}\n"
                f"  Timeout: {f'{timeout}s' if timeout else 'none'}",
                title="Install",
                border_style="cyan",
            )
        )

        cmd = [manager.value, "install"]
        start_time = time.monotonic()
        try:
            exit_code, stdout, stderr = await run_command(cmd, cwd=cwd, timeout=timeout)
        except FileNotFoundError:
            return InstallResult(
                success=False,
                package_manager=manager,
                errors=[f"'{manager.value}' not found. Ensure it is installed and in PATH."],
                duration_seconds=time.monotonic() - start_time,
            )
        except PermissionError:
            return InstallResult(
                success=False,
                package_manager=manager,
                errors=[f"Permission denied executing '{manager.value}'."],
                duration_seconds=time.monotonic() - start_time,
            )

        elapsed = time.monotonic() - start_time
        errors: list[str] = []
        if exit_code != 0:
            errors.append(stderr or f"{manager.value} install exited with code {exit_code}")

        result = InstallResult(
            success=exit_code == 0,
            package_manager=manager,
            exit_code=exit_code,
            duration_seconds=elapsed,
            stdout=stdout,
            stderr=stderr,
            errors=errors,
        )
        self._display_result(result)
        return result

    def _display_result(self, result: InstallResult) -> None:
        """Print a one-line status plus the first few error lines."""
        duration = format_duration(result.duration_seconds)
        if result.success:
            console.print(
                f"[green]Dependencies installed with {result.package_manager.value} "
                f"in {duration}.[/green]"
            )
            return

        console.print(
            f"[red]{result.package_manager.value} install failed after {duration} "
            f"(exit code {result.exit_code}).[/red]"
        )
        for err in result.errors[:1]:
            for line in err.splitlines()[:10]:
                console.print(f"  [dim]{escape(line)}[/dim]")


async def run_install(
    cwd: str | Path,
    *,
    skip_install: bool = False,
    package_manager: PackageManager | None = None,
    timeout: float | None = None,
) -> InstallResult:
    """Install dependencies with a default :class:`Installer`."""
    return await Installer().run(
        cwd,
        skip_install=skip_install,
        package_manager=package_manager,
        timeout=timeout,
    )
