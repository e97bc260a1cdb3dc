"""Main scaffolding orchestrator.

Takes a ``ScaffoldRequest`` and turns it into an installable Next.js +
Stellar project: resolve the template, copy it, overlay the optional
contracts add-on, fill in placeholder tokens and hand over to the installer.
Stages run strictly in sequence and never revisit an earlier stage.
"""

from __future__ import annotations

from collections.abc import Awaitable
from pathlib import Path
from typing import Protocol

from rich.markup import escape

from nextellar.config import PackageManager, ScaffoldRequest
from nextellar.installer import InstallResult, run_install
from nextellar.utils import print_success

from .contracts import apply_contracts_feature
from .errors import InstallFailureError
from .locator import TemplateLocator
from .materializer import materialize
from .substitution import build_substitution_map, generated_files, substitute


class InstallFn(Protocol):
    """Signature of the dependency installer the generator delegates to."""

    def __call__(
        self,
        cwd: str | Path,
        *,
        skip_install: bool = ...,
        package_manager: PackageManager | None = ...,
        timeout: float | None = ...,
    ) -> Awaitable[InstallResult]: ...


class ProjectGenerator:
    """Drive one scaffold run from template lookup to dependency install.

    Attributes:
        request: The validated scaffold request.
        locator: Template root resolver.  Defaults to the standard search
            order.
        installer: Coroutine function performing the install.
    """

    def __init__(
        self,
        request: ScaffoldRequest,
        *,
        locator: TemplateLocator | None = None,
        installer: InstallFn | None = None,
    ) -> None:
        self.request = request
        self.locator = locator or TemplateLocator()
        self.installer = installer or run_install

    async def generate(self, cwd: str | Path | None = None) -> Path:
        """Scaffold the project under *cwd* (the current directory by default).

        Returns:
            Path to the generated project root.

        Raises:
            UnsupportedTemplateError: JavaScript requested with a
                TypeScript-only template.
            DirectoryExistsError: The target directory already exists.
            CopyFailureError: Copying template files failed.
            InstallFailureError: Installation failed and was not skipped.
        """
        request = self.request
        base = Path(cwd) if cwd is not None else Path.cwd()

        # 1. Resolve the template (no filesystem writes before this succeeds)
        resolved = self.locator.resolve(request.template, request.use_ts)

        # 2. Copy it into the new directory; fails if the directory exists
        target = await materialize(resolved, base / request.app_name, request.app_name)

        # 3. Optional contracts add-on
        await apply_contracts_feature(target, resolved.root, request.with_contracts)

        # 4. Placeholder tokens
        await substitute(
            generated_files(target, request.use_ts),
            build_substitution_map(request),
        )

        print_success(f'✔️  Scaffolded "{escape(request.app_name)}" from template.')

        # 5. Dependencies
        result = await self.installer(
            target,
            skip_install=request.skip_install,
            package_manager=request.package_manager,
            timeout=request.install_timeout,
        )
        if not result.success and not request.skip_install:
            package_manager = getattr(result.package_manager, "value", result.package_manager)
            raise InstallFailureError(str(package_manager), request.app_name)

        return target


async def scaffold(
    request: ScaffoldRequest,
    *,
    cwd: str | Path | None = None,
    locator: TemplateLocator | None = None,
    installer: InstallFn | None = None,
) -> Path:
    """Scaffold *request* with a one-off :class:`ProjectGenerator`."""
    generator = ProjectGenerator(request, locator=locator, installer=installer)
    return await generator.generate(cwd)
