"""Exceptions raised by the scaffolding pipeline."""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every error that aborts a scaffold run."""


class UnsupportedTemplateError(ScaffoldError):
    """Raised when a TypeScript-only template is requested in JavaScript mode."""

    def __init__(self, template: str) -> None:
        self.template = template
        super().__init__(
            f'Template "{template}" is not available for JavaScript yet. '
            "Please use the default template with --javascript, "
            "or drop --javascript to scaffold it with TypeScript."
        )


class DirectoryExistsError(ScaffoldError):
    """Raised when the target application directory is already present."""

    def __init__(self, app_name: str) -> None:
        self.app_name = app_name
        super().__init__(f'Directory "{app_name}" already exists.')


class CopyFailureError(ScaffoldError):
    """Raised when copying template files into the target fails."""

    def __init__(self, template: str, target: Path, reason: str) -> None:
        self.template = template
        self.target = target
        super().__init__(
            f'Failed to copy template "{template}" into "{target}": {reason}'
        )


class FileUpdateError(ScaffoldError):
    """Raised when a generated file cannot be read, parsed or rewritten."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f'Failed to update "{path}": {reason}')


class InstallFailureError(ScaffoldError):
    """Raised when dependency installation fails and was not skipped."""

    def __init__(self, package_manager: str, app_name: str) -> None:
        self.package_manager = package_manager
        self.app_name = app_name
        super().__init__(
            "Dependency installation failed. "
            f'Please run "{package_manager} install" manually in "{app_name}".'
        )
