"""Nextellar scaffolder -- creates Next.js + Stellar projects from templates.

Quick usage::

    from nextellar.config import ScaffoldRequest
    from nextellar.scaffolder import scaffold

    request = ScaffoldRequest(app_name="my-dapp", use_ts=True, with_contracts=True)
    project_path = await scaffold(request)
"""

from nextellar.scaffolder.errors import (
    CopyFailureError,
    DirectoryExistsError,
    FileUpdateError,
    InstallFailureError,
    ScaffoldError,
    UnsupportedTemplateError,
)
from nextellar.scaffolder.generator import ProjectGenerator, scaffold
from nextellar.scaffolder.locator import ResolvedTemplate, TemplateLocator, candidate_roots

__all__ = [
    "CopyFailureError",
    "DirectoryExistsError",
    "FileUpdateError",
    "InstallFailureError",
    "ProjectGenerator",
    "ResolvedTemplate",
    "ScaffoldError",
    "TemplateLocator",
    "UnsupportedTemplateError",
    "candidate_roots",
    "scaffold",
]
