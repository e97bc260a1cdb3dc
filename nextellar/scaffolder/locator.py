"""Template root discovery.

Templates can live in several places depending on how Nextellar was
installed: bundled inside the package, shipped as data files under
``sys.prefix``, or sitting next to the package in a development checkout.
The locator probes those roots in a fixed order.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from nextellar.config import DEFAULT_TEMPLATE, JS_TEMPLATE

from .errors import UnsupportedTemplateError

MANIFEST_NAME = "package.json"

_PACKAGE_DIR = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class ResolvedTemplate:
    """A template directory chosen for one scaffold run."""

    root: Path
    name: str

    @property
    def path(self) -> Path:
        return self.root / self.name


def candidate_roots(
    self_location: Path | None = None,
    extra_roots: Iterable[Path] = (),
) -> list[Path]:
    """Return the template roots to probe, highest priority first.

    Args:
        self_location: Directory of the ``nextellar`` package.  Defaults to
            the directory this module was imported from.
        extra_roots: Roots configured by the user; they are tried first.

    The last entry is always the package's bundled ``templates`` directory.
    """
    base = Path(self_location) if self_location is not None else _PACKAGE_DIR
    return [
        *(Path(r) for r in extra_roots),
        base.parent / "templates",
        Path(sys.prefix) / "share" / "nextellar" / "templates",
        base / "templates",
    ]


class TemplateLocator:
    """Pick the template root that holds a named template."""

    def __init__(self, roots: Sequence[Path] | None = None) -> None:
        self.roots = list(roots) if roots is not None else candidate_roots()
        if not self.roots:
            raise ValueError("TemplateLocator needs at least one candidate root")

    def resolve(self, template_name: str, use_ts: bool) -> ResolvedTemplate:
        """Resolve *template_name* for the requested language variant.

        JavaScript mode only supports the default template and always maps it
        to the ``js-template`` directory.  The first root containing
        ``<name>/package.json`` wins; when none does, the last root is used.

        Raises:
            UnsupportedTemplateError: JavaScript mode with a non-default
                template.  Raised before touching the filesystem.
        """
        if not use_ts and template_name != DEFAULT_TEMPLATE:
            raise UnsupportedTemplateError(template_name)

        name = template_name if use_ts else JS_TEMPLATE

        for root in self.roots:
            if (root / name / MANIFEST_NAME).exists():
                return ResolvedTemplate(root=root, name=name)

        # Some install layouts make the manifest probe miss; fall back to the
        # last root instead of failing.
        return ResolvedTemplate(root=self.roots[-1], name=name)
