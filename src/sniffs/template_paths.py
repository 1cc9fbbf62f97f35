"""Resolve dot-notated Blade template names to files on disk."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

DEFAULT_TEMPLATE_PATHS = ("resources/views",)
DEFAULT_TEMPLATE_EXTENSION = "blade.php"

# Files marking the root of a Laravel project.
PROJECT_ROOT_MARKERS = ("artisan", "composer.json")

INTERPOLATION_MARKER = "$"
UNANALYZABLE_SUFFIXES = ("-", "_", ".")

_NAMESPACE_RE = re.compile(r"^(\w+)::")


@dataclass(frozen=True)
class TemplateFound:
    identifier: str
    candidates: tuple[Path, ...]
    path: Path


@dataclass(frozen=True)
class TemplateNotFound:
    identifier: str
    candidates: tuple[Path, ...]


@dataclass(frozen=True)
class UnknownNamespace:
    identifier: str
    namespace: str


TemplateResolution = Union[TemplateFound, TemplateNotFound, UnknownNamespace]


def is_analyzable(identifier: str) -> bool:
    """False for names that are likely built at runtime.

    A trailing ``-``, ``_`` or ``.`` suggests concatenation, and ``$`` an
    interpolated variable. Such names are skipped, never resolved.
    """
    if not identifier or INTERPOLATION_MARKER in identifier:
        return False
    return not identifier.endswith(UNANALYZABLE_SUFFIXES)


def detect_base_dir(start: Path | None = None) -> Path:
    """Nearest ancestor of ``start`` that looks like a Laravel project root.

    Defaults to the install location of this package, so a tool installed
    into a project's environment finds that project. Falls back to the
    current working directory.
    """
    origin = (start or Path(__file__)).resolve()
    for directory in (origin, *origin.parents):
        if any((directory / marker).is_file() for marker in PROJECT_ROOT_MARKERS):
            return directory
    return Path.cwd()


class TemplatePathResolver:
    """Map template identifiers to candidate files.

    ``namespace::a.b`` resolves to the single file
    ``{base_dir}/{view_namespaces[namespace]}/a/b.{extension}``; plain ``a.b``
    is tried against every default template path, in order.
    """

    def __init__(
        self,
        *,
        base_dir: Path | None = None,
        template_paths: Sequence[str] = DEFAULT_TEMPLATE_PATHS,
        view_namespaces: Mapping[str, str] | None = None,
        extension: str = DEFAULT_TEMPLATE_EXTENSION,
    ) -> None:
        self.base_dir = base_dir if base_dir is not None else detect_base_dir()
        self.template_paths = tuple(template_paths)
        self.view_namespaces = dict(view_namespaces or {})
        self.extension = extension.lstrip(".")

    def _candidate(self, directory: str, name: str) -> Path:
        relative = name.replace(".", "/")
        return self.base_dir / directory / f"{relative}.{self.extension}"

    def candidates(self, identifier: str) -> tuple[Path, ...] | UnknownNamespace:
        match = _NAMESPACE_RE.match(identifier)
        if match is None:
            return tuple(
                self._candidate(directory, identifier)
                for directory in self.template_paths
            )

        namespace = match.group(1)
        directory = self.view_namespaces.get(namespace)
        if directory is None:
            return UnknownNamespace(identifier=identifier, namespace=namespace)
        return (self._candidate(directory, identifier[match.end() :]),)

    def resolve(self, identifier: str) -> TemplateResolution:
        candidates = self.candidates(identifier)
        if isinstance(candidates, UnknownNamespace):
            return candidates

        for candidate in candidates:
            if candidate.is_file():
                return TemplateFound(
                    identifier=identifier, candidates=candidates, path=candidate
                )
        return TemplateNotFound(identifier=identifier, candidates=candidates)


__all__ = [
    "DEFAULT_TEMPLATE_EXTENSION",
    "DEFAULT_TEMPLATE_PATHS",
    "TemplateFound",
    "TemplateNotFound",
    "TemplatePathResolver",
    "TemplateResolution",
    "UnknownNamespace",
    "detect_base_dir",
    "is_analyzable",
]
