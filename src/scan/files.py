"""Discovery of the PHP sources, Blade templates and stubs of a Laravel tree.

The walk prunes dependency and cache directories before descending, never
follows symlinks, and honours ``.gitignore`` rules. Nested ``.gitignore``
files only apply to the subtree they live in.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from fnmatch import fnmatch
from pathlib import Path
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

logger = logging.getLogger(__name__)

# Relative to the scanned root; compiled views live in storage/.
DEFAULT_SKIP_DIRS = (".git", "vendor", "node_modules", "storage", "bootstrap/cache")

BLADE_SUFFIX = ".blade.php"
PHP_SUFFIX = ".php"
STUB_SUFFIX = ".stub"


class SourceKind(str, Enum):
    PHP = "php"
    BLADE = "blade"
    STUB = "stub"


@dataclass(frozen=True)
class ScannedFile:
    path: Path
    relative_path: str
    kind: SourceKind


def source_kind(file_name: str) -> SourceKind | None:
    """Kind of a file by name, or None when it is not a PHP source."""
    if file_name.endswith(STUB_SUFFIX):
        return SourceKind.STUB
    if file_name.endswith(BLADE_SUFFIX):
        return SourceKind.BLADE
    if file_name.endswith(PHP_SUFFIX):
        return SourceKind.PHP
    return None


def _load_gitignore(directory: Path) -> Callable[[str], bool] | None:
    gitignore_path = directory / ".gitignore"
    if not gitignore_path.is_file() or gitignore_path.is_symlink():
        return None
    return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))


def _is_ignored(matchers: Sequence[Callable[[str], bool]], path: Path) -> bool:
    return any(matcher(str(path)) for matcher in matchers)


def _matches_patterns(
    relative_path: str,
    include_patterns: Sequence[str] | None,
    exclude_patterns: Sequence[str] | None,
) -> bool:
    if include_patterns and not any(
        fnmatch(relative_path, pattern) for pattern in include_patterns
    ):
        return False
    return not (
        exclude_patterns
        and any(fnmatch(relative_path, pattern) for pattern in exclude_patterns)
    )


def scan_sources(
    root: Path,
    *,
    skip_dirs: Sequence[str] = DEFAULT_SKIP_DIRS,
    include_patterns: Sequence[str] | None = None,
    exclude_patterns: Sequence[str] | None = None,
    nested_gitignore: bool = False,
    include_stubs: bool = False,
) -> Iterator[ScannedFile]:
    """Yield the PHP sources and Blade templates under ``root``.

    Args:
        root: Directory to scan
        skip_dirs: Directory paths relative to ``root`` that are never entered
        include_patterns: fnmatch patterns on the relative path; when given,
            a file must match at least one
        exclude_patterns: fnmatch patterns on the relative path
        nested_gitignore: Also honour ``.gitignore`` files below the root
        include_stubs: Also yield ``*.stub`` generator templates

    Yields:
        Files sorted by relative POSIX path.
    """
    skipped = {skip_dir.strip("/") for skip_dir in skip_dirs}
    root_matcher = _load_gitignore(root)
    matchers_by_dir: dict[Path, list[Callable[[str], bool]]] = {
        Path(root): [root_matcher] if root_matcher is not None else []
    }

    found: list[ScannedFile] = []
    for dirpath, dirnames, filenames in os.walk(root):
        directory = Path(dirpath)
        matchers = matchers_by_dir.pop(directory, [])

        kept_dirs = []
        for dirname in sorted(dirnames):
            child = directory / dirname
            relative_dir = child.relative_to(root).as_posix()
            if relative_dir in skipped or child.is_symlink():
                continue
            if _is_ignored(matchers, child):
                logger.debug("Skipping ignored directory %s", relative_dir)
                continue
            kept_dirs.append(dirname)
            child_matchers = matchers
            if nested_gitignore:
                nested = _load_gitignore(child)
                if nested is not None:
                    child_matchers = [*matchers, nested]
            matchers_by_dir[child] = child_matchers
        dirnames[:] = kept_dirs

        for filename in filenames:
            kind = source_kind(filename)
            if kind is None or (kind is SourceKind.STUB and not include_stubs):
                continue
            path = directory / filename
            if path.is_symlink() or _is_ignored(matchers, path):
                continue
            relative_path = path.relative_to(root).as_posix()
            if _matches_patterns(relative_path, include_patterns, exclude_patterns):
                found.append(ScannedFile(path, relative_path, kind))

    found.sort(key=lambda scanned: scanned.relative_path)
    yield from found


__all__ = [
    "DEFAULT_SKIP_DIRS",
    "ScannedFile",
    "SourceKind",
    "scan_sources",
    "source_kind",
]
