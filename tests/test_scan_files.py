from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from scan.files import SourceKind, scan_sources, source_kind

if TYPE_CHECKING:
    from pathlib import Path


def _touch(root: Path, relative_path: str, content: str = "<?php\n") -> None:
    path = root / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _found(root: Path, **kwargs: object) -> list[str]:
    return [
        scanned.relative_path
        for scanned in scan_sources(root, **kwargs)  # type: ignore[arg-type]
    ]


@pytest.mark.parametrize(
    ("file_name", "expected"),
    [
        ("HomeController.php", SourceKind.PHP),
        ("home.blade.php", SourceKind.BLADE),
        ("controller.stub", SourceKind.STUB),
        ("model.php.stub", SourceKind.STUB),
        ("app.js", None),
        ("blade.php.bak", None),
    ],
)
def test_source_kind(file_name: str, expected: SourceKind | None) -> None:
    assert source_kind(file_name) is expected


def test_finds_php_and_blade_files_sorted(tmp_path: Path) -> None:
    _touch(tmp_path, "routes/web.php")
    _touch(tmp_path, "app/Http/Controller.php")
    _touch(tmp_path, "resources/views/home.blade.php", "@include('nav')\n")
    _touch(tmp_path, "resources/js/app.js", "console.log(1)\n")

    scanned = list(scan_sources(tmp_path))

    assert [(item.relative_path, item.kind) for item in scanned] == [
        ("app/Http/Controller.php", SourceKind.PHP),
        ("resources/views/home.blade.php", SourceKind.BLADE),
        ("routes/web.php", SourceKind.PHP),
    ]
    assert scanned[0].path == tmp_path / "app/Http/Controller.php"


def test_stubs_only_when_enabled(tmp_path: Path) -> None:
    _touch(tmp_path, "app/Model.php")
    _touch(tmp_path, "stubs/controller.stub", "<?php\nclass {{ class }} {}\n")

    assert _found(tmp_path) == ["app/Model.php"]
    assert _found(tmp_path, include_stubs=True) == [
        "app/Model.php",
        "stubs/controller.stub",
    ]


def test_dependency_and_cache_directories_are_skipped(tmp_path: Path) -> None:
    _touch(tmp_path, "app/Model.php")
    _touch(tmp_path, "vendor/laravel/framework/helpers.php")
    _touch(tmp_path, "node_modules/pkg/stub.php")
    _touch(tmp_path, "storage/framework/views/cached.php")
    _touch(tmp_path, "bootstrap/cache/packages.php")
    _touch(tmp_path, "bootstrap/app.php")

    assert _found(tmp_path) == ["app/Model.php", "bootstrap/app.php"]


def test_skip_dirs_match_relative_paths_not_names(tmp_path: Path) -> None:
    _touch(tmp_path, "app/Model.php")
    _touch(tmp_path, "app/vendor/Adapter.php")
    _touch(tmp_path, "public/build/manifest.php")

    found = _found(tmp_path, skip_dirs=["vendor", "public/build/"])

    assert found == ["app/Model.php", "app/vendor/Adapter.php"]


def test_include_and_exclude_patterns(tmp_path: Path) -> None:
    _touch(tmp_path, "app/Model.php")
    _touch(tmp_path, "app/Legacy/Old.php")
    _touch(tmp_path, "routes/web.php")

    found = _found(
        tmp_path, include_patterns=["app/**"], exclude_patterns=["app/Legacy/**"]
    )

    assert found == ["app/Model.php"]


def test_root_gitignore_prunes_directories_and_files(tmp_path: Path) -> None:
    _touch(tmp_path, "app/Model.php")
    _touch(tmp_path, "app/Generated.php")
    _touch(tmp_path, "public/hot/index.php")
    (tmp_path / ".gitignore").write_text(
        "public/hot/\nGenerated.php\n", encoding="utf-8"
    )

    assert _found(tmp_path) == ["app/Model.php"]


def test_nested_gitignore_only_when_enabled(tmp_path: Path) -> None:
    _touch(tmp_path, "app/Model.php")
    _touch(tmp_path, "modules/shop/generated/Api.php")
    (tmp_path / "modules" / "shop" / ".gitignore").write_text(
        "generated/\n", encoding="utf-8"
    )

    assert "modules/shop/generated/Api.php" in _found(tmp_path)
    assert _found(tmp_path, nested_gitignore=True) == ["app/Model.php"]


def test_nested_gitignore_applies_only_to_its_subtree(tmp_path: Path) -> None:
    _touch(tmp_path, "app/Api.php")
    _touch(tmp_path, "modules/shop/Api.php")
    _touch(tmp_path, "modules/shop/Cart.php")
    (tmp_path / "modules" / "shop" / ".gitignore").write_text(
        "Api.php\n", encoding="utf-8"
    )

    assert _found(tmp_path, nested_gitignore=True) == [
        "app/Api.php",
        "modules/shop/Cart.php",
    ]


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_symlinked_dirs_and_files_are_not_followed(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _touch(repo_root, "app/Model.php")

    external_root = tmp_path / "external"
    _touch(external_root, "leak.php")

    (repo_root / "linked").symlink_to(external_root, target_is_directory=True)
    (repo_root / "app" / "Leak.php").symlink_to(external_root / "leak.php")

    assert _found(repo_root) == ["app/Model.php"]


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_symlinked_gitignore_is_ignored(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _touch(repo_root, "app/Model.php")

    external_root = tmp_path / "external"
    external_root.mkdir()
    (external_root / "outside.gitignore").write_text("*.php\n", encoding="utf-8")
    (repo_root / ".gitignore").symlink_to(external_root / "outside.gitignore")

    assert _found(repo_root) == ["app/Model.php"]
