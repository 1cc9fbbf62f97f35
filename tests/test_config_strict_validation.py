from __future__ import annotations

from pathlib import Path

import pytest

from rules.config import (
    BladeTemplatesConfig,
    ConfigError,
    load_config,
    resolve_base_dir,
    resolve_report_path,
)


def _write_config(repo_root: Path, toml_content: str) -> None:
    (repo_root / "sniffs.toml").write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.include == []
    assert config.exclude == []
    assert config.report_file is None
    assert config.skip_dirs == [
        ".git",
        "vendor",
        "node_modules",
        "storage",
        "bootstrap/cache",
    ]
    assert not config.include_stubs
    assert config.missing_argument.functions == {}
    assert config.abort_message.enabled
    assert config.abort_message.functions == {
        "abort": 2,
        "abort_if": 3,
        "abort_unless": 3,
    }
    assert config.blade_templates.template_paths == ["resources/views"]
    assert config.blade_templates.template_extension == "blade.php"


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    config = load_config(tmp_path)

    assert config.nested_gitignore is False
    assert config.blade_templates.view_namespaces == {}


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "include = [")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_nested_key_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[blade_templates]
enabled = true
bogus = true
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "table",
    [
        "functions = { route = -1 }",
        'functions = { route = "3" }',
        "functions = { route = true }",
        'static_methods = { parse = 2 }',
    ],
)
def test_invalid_minimum_tables_rejected(tmp_path: Path, table: str) -> None:
    _write_config(tmp_path, f"[missing_argument]\n{table}\n")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_empty_template_extension_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, '[blade_templates]\ntemplate_extension = "."\n')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
include = ["app/**", "resources/**"]
exclude = ["app/Legacy/**"]
report_file = ".sniffs/findings.jsonl"
skip_dirs = ["vendor", "public/build"]
include_stubs = true

[missing_argument]
functions = { route = 3 }
static_methods = { "Carbon::parse" = 2 }

[abort_message]
enabled = false

[blade_templates]
base_dir = "web"
template_paths = ["resources/views", "modules/views"]
template_extension = ".blade.php"
view_namespaces = { known = "resources/views/vendor/known" }
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.include == ["app/**", "resources/**"]
    assert config.exclude == ["app/Legacy/**"]
    assert config.report_file == ".sniffs/findings.jsonl"
    assert config.skip_dirs == ["vendor", "public/build"]
    assert config.include_stubs is True
    assert config.missing_argument.functions == {"route": 3}
    assert config.missing_argument.static_methods == {"Carbon::parse": 2}
    assert config.abort_message.enabled is False
    assert config.blade_templates.base_dir == "web"
    assert config.blade_templates.template_paths == [
        "resources/views",
        "modules/views",
    ]
    assert config.blade_templates.template_extension == "blade.php"
    assert config.blade_templates.view_namespaces == {
        "known": "resources/views/vendor/known"
    }


def test_camel_case_aliases_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[missing_argument]
staticMethods = { "Carbon::parse" = 2 }

[blade_templates]
viewNamespaces = { known = "vendor/known" }
templatePaths = ["views"]
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.missing_argument.static_methods == {"Carbon::parse": 2}
    assert config.blade_templates.view_namespaces == {"known": "vendor/known"}
    assert config.blade_templates.template_paths == ["views"]


def test_resolve_report_path_rejects_escape(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    with pytest.raises(ConfigError, match="escapes the repository root"):
        resolve_report_path(repo_root, "../outside.jsonl")


def test_resolve_report_path_rejects_absolute(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="relative path"):
        resolve_report_path(tmp_path, str(tmp_path / "findings.jsonl"))


def test_resolve_report_path_within_root(tmp_path: Path) -> None:
    resolved = resolve_report_path(tmp_path, ".sniffs/findings.jsonl")

    assert resolved == (tmp_path / ".sniffs" / "findings.jsonl").resolve()


def test_resolve_base_dir(tmp_path: Path) -> None:
    assert resolve_base_dir(tmp_path, BladeTemplatesConfig()) == tmp_path.resolve()
    assert (
        resolve_base_dir(tmp_path, BladeTemplatesConfig(base_dir="web"))
        == (tmp_path / "web").resolve()
    )
