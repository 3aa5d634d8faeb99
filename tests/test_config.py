from __future__ import annotations

import json

import pytest

from oomph_ide.config import DEFAULT_SETUP_APPLICATION, ConfigError, IdeConfig, load_config

CONFIG_YAML = """\
name: Acme IDE
perspective: org.eclipse.pde.ui.PDEPerspective
ide_dir: build/acme-ide
icon: images/icon.png
p2:
  repos:
    - https://download.eclipse.org/eclipse/updates/4.33/
    - local-repo
  ius: [org.eclipse.platform.ide]
  features: [org.eclipse.egit]
  director: tools/eclipse/eclipse
projects:
  - proj-a
eclipse_ini:
  args:
    -clearPersistedState: "true"
  vmargs: [-Xmx2g]
workspace_props:
  .metadata/x.prefs:
    a: 1
jdt:
  compiler_compliance: "11"
  installed_jres:
    - version: "11.0.2"
      location: /opt/jdk-11
      default: true
      execution_environments: [JavaSE-11]
setup:
  application: org.example.setup
  actions:
    - application: org.example.indexer
      args: [--all]
"""


def test_load_yaml(tmp_path, project_dir) -> None:
    cfg_path = tmp_path / "oomph-ide.yaml"
    cfg_path.write_text(CONFIG_YAML, encoding="utf-8")

    cfg = load_config(cfg_path)
    base = tmp_path.resolve()
    assert cfg.name == "Acme IDE"
    assert cfg.perspective == "org.eclipse.pde.ui.PDEPerspective"
    assert cfg.ide_dir == base / "build/acme-ide"
    assert cfg.icon == base / "images/icon.png"
    assert cfg.splash is None
    assert cfg.repos == [
        "https://download.eclipse.org/eclipse/updates/4.33/",
        str(base / "local-repo"),
    ]
    assert cfg.features == ["org.eclipse.egit"]
    assert cfg.director == str(base / "tools/eclipse/eclipse")
    assert cfg.projects == [(project_dir / ".project").resolve()]
    assert cfg.eclipse_ini_args == {"-clearPersistedState": "true"}
    assert cfg.eclipse_ini_vmargs == ["-Xmx2g"]
    assert cfg.workspace_props == {".metadata/x.prefs": {"a": "1"}}
    [jre] = cfg.installed_jres()
    assert jre.version == "11.0.2"
    assert jre.mark_default is True
    assert jre.execution_environments == ("JavaSE-11",)
    assert cfg.setup_application == "org.example.setup"
    assert cfg.extra_actions == [{"application": "org.example.indexer", "args": ["--all"]}]


def test_load_json(tmp_path) -> None:
    cfg_path = tmp_path / "ide.json"
    cfg_path.write_text(json.dumps({"name": "J", "p2": {"ius": ["a"]}}), encoding="utf-8")
    cfg = load_config(cfg_path)
    assert cfg.name == "J"
    assert cfg.ius == ["a"]


def test_defaults(tmp_path) -> None:
    cfg = IdeConfig(raw={}, base_dir=tmp_path)
    assert cfg.name == tmp_path.resolve().name
    assert cfg.perspective is None
    assert cfg.projects == []
    assert cfg.jdt is None
    assert cfg.director is None
    assert cfg.setup_application == DEFAULT_SETUP_APPLICATION
    assert cfg.bundle_pool.name == "shared-bundles"


def test_bare_director_name_is_kept(tmp_path) -> None:
    cfg = IdeConfig(raw={"p2": {"director": "eclipse"}}, base_dir=tmp_path)
    assert cfg.director == "eclipse"


def test_project_must_be_dot_project(tmp_path) -> None:
    (tmp_path / "pom.xml").write_text("", encoding="utf-8")
    cfg = IdeConfig(raw={"projects": ["pom.xml"]}, base_dir=tmp_path)
    with pytest.raises(ConfigError):
        cfg.projects


def test_projects_from_scans_recursively(tmp_path) -> None:
    for name in ["a", "nested/b"]:
        d = tmp_path / "src" / name
        d.mkdir(parents=True)
        (d / ".project").write_text("", encoding="utf-8")
    cfg = IdeConfig(raw={"projects_from": ["src"]}, base_dir=tmp_path)
    assert [p.parent.name for p in cfg.projects] == ["a", "b"]


@pytest.mark.parametrize(
    "raw, read",
    [
        ({"p2": ["not", "a", "mapping"]}, lambda c: c.ius),
        ({"jdt": {"installed_jres": [{"version": "8"}]}}, lambda c: c.installed_jres()),
        ({"setup": {"actions": [{"args": ["x"]}]}}, lambda c: c.extra_actions),
        ({"workspace_props": {"x.prefs": "nope"}}, lambda c: c.workspace_props),
    ],
)
def test_malformed_sections(tmp_path, raw, read) -> None:
    cfg = IdeConfig(raw=raw, base_dir=tmp_path)
    with pytest.raises(ConfigError):
        read(cfg)


def test_rejects_non_mapping_document(tmp_path) -> None:
    cfg_path = tmp_path / "oomph-ide.yaml"
    cfg_path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(cfg_path)


def test_rejects_unknown_extension(tmp_path) -> None:
    cfg_path = tmp_path / "oomph-ide.toml"
    cfg_path.write_text("", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(cfg_path)


def test_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")
