from __future__ import annotations

from pathlib import Path

from oomph_ide.lib.p2 import P2Model
from oomph_ide.state_store import STALE_TOKEN, fingerprint, has_token, snapshot, write_token


def _model(*ius: str) -> P2Model:
    m = P2Model()
    m.add_repo("https://download.eclipse.org/eclipse/updates/4.33/")
    m.add_ius(ius)
    return m


def test_snapshot_is_deterministic() -> None:
    projects = [Path("/b/.project"), Path("/a/.project")]
    s1 = snapshot(Path("/ide"), _model("x", "y"), projects)
    s2 = snapshot(Path("/ide"), _model("x", "y"), list(reversed(projects)))
    assert s1 == s2
    assert s1.splitlines()[0] == str(Path("/ide"))
    assert fingerprint(s1) == fingerprint(s2)


def test_missing_token_is_stale(tmp_path) -> None:
    assert has_token(tmp_path, STALE_TOKEN, "anything") is False


def test_same_state_is_clean(tmp_path) -> None:
    state = snapshot(tmp_path, _model("x"), [])
    write_token(tmp_path, STALE_TOKEN, state)
    assert has_token(tmp_path, STALE_TOKEN, state) is True


def test_changed_state_is_stale(tmp_path) -> None:
    write_token(tmp_path, STALE_TOKEN, snapshot(tmp_path, _model("x"), []))

    assert has_token(tmp_path, STALE_TOKEN, snapshot(tmp_path, _model("x", "y"), [])) is False
    assert has_token(tmp_path, STALE_TOKEN, snapshot(tmp_path, _model("x"), [Path("/p/.project")])) is False
    assert has_token(tmp_path, STALE_TOKEN, snapshot(tmp_path / "other", _model("x"), [])) is False


def test_malformed_token_is_stale(tmp_path) -> None:
    (tmp_path / STALE_TOKEN).write_text("not json", encoding="utf-8")
    assert has_token(tmp_path, STALE_TOKEN, "state") is False

    (tmp_path / STALE_TOKEN).write_text("[1, 2]", encoding="utf-8")
    assert has_token(tmp_path, STALE_TOKEN, "state") is False
