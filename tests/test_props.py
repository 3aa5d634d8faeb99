from __future__ import annotations

from oomph_ide.lib.props import render_props, write_props


def test_output_independent_of_insertion_order() -> None:
    a = {"b.key": "2", "a.key": "1", "c.key": "3"}
    b = {"c.key": "3", "a.key": "1", "b.key": "2"}
    assert render_props(a) == render_props(b)
    assert render_props(a) == "a.key=1\nb.key=2\nc.key=3\n"


def test_escaping() -> None:
    out = render_props({"my key": "a=b:c", "path": "C:\\jdk", "lead": " x y"})
    assert "my\\ key=a\\=b\\:c\n" in out
    assert "path=C\\:\\\\jdk\n" in out
    assert "lead=\\ x y\n" in out


def test_non_ascii_is_unicode_escaped() -> None:
    assert render_props({"name": "caf\u00e9"}) == "name=caf\\u00E9\n"


def test_empty_mapping() -> None:
    assert render_props({}) == ""


def test_write_props_creates_parents(tmp_path) -> None:
    target = tmp_path / ".metadata/.plugins/x/.settings/org.example.prefs"
    write_props(target, {"k": "v"})
    assert target.read_text(encoding="latin-1") == "k=v\n"


def test_astral_characters_become_surrogate_pairs() -> None:
    assert render_props({"k": "\U0001F600"}) == "k=\\uD83D\\uDE00\n"
