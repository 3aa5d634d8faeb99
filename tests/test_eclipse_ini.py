from __future__ import annotations

from oomph_ide.lib.eclipse_ini import EclipseIni

from .conftest import ECLIPSE_INI


def _ini() -> EclipseIni:
    return EclipseIni(ECLIPSE_INI.splitlines())


def test_set_replaces_existing_value() -> None:
    ini = _ini()
    ini.set("-showsplash", "dropins/oomph.ide.branding/splash.bmp")
    assert ini.get("-showsplash") == "dropins/oomph.ide.branding/splash.bmp"
    assert ini.lines.count("-showsplash") == 1


def test_set_inserts_before_vmargs() -> None:
    ini = _ini()
    ini.set("-data", "/ws")
    i = ini.lines.index("-data")
    assert ini.lines[i + 1] == "/ws"
    assert i + 1 < ini.lines.index("-vmargs")
    assert ini.vmargs() == ["-Xms256m", "-Xmx2048m"]


def test_vmarg_replaces_same_option() -> None:
    ini = _ini()
    ini.vmarg("-Xmx4g")
    ini.vmarg("-Dfoo=bar")
    ini.vmarg("-Dfoo=baz")
    assert ini.vmargs() == ["-Xms256m", "-Xmx4g", "-Dfoo=baz"]


def test_vmarg_without_vmargs_section() -> None:
    ini = EclipseIni(["-startup", "plugins/launcher.jar"])
    ini.vmarg("-Xmx1g")
    assert ini.lines[-2:] == ["-vmargs", "-Xmx1g"]


def test_set_flag_is_idempotent() -> None:
    ini = _ini()
    ini.set_flag("-clean")
    ini.set_flag("-clean")
    assert ini.lines.count("-clean") == 1
    assert ini.lines.index("-clean") < ini.lines.index("-vmargs")


def test_round_trip_through_file(tmp_path) -> None:
    path = tmp_path / "eclipse.ini"
    path.write_text(ECLIPSE_INI, encoding="utf-8")
    ini = EclipseIni.parse_from(path)
    ini.set("-product", "oomph.ide.branding.product")
    ini.write_to(path)
    again = EclipseIni.parse_from(path)
    assert again.get("-product") == "oomph.ide.branding.product"
    assert again.get("-startup") == "plugins/org.eclipse.equinox.launcher_1.6.800.jar"
