import os
import stat
import subprocess
from unittest import mock

import pytest

from lumos import udev_setup
from lumos.udev_setup import (
    SetupError,
    fix_brightness_files,
    list_entries,
    os_pretty_name,
    rules_text,
    run_udev_setup,
    write_rules_file,
)


def _make_devices(base, names):
    base.mkdir(parents=True, exist_ok=True)
    for name in names:
        (base / name).mkdir()
        (base / name / "brightness").write_text("1\n")
        os.chmod(base / name / "brightness", 0o600)


def test_rules_text_header():
    text = rules_text(False)
    assert text.splitlines()[0] == "# 90-lumos.rules - auto-generated by lumos --setup"


def test_rules_text_without_leds():
    text = rules_text(False)
    assert 'SUBSYSTEM=="backlight"' in text
    assert "leds" not in text
    assert "/sys/class/backlight/%k/brightness" in text


def test_rules_text_with_leds_extends_base():
    base = rules_text(False)
    full = rules_text(True)
    assert full.startswith(base)
    assert 'SUBSYSTEM=="leds"' in full
    assert len(full.splitlines()) == len(base.splitlines()) + 1


def test_os_pretty_name_quoted(tmp_path):
    path = tmp_path / "os-release"
    path.write_text('NAME="Foo"\nPRETTY_NAME="Foo Linux 1.0"\n')
    assert os_pretty_name(path) == "Foo Linux 1.0"


def test_os_pretty_name_unquoted(tmp_path):
    path = tmp_path / "os-release"
    path.write_text("PRETTY_NAME=Bar\n")
    assert os_pretty_name(path) == "Bar"


def test_os_pretty_name_falls_back_to_uname(tmp_path):
    name = os_pretty_name(tmp_path / "missing")
    assert name.startswith(os.uname().sysname)
    assert os.uname().release in name


def test_list_entries_sorted_and_skips_hidden(tmp_path):
    for name in ("b", "a", ".hidden"):
        (tmp_path / name).mkdir()
    assert list_entries(tmp_path) == ["a", "b"]


def test_list_entries_missing_dir(tmp_path):
    assert list_entries(tmp_path / "none") == []


def test_write_rules_file_content_and_mode(tmp_path):
    path = tmp_path / "90-lumos.rules"
    write_rules_file(path, True)
    assert path.read_text() == rules_text(True)
    assert stat.S_IMODE(path.stat().st_mode) == 0o644


def test_write_rules_file_unwritable(tmp_path):
    with pytest.raises(SetupError, match="cannot open"):
        write_rules_file(tmp_path / "missing" / "rules", False)


def test_fix_brightness_files(tmp_path):
    _make_devices(tmp_path, ["intel_backlight", "acpi_video0"])
    (tmp_path / "empty").mkdir()
    assert fix_brightness_files(tmp_path, None) == 2
    mode = stat.S_IMODE((tmp_path / "acpi_video0" / "brightness").stat().st_mode)
    assert mode == 0o664


def test_fix_brightness_files_missing_base(tmp_path):
    assert fix_brightness_files(tmp_path / "none", None) == 0


def test_run_requires_root():
    with mock.patch("os.geteuid", return_value=1000):
        with pytest.raises(SetupError, match="must be run as root"):
            run_udev_setup()


def test_run_existing_rule(tmp_path, monkeypatch, capsys):
    existing = tmp_path / "etc.rules"
    existing.write_text("")
    monkeypatch.setattr(udev_setup, "UDEV_RULE_ETC", existing)
    monkeypatch.setattr(udev_setup, "UDEV_RULE_LIB", tmp_path / "lib.rules")
    with mock.patch("os.geteuid", return_value=0):
        run_udev_setup()
    out = capsys.readouterr().out
    assert f"Udev rule already exists at {existing}; nothing to do." in out


def test_run_full_setup(tmp_path, monkeypatch, capsys):
    rule = tmp_path / "etc.rules"
    backlight = tmp_path / "backlight"
    leds = tmp_path / "leds"
    _make_devices(backlight, ["intel_backlight"])
    _make_devices(leds, ["input0::capslock", "input0::numlock"])
    release = tmp_path / "os-release"
    release.write_text('PRETTY_NAME="Test OS"\n')
    monkeypatch.setattr(udev_setup, "UDEV_RULE_ETC", rule)
    monkeypatch.setattr(udev_setup, "UDEV_RULE_LIB", tmp_path / "lib.rules")
    monkeypatch.setattr(udev_setup, "BACKLIGHT_BASE", backlight)
    monkeypatch.setattr(udev_setup, "LEDS_BASE", leds)
    monkeypatch.setattr(udev_setup, "OS_RELEASE", release)
    done = subprocess.CompletedProcess(args=[], returncode=0)
    with mock.patch("os.geteuid", return_value=0), mock.patch(
        "subprocess.run", return_value=done
    ) as run, mock.patch("grp.getgrnam", side_effect=KeyError("video")):
        run_udev_setup()
    out = capsys.readouterr().out
    assert rule.read_text() == rules_text(True)
    assert "Reloading udev rules... done." in out
    assert " OS: Test OS" in out
    assert " Backlight interfaces (1): intel_backlight" in out
    assert " LED interfaces (2): input0::capslock input0::numlock" in out
    assert " Existing brightness files fixed: 3" in out
    assert run.call_count == 4


def test_run_reload_failure_reported(tmp_path, monkeypatch, capsys):
    rule = tmp_path / "etc.rules"
    monkeypatch.setattr(udev_setup, "UDEV_RULE_ETC", rule)
    monkeypatch.setattr(udev_setup, "UDEV_RULE_LIB", tmp_path / "lib.rules")
    monkeypatch.setattr(udev_setup, "BACKLIGHT_BASE", tmp_path / "none")
    monkeypatch.setattr(udev_setup, "LEDS_BASE", tmp_path / "none2")
    with mock.patch("os.geteuid", return_value=0), mock.patch(
        "subprocess.run", side_effect=FileNotFoundError("udevadm")
    ), mock.patch("grp.getgrnam", side_effect=KeyError("video")):
        run_udev_setup()
    captured = capsys.readouterr()
    assert "Failed to reload udev rules automatically." in captured.err
    assert rule.read_text() == rules_text(False)
    assert " Backlight interfaces (0):" in captured.out
    assert "LED interfaces" not in captured.out