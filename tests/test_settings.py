"""SettingsManager TOML persistence and the lenient parsing helpers in utils."""
from __future__ import annotations

import datetime

import pytest
from PyQt6.QtCore import QDate, QDateTime, QTime
from PyQt6.QtGui import QColor

from settings import AppSettings, SettingsManager
from utils import (
    INT32_MAX,
    clamp_int32,
    join_list,
    parse_bool,
    parse_color,
    parse_float,
    parse_int,
    qdate_to_py,
    qdatetime_to_py,
    qtime_to_py,
    split_list,
    to_qdate,
    to_qdatetime,
    to_qtime,
)


# ---------------------------------------------------------------------------
# SettingsManager
# ---------------------------------------------------------------------------

class TestSettingsManager:
    """Defaults, round trip and corrupted files."""

    def test_defaults_without_file(self, tmp_path):
        sm = SettingsManager(settings_dir=tmp_path)
        assert sm.settings == AppSettings()
        assert sm.settings.editor.layout.label_width == 120
        assert sm.settings.editor.captions.reset == "DEF"
        assert sm.settings.editor.formats.root_tag == "Params"
        assert sm.get_settings_path() == tmp_path / "settings.toml"

    def test_round_trip(self, tmp_path):
        sm = SettingsManager(settings_dir=tmp_path)
        sm.settings.last_file = "/data/params.xml"
        sm.settings.editor.layout.label_width = 150
        sm.settings.editor.captions.apply = "OK"
        sm.settings.editor.formats.date = "yyyy-MM-dd"
        sm.save()

        reloaded = SettingsManager(settings_dir=tmp_path)
        assert reloaded.settings == sm.settings

    def test_save_creates_directory(self, tmp_path):
        target = tmp_path / "nested" / "dir"
        sm = SettingsManager(settings_dir=target)
        sm.save()
        assert (target / "settings.toml").exists()

    def test_corrupted_file_uses_defaults(self, tmp_path):
        (tmp_path / "settings.toml").write_text("this is = = not toml [", encoding="utf-8")
        sm = SettingsManager(settings_dir=tmp_path)
        assert sm.settings == AppSettings()

    def test_wrong_types_ignored(self, tmp_path):
        (tmp_path / "settings.toml").write_text(
            '[editor.layout]\nlabel_width = "wide"\ncontrol_min_width = 250\n'
            '[editor.captions]\napply = 5\ncancel = "Abort"\n',
            encoding="utf-8",
        )
        sm = SettingsManager(settings_dir=tmp_path)
        assert sm.settings.editor.layout.label_width == 120
        assert sm.settings.editor.layout.control_min_width == 250
        assert sm.settings.editor.captions.apply == "APPLY"
        assert sm.settings.editor.captions.cancel == "Abort"

    def test_to_toml(self, tmp_path):
        text = SettingsManager(settings_dir=tmp_path).to_toml()
        assert "label_width = 120" in text
        assert 'root_tag = "Params"' in text


# ---------------------------------------------------------------------------
# utils
# ---------------------------------------------------------------------------

class TestParsing:
    """Parse helpers return None instead of raising."""

    @pytest.mark.parametrize("text, expected", [
        ("42", 42),
        (" -7 ", -7),
        ("3.0", 3),
        ("abc", None),
        ("", None),
        (None, None),
        ("nan", None),
        ("inf", None),
    ])
    def test_parse_int(self, text, expected):
        assert parse_int(text) == expected

    @pytest.mark.parametrize("text, expected", [
        ("1.5", 1.5),
        ("-2", -2.0),
        ("1e3", 1000.0),
        ("x", None),
        (None, None),
        ("nan", None),
    ])
    def test_parse_float(self, text, expected):
        assert parse_float(text) == expected

    def test_parse_bool(self):
        assert parse_bool("true") is True
        assert parse_bool("false") is False
        assert parse_bool("yes") is False
        assert parse_bool(None) is None

    def test_parse_color(self, qapp):
        assert parse_color("#ff0000").name() == "#ff0000"
        assert parse_color("blue").name() == "#0000ff"
        assert parse_color("nope") is None
        assert parse_color("") is None

    def test_clamp_int32(self):
        assert clamp_int32(2 ** 40) == INT32_MAX
        assert clamp_int32(5) == 5

    def test_lists(self):
        assert join_list(["a", "b"]) == "a,b"
        assert split_list("a,b,,c") == ["a", "b", "c"]
        assert split_list("a, b ") == ["a", " b "]
        assert split_list("") == []


class TestTemporalConversion:
    """Python date/time values and their Qt counterparts."""

    def test_date(self):
        q = to_qdate(datetime.date(2021, 4, 5))
        assert q == QDate(2021, 4, 5)
        assert qdate_to_py(q) == datetime.date(2021, 4, 5)

    def test_time(self):
        q = to_qtime(datetime.time(10, 11, 12, 13000))
        assert q == QTime(10, 11, 12, 13)
        assert qtime_to_py(q) == datetime.time(10, 11, 12, 13000)

    def test_datetime(self):
        value = datetime.datetime(2021, 4, 5, 6, 7, 8)
        q = to_qdatetime(value)
        assert q == QDateTime(QDate(2021, 4, 5), QTime(6, 7, 8))
        assert qdatetime_to_py(q) == value

    def test_invalid(self):
        assert qdate_to_py(QDate()) is None
        assert not to_qdate("nonsense").isValid()

    def test_qt_values_copied(self):
        original = QDate(2000, 1, 1)
        assert to_qdate(original) == original
        assert to_qdate(original) is not original


def test_color_equality_helper(qapp):
    assert QColor("#00ff00") == parse_color("#00ff00")
