"""Parameter catalog: apply/reset contract, XML attributes and lenient loading.

For each variant:
  1. Save a parameter holding one value.
  2. Load the element into a parameter of the same variant holding another.
  3. The second control now shows the first value; its slot is untouched.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET

import numpy as np
import pytest
from PyQt6.QtCore import QDate, QDateTime, QPoint, QRect, QSize, QTime
from PyQt6.QtGui import QColor, QFont

import params.text as text_module
from params import (
    BoolParam,
    ColorParam,
    ComboParam,
    DateParam,
    DateTimeParam,
    DirParam,
    DoubleParam,
    FilePathParam,
    FloatParam,
    FontParam,
    IntParam,
    InvalidParamName,
    PasswordParam,
    PointParam,
    RangeParam,
    RectParam,
    SizeParam,
    StringListParam,
    StringParam,
    TimeParam,
    ValueSlot,
    VariantParam,
)
from params.base import AttrSlot


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _element(param) -> ET.Element:
    root = ET.Element("Params")
    return param.save(root)


def _reload(param) -> ET.Element:
    """Serialize *param* and parse the text back, as a file round trip would."""
    root = ET.Element("Params")
    param.save(root)
    return ET.fromstring(ET.tostring(root, encoding="unicode"))[0]


_DT_A = QDateTime(QDate(2024, 3, 15), QTime(9, 30))
_DT_B = QDateTime(QDate(2001, 1, 1), QTime(23, 5))

# (factory(name, slot), first value, second value, comparable form)
VARIANTS = {
    "int": (lambda n, s: IntParam(n, s, 0, 100, 1), 42, 7, None),
    "double": (lambda n, s: DoubleParam(n, s, 0.0, 10.0, 0.01), 3.14, 1.5, None),
    "float": (lambda n, s: FloatParam(n, s, 0.0, 10.0, 0.5), np.float32(2.5), np.float32(0.5), float),
    "bool": (lambda n, s: BoolParam(n, s), True, False, None),
    "string": (lambda n, s: StringParam(n, s), "hello world", "other", None),
    "password": (lambda n, s: PasswordParam(n, s), "s3cret", "", None),
    "combo": (lambda n, s: ComboParam(n, ["a", "b", "c"], s), 2, 0, None),
    "color": (lambda n, s: ColorParam(n, s), QColor("#12ab34"), QColor("red"), lambda c: c.name()),
    "font": (lambda n, s: FontParam(n, s), QFont("Arial", 14), QFont("Courier", 8), lambda f: f.toString()),
    "file": (lambda n, s: FilePathParam(n, s), "/etc/app.ini", "x.txt", None),
    "dir": (lambda n, s: DirParam(n, s), "/var/data", "tmp", None),
    "date": (lambda n, s: DateParam(n, s), QDate(2024, 2, 29), QDate(1999, 12, 31), None),
    "time": (lambda n, s: TimeParam(n, s), QTime(13, 45, 10), QTime(1, 2, 3), None),
    "datetime": (lambda n, s: DateTimeParam(n, s), _DT_A, _DT_B, None),
    "range": (lambda n, s: RangeParam(n, s, 0.0, 10.0, 0.5, (0.0, 1.0)), (1.5, 8.0), (0.0, 1.0), None),
    "string_list": (lambda n, s: StringListParam(n, s), ["alpha", "beta"], ["x"], None),
    "point": (lambda n, s: PointParam(n, s), QPoint(-5, 12), QPoint(0, 0), None),
    "size": (lambda n, s: SizeParam(n, s), QSize(800, 600), QSize(1, 1), None),
    "rect": (lambda n, s: RectParam(n, s), QRect(10, 20, 300, 400), QRect(), None),
    "variant": (lambda n, s: VariantParam(n, s), "Initial Variant", "zzz", None),
}


def _same(a, b, key):
    if key is None:
        return a == b
    return key(a) == key(b)


# ---------------------------------------------------------------------------
# Round trip per variant
# ---------------------------------------------------------------------------

class TestRoundTrip:
    """save() then load() reproduces the control value for every variant."""

    @pytest.mark.parametrize("kind", sorted(VARIANTS))
    def test_save_load_restores_control(self, qapp, kind):
        factory, first, second, key = VARIANTS[kind]
        source = factory("Value", ValueSlot(first))
        target_slot = ValueSlot(second)
        target = factory("Value", target_slot)

        target.load(_reload(source))

        assert _same(target.current_value(), source.current_value(), key)
        # load touches the control only
        assert _same(target_slot.value, second, key)

    @pytest.mark.parametrize("kind", sorted(VARIANTS))
    def test_element_tag_is_name(self, qapp, kind):
        factory, first, _, _ = VARIANTS[kind]
        element = _element(factory("Some_Name", ValueSlot(first)))
        assert element.tag == "Some_Name"

    @pytest.mark.parametrize("kind", sorted(VARIANTS))
    def test_missing_attributes_leave_control(self, qapp, kind):
        factory, first, _, key = VARIANTS[kind]
        param = factory("Value", ValueSlot(first))
        before = param.current_value()
        param.load(ET.Element("Value"))
        assert _same(param.current_value(), before, key)


# ---------------------------------------------------------------------------
# Attribute formats
# ---------------------------------------------------------------------------

class TestAttributes:
    """Persisted attribute names and value formats."""

    def test_int_value(self, qapp):
        assert _element(IntParam("A", ValueSlot(42))).attrib == {"value": "42"}

    def test_float_six_decimals(self, qapp):
        p = FloatParam("F", ValueSlot(np.float32(1.5)), 0.0, 10.0, 0.1)
        assert _element(p).get("value") == "1.500000"

    def test_double_keeps_precision(self, qapp):
        p = DoubleParam("D", ValueSlot(0.125), 0.0, 1.0, 0.001)
        assert float(_element(p).get("value")) == pytest.approx(0.125)

    def test_bool_text(self, qapp):
        assert _element(BoolParam("B", ValueSlot(True))).get("value") == "true"
        assert _element(BoolParam("B", ValueSlot(False))).get("value") == "false"

    def test_combo_index(self, qapp):
        p = ComboParam("C", ["x", "y", "z"], ValueSlot(1))
        assert _element(p).attrib == {"index": "1"}

    def test_color_hex(self, qapp):
        p = ColorParam("Col", ValueSlot(QColor("blue")))
        assert _element(p).attrib == {"color": "#0000ff"}

    def test_path_attribute(self, qapp):
        assert _element(FilePathParam("F", ValueSlot("/a/b"))).attrib == {"path": "/a/b"}
        assert _element(DirParam("D", ValueSlot("/c"))).attrib == {"path": "/c"}

    def test_temporal_iso(self, qapp):
        assert _element(DateParam("D", ValueSlot(QDate(2024, 1, 5)))).get("value") == "2024-01-05"
        assert _element(TimeParam("T", ValueSlot(QTime(7, 8, 9)))).get("value") == "07:08:09"
        dt = QDateTime(QDate(2024, 1, 5), QTime(7, 8, 0))
        assert _element(DateTimeParam("DT", ValueSlot(dt))).get("value").startswith("2024-01-05T07:08")

    def test_range_min_max(self, qapp):
        p = RangeParam("R", ValueSlot((1.0, 2.0)), 0.0, 5.0, 0.5, (0.0, 5.0))
        attrs = _element(p).attrib
        assert float(attrs["min"]) == 1.0
        assert float(attrs["max"]) == 2.0

    def test_string_list_comma_joined(self, qapp):
        p = StringListParam("L", ValueSlot(["a", "b", "c"]))
        assert _element(p).get("value") == "a,b,c"

    def test_geometry(self, qapp):
        assert _element(PointParam("P", ValueSlot(QPoint(1, 2)))).attrib == {"x": "1", "y": "2"}
        assert _element(SizeParam("S", ValueSlot(QSize(3, 4)))).attrib == {"width": "3", "height": "4"}
        assert _element(RectParam("R", ValueSlot(QRect(1, 2, 3, 4)))).attrib == {
            "x": "1", "y": "2", "width": "3", "height": "4",
        }

    def test_save_reflects_control_not_slot(self, qapp):
        slot = ValueSlot(5)
        p = IntParam("A", slot, 0, 100)
        p.spin.setValue(9)
        assert _element(p).get("value") == "9"
        assert slot.value == 5


# ---------------------------------------------------------------------------
# Malformed input
# ---------------------------------------------------------------------------

class TestMalformedLoad:
    """Bad attribute values leave the control as it was."""

    def test_int_garbage(self, qapp):
        p = IntParam("A", ValueSlot(5), 0, 100)
        p.load(ET.Element("A", value="abc"))
        assert p.current_value() == 5

    def test_int_clamped(self, qapp):
        p = IntParam("A", ValueSlot(5), 0, 100)
        p.load(ET.Element("A", value="1000"))
        assert p.current_value() == 100

    def test_double_garbage(self, qapp):
        p = DoubleParam("D", ValueSlot(1.0), 0.0, 10.0)
        p.load(ET.Element("D", value="1.2.3"))
        assert p.current_value() == 1.0

    def test_bool_only_exact_true(self, qapp):
        p = BoolParam("B", ValueSlot(True))
        p.load(ET.Element("B", value="TRUE"))
        assert p.current_value() is False

    def test_combo_out_of_range(self, qapp):
        p = ComboParam("C", ["a", "b"], ValueSlot(1))
        p.load(ET.Element("C", index="5"))
        assert p.current_value() == 1
        p.load(ET.Element("C", index="-1"))
        assert p.current_value() == 1

    def test_color_invalid(self, qapp):
        p = ColorParam("C", ValueSlot(QColor("red")))
        p.load(ET.Element("C", color="not-a-color"))
        assert p.current_value().name() == "#ff0000"

    def test_date_invalid(self, qapp):
        p = DateParam("D", ValueSlot(QDate(2020, 5, 6)))
        p.load(ET.Element("D", value="31/31/2020"))
        assert p.current_value() == QDate(2020, 5, 6)

    def test_rect_partial(self, qapp):
        p = RectParam("R", ValueSlot(QRect(1, 2, 3, 4)))
        p.load(ET.Element("R", x="9", y="9", width="9"))
        assert p.current_value() == QRect(1, 2, 3, 4)

    def test_range_needs_both(self, qapp):
        p = RangeParam("R", ValueSlot((1.0, 2.0)), 0.0, 5.0, 0.5, (0.0, 5.0))
        p.load(ET.Element("R", min="3.0"))
        assert p.current_value() == (1.0, 2.0)


# ---------------------------------------------------------------------------
# apply / reset
# ---------------------------------------------------------------------------

class TestApplyReset:
    """apply() writes the slot; reset() restores the control only."""

    def test_apply_writes_slot(self, qapp):
        slot = ValueSlot(5)
        p = IntParam("A", slot, 0, 100)
        p.spin.setValue(77)
        assert slot.value == 5
        p.apply()
        assert slot.value == 77

    def test_reset_uses_initial_value(self, qapp):
        slot = ValueSlot(5)
        p = IntParam("A", slot, 0, 100)
        p.spin.setValue(77)
        p.reset()
        assert p.current_value() == 5
        assert slot.value == 5

    def test_reset_uses_explicit_default(self, qapp):
        slot = ValueSlot("typed")
        p = StringParam("S", slot, "Default")
        assert p.current_value() == "typed"
        p.reset()
        assert p.current_value() == "Default"
        assert slot.value == "typed"

    def test_reset_twice_is_idempotent(self, qapp):
        p = ColorParam("C", ValueSlot(QColor("blue")), QColor("red"))
        p.reset()
        first = p.current_value().name()
        p.reset()
        assert p.current_value().name() == first == "#ff0000"

    def test_combo_default_index(self, qapp):
        slot = ValueSlot(2)
        p = ComboParam("C", ["a", "b", "c"], slot, 0)
        p.reset()
        assert p.current_value() == 0
        assert p.current_text() == "a"

    def test_color_pick_does_not_touch_slot(self, qapp):
        slot = ValueSlot(QColor("blue"))
        p = ColorParam("C", slot)
        p.button.setColor(QColor("green"))
        assert slot.value.name() == "#0000ff"
        p.apply()
        assert slot.value.name() == QColor("green").name()

    def test_float_apply_is_float32(self, qapp):
        slot = ValueSlot(np.float32(1.0))
        p = FloatParam("F", slot, 0.0, 10.0, 0.5)
        p.spin.setValue(2.5)
        p.apply()
        assert isinstance(slot.value, np.float32)
        assert slot.value == np.float32(2.5)

    def test_string_list_apply(self, qapp):
        slot = ValueSlot(["a"])
        p = StringListParam("L", slot)
        p.edit.setText("x,y,,z")
        p.apply()
        assert slot.value == ["x", "y", "z"]

    def test_string_list_keeps_whitespace(self, qapp):
        slot = ValueSlot(["a ", " b"])
        p = StringListParam("L", slot)
        assert p.edit.text() == "a , b"
        p.apply()
        assert slot.value == ["a ", " b"]

        root = ET.Element("Params")
        p.save(root)
        other = StringListParam("L", ValueSlot([]))
        other.load(root.find("L"))
        assert other.current_value() == ["a ", " b"]

    def test_variant_apply_stores_text(self, qapp):
        slot = ValueSlot(12)
        p = VariantParam("V", slot)
        assert p.current_value() == "12"
        p.apply()
        assert slot.value == "12"

    def test_attr_slot(self, qapp):
        class Target:
            speed = 3

        t = Target()
        p = IntParam("speed", AttrSlot(t, "speed"), 0, 10)
        p.spin.setValue(8)
        p.apply()
        assert t.speed == 8


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------

class TestNames:
    """Names must be usable as XML tags; labels carry display text."""

    @pytest.mark.parametrize("name", ["Admin Password", "1abc", "", "a:b", "x<y"])
    def test_invalid_names_rejected(self, qapp, name):
        with pytest.raises(InvalidParamName):
            IntParam(name, ValueSlot(0))

    def test_invalid_name_is_value_error(self, qapp):
        with pytest.raises(ValueError):
            StringParam("has space", ValueSlot(""))

    def test_label_defaults_to_name(self, qapp):
        assert IntParam("Answer", ValueSlot(0)).label == "Answer"

    def test_label_override(self, qapp):
        p = PasswordParam("AdminPassword", ValueSlot(""), label="Admin Password")
        assert p.label == "Admin Password"
        assert _element(p).tag == "AdminPassword"


# ---------------------------------------------------------------------------
# Browse
# ---------------------------------------------------------------------------

class _FakeFileDialog:
    """Stands in for QFileDialog's static choosers."""
    result = ""
    seen = None

    @classmethod
    def getOpenFileName(cls, parent, caption, directory):
        cls.seen = directory
        return cls.result, ""

    @classmethod
    def getExistingDirectory(cls, parent, caption, directory):
        cls.seen = directory
        return cls.result


class TestBrowse:
    """Browse overwrites the path only when the chooser returns something."""

    @pytest.fixture(autouse=True)
    def fake_dialog(self, monkeypatch):
        _FakeFileDialog.result = ""
        _FakeFileDialog.seen = None
        monkeypatch.setattr(text_module, "QFileDialog", _FakeFileDialog)
        yield _FakeFileDialog

    def test_file_chosen(self, qapp, fake_dialog):
        p = FilePathParam("F", ValueSlot("/start/here.txt"))
        fake_dialog.result = "/picked/file.txt"
        p.on_browse_clicked()
        assert fake_dialog.seen == "/start/here.txt"
        assert p.current_value() == "/picked/file.txt"

    def test_file_cancelled(self, qapp, fake_dialog):
        p = FilePathParam("F", ValueSlot("/start/here.txt"))
        p.on_browse_clicked()
        assert p.current_value() == "/start/here.txt"

    def test_dir_chosen(self, qapp, fake_dialog):
        slot = ValueSlot("/old")
        p = DirParam("D", slot)
        fake_dialog.result = "/new/dir"
        p.on_browse_clicked()
        assert p.current_value() == "/new/dir"
        assert slot.value == "/old"

    def test_dir_cancelled(self, qapp, fake_dialog):
        p = DirParam("D", ValueSlot("/old"))
        p.on_browse_clicked()
        assert p.current_value() == "/old"
