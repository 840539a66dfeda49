"""
sample_config.py

Example QObject exposing one property of each common Qt value type,
plus constant metadata properties picked up by the reflection binder.
"""

from PyQt6.QtCore import QDate, QObject, QPoint, QRect, QSize, QTime, pyqtProperty, pyqtSignal
from PyQt6.QtGui import QColor


class ExtendedConfig(QObject):
    """Configuration object used by the demo and the binder tests."""

    integerValueChanged = pyqtSignal()
    doubleValueChanged = pyqtSignal()
    stringValueChanged = pyqtSignal()
    colorValueChanged = pyqtSignal()
    stringListValueChanged = pyqtSignal()
    dateValueChanged = pyqtSignal()
    timeValueChanged = pyqtSignal()
    pointValueChanged = pyqtSignal()
    sizeValueChanged = pyqtSignal()
    rectValueChanged = pyqtSignal()
    boolValueChanged = pyqtSignal()
    variantValueChanged = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._integer_value = 42
        self._double_value = 3.14159
        self._string_value = "Default Text"
        self._color_value = QColor("blue")
        self._string_list_value = ["Item1", "Item2", "Item3"]
        self._date_value = QDate.currentDate()
        self._time_value = QTime.currentTime()
        self._point_value = QPoint(100, 200)
        self._size_value = QSize(800, 600)
        self._rect_value = QRect(10, 10, 200, 100)
        self._bool_value = True
        self._variant_value = "Initial Variant"

    # Metadata (constant)

    @pyqtProperty(str, constant=True)
    def integerValueDisplay(self):
        return "Integer Setting"

    @pyqtProperty(str, constant=True)
    def colorValueCategory(self):
        return "Appearance"

    # Editable properties

    @pyqtProperty(int, notify=integerValueChanged)
    def integerValue(self):
        return self._integer_value

    @integerValue.setter
    def integerValue(self, value):
        if self._integer_value != value:
            self._integer_value = value
            self.integerValueChanged.emit()

    @pyqtProperty(float, notify=doubleValueChanged)
    def doubleValue(self):
        return self._double_value

    @doubleValue.setter
    def doubleValue(self, value):
        if self._double_value != value:
            self._double_value = value
            self.doubleValueChanged.emit()

    @pyqtProperty(str, notify=stringValueChanged)
    def stringValue(self):
        return self._string_value

    @stringValue.setter
    def stringValue(self, value):
        if self._string_value != value:
            self._string_value = value
            self.stringValueChanged.emit()

    @pyqtProperty(QColor, notify=colorValueChanged)
    def colorValue(self):
        return self._color_value

    @colorValue.setter
    def colorValue(self, value):
        if self._color_value != value:
            self._color_value = QColor(value)
            self.colorValueChanged.emit()

    @pyqtProperty("QStringList", notify=stringListValueChanged)
    def stringListValue(self):
        return list(self._string_list_value)

    @stringListValue.setter
    def stringListValue(self, value):
        if self._string_list_value != list(value):
            self._string_list_value = list(value)
            self.stringListValueChanged.emit()

    @pyqtProperty(QDate, notify=dateValueChanged)
    def dateValue(self):
        return self._date_value

    @dateValue.setter
    def dateValue(self, value):
        if self._date_value != value:
            self._date_value = QDate(value)
            self.dateValueChanged.emit()

    @pyqtProperty(QTime, notify=timeValueChanged)
    def timeValue(self):
        return self._time_value

    @timeValue.setter
    def timeValue(self, value):
        if self._time_value != value:
            self._time_value = QTime(value)
            self.timeValueChanged.emit()

    @pyqtProperty(QPoint, notify=pointValueChanged)
    def pointValue(self):
        return self._point_value

    @pointValue.setter
    def pointValue(self, value):
        if self._point_value != value:
            self._point_value = QPoint(value)
            self.pointValueChanged.emit()

    @pyqtProperty(QSize, notify=sizeValueChanged)
    def sizeValue(self):
        return self._size_value

    @sizeValue.setter
    def sizeValue(self, value):
        if self._size_value != value:
            self._size_value = QSize(value)
            self.sizeValueChanged.emit()

    @pyqtProperty(QRect, notify=rectValueChanged)
    def rectValue(self):
        return self._rect_value

    @rectValue.setter
    def rectValue(self, value):
        if self._rect_value != value:
            self._rect_value = QRect(value)
            self.rectValueChanged.emit()

    @pyqtProperty(bool, notify=boolValueChanged)
    def boolValue(self):
        return self._bool_value

    @boolValue.setter
    def boolValue(self, value):
        if self._bool_value != value:
            self._bool_value = value
            self.boolValueChanged.emit()

    @pyqtProperty("QVariant", notify=variantValueChanged)
    def variantValue(self):
        return self._variant_value

    @variantValue.setter
    def variantValue(self, value):
        if self._variant_value != value:
            self._variant_value = value
            self.variantValueChanged.emit()
