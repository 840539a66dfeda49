"""
main.py

Parameter Editor - Demo Application

Builds a ParamsEditor with:
- A "Simple" tab of hand-registered parameters
- A "File Settings" tab with path and directory choosers
- Tabs derived from an ExtendedConfig object by the reflection binder
- An HTML help tab

Usage:
    python main.py [params.xml]

When an XML file is given, its values are loaded before the dialog is shown
and the current values are saved back to it after APPLY.

Dependencies:
    pip install PyQt6 platformdirs tomli-w numpy

Environment:
    PARAMEDITOR_TRACE=1            enable trace output
    PARAMEDITOR_TRACE_FILE=path    mirror trace output to a file
"""

from __future__ import annotations

import sys

from PyQt6.QtCore import QDateTime
from PyQt6.QtGui import QColor, QFont
from PyQt6.QtWidgets import QApplication, QDialog

from binding import PropertyAdapter
from debug_trace import close_log, configure_logging, trace, trace_exception
from params import (
    BoolParam,
    ColorParam,
    ComboParam,
    DateTimeParam,
    DirParam,
    DoubleParam,
    FilePathParam,
    FontParam,
    IntParam,
    PasswordParam,
    StringParam,
    ValueSlot,
)
from params_editor import ParamsEditor
from sample_config import ExtendedConfig
from settings import get_settings

HELP_HTML = (
    "<h1>Parameters Editor Help</h1>"
    "<p>This is a test application for the <b>ParamsEditor</b> component.</p>"
    "<p>You can modify parameters in different tabs and see the results.</p>"
    "<ul>"
    "<li><b>DEF</b> - Reset to default value</li>"
    "<li><b>BROWSE</b> - Open file/directory dialog</li>"
    "<li><b>APPLY</b> - Save changes</li>"
    "<li><b>CANCEL</b> - Discard changes</li>"
    "</ul>"
)


def build_editor(values, config):
    """Populate a ParamsEditor with the demo parameters."""
    editor = ParamsEditor()

    general_tab = editor.add_tab("Simple")
    file_tab = editor.add_tab("File Settings")

    editor.add_param(general_tab, DoubleParam("Pi", values["pi"], 0.0, 10.0, 0.01, "Approximation of Pi"))
    editor.add_param(general_tab, IntParam("Answer", values["answer"], 0, 100, 1, "The answer to everything"))
    editor.add_param(general_tab, StringParam("Message", values["message"], "Default", tip="Test message"))
    editor.add_param(general_tab, ComboParam("Options", values["options"], values["option_index"], 0,
                                             "Select an option"))
    editor.add_param(general_tab, ColorParam("Color", values["color"], QColor("red"), "Background color"))
    editor.add_param(general_tab, BoolParam("Enable", values["enable"], False, "Enable feature"))
    editor.add_param(general_tab, FontParam("Font", values["font"], QFont("Arial", 10), "Text font"))
    editor.add_param(general_tab, PasswordParam("AdminPassword", values["password"], "",
                                                "Enter admin password", label="Admin Password"))
    editor.add_param(general_tab, DateTimeParam("Appointment", values["appointment"],
                                                QDateTime.currentDateTime(), "Meeting time",
                                                display_format="dd/MM/yyyy hh:mm"))

    editor.add_param(file_tab, FilePathParam("ConfigFile", values["config_file"], "config.ini",
                                             tip="Configuration file", label="Config File"))
    editor.add_param(file_tab, DirParam("DataDir", values["data_dir"], "data/",
                                        tip="Data directory", label="Data Dir"))

    PropertyAdapter.bind_object_to_editor(editor, config, "Class")
    editor.set_main_help(HELP_HTML)
    return editor


def report(values, config):
    """Trace the values after the dialog was accepted."""
    trace("=== Modified Values ===", "RESULT")
    trace(f"Pi: {values['pi'].value}", "RESULT")
    trace(f"Answer: {values['answer'].value}", "RESULT")
    trace(f"Message: {values['message'].value}", "RESULT")
    index = values["option_index"].value
    trace(f"Selected Option: {values['options'][index]} ({index})", "RESULT")
    trace(f"Color: {values['color'].value.name()}", "RESULT")
    trace(f"Config File: {values['config_file'].value}", "RESULT")
    trace(f"Data Dir: {values['data_dir'].value}", "RESULT")
    trace(f"Enabled: {values['enable'].value}", "RESULT")
    trace(f"Font: {values['font'].value.toString()}", "RESULT")
    trace(f"Password: {values['password'].value}", "RESULT")
    trace(f"Appointment: {values['appointment'].value.toString('dd/MM/yyyy hh:mm')}", "RESULT")
    trace(f"Class integerValue: {config.integerValue}", "RESULT")
    trace(f"Class colorValue: {config.colorValue.name()}", "RESULT")


def main():
    """Application entry point."""
    configure_logging()
    trace("Application starting", "MAIN")
    app = QApplication(sys.argv)
    xml_path = sys.argv[1] if len(sys.argv) > 1 else None

    settings_manager = get_settings()
    app.aboutToQuit.connect(close_log)

    values = {
        "pi": ValueSlot(3.1415),
        "answer": ValueSlot(42),
        "message": ValueSlot("Hello World"),
        "options": ["Option 1", "Option 2", "Option 3"],
        "option_index": ValueSlot(1),
        "color": ValueSlot(QColor("blue")),
        "config_file": ValueSlot("C:/test.txt"),
        "data_dir": ValueSlot("C:/Documents"),
        "enable": ValueSlot(True),
        "font": ValueSlot(QApplication.font()),
        "password": ValueSlot("secret"),
        "appointment": ValueSlot(QDateTime.currentDateTime()),
    }
    config = ExtendedConfig()

    trace("Creating editor", "MAIN")
    editor = build_editor(values, config)
    editor.setWindowTitle("Test Parameters Editor")

    if xml_path:
        if editor.load_from_file(xml_path):
            trace(f"Loaded {xml_path}", "MAIN")
        else:
            trace(f"Could not load {xml_path}, using defaults", "MAIN")

    result = editor.exec()

    if result == QDialog.DialogCode.Accepted:
        report(values, config)
        if xml_path:
            if editor.save_to_file(xml_path):
                settings_manager.settings.last_file = xml_path
                settings_manager.save()
            else:
                trace(f"Could not save {xml_path}", "ERROR")
    else:
        trace("Changes canceled", "RESULT")

    close_log()
    return 0


if __name__ == "__main__":
    # Set up global exception handler to catch crashes
    def excepthook(exc_type, exc_value, exc_tb):
        import traceback
        trace("UNCAUGHT EXCEPTION:", "CRASH")
        trace("".join(traceback.format_exception(exc_type, exc_value, exc_tb)), "CRASH")
        close_log()
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = excepthook

    try:
        sys.exit(main())
    except Exception as e:
        trace(f"FATAL: {type(e).__name__}: {e}", "CRASH")
        trace_exception("Fatal exception")
        close_log()
        raise
