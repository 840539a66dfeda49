"""
params_editor.py

Tabbed parameter editor dialog.

Features:
- Tab-based organization of parameters
- Apply/Cancel transaction: slots change only when the dialog is accepted
- XML import/export of the current control values
- Integrated HTML help tab

Usage:
    editor = ParamsEditor()
    tab = editor.add_tab("General")
    editor.add_param(tab, IntParam("Answer", slot, 0, 100, 1, "The answer"))
    editor.set_main_help("<h1>Help</h1>")
    if editor.exec() == QDialog.DialogCode.Accepted:
        print(slot.value)

    editor.save_to_file("settings.xml")
    editor.load_from_file("settings.xml")
"""

from __future__ import annotations

import enum
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QIcon
from PyQt6.QtWidgets import (
    QDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QSizePolicy,
    QTabWidget,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from binding.arena import BufferArena, WriteBack
from params.base import ParamBase
from settings import EditorSettings, get_settings

log = logging.getLogger(__name__)


class Outcome(enum.Enum):
    """Result of the editor's apply/cancel transaction."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass
class TabGroup:
    """An ordered, titled collection of parameters shown on one tab."""
    title: str
    page: QWidget
    rows: QVBoxLayout
    icon: Optional[QIcon] = None
    params: List[ParamBase] = field(default_factory=list)


class ParamsEditor(QDialog):
    """
    Parameter editor dialog with tabs, help and apply/cancel semantics.

    Parameters are applied in tab order, then registration order, when the
    dialog is accepted; write-backs registered by the property binder run
    afterwards in the order they were registered. Rejecting the dialog
    leaves every slot untouched.

    Args:
        settings: Layout, caption and format settings. Defaults to the
            ``editor`` section of the global settings.
        parent: Parent widget.
    """

    def __init__(self, settings: Optional[EditorSettings] = None, parent=None):
        super().__init__(parent)
        self.settings = settings if settings is not None else get_settings().settings.editor
        self.tab_groups: List[TabGroup] = []
        self.help_browser: Optional[QTextBrowser] = None
        self.outcome = Outcome.PENDING
        self.buffers = BufferArena()
        self.write_backs: List[WriteBack] = []

        captions = self.settings.captions
        self.setWindowTitle(captions.window_title)

        main_layout = QVBoxLayout(self)
        self.tabs = QTabWidget(self)
        main_layout.addWidget(self.tabs)

        btn_layout = QHBoxLayout()
        self.apply_button = QPushButton(captions.apply, self)
        self.cancel_button = QPushButton(captions.cancel, self)
        btn_layout.addStretch()
        btn_layout.addWidget(self.apply_button)
        btn_layout.addWidget(self.cancel_button)
        main_layout.addLayout(btn_layout)

        self.apply_button.clicked.connect(self.accept)
        self.cancel_button.clicked.connect(self.reject)

    # =========================================================================
    # Registration
    # =========================================================================

    def add_tab(self, title: str, icon: Optional[QIcon] = None) -> int:
        """
        Add a new, empty tab.

        Args:
            title: Tab title.
            icon: Optional tab icon.

        Returns:
            Index of the new tab, for use with :meth:`add_param`.
        """
        page = QWidget()
        rows = QVBoxLayout(page)
        rows.addStretch()

        scroll = QScrollArea()
        scroll.setWidget(page)
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.Shape.NoFrame)

        # Tab groups precede the help tab, so their indices match tab indices.
        index = len(self.tab_groups)
        if icon is not None:
            self.tabs.insertTab(index, scroll, icon, title)
        else:
            self.tabs.insertTab(index, scroll, title)
        self.tab_groups.append(TabGroup(title=title, page=page, rows=rows, icon=icon))
        return index

    def add_param(self, tab_index: int, param: ParamBase) -> None:
        """
        Add a parameter row to a tab.

        Out-of-range indices are ignored: the parameter is not registered
        and will not be applied or saved.

        Args:
            tab_index: Index returned by :meth:`add_tab`.
            param: The parameter to add.
        """
        if tab_index < 0 or tab_index >= len(self.tab_groups):
            log.debug("add_param: tab index %s out of range, %r ignored", tab_index, param)
            return

        group = self.tab_groups[tab_index]
        layout_cfg = self.settings.layout
        captions = self.settings.captions

        row = QHBoxLayout()
        row.addStretch()

        label = QLabel(param.label)
        label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        label.setFixedWidth(layout_cfg.label_width)
        label.setToolTip(param.tooltip)
        row.addWidget(label)

        if param.widget is not None:
            param.widget.setSizePolicy(QSizePolicy.Policy.Preferred, QSizePolicy.Policy.Fixed)
            param.widget.setMinimumWidth(layout_cfg.control_min_width)
            row.addWidget(param.widget)

        if param.has_browse:
            browse_btn = QPushButton(captions.browse)
            browse_btn.setFixedWidth(layout_cfg.browse_button_width)
            browse_btn.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
            browse_btn.clicked.connect(param.on_browse_clicked)
            row.addWidget(browse_btn)
            param.browse_button = browse_btn

        def_btn = QPushButton(captions.reset)
        def_btn.setFixedWidth(layout_cfg.reset_button_width)
        def_btn.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        def_btn.setToolTip(captions.reset_tooltip)
        def_btn.clicked.connect(param.reset)
        row.addWidget(def_btn)
        param.def_button = def_btn

        # Keep the trailing stretch last
        group.rows.insertLayout(group.rows.count() - 1, row)
        # The page owns the parameter from here on
        param.setParent(group.page)
        group.params.append(param)

    def register_write_back(self, write_back: WriteBack) -> None:
        """Register a buffer-to-property copy to run when the editor is accepted."""
        self.write_backs.append(write_back)

    def set_main_help(self, html_text: str) -> None:
        """
        Set the content of the Help tab, creating the tab on first use.

        Args:
            html_text: HTML-formatted help text.
        """
        if self.help_browser is None:
            self.help_browser = QTextBrowser(self)
            self.help_browser.setOpenExternalLinks(True)
            help_tab = QWidget()
            help_layout = QVBoxLayout(help_tab)
            help_layout.addWidget(self.help_browser)
            self.tabs.addTab(help_tab, self.settings.captions.help_tab)
        self.help_browser.setHtml(html_text)

    # =========================================================================
    # Accessors
    # =========================================================================

    def tab_count(self) -> int:
        """Number of tab groups, not counting the help tab."""
        return len(self.tab_groups)

    def params(self, tab_index: Optional[int] = None) -> List[ParamBase]:
        """Parameters of one tab, or of every tab in apply order."""
        if tab_index is not None:
            if 0 <= tab_index < len(self.tab_groups):
                return list(self.tab_groups[tab_index].params)
            return []
        return [p for group in self.tab_groups for p in group.params]

    def find_params(self, name: str) -> List[ParamBase]:
        """Every parameter named *name*; names are not required to be unique."""
        return [p for p in self.params() if p.name == name]

    def values(self) -> Dict[str, Any]:
        """Current control values by name; the first parameter wins on duplicates."""
        result: Dict[str, Any] = {}
        for p in self.params():
            result.setdefault(p.name, p.current_value())
        return result

    # =========================================================================
    # Display and transaction
    # =========================================================================

    def show(self, window_title: Optional[str] = None, icon: Optional[QIcon] = None):
        """
        Show the dialog non-modally.

        Args:
            window_title: Dialog title; the configured title when None.
            icon: Optional window icon.
        """
        self._prepare(window_title, icon)
        super().show()

    def exec(self) -> int:
        """Run the dialog modally and return the QDialog result code."""
        self._prepare(None, None)
        return super().exec()

    def _prepare(self, window_title: Optional[str], icon: Optional[QIcon]):
        if window_title is not None:
            self.setWindowTitle(window_title)
        if icon is not None:
            self.setWindowIcon(icon)
        if self.tabs.count() > 1:
            self.tabs.setCurrentIndex(0)
        self.outcome = Outcome.PENDING

    def accept(self):
        """Apply every parameter, run the write-backs, then close as accepted."""
        for group in self.tab_groups:
            for param in group.params:
                param.apply()
        for write_back in self.write_backs:
            write_back.run(self.buffers)
        self.outcome = Outcome.ACCEPTED
        log.debug("Editor accepted: %d parameters, %d write-backs",
                  len(self.params()), len(self.write_backs))
        super().accept()

    def reject(self):
        """Close without applying anything."""
        self.outcome = Outcome.REJECTED
        log.debug("Editor rejected")
        super().reject()

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_element(self) -> ET.Element:
        """Build the parameter document from the current control values."""
        root = ET.Element(self.settings.formats.root_tag)
        for group in self.tab_groups:
            for param in group.params:
                param.save(root)
        return root

    def save_to_string(self) -> str:
        """Render the parameter document as indented XML text."""
        tree = ET.ElementTree(self.to_element())
        ET.indent(tree)
        return ET.tostring(tree.getroot(), encoding="unicode", xml_declaration=True) + "\n"

    def save_to_file(self, filename) -> bool:
        """
        Save the current control values to an XML file.

        Args:
            filename: Destination path.

        Returns:
            True on success, False if the file could not be written.
        """
        text = self.save_to_string()
        try:
            with open(filename, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            log.warning("Cannot save parameters to %s: %s", filename, e)
            return False
        return True

    def _load_one(self, element: ET.Element) -> None:
        for group in self.tab_groups:
            for param in group.params:
                if param.name == element.tag:
                    param.load(element)

    def load_element(self, root: ET.Element) -> None:
        """
        Load every element of *root* (itself included) into the matching
        parameters. Every parameter whose name equals an element's tag
        receives that element; unknown tags are ignored.
        """
        for element in root.iter():
            self._load_one(element)

    def _load_stream(self, data, source: str) -> bool:
        """
        Scan *data* element by element, loading each one as soon as its
        start tag is read. On a parse error the scan stops; elements read
        before the error stay loaded.
        """
        parser = ET.XMLPullParser(events=("start",))
        try:
            parser.feed(data)
            for _event, element in parser.read_events():
                self._load_one(element)
            parser.close()
            for _event, element in parser.read_events():
                self._load_one(element)
        except ET.ParseError as e:
            log.warning("Stopped loading malformed parameter document %s: %s", source, e)
            return False
        return True

    def load_from_string(self, text: str) -> bool:
        """Load control values from XML text; False if the text is malformed."""
        return self._load_stream(text, "<string>")

    def load_from_file(self, filename) -> bool:
        """
        Load control values from an XML file.

        Args:
            filename: Source path.

        Returns:
            True on success, False if the file could not be read or is
            malformed. Elements before a parse error are still loaded.
        """
        try:
            with open(filename, "rb") as f:
                data = f.read()
        except OSError as e:
            log.warning("Cannot load parameters from %s: %s", filename, e)
            return False
        return self._load_stream(data, filename)
