"""
settings.py

Persistent settings management for the parameter editor.

Handles cross-platform settings storage using TOML format with platformdirs
for proper user config directory detection.

Settings file location:
    - Windows: %APPDATA%/parameditor/settings.toml
    - macOS: ~/Library/Application Support/parameditor/settings.toml
    - Linux: ~/.config/parameditor/settings.toml

Default values are documented in comments throughout this file.
If settings.toml is corrupted, these defaults will be used.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

# TOML reading - use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

APP_NAME = "parameditor"

log = logging.getLogger(__name__)

# Global settings manager instance (singleton)
_settings_manager: Optional["SettingsManager"] = None


def get_settings() -> "SettingsManager":
    """Get the global settings manager instance.

    Returns:
        The singleton SettingsManager instance.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager


# =============================================================================
# Editor Settings
# =============================================================================

@dataclass
class EditorLayoutSettings:
    """Row geometry for parameter rows.

    Defaults:
        label_width: 120
        control_min_width: 200
        reset_button_width: 40
        browse_button_width: 60
    """
    label_width: int = 120          # Default: 120 pixels
    control_min_width: int = 200    # Default: 200 pixels
    reset_button_width: int = 40    # Default: 40 pixels
    browse_button_width: int = 60   # Default: 60 pixels


@dataclass
class EditorCaptionSettings:
    """Button and tab captions.

    Defaults:
        apply: "APPLY"
        cancel: "CANCEL"
        reset: "DEF"
        reset_tooltip: "Set default value"
        browse: "BROWSE"
        help_tab: "Help"
        window_title: "Params Editor"
    """
    apply: str = "APPLY"
    cancel: str = "CANCEL"
    reset: str = "DEF"
    reset_tooltip: str = "Set default value"
    browse: str = "BROWSE"
    help_tab: str = "Help"
    window_title: str = "Params Editor"


@dataclass
class EditorFormatSettings:
    """Display formats for temporal controls and the XML root tag.

    Defaults:
        date: "dd/MM/yyyy"
        time: "hh:mm:ss"
        datetime: "dd/MM/yyyy hh:mm"
        root_tag: "Params"
    """
    date: str = "dd/MM/yyyy"
    time: str = "hh:mm:ss"
    datetime: str = "dd/MM/yyyy hh:mm"
    root_tag: str = "Params"


@dataclass
class EditorSettings:
    """All editor-related settings."""
    layout: EditorLayoutSettings = field(default_factory=EditorLayoutSettings)
    captions: EditorCaptionSettings = field(default_factory=EditorCaptionSettings)
    formats: EditorFormatSettings = field(default_factory=EditorFormatSettings)


# =============================================================================
# Main App Settings
# =============================================================================

@dataclass
class AppSettings:
    """Application settings with default values.

    Attributes:
        last_file: Parameter document the demo application loads on start.
        editor: Editor-related settings.
    """
    # Empty = nothing is loaded on start
    last_file: str = ""

    editor: EditorSettings = field(default_factory=EditorSettings)


# =============================================================================
# Settings Manager
# =============================================================================

def _merge_section(target: Any, data: Dict[str, Any]) -> None:
    """Copy known keys from a TOML table onto a settings dataclass.

    Values whose type does not match the default are ignored so a hand-edited
    file cannot put a string where an int is expected.
    """
    for f in fields(target):
        if f.name not in data:
            continue
        current = getattr(target, f.name)
        value = data[f.name]
        if isinstance(current, int) and not isinstance(current, bool):
            if isinstance(value, int) and not isinstance(value, bool):
                setattr(target, f.name, value)
        elif isinstance(value, type(current)):
            setattr(target, f.name, value)
        else:
            log.warning("Ignoring setting %s=%r (expected %s)",
                        f.name, value, type(current).__name__)


class SettingsManager:
    """Manages loading, saving, and accessing application settings.

    Settings are stored in a TOML file at the platform-appropriate location.
    If the settings file doesn't exist, defaults are used and the file is
    created on first save.

    Args:
        app_name: Application name used for the config directory.
        settings_dir: Overrides the platform config directory (tests).
    """

    def __init__(self, app_name: str = APP_NAME, settings_dir: Optional[Path] = None):
        if settings_dir is None:
            settings_dir = Path(platformdirs.user_config_dir(app_name))
        self.settings_dir = Path(settings_dir)
        self.settings_file = self.settings_dir / "settings.toml"
        self.settings = self.load()

    def load(self) -> AppSettings:
        """Load settings from the TOML file.

        Returns:
            AppSettings instance with values from file or defaults if file
            doesn't exist or is invalid.
        """
        if not self.settings_file.exists():
            return AppSettings()

        try:
            with open(self.settings_file, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            # If file is corrupted or invalid, return defaults
            log.warning("Could not read %s (%s); using defaults", self.settings_file, e)
            return AppSettings()

        return self._parse_toml(data)

    def _parse_toml(self, data: Dict[str, Any]) -> AppSettings:
        """Parse TOML data into AppSettings.

        Args:
            data: Parsed TOML dictionary.

        Returns:
            AppSettings instance populated from TOML data.
        """
        settings = AppSettings()

        general = data.get("general", {})
        if isinstance(general, dict):
            _merge_section(settings, {k: v for k, v in general.items() if k != "editor"})

        editor = data.get("editor", {})
        if isinstance(editor, dict):
            for section in ("layout", "captions", "formats"):
                table = editor.get(section)
                if isinstance(table, dict):
                    _merge_section(getattr(settings.editor, section), table)

        return settings

    def save(self) -> None:
        """Save current settings to the TOML file.

        Creates the settings directory if it doesn't exist.
        """
        self.settings_dir.mkdir(parents=True, exist_ok=True)

        data = self._to_toml_dict()

        with open(self.settings_file, "wb") as f:
            tomli_w.dump(data, f)

    def _to_toml_dict(self) -> Dict[str, Any]:
        """Convert settings to a TOML-compatible dictionary structure.

        Returns:
            Dictionary organized by TOML sections.
        """
        s = self.settings
        return {
            "general": {
                "last_file": s.last_file,
            },
            "editor": {
                "layout": {
                    "label_width": s.editor.layout.label_width,
                    "control_min_width": s.editor.layout.control_min_width,
                    "reset_button_width": s.editor.layout.reset_button_width,
                    "browse_button_width": s.editor.layout.browse_button_width,
                },
                "captions": {
                    "apply": s.editor.captions.apply,
                    "cancel": s.editor.captions.cancel,
                    "reset": s.editor.captions.reset,
                    "reset_tooltip": s.editor.captions.reset_tooltip,
                    "browse": s.editor.captions.browse,
                    "help_tab": s.editor.captions.help_tab,
                    "window_title": s.editor.captions.window_title,
                },
                "formats": {
                    "date": s.editor.formats.date,
                    "time": s.editor.formats.time,
                    "datetime": s.editor.formats.datetime,
                    "root_tag": s.editor.formats.root_tag,
                },
            },
        }

    def to_toml(self) -> str:
        """Convert current settings to a TOML-formatted string.

        Returns:
            TOML representation of the current settings.
        """
        data = self._to_toml_dict()
        return tomli_w.dumps(data)

    def get_settings_path(self) -> Path:
        """Get the path to the settings file.

        Returns:
            Path object pointing to the settings file location.
        """
        return self.settings_file
