"""
debug_trace.py

Application-level trace output for the parameter editor.
Enable by setting the PARAMEDITOR_TRACE environment variable (any value
other than "0"); set PARAMEDITOR_TRACE_FILE to mirror lines into a file.
"""

import logging
import os
import sys
import traceback

# Set to True to enable debug tracing
DEBUG_TRACE = os.environ.get("PARAMEDITOR_TRACE", "0") not in ("", "0")

# Log file (None for stderr only)
LOG_FILE = os.environ.get("PARAMEDITOR_TRACE_FILE") or None

_LINE_FORMAT = "[%(asctime)s.%(msecs)03d] [%(category)s] %(message)s"

_trace_log = logging.getLogger("parameditor.trace")
_trace_log.setLevel(logging.INFO)
_file_handler = None


class _CategoryFilter(logging.Filter):
    """Give records from other loggers a category derived from their level."""

    def filter(self, record):
        if not hasattr(record, "category"):
            record.category = record.levelname
        return True


def configure_logging(level=None):
    """Route every module logger through the trace line format.

    Called once by the application entry point. Library code only creates
    module loggers and never configures handlers.
    """
    global _file_handler
    if level is None:
        level = logging.DEBUG if DEBUG_TRACE else logging.WARNING

    formatter = logging.Formatter(_LINE_FORMAT, datefmt="%H:%M:%S")
    root = logging.getLogger()
    root.setLevel(level)

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(formatter)
    stream.addFilter(_CategoryFilter())
    root.addHandler(stream)

    if LOG_FILE and _file_handler is None:
        try:
            _file_handler = logging.FileHandler(LOG_FILE, mode="w", encoding="utf-8")
        except OSError as e:
            _trace_log.warning("Cannot open trace file %s: %s", LOG_FILE, e,
                               extra={"category": "TRACE"})
        else:
            _file_handler.setFormatter(formatter)
            _file_handler.addFilter(_CategoryFilter())
            root.addHandler(_file_handler)


def trace(msg: str, category: str = "INFO"):
    """Emit a trace line under *category*."""
    if not DEBUG_TRACE and category not in ("ERROR", "CRASH", "RESULT"):
        return
    level = logging.ERROR if category in ("ERROR", "CRASH") else logging.INFO
    _trace_log.log(level, msg, extra={"category": category})


def trace_exception(msg: str = "Exception"):
    """Print exception info."""
    trace(f"{msg}: {traceback.format_exc()}", "ERROR")


def close_log():
    """Close log file."""
    global _file_handler
    if _file_handler is not None:
        logging.getLogger().removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
