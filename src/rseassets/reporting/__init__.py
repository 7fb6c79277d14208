"""Reporter backends for the rseassets CLI (plain, rich, json, silent)."""

from .base import (
    Reporter,
    TaskStatus,
    format_task_line,
    get_reporter,
    get_verbosity,
    set_reporter,
    set_verbosity,
    task,
)
from .jsonl import JsonLinesReporter, parse_summary
from .plain import PlainReporter
from .rich_reporter import RichReporter
from .silent import SilentReporter

REPORTER_CHOICES = ("plain", "rich", "json", "silent")

__all__ = [
    "Reporter",
    "TaskStatus",
    "format_task_line",
    "get_reporter",
    "set_reporter",
    "get_verbosity",
    "set_verbosity",
    "task",
    "parse_summary",
    "PlainReporter",
    "JsonLinesReporter",
    "SilentReporter",
    "RichReporter",
    "REPORTER_CHOICES",
]
