"""Reporting module for vouch run output."""

from vouch.reports.base import Reporter
from vouch.reports.junit import JUnitReporter
from vouch.reports.registry import (
    clear_reporter_registry,
    get_reporter_registry,
    register_builtin,
    reporter,
    resolve_reporter,
    resolve_reporters,
)
from vouch.reports.summary import SummaryReporter

register_builtin(SummaryReporter, alias="summary")
register_builtin(JUnitReporter, alias="junit")

__all__ = [
    "JUnitReporter",
    "Reporter",
    "SummaryReporter",
    "clear_reporter_registry",
    "get_reporter_registry",
    "register_builtin",
    "reporter",
    "resolve_reporter",
    "resolve_reporters",
]
