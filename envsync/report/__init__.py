"""Drift report export and terminal rendering."""

from envsync.report.exporter import export_report_json, save_report
from envsync.report.renderer import ReportRenderer

__all__ = ["ReportRenderer", "export_report_json", "save_report"]
