"""
report — 從 allure-results 產生 PDF 測試報告

用法：
    python -m report
    python -m report --results-dir allure-results --output test-report.pdf

    from report import generate_report
"""

from report.loader import load_results
from report.models import ResultSet, Status, TestResult
from report.pipeline import ReportOutcome, generate_report
from report.summary import ReportSummary, summarize

__all__ = [
    "load_results",
    "generate_report",
    "summarize",
    "ReportOutcome",
    "ReportSummary",
    "ResultSet",
    "Status",
    "TestResult",
]
