"""
自訂 pytest 報告 plugin
在終端機輸出 E2E 測試摘要：通過率、失敗清單、耗時排行。
通過率與 PDF 報告使用同一套計算規則 (report.summary)。
在 e2e/conftest.py 匯入這些 hook 即可生效。
"""

import time
from collections import defaultdict

from report.summary import ReportSummary, format_duration
from utils.logger import logger


class TestMetrics:
    """收集測試指標"""

    __test__ = False

    def __init__(self):
        self.results: dict[str, list] = defaultdict(list)
        self.durations: dict[str, float] = {}
        self.start_time: float = 0

    def record(self, nodeid: str, outcome: str, duration: float) -> None:
        self.results[outcome].append(nodeid)
        self.durations[nodeid] = duration

    def summary(self) -> ReportSummary:
        return ReportSummary.from_counts(
            len(self.results.get("passed", [])),
            len(self.results.get("failed", [])),
            len(self.results.get("skipped", [])),
        )

    def slowest(self, count: int = 5) -> list[tuple[str, float]]:
        return sorted(self.durations.items(), key=lambda x: x[1], reverse=True)[:count]


_metrics = TestMetrics()


def build_summary_lines(metrics: TestMetrics, total_time: float) -> list[str]:
    """組出終端機摘要文字；沒有任何測試時回傳空 list"""
    summary = metrics.summary()
    if summary.total == 0:
        return []

    sep = "=" * 60
    lines = [
        "",
        sep,
        "  E2E 測試報告摘要",
        sep,
        "",
        f"  總計:   {summary.total} 個測試",
        f"  通過:   {summary.passed}",
        f"  失敗:   {summary.failed}",
        f"  跳過:   {summary.skipped}",
        f"  通過率: {summary.pass_rate}%",
        f"  總耗時: {total_time:.1f} 秒",
        "",
    ]

    failed = metrics.results.get("failed", [])
    if failed:
        lines.append("  --- 失敗測試 ---")
        for nodeid in failed:
            dur = metrics.durations.get(nodeid, 0)
            lines.append(f"    FAIL  {nodeid}  ({format_duration(dur * 1000)})")
        lines.append("")

    if metrics.durations:
        lines.append("  --- 最慢的測試 (Top 5) ---")
        for nodeid, dur in metrics.slowest():
            lines.append(f"    {format_duration(dur * 1000):>8}  {nodeid}")
        lines.append("")

    lines.append(sep)
    return lines


# ── pytest hooks ──

def pytest_sessionstart(session):
    """測試 session 開始"""
    _metrics.start_time = time.time()


def pytest_runtest_logreport(report):
    """每個測試結果回報；setup 階段被 skip 的測試也要算進去"""
    if report.when == "call" or (report.when == "setup" and report.skipped):
        _metrics.record(report.nodeid, report.outcome, report.duration)


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """在終端機輸出自訂測試摘要"""
    lines = build_summary_lines(_metrics, time.time() - _metrics.start_time)
    if not lines:
        return

    writer = terminalreporter
    writer.section("E2E Test Report", sep="=")
    for line in lines:
        writer.line(line)

    for line in lines:
        logger.info(line)
