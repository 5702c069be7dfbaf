"""
統計與格式化

ReportSummary 每次產生報告時重新計算，不另外保存。
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from report.models import Status, TestResult

NAME_LIMIT = 55
ELLIPSIS = "..."


@dataclass(frozen=True)
class ReportSummary:
    """通過 / 失敗 / 跳過統計"""

    total: int
    passed: int
    failed: int
    skipped: int

    @property
    def pass_rate(self) -> int:
        return pass_rate(self.passed, self.total)

    @classmethod
    def from_counts(cls, passed: int, failed: int, skipped: int) -> "ReportSummary":
        return cls(
            total=passed + failed + skipped,
            passed=passed,
            failed=failed,
            skipped=skipped,
        )

    def as_rows(self) -> list[tuple[str, str]]:
        return [
            ("Total Tests", str(self.total)),
            ("Passed", str(self.passed)),
            ("Failed", str(self.failed)),
            ("Skipped", str(self.skipped)),
            ("Pass Rate", f"{self.pass_rate}%"),
        ]


def summarize(results: Iterable[TestResult]) -> ReportSummary:
    """計算整體統計"""
    counts = {status: 0 for status in Status}
    for result in results:
        counts[result.status] += 1
    return ReportSummary.from_counts(
        counts[Status.PASSED], counts[Status.FAILED], counts[Status.SKIPPED]
    )


def pass_rate(passed: int, total: int) -> int:
    """passed / total × 100，四捨五入為整數；total 為 0 時回傳 0"""
    if total <= 0:
        return 0
    # 整數運算做 round-half-up，避免 round() 的銀行家捨入
    return (passed * 200 + total) // (total * 2)


def format_duration(ms) -> str:
    """
    格式化耗時。

    None → "N/A"；小於 1000ms 顯示毫秒；其餘顯示秒數（兩位小數）。
    """
    if ms is None:
        return "N/A"
    if ms < 1000:
        return f"{int(ms)}ms"
    return f"{ms / 1000:.2f}s"


def truncate_name(name: str, limit: int = NAME_LIMIT) -> str:
    """超過 limit 個字元時保留前 limit-3 個字元並加上 ..."""
    if len(name) <= limit:
        return name
    return name[: limit - len(ELLIPSIS)] + ELLIPSIS


def display_id(index: int) -> str:
    """依序號產生顯示用 ID：1 → TC-001"""
    return f"TC-{index:03d}"
