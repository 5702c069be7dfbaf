"""
報告資料模型

TestResult 由 loader 建立後即不可變；ResultSet 是單次報告產生期間
loader 擁有的結果清單，不跨次共用、也不另外持久化。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Status(str, Enum):
    """測試狀態"""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


# allure 狀態 → kit 狀態
STATUS_ALIASES = {
    "passed": Status.PASSED,
    "failed": Status.FAILED,
    "broken": Status.FAILED,
    "skipped": Status.SKIPPED,
    "unknown": Status.SKIPPED,
}


@dataclass(frozen=True)
class TestResult:
    """單一測試的結果紀錄"""

    __test__ = False  # 避免 pytest 把它當成測試類別收集

    name: str
    status: Status
    start: int | float | None = None
    stop: int | float | None = None
    attachments: tuple[str, ...] = ()
    source: str = ""

    @property
    def duration_ms(self) -> int | float | None:
        """stop − start；任一時間戳缺失時為 None"""
        if self.start is None or self.stop is None:
            return None
        return self.stop - self.start


@dataclass(frozen=True)
class ResultSet:
    """loader 的輸出：依名稱排序的結果 + 依檔名排序的截圖"""

    results_dir: Path
    results: tuple[TestResult, ...] = ()
    attachments: tuple[Path, ...] = ()
    skipped_files: tuple[str, ...] = field(default=())

    def __len__(self) -> int:
        return len(self.results)


@dataclass(frozen=True)
class ReportEntry:
    """一列報告：結果 + 已確認可解碼的截圖（可能沒有）"""

    result: TestResult
    screenshot: Path | None = None
