"""
Report Layout — 純函式版面配置

compose() 只產生不可變的繪圖指令（Rect / Text / Line / Image），
不碰檔案、不碰 PDF 物件；實際輸出交給 report.renderer。
座標系統：左上角為原點、y 向下遞增，單位為 point。

版面：
    第 1 頁   標題帶、三個統計方塊、測試列表開頭
    第 2..n 頁 測試列表（每列後接截圖）
    最後一頁  Test Summary 摘要頁
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from report.models import ReportEntry, Status
from report.summary import ReportSummary, display_id, format_duration, truncate_name

# A4 (point)
PAGE_WIDTH = 595.28
PAGE_HEIGHT = 841.89
MARGIN = 50

# 剩餘空間門檻：游標超過 page_height - 門檻 就換頁
ROW_THRESHOLD = 200
IMAGE_THRESHOLD = 220

ROW_HEIGHT = 30
ROW_ADVANCE = 40
IMAGE_HEIGHT = 160
IMAGE_ADVANCE = 170
ENTRY_GAP = 15

TILE_WIDTH = 150
TILE_HEIGHT = 80
TILE_GAP = 20
BADGE_WIDTH = 65

COLORS = {
    "primary": "#059669",
    "success": "#10b981",
    "failed": "#ef4444",
    "skipped": "#f59e0b",
    "text": "#1f2937",
    "muted": "#6b7280",
    "footer": "#9ca3af",
    "light_gray": "#f3f4f6",
    "white": "#ffffff",
}

STATUS_COLORS = {
    Status.PASSED: COLORS["success"],
    Status.FAILED: COLORS["failed"],
    Status.SKIPPED: COLORS["skipped"],
}

FOOTER_TEXT = "Generated by E2E Testing Kit (pytest + Selenium + Allure)"


# ── 繪圖指令 ──

@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: str


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    size: float = 12
    bold: bool = False
    color: str = COLORS["text"]
    width: float | None = None
    align: str = "left"


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str = COLORS["primary"]


@dataclass(frozen=True)
class Image:
    path: Path
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Page:
    instructions: tuple = ()


@dataclass(frozen=True)
class DocumentLayout:
    title: str
    pages: tuple[Page, ...] = ()
    width: float = PAGE_WIDTH
    height: float = PAGE_HEIGHT

    def texts(self, page: int | None = None) -> list[str]:
        """取出所有（或指定頁）文字內容，方便檢查輸出"""
        pages = self.pages if page is None else (self.pages[page],)
        return [i.text for p in pages for i in p.instructions if isinstance(i, Text)]


@dataclass(frozen=True)
class ReportMeta:
    """報告標頭資訊"""

    title: str
    env_label: str
    generated_at: datetime = field(default_factory=datetime.now)


# ── 配色規則 ──

def pass_rate_color(rate: int) -> str:
    if rate == 100:
        return COLORS["success"]
    if rate >= 80:
        return COLORS["skipped"]
    return COLORS["failed"]


def failed_color(failed: int) -> str:
    return COLORS["failed"] if failed > 0 else COLORS["text"]


def format_date(moment: datetime) -> str:
    """Monday, October 19, 2026"""
    return f"{moment:%A}, {moment:%B} {moment.day}, {moment.year}"


# ── 版面配置 ──

class _Pages:
    """累積指令、處理換頁；只在 compose() 內部使用"""

    def __init__(self):
        self._done: list[Page] = []
        self._current: list = []

    def add(self, *instructions) -> None:
        self._current.extend(instructions)

    def new_page(self) -> None:
        self._done.append(Page(tuple(self._current)))
        self._current = []

    def finish(self) -> tuple[Page, ...]:
        return tuple(self._done) + (Page(tuple(self._current)),)


def compose(
    entries: list[ReportEntry],
    summary: ReportSummary,
    meta: ReportMeta,
    width: float = PAGE_WIDTH,
    height: float = PAGE_HEIGHT,
) -> DocumentLayout:
    """依結果列表產生整份文件的版面"""
    pages = _Pages()
    _header(pages, meta, width)
    _tiles(pages, summary, width)

    pages.add(
        Text(MARGIN, 260, "Test Results with Screenshots", size=18, bold=True),
        Line(MARGIN, 285, width - MARGIN, 285),
    )

    y = 300
    for index, entry in enumerate(entries, start=1):
        if y > height - ROW_THRESHOLD:
            pages.new_page()
            y = MARGIN
        pages.add(*_row(index, entry, y, width))
        y += ROW_ADVANCE

        if entry.screenshot is not None:
            if y > height - IMAGE_THRESHOLD:
                pages.new_page()
                y = MARGIN
            pages.add(Image(entry.screenshot, 70, y, width - 140, IMAGE_HEIGHT))
            y += IMAGE_ADVANCE

        y += ENTRY_GAP

    pages.new_page()
    _summary_page(pages, summary, meta, width, height)
    return DocumentLayout(title=meta.title, pages=pages.finish(), width=width, height=height)


def _header(pages: _Pages, meta: ReportMeta, width: float) -> None:
    pages.add(
        Rect(0, 0, width, 120, COLORS["primary"]),
        Text(MARGIN, 40, meta.title, size=28, bold=True, color=COLORS["white"]),
        Text(MARGIN, 75, f"Date: {format_date(meta.generated_at)}", color=COLORS["white"]),
        Text(MARGIN, 92, f"Environment: {meta.env_label}", color=COLORS["white"]),
    )


def _tiles(pages: _Pages, summary: ReportSummary, width: float) -> None:
    tiles = [
        (str(summary.passed), "Tests Passed", COLORS["success"]),
        (str(summary.failed), "Tests Failed", failed_color(summary.failed)),
        (f"{summary.pass_rate}%", "Pass Rate", pass_rate_color(summary.pass_rate)),
    ]
    top = 150
    start_x = (width - (3 * TILE_WIDTH + 2 * TILE_GAP)) / 2
    for i, (value, label, color) in enumerate(tiles):
        x = start_x + i * (TILE_WIDTH + TILE_GAP)
        pages.add(
            Rect(x, top, TILE_WIDTH, TILE_HEIGHT, COLORS["light_gray"]),
            Text(x, top + 15, value, size=36, bold=True, color=color,
                 width=TILE_WIDTH, align="center"),
            Text(x, top + 55, label, width=TILE_WIDTH, align="center"),
        )


def _row(index: int, entry: ReportEntry, y: float, width: float) -> list:
    result = entry.result
    badge_x = width - MARGIN - BADGE_WIDTH - 10
    return [
        Rect(MARGIN, y, width - 2 * MARGIN, ROW_HEIGHT, COLORS["light_gray"]),
        Text(60, y + 9, display_id(index), size=11, bold=True),
        Text(115, y + 9, truncate_name(result.name), size=11),
        Text(width - 180, y + 10, format_duration(result.duration_ms),
             size=9, color=COLORS["muted"]),
        Rect(badge_x, y + 5, BADGE_WIDTH, 20, STATUS_COLORS[result.status]),
        Text(badge_x, y + 10, result.status.value.upper(), size=9, bold=True,
             color=COLORS["white"], width=BADGE_WIDTH, align="center"),
    ]


def _summary_page(
    pages: _Pages,
    summary: ReportSummary,
    meta: ReportMeta,
    width: float,
    height: float,
) -> None:
    pages.add(
        Text(MARGIN, 50, "Test Summary", size=18, bold=True),
        Line(MARGIN, 75, width - MARGIN, 75),
    )
    rows = summary.as_rows() + [
        ("Report Generated", meta.generated_at.strftime("%Y-%m-%d %H:%M:%S")),
    ]
    for i, (label, value) in enumerate(rows):
        y = 100 + i * 30
        pages.add(
            Text(MARGIN, y, f"{label}:", bold=True),
            Text(200, y, value),
        )
    pages.add(
        Text(MARGIN, height - MARGIN, FOOTER_TEXT, size=10, color=COLORS["footer"],
             width=width - 2 * MARGIN, align="center"),
    )
