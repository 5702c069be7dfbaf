"""
報告產生流程

Result Loader → 統計 → 版面配置 → PDF 輸出，單執行緒、一次跑完。
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from config.config import ReportSettings
from report.attachments import link_screenshots
from report.layout import ReportMeta, compose
from report.loader import load_results
from report.renderer import ReportlabRenderer
from report.summary import ReportSummary, summarize
from utils.logger import logger


@dataclass(frozen=True)
class ReportOutcome:
    output: Path
    summary: ReportSummary
    pages: int
    screenshots: int


def generate_report(
    settings: ReportSettings,
    renderer=None,
    now: datetime | None = None,
) -> ReportOutcome:
    """
    產生 PDF 報告。

    Args:
        settings: Config.report_settings() 的結果
        renderer: 具有 render(layout) 方法的物件，預設寫到 settings.output_file
        now: 報告產生時間（測試用）

    Raises:
        ConfigurationError / EmptyResultsError / MalformedResultError:
            讀取結果失敗，此時不會產生任何檔案
    """
    result_set = load_results(settings.results_dir, policy=settings.malformed_policy)
    summary = summarize(result_set.results)
    entries = link_screenshots(result_set, mode=settings.linking)

    meta = ReportMeta(
        title=settings.title,
        env_label=settings.env_label,
        generated_at=now or datetime.now(),
    )
    layout = compose(entries, summary, meta)
    logger.debug(f"[Pipeline] 版面完成: {len(layout.pages)} 頁")

    renderer = renderer or ReportlabRenderer(settings.output_file)
    output = renderer.render(layout)

    return ReportOutcome(
        output=Path(output),
        summary=summary,
        pages=len(layout.pages),
        screenshots=sum(1 for e in entries if e.screenshot is not None),
    )
