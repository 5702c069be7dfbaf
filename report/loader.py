"""
Result Loader — 讀取 allure-results 目錄

目錄是扁平結構：
    <uuid>-result.json       每個測試一筆結果紀錄
    <uuid>-attachment.png    測試過程中的截圖

用法：
    from report.loader import load_results

    result_set = load_results("allure-results")
    result_set = load_results("allure-results", policy="skip")
"""

from __future__ import annotations

import json
from pathlib import Path

from core.exceptions import (
    EmptyResultsError,
    MalformedResultError,
    ResultsDirNotFoundError,
)
from report.models import STATUS_ALIASES, ResultSet, TestResult
from utils.logger import logger

RESULT_SUFFIX = "-result.json"
ATTACHMENT_SUFFIX = "-attachment.png"


def load_results(results_dir: str | Path, policy: str = "strict") -> ResultSet:
    """
    載入結果目錄。

    Args:
        results_dir: allure-results 目錄
        policy: 格式錯誤紀錄的處理方式，"strict" 直接失敗，"skip" 記錄警告後略過

    Returns:
        ResultSet（results 依名稱排序，attachments 依檔名排序）

    Raises:
        ResultsDirNotFoundError: 目錄不存在
        EmptyResultsError: 沒有任何有效紀錄
        MalformedResultError: strict 模式下遇到格式錯誤的紀錄
    """
    directory = Path(results_dir)
    if not directory.is_dir():
        raise ResultsDirNotFoundError(str(directory))

    results: list[TestResult] = []
    skipped: list[str] = []
    for path in sorted(directory.iterdir()):
        if not (path.is_file() and path.name.endswith(RESULT_SUFFIX)):
            continue
        try:
            results.append(parse_result_file(path))
        except MalformedResultError as e:
            if policy != "skip":
                raise
            logger.warning(f"[Loader] 略過格式錯誤的紀錄: {e}")
            skipped.append(path.name)

    if not results:
        raise EmptyResultsError(str(directory))

    results.sort(key=lambda r: (r.name, r.source))
    attachments = find_attachments(directory)
    logger.info(
        f"[Loader] 載入 {len(results)} 筆結果、{len(attachments)} 張截圖: {directory}"
    )
    return ResultSet(
        results_dir=directory,
        results=tuple(results),
        attachments=tuple(attachments),
        skipped_files=tuple(skipped),
    )


def find_attachments(directory: Path) -> list[Path]:
    """列出目錄下所有截圖附件（依檔名排序）"""
    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.name.endswith(ATTACHMENT_SUFFIX)
    )


def parse_result_file(path: Path) -> TestResult:
    """解析單一結果檔，格式錯誤時拋出 MalformedResultError"""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedResultError(path.name, f"{type(e).__name__}: {e}")
    return parse_result(data, source=path.name)


def parse_result(data, source: str = "") -> TestResult:
    """將一筆 allure 結果 dict 轉為 TestResult"""
    if not isinstance(data, dict):
        raise MalformedResultError(source, "紀錄不是 JSON 物件")

    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise MalformedResultError(source, "缺少 name")

    raw_status = data.get("status")
    status = STATUS_ALIASES.get(str(raw_status).lower()) if raw_status is not None else None
    if status is None:
        raise MalformedResultError(source, f"不支援的 status: {raw_status}")

    return TestResult(
        name=name,
        status=status,
        start=_timestamp(data.get("start")),
        stop=_timestamp(data.get("stop")),
        attachments=tuple(_collect_png_sources(data)),
        source=source,
    )


def _timestamp(value):
    # bool 是 int 的子類別，要先排除
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _collect_png_sources(node: dict) -> list[str]:
    """遞迴收集紀錄本身與各 step 引用的 PNG 附件檔名"""
    sources: list[str] = []
    for att in node.get("attachments") or []:
        if not isinstance(att, dict):
            continue
        source = att.get("source")
        if not isinstance(source, str):
            continue
        if att.get("type") == "image/png" or source.endswith(".png"):
            sources.append(source)
    for step in node.get("steps") or []:
        if isinstance(step, dict):
            sources.extend(_collect_png_sources(step))
    return sources
