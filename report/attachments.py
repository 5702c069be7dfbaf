"""
截圖附件對應與檢查

兩種對應方式：
- explicit（預設）：使用結果紀錄自己引用的附件檔名 (attachments[].source)
- positional：第 i 筆結果對應第 i 張截圖（依檔名排序）。
  結果與截圖之間沒有任何識別碼關聯，只要有測試沒截圖就會整批錯位，
  僅為相容舊行為保留。

無法解碼的截圖不是致命錯誤：該列照常輸出，只是不附圖片。
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from core.exceptions import AttachmentError
from report.models import ReportEntry, ResultSet
from utils.logger import logger


def read_image_size(path: Path) -> tuple[int, int]:
    """
    確認圖片可以解碼，回傳 (寬, 高)。

    Raises:
        AttachmentError: 檔案不存在、無法讀取或不是圖片
    """
    try:
        with Image.open(path) as img:
            img.verify()
            return img.size
    except (OSError, UnidentifiedImageError, SyntaxError, ValueError) as e:
        raise AttachmentError(str(path), e)


def link_screenshots(result_set: ResultSet, mode: str = "explicit") -> list[ReportEntry]:
    """
    為每筆結果找出要嵌入的截圖。

    Args:
        result_set: loader 輸出
        mode: "explicit" 或 "positional"

    Returns:
        與 result_set.results 同順序的 ReportEntry 列表
    """
    if mode == "positional":
        logger.warning("[Attachments] 使用 positional 對應，截圖可能與測試錯位")
        candidates = [
            result_set.attachments[i] if i < len(result_set.attachments) else None
            for i in range(len(result_set.results))
        ]
    else:
        candidates = [
            _first_referenced(result_set, result.attachments)
            for result in result_set.results
        ]

    entries = []
    for result, path in zip(result_set.results, candidates):
        entries.append(ReportEntry(result=result, screenshot=_usable(path)))
    return entries


def _first_referenced(result_set: ResultSet, sources: tuple[str, ...]) -> Path | None:
    for source in sources:
        path = result_set.results_dir / Path(source).name
        if path.is_file():
            return path
        logger.debug(f"[Attachments] 紀錄引用的附件不存在: {source}")
    return None


def _usable(path: Path | None) -> Path | None:
    if path is None:
        return None
    try:
        read_image_size(path)
    except AttachmentError as e:
        logger.debug(f"[Attachments] {e}")
        return None
    return path
