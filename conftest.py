"""
pytest 全域 fixtures

提供：
- make_png：產生真正可解碼的 PNG 截圖
- write_result：寫入一筆 allure 結果紀錄 (<uuid>-result.json)
- results_dir：空的 allure-results 目錄
- report_env：清掉會影響報告設定的環境變數
"""

import json
import uuid
from pathlib import Path

import pytest
from PIL import Image

REPORT_ENV_VARS = (
    "ALLURE_RESULTS_DIR",
    "OUTPUT_FILE",
    "REPORT_TITLE",
    "BASE_URL",
    "ATTACHMENT_LINKING",
    "MALFORMED_POLICY",
)


@pytest.fixture
def results_dir(tmp_path) -> Path:
    """空的 allure-results 目錄"""
    path = tmp_path / "allure-results"
    path.mkdir()
    return path


@pytest.fixture
def make_png():
    """在指定路徑產生 PNG 圖片"""
    def _make(path: Path, size: tuple[int, int] = (64, 40), color: str = "#10b981") -> Path:
        Image.new("RGB", size, color).save(path, format="PNG")
        return path
    return _make


@pytest.fixture
def write_result():
    """
    寫入一筆結果紀錄，回傳檔案路徑。

    用法：
        write_result(results_dir, "test_login", "passed", start=0, stop=500)
        write_result(results_dir, "test_x", "failed", attachments=["a-attachment.png"])
    """
    def _write(
        directory: Path,
        name: str,
        status: str = "passed",
        start: int | None = 1_700_000_000_000,
        stop: int | None = 1_700_000_000_500,
        attachments: list[str] | None = None,
        **extra,
    ) -> Path:
        record_id = uuid.uuid4().hex
        data = {"uuid": record_id, "name": name, "status": status, **extra}
        if start is not None:
            data["start"] = start
        if stop is not None:
            data["stop"] = stop
        if attachments:
            data["attachments"] = [
                {"name": "screenshot", "source": src, "type": "image/png"}
                for src in attachments
            ]
        path = directory / f"{record_id}-result.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def report_env(monkeypatch):
    """清除報告相關環境變數，讓測試從預設值開始"""
    for var in REPORT_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
