"""
設定管理模組
統一管理報告產生、結果目錄、瀏覽器 E2E 執行等設定。
支援透過環境變數覆蓋預設值，方便 CI/CD 整合。
"""

import os
from dataclasses import dataclass
from pathlib import Path

from core.exceptions import InvalidConfigError

BASE_DIR = Path(__file__).resolve().parent.parent
CONFIG_DIR = Path(__file__).resolve().parent

# 可接受的設定值
LINKING_MODES = ("explicit", "positional")
MALFORMED_POLICIES = ("strict", "skip")
BROWSERS = ("chrome", "firefox", "edge")

DEFAULT_TITLE = "E2E Test Report"
DEFAULT_OUTPUT = "test-report.pdf"
DEFAULT_BASE_URL = "http://localhost:3000"


# 無法解析成整數的環境變數 {名稱: 原始值}，在驗證瀏覽器設定時回報
_INVALID_INTS: dict[str, str] = {}


def _env_int(name: str, default: int) -> int:
    """讀取整數環境變數；不是整數時先用預設值，留待 validate() 回報"""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        _INVALID_INTS[name] = raw
        return default


@dataclass(frozen=True)
class ReportSettings:
    """單次報告產生所使用的設定快照"""

    results_dir: Path
    output_file: Path
    title: str
    env_label: str
    linking: str = "explicit"
    malformed_policy: str = "strict"


class Config:
    """框架全域設定"""

    # 報告
    RESULTS_DIR = Path(os.getenv("ALLURE_RESULTS_DIR", str(BASE_DIR / "allure-results")))
    OUTPUT_FILE = Path(os.getenv("OUTPUT_FILE", DEFAULT_OUTPUT))
    REPORT_TITLE = os.getenv("REPORT_TITLE", DEFAULT_TITLE)
    ATTACHMENT_LINKING = os.getenv("ATTACHMENT_LINKING", "explicit").lower()
    MALFORMED_POLICY = os.getenv("MALFORMED_POLICY", "strict").lower()

    # 受測環境
    BASE_URL = os.getenv("BASE_URL", DEFAULT_BASE_URL)

    # 瀏覽器
    BROWSER = os.getenv("BROWSER", "chrome").lower()
    HEADLESS = os.getenv("HEADLESS", "1").strip().lower() not in ("0", "false", "no")
    WINDOW_SIZE = (1280, 720)

    # 超時設定 (秒)
    IMPLICIT_WAIT = _env_int("IMPLICIT_WAIT", 5)
    EXPLICIT_WAIT = _env_int("EXPLICIT_WAIT", 10)
    PAGE_LOAD_TIMEOUT = _env_int("PAGE_LOAD_TIMEOUT", 30)

    # 截圖與日誌
    SCREENSHOT_DIR = BASE_DIR / "screenshots"
    REPORT_DIR = BASE_DIR / "reports"

    @classmethod
    def report_settings(cls, **overrides) -> ReportSettings:
        """
        讀取目前環境變數，組出報告設定。

        每次呼叫都重新讀取環境變數，CLI 參數（overrides）優先。
        值為 None 的 override 會被忽略。

        Raises:
            InvalidConfigError: linking / malformed_policy 值不合法
        """
        values = {
            "results_dir": Path(os.getenv("ALLURE_RESULTS_DIR", str(BASE_DIR / "allure-results"))),
            "output_file": Path(os.getenv("OUTPUT_FILE", DEFAULT_OUTPUT)),
            "title": os.getenv("REPORT_TITLE", DEFAULT_TITLE),
            "env_label": os.getenv("BASE_URL", DEFAULT_BASE_URL),
            "linking": os.getenv("ATTACHMENT_LINKING", "explicit").lower(),
            "malformed_policy": os.getenv("MALFORMED_POLICY", "strict").lower(),
        }
        for key, value in overrides.items():
            if value is None:
                continue
            if key in ("results_dir", "output_file"):
                value = Path(value)
            values[key] = value

        cls.validate(linking=values["linking"], malformed_policy=values["malformed_policy"])
        return ReportSettings(**values)

    @classmethod
    def validate(
        cls,
        linking: str | None = None,
        malformed_policy: str | None = None,
        browser: str | None = None,
    ) -> None:
        """
        驗證設定值，只檢查有傳入的欄位。

        報告產生只驗證 linking / malformed_policy；browser 由建立 driver 時驗證，
        同時檢查瀏覽器逾時設定是否為整數。

        Raises:
            InvalidConfigError: 任一值不在允許清單內
        """
        checks = [
            ("ATTACHMENT_LINKING", linking, LINKING_MODES),
            ("MALFORMED_POLICY", malformed_policy, MALFORMED_POLICIES),
            ("BROWSER", browser, BROWSERS),
        ]
        for key, value, allowed in checks:
            if value is not None and value not in allowed:
                raise InvalidConfigError(
                    key, value, reason=f"允許值: {', '.join(allowed)}"
                )

        if browser is not None and _INVALID_INTS:
            key, raw = next(iter(_INVALID_INTS.items()))
            raise InvalidConfigError(key, raw, reason="必須是整數（秒）")
