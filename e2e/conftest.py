"""
E2E pytest fixtures

提供：
- driver fixture：每個測試自動建立/銷毀瀏覽器 driver
- page fixture：開好首頁的 driver
- 每個測試結束時截圖（附加到 Allure 報告，PDF 報告會嵌入）
- 命令列參數支援 (--browser, --base-url, --headed)

執行：
    pytest e2e --alluredir=allure-results
    BASE_URL=https://your-site.com pytest e2e --alluredir=allure-results
"""

import pytest

from config.config import Config
from core.driver_manager import DriverManager
from utils.allure_helper import attach_screenshot
from utils.logger import logger
from utils.report_plugin import (  # noqa: F401  終端機摘要 hooks
    pytest_runtest_logreport,
    pytest_sessionstart,
    pytest_terminal_summary,
)
from utils.screenshot import take_screenshot


# ── 命令列參數 ──

def pytest_addoption(parser):
    """新增自訂命令列參數"""
    parser.addoption(
        "--browser",
        action="store",
        default=Config.BROWSER,
        choices=["chrome", "firefox", "edge"],
        help="瀏覽器: chrome / firefox / edge",
    )
    parser.addoption(
        "--base-url",
        action="store",
        default=Config.BASE_URL,
        help="受測站台 URL (預設讀取 BASE_URL)",
    )
    parser.addoption(
        "--headed",
        action="store_true",
        default=False,
        help="顯示瀏覽器視窗",
    )


# ── Session ──

@pytest.fixture(scope="session")
def browser_name(request) -> str:
    return request.config.getoption("--browser")


@pytest.fixture(scope="session")
def base_url(request) -> str:
    return request.config.getoption("--base-url")


# ── Driver ──

@pytest.fixture(scope="function")
def driver(browser_name, base_url, request):
    """每個測試函式自動建立並銷毀 driver"""
    headless = Config.HEADLESS and not request.config.getoption("--headed")
    drv = DriverManager.create_driver(browser_name, headless=headless, base_url=base_url)
    yield drv
    DriverManager.quit_driver()


@pytest.fixture
def page(driver):
    """已開啟首頁的 driver"""
    DriverManager.open("/")
    return driver


# ── 測試生命週期 Hook ──

@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """測試本體結束時截圖（成功或失敗都截）"""
    outcome = yield
    report = outcome.get_result()

    if report.when != "call":
        return
    drv = item.funcargs.get("driver") or item.funcargs.get("page")
    if drv is None:
        return

    try:
        attach_screenshot(drv, f"screenshot: {item.name}")
        if report.failed:
            logger.error(f"測試失敗: {item.name}")
            take_screenshot(drv, f"FAIL_{item.name}")
    except Exception as e:
        # 瀏覽器已經掛掉時截不到圖，不影響測試結果
        logger.warning(f"截圖失敗: {item.name} ({type(e).__name__}: {e})")
