"""
範例 E2E 測試

請換成你自己的測試，加入自己的測試後可以刪除這個檔案。
"""

import pytest
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from config.config import Config
from core.driver_manager import DriverManager


def _visible(driver, css: str):
    return WebDriverWait(driver, Config.EXPLICIT_WAIT).until(
        EC.visibility_of_element_located((By.CSS_SELECTOR, css))
    )


@pytest.mark.e2e
class TestExampleSuite:
    """基本頁面檢查"""

    def test_page_loads_successfully(self, page):
        """TC-001: 頁面正常載入"""
        assert _visible(page, "body").is_displayed()

    def test_page_has_title(self, page):
        """TC-002: 頁面有標題（請換成預期的標題）"""
        assert page.title.strip() != ""

    def test_main_content_visible(self, page):
        """TC-003: 主要內容可見（請換成你的主要內容 selector）"""
        assert _visible(page, "main, #root, #app, body").is_displayed()


@pytest.mark.e2e
class TestResponsive:
    """不同視窗大小"""

    @pytest.mark.parametrize(
        "width,height",
        [(375, 667), (768, 1024)],
        ids=["mobile", "tablet"],
    )
    def test_viewport_renders(self, driver, width, height):
        """TC-004 / TC-005: 行動裝置與平板尺寸"""
        DriverManager.set_viewport(width, height)
        DriverManager.open("/")
        assert _visible(driver, "body").is_displayed()
