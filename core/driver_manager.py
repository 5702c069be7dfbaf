"""
Driver 生命週期管理

負責建立、取得、關閉 Selenium 瀏覽器 driver，確保每個測試獨立。

支援：
- 執行緒安全（平行測試時每個 worker 獨立 driver）
- Chrome / Firefox / Edge，預設 headless
- 相對路徑自動接上 BASE_URL
"""

import threading
from urllib.parse import urljoin

from selenium import webdriver

from config.config import Config
from core.exceptions import DriverNotInitializedError
from utils.logger import logger


class DriverManager:
    """
    管理 Selenium WebDriver 的建立與銷毀

    使用 thread-local storage 確保平行測試時各 worker 的 driver 互不干擾。
    """

    _local = threading.local()

    # ── Options ──

    @staticmethod
    def build_options(browser: str, headless: bool = True):
        """依瀏覽器建立 options"""
        width, height = Config.WINDOW_SIZE
        if browser == "chrome":
            options = webdriver.ChromeOptions()
            if headless:
                options.add_argument("--headless=new")
            options.add_argument(f"--window-size={width},{height}")
            # 讓 get_log("browser") 能取得 console 訊息
            options.set_capability("goog:loggingPrefs", {"browser": "ALL"})
        elif browser == "firefox":
            options = webdriver.FirefoxOptions()
            if headless:
                options.add_argument("-headless")
        elif browser == "edge":
            options = webdriver.EdgeOptions()
            if headless:
                options.add_argument("--headless=new")
            options.add_argument(f"--window-size={width},{height}")
        else:
            raise ValueError(f"不支援的瀏覽器: {browser}")
        return options

    # ── Driver 建立 ──

    @classmethod
    def create_driver(
        cls,
        browser: str | None = None,
        headless: bool | None = None,
        base_url: str | None = None,
    ):
        """
        建立瀏覽器 driver。

        Args:
            browser: 'chrome' / 'firefox' / 'edge'，預設讀取 Config.BROWSER
            headless: 是否 headless，預設讀取 Config.HEADLESS
            base_url: 受測站台，預設讀取 Config.BASE_URL

        Returns:
            Selenium WebDriver 實例

        Raises:
            InvalidConfigError: 瀏覽器不支援，或逾時設定不是整數
        """
        browser = (browser or Config.BROWSER).lower()
        Config.validate(browser=browser)
        headless = Config.HEADLESS if headless is None else headless
        options = cls.build_options(browser, headless)

        factories = {
            "chrome": webdriver.Chrome,
            "firefox": webdriver.Firefox,
            "edge": webdriver.Edge,
        }
        drv = factories[browser](options=options)
        drv.implicitly_wait(Config.IMPLICIT_WAIT)
        drv.set_page_load_timeout(Config.PAGE_LOAD_TIMEOUT)
        if browser == "firefox":
            drv.set_window_size(*Config.WINDOW_SIZE)

        cls._local.driver = drv
        cls._local.browser = browser
        cls._local.base_url = base_url or Config.BASE_URL
        logger.info(f"Driver 已建立: {browser} (headless={headless})")
        return drv

    @classmethod
    def get_driver(cls):
        """取得當前執行緒的 driver 實例"""
        drv = getattr(cls._local, "driver", None)
        if drv is None:
            raise DriverNotInitializedError()
        return drv

    @classmethod
    def browser_name(cls) -> str:
        return getattr(cls._local, "browser", Config.BROWSER)

    # ── 頁面操作 ──

    @classmethod
    def resolve_url(cls, path: str = "/") -> str:
        """相對路徑接上 base URL，絕對網址原樣回傳"""
        base = getattr(cls._local, "base_url", None) or Config.BASE_URL
        return urljoin(base.rstrip("/") + "/", path.lstrip("/"))

    @classmethod
    def open(cls, path: str = "/"):
        """開啟頁面（相對於 base URL）"""
        drv = cls.get_driver()
        url = cls.resolve_url(path)
        logger.debug(f"開啟頁面: {url}")
        drv.get(url)
        return drv

    @classmethod
    def set_viewport(cls, width: int, height: int) -> None:
        """調整視窗大小，模擬行動裝置 / 平板"""
        cls.get_driver().set_window_size(width, height)

    @classmethod
    def quit_driver(cls) -> None:
        """安全關閉當前執行緒的 driver"""
        drv = getattr(cls._local, "driver", None)
        if drv is not None:
            drv.quit()
            cls._local.driver = None
            logger.info("Driver 已關閉")
