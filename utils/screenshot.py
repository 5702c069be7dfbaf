"""
截圖工具
每個 E2E 測試結束時截圖，方便 debug 與嵌入 PDF 報告。
"""

import re
from datetime import datetime

from config.config import Config
from utils.logger import logger

_UNSAFE = re.compile(r"[^\w.-]+")


def take_screenshot(driver, name: str) -> str:
    """
    擷取瀏覽器截圖並儲存到 screenshots 目錄。

    Args:
        driver: Selenium driver 實例
        name: 截圖名稱（不含副檔名），不合法的檔名字元會換成 "_"

    Returns:
        截圖檔案的完整路徑
    """
    Config.SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    safe_name = _UNSAFE.sub("_", name).strip("_") or "screenshot"
    filename = f"{safe_name}_{timestamp}.png"
    filepath = Config.SCREENSHOT_DIR / filename
    driver.save_screenshot(str(filepath))
    logger.info(f"截圖已儲存: {filepath}")
    return str(filepath)
