"""
Allure 報告整合輔助
封裝 Allure 步驟標記與附件功能；附件最後會成為 allure-results 裡的
<uuid>-attachment.png，並由結果紀錄的 attachments[].source 引用，
PDF 報告靠這個引用把截圖對應到測試。
如未安裝 allure-pytest，所有方法會 graceful fallback，不影響測試執行。
"""

import functools

from utils.logger import logger

try:
    import allure
    ALLURE_AVAILABLE = True
except ImportError:
    ALLURE_AVAILABLE = False
    logger.debug("allure-pytest 未安裝，Allure 報告功能停用")


def allure_step(title: str):
    """
    裝飾器：將函式標記為 Allure step。
    未安裝 allure 時直接執行原函式。

    用法：
        @allure_step("開啟首頁並確認標題")
        def open_home(driver): ...
    """
    def decorator(func):
        if ALLURE_AVAILABLE:
            @allure.step(title)
            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                return func(*args, **kwargs)
            return wrapper
        return func
    return decorator


def attach_screenshot(driver, name: str = "screenshot") -> bool:
    """
    將瀏覽器截圖附加到 Allure 報告。

    Returns:
        True = 已附加, False = allure 不可用
    """
    if not ALLURE_AVAILABLE:
        return False
    png = driver.get_screenshot_as_png()
    allure.attach(png, name=name, attachment_type=allure.attachment_type.PNG)
    return True


def attach_text(text: str, name: str = "log") -> None:
    """將文字附加到 Allure 報告"""
    if ALLURE_AVAILABLE:
        allure.attach(text, name=name, attachment_type=allure.attachment_type.TEXT)
