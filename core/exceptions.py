"""
自訂 Exception 體系

統一的錯誤處理階層，讓每種失敗都有明確的分類與訊息。
上層可以 catch 大類別 (如 KitError)，
也可以精準 catch 子類別 (如 EmptyResultsError)。

Exception 樹：
    KitError
    ├── ConfigurationError
    │   ├── ResultsDirNotFoundError
    │   └── InvalidConfigError
    ├── ResultsError
    │   ├── EmptyResultsError
    │   └── MalformedResultError
    ├── AttachmentError
    ├── ScaffoldError
    └── DriverError
        └── DriverNotInitializedError
"""


class KitError(Exception):
    """Kit 所有例外的基底，catch 這個就能攔截一切 kit 錯誤"""

    def __init__(self, message: str = "", context: dict | None = None):
        self.context = context or {}
        super().__init__(message)


# ── Config 相關 ──

class ConfigurationError(KitError):
    """設定相關錯誤（輸入位置缺失或設定值無效）"""


class ResultsDirNotFoundError(ConfigurationError):
    """找不到測試結果目錄"""

    def __init__(self, path: str = ""):
        super().__init__(
            f"找不到測試結果目錄: {path}（請先執行測試: pytest e2e）",
            context={"path": path},
        )


class InvalidConfigError(ConfigurationError):
    """設定值無效"""

    def __init__(self, key: str = "", value: str = "", reason: str = ""):
        msg = f"設定值無效: {key}={value}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, context={"key": key, "value": value})


# ── 測試結果相關 ──

class ResultsError(KitError):
    """測試結果讀取相關錯誤"""


class EmptyResultsError(ResultsError):
    """結果目錄存在，但沒有任何有效的結果紀錄"""

    def __init__(self, path: str = ""):
        super().__init__(
            f"找不到任何測試結果: {path}",
            context={"path": path},
        )


class MalformedResultError(ResultsError):
    """單筆結果紀錄格式錯誤"""

    def __init__(self, path: str = "", reason: str = ""):
        msg = f"結果紀錄格式錯誤: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, context={"path": path, "reason": reason})


# ── 附件相關 ──

class AttachmentError(KitError):
    """截圖附件無法讀取或解碼（可恢復，該列不顯示圖片）"""

    def __init__(self, path: str = "", original: Exception | None = None):
        self.original = original
        msg = f"無法載入截圖: {path}"
        if original:
            msg += f" ({type(original).__name__}: {original})"
        super().__init__(msg, context={"path": path})


# ── Scaffold 相關 ──

class ScaffoldError(KitError):
    """安裝 kit 到目標專案時失敗"""

    def __init__(self, target: str = "", reason: str = ""):
        msg = f"無法安裝到目標目錄: {target}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, context={"target": target})


# ── Driver 相關 ──

class DriverError(KitError):
    """瀏覽器 Driver 相關錯誤"""


class DriverNotInitializedError(DriverError):
    """Driver 尚未初始化就被使用"""

    def __init__(self, message: str = "Driver 尚未建立，請先呼叫 create_driver()"):
        super().__init__(message)
