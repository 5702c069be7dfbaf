"""
core — kit 核心

統一匯出例外體系，方便外部 import。
瀏覽器 driver 需要 selenium，請直接從 core.driver_manager 匯入。

用法：
    from core import KitError, ConfigurationError, EmptyResultsError
    from core.driver_manager import DriverManager
"""

from core.exceptions import (
    AttachmentError,
    ConfigurationError,
    DriverError,
    DriverNotInitializedError,
    EmptyResultsError,
    InvalidConfigError,
    KitError,
    MalformedResultError,
    ResultsDirNotFoundError,
    ResultsError,
    ScaffoldError,
)

__all__ = [
    "KitError",
    "ConfigurationError",
    "ResultsDirNotFoundError",
    "InvalidConfigError",
    "ResultsError",
    "EmptyResultsError",
    "MalformedResultError",
    "AttachmentError",
    "ScaffoldError",
    "DriverError",
    "DriverNotInitializedError",
]
