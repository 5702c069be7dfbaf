"""
core/exceptions.py 單元測試

驗證自訂例外體系的繼承關係、訊息格式、context 欄位。
"""

import pytest

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


@pytest.mark.unit
class TestExceptionHierarchy:
    """測試例外繼承關係"""

    @pytest.mark.unit
    def test_all_inherit_from_base(self):
        """所有例外都繼承 KitError"""
        classes = [
            ConfigurationError, ResultsDirNotFoundError, InvalidConfigError,
            ResultsError, EmptyResultsError, MalformedResultError,
            AttachmentError, ScaffoldError, DriverError, DriverNotInitializedError,
        ]
        for cls in classes:
            assert issubclass(cls, KitError), f"{cls.__name__} 未繼承 KitError"

    @pytest.mark.unit
    def test_missing_dir_is_configuration_error(self):
        """找不到結果目錄屬於 ConfigurationError"""
        assert issubclass(ResultsDirNotFoundError, ConfigurationError)
        assert issubclass(InvalidConfigError, ConfigurationError)

    @pytest.mark.unit
    def test_results_errors(self):
        """空結果與格式錯誤都屬於 ResultsError"""
        assert issubclass(EmptyResultsError, ResultsError)
        assert issubclass(MalformedResultError, ResultsError)

    @pytest.mark.unit
    def test_attachment_error_is_not_results_error(self):
        """AttachmentError 可恢復，不屬於致命的 ResultsError / ConfigurationError"""
        assert not issubclass(AttachmentError, ResultsError)
        assert not issubclass(AttachmentError, ConfigurationError)

    @pytest.mark.unit
    def test_catch_base_catches_all(self):
        """catch KitError 能攔截所有子類別"""
        with pytest.raises(KitError):
            raise EmptyResultsError("allure-results")

        with pytest.raises(KitError):
            raise DriverNotInitializedError()


@pytest.mark.unit
class TestExceptionMessages:
    """測試例外訊息格式"""

    @pytest.mark.unit
    def test_results_dir_not_found_message(self):
        """訊息包含路徑，context 帶 path"""
        e = ResultsDirNotFoundError("/tmp/nope")
        assert "/tmp/nope" in str(e)
        assert e.context == {"path": "/tmp/nope"}

    @pytest.mark.unit
    def test_malformed_result_with_reason(self):
        """有 reason 時附在訊息後面"""
        e = MalformedResultError("abc-result.json", "缺少 name")
        assert "abc-result.json" in str(e)
        assert "缺少 name" in str(e)
        assert e.context["reason"] == "缺少 name"

    @pytest.mark.unit
    def test_invalid_config_message(self):
        """InvalidConfigError 顯示 key=value"""
        e = InvalidConfigError("BROWSER", "safari", "允許值: chrome")
        assert "BROWSER=safari" in str(e)
        assert e.context == {"key": "BROWSER", "value": "safari"}

    @pytest.mark.unit
    def test_attachment_error_keeps_original(self):
        """AttachmentError 保留原始例外"""
        original = OSError("broken png")
        e = AttachmentError("shot.png", original)
        assert e.original is original
        assert "OSError" in str(e)

    @pytest.mark.unit
    def test_driver_not_initialized_default_msg(self):
        """DriverNotInitializedError 有預設訊息"""
        assert "create_driver" in str(DriverNotInitializedError())

    @pytest.mark.unit
    def test_default_context_is_empty_dict(self):
        """未提供 context 時為空 dict"""
        assert KitError("x").context == {}
