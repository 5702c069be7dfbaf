"""
report.loader 單元測試
驗證結果目錄讀取、排序、狀態正規化與格式錯誤處理。
"""

import json

import pytest

from core.exceptions import (
    ConfigurationError,
    EmptyResultsError,
    MalformedResultError,
    ResultsDirNotFoundError,
)
from report.loader import load_results, parse_result
from report.models import Status


@pytest.mark.unit
class TestLoadResultsErrors:
    """致命錯誤"""

    @pytest.mark.unit
    def test_missing_dir_raises_configuration_error(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_results(tmp_path / "does-not-exist")
        assert isinstance(exc_info.value, ResultsDirNotFoundError)

    @pytest.mark.unit
    def test_file_instead_of_dir(self, tmp_path):
        path = tmp_path / "allure-results"
        path.write_text("not a dir", encoding="utf-8")
        with pytest.raises(ResultsDirNotFoundError):
            load_results(path)

    @pytest.mark.unit
    def test_empty_dir_raises(self, results_dir):
        with pytest.raises(EmptyResultsError):
            load_results(results_dir)

    @pytest.mark.unit
    def test_only_attachments_raises(self, results_dir, make_png):
        make_png(results_dir / "a-attachment.png")
        (results_dir / "x-container.json").write_text("{}", encoding="utf-8")
        with pytest.raises(EmptyResultsError):
            load_results(results_dir)


@pytest.mark.unit
class TestLoadResultsOrdering:
    """排序"""

    @pytest.mark.unit
    def test_results_sorted_by_name(self, results_dir, write_result):
        for name in ["test_c", "test_a", "test_b"]:
            write_result(results_dir, name)

        result_set = load_results(results_dir)

        assert [r.name for r in result_set.results] == ["test_a", "test_b", "test_c"]
        assert len(result_set) == 3

    @pytest.mark.unit
    def test_attachments_sorted_by_filename(self, results_dir, write_result, make_png):
        write_result(results_dir, "test_a")
        for name in ["ccc-attachment.png", "aaa-attachment.png", "bbb-attachment.png"]:
            make_png(results_dir / name)
        (results_dir / "ddd-attachment.txt").write_text("log", encoding="utf-8")

        result_set = load_results(results_dir)

        assert [p.name for p in result_set.attachments] == [
            "aaa-attachment.png", "bbb-attachment.png", "ccc-attachment.png",
        ]


@pytest.mark.unit
class TestLoadResultsMalformed:
    """格式錯誤的紀錄"""

    @pytest.mark.unit
    def test_bad_json_is_fatal_by_default(self, results_dir, write_result):
        write_result(results_dir, "test_ok")
        (results_dir / "bad-result.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(MalformedResultError) as exc_info:
            load_results(results_dir)
        assert "bad-result.json" in str(exc_info.value)

    @pytest.mark.unit
    def test_skip_policy_skips_bad_records(self, results_dir, write_result):
        write_result(results_dir, "test_ok")
        (results_dir / "bad-result.json").write_text("{not json", encoding="utf-8")

        result_set = load_results(results_dir, policy="skip")

        assert [r.name for r in result_set.results] == ["test_ok"]
        assert result_set.skipped_files == ("bad-result.json",)

    @pytest.mark.unit
    def test_skip_policy_all_bad_is_empty(self, results_dir):
        (results_dir / "bad-result.json").write_text("[]", encoding="utf-8")
        with pytest.raises(EmptyResultsError):
            load_results(results_dir, policy="skip")


@pytest.mark.unit
class TestParseResult:
    """單筆紀錄解析"""

    @pytest.mark.unit
    def test_basic_fields(self):
        result = parse_result(
            {"name": "test_login", "status": "passed", "start": 1000, "stop": 1500},
            source="x-result.json",
        )
        assert result.name == "test_login"
        assert result.status is Status.PASSED
        assert result.duration_ms == 500
        assert result.source == "x-result.json"

    @pytest.mark.unit
    @pytest.mark.parametrize("raw,expected", [
        ("passed", Status.PASSED),
        ("failed", Status.FAILED),
        ("broken", Status.FAILED),
        ("skipped", Status.SKIPPED),
        ("unknown", Status.SKIPPED),
        ("PASSED", Status.PASSED),
    ])
    def test_status_normalisation(self, raw, expected):
        assert parse_result({"name": "t", "status": raw}).status is expected

    @pytest.mark.unit
    @pytest.mark.parametrize("data", [
        [],
        {"status": "passed"},
        {"name": "", "status": "passed"},
        {"name": "t"},
        {"name": "t", "status": "exploded"},
    ])
    def test_invalid_records_raise(self, data):
        with pytest.raises(MalformedResultError):
            parse_result(data)

    @pytest.mark.unit
    def test_missing_or_invalid_timestamps_are_none(self):
        result = parse_result({"name": "t", "status": "passed", "start": "soon", "stop": True})
        assert result.start is None
        assert result.stop is None
        assert result.duration_ms is None

    @pytest.mark.unit
    def test_collects_png_attachments_from_steps(self):
        data = {
            "name": "t",
            "status": "failed",
            "attachments": [
                {"name": "log", "source": "a-attachment.txt", "type": "text/plain"},
                {"name": "shot", "source": "b-attachment.png", "type": "image/png"},
            ],
            "steps": [
                {"name": "step", "attachments": [{"source": "c-attachment.png"}],
                 "steps": [{"attachments": [{"source": "d-attachment.png"}]}]},
            ],
        }
        result = parse_result(data)
        assert result.attachments == (
            "b-attachment.png", "c-attachment.png", "d-attachment.png",
        )

    @pytest.mark.unit
    def test_result_is_immutable(self):
        result = parse_result({"name": "t", "status": "passed"})
        with pytest.raises(AttributeError):
            result.name = "other"

    @pytest.mark.unit
    def test_reads_utf8_names(self, results_dir):
        path = results_dir / "u-result.json"
        path.write_text(
            json.dumps({"name": "登入測試", "status": "passed"}, ensure_ascii=False),
            encoding="utf-8",
        )
        assert load_results(results_dir).results[0].name == "登入測試"
