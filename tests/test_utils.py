from loguru import logger

from infrastructure.logging import BASE_DIR, get_log_directory, init_logging
from infrastructure.utils import parse_api_datetime, parse_api_timestamp


def test_parse_api_timestamp():
    assert parse_api_timestamp("1970-01-01T00:01:40Z") == 100
    assert parse_api_timestamp("2020-04-17T10:04:11-04:00") == 1587132251


def test_parse_api_datetime_handles_missing_and_garbage():
    assert parse_api_datetime(None) is None
    assert parse_api_datetime("") is None
    assert parse_api_datetime("yesterday") is None


def test_naive_timestamps_are_utc():
    assert parse_api_timestamp("1970-01-02T00:00:00") == 86400


def test_init_logging_writes_to_directory(tmp_path):
    init_logging(str(tmp_path), level="DEBUG")
    logger.info("hello")
    logger.complete()
    logger.remove()
    log_files = list(tmp_path.glob("app_*.log"))
    assert len(log_files) == 1
    assert "hello" in log_files[0].read_text(encoding="utf-8")


def test_default_log_directory_is_under_project():
    assert get_log_directory() == str(BASE_DIR / "logs")
