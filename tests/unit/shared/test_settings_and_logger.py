import json
import logging

import pytest

from deploy_hooks.config.settings import HookSettings
from deploy_hooks.utils.logger import _JsonFormatter, get_logger


def test_settings_defaults() -> None:
    settings = HookSettings.load()
    assert settings.log_level == "INFO"
    assert settings.environment is None


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Given: HOOKS_LOG_LEVEL, ENVIRONMENT 환경변수
    When: 설정 로드
    Then: 대문자 로그 레벨과 환경 값 반환
    """
    monkeypatch.setenv("HOOKS_LOG_LEVEL", "debug")
    monkeypatch.setenv("ENVIRONMENT", "dev")

    settings = HookSettings.load()

    assert settings.log_level == "DEBUG"
    assert settings.environment == "dev"


def test_unknown_log_level_falls_back_to_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOOKS_LOG_LEVEL", "chatty")
    assert HookSettings.load().log_level == "INFO"


def test_get_logger_adapter_has_extras(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Given: helper 이름이 설정된 로거
    When: extra 포함 로그 기록
    Then: 어댑터에 helper/environment가 포함되고 예외 없이 처리
    """
    monkeypatch.setenv("ENVIRONMENT", "dev")
    log = get_logger("tests.logger", helper="sqs")

    assert log.extra == {"environment": "dev", "helper": "sqs"}
    log.info("hello", extra={"entity": "Order"})


def test_json_formatter_payload() -> None:
    record = logging.LogRecord("deploy_hooks.test", logging.WARNING, __file__, 1, "built %s", ("Order",), None)
    record.helper = "sqs"
    record.entity = "Order"

    payload = json.loads(_JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["message"] == "built Order"
    assert payload["helper"] == "sqs"
    assert payload["entity"] == "Order"
    assert "environment" not in payload
