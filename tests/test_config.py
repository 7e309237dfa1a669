import json
import logging

import pytest
import structlog

from pinifast.config import get_settings, validate_settings
from pinifast.core.logging import configure_logging


@pytest.fixture
def restore_logging():
    yield
    configure_logging()


def test_list_settings_are_split_and_normalised():
    settings = get_settings().model_copy(update={"ALLOWED_FILE_TYPES": " TXT, png,,pdf "})

    assert settings.allowed_file_types == ["txt", "png", "pdf"]
    assert settings.database_url.startswith("sqlite:///")


@pytest.mark.parametrize("update", [{"SECRET_KEY": ""}, {"PORT": 0}, {"MAX_FILE_SIZE": 0}])
def test_unusable_settings_fail_fast(update):
    with pytest.raises(ValueError):
        validate_settings(get_settings().model_copy(update=update))


def test_production_logs_are_json_lines(restore_logging, capsys):
    configure_logging(get_settings().model_copy(update={"ENVIRONMENT": "production"}))

    structlog.get_logger("pinifast.test").warning("disk nearly full", free_bytes=10)

    line = capsys.readouterr().out.strip().splitlines()[-1]
    entry = json.loads(line)
    assert entry["event"] == "disk nearly full"
    assert entry["free_bytes"] == 10
    assert entry["level"] == "warning"
    assert entry["logger"] == "pinifast.test"


def test_stdlib_records_share_the_handler(restore_logging, capsys):
    configure_logging(get_settings().model_copy(update={"ENVIRONMENT": "production"}))

    logging.getLogger("pinifast.stdlib").warning("port %s in use", 8088)

    entry = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert entry["event"] == "port 8088 in use"
    assert entry["logger"] == "pinifast.stdlib"
