import json
import logging

from user_directory.config import Settings
from user_directory.logging_config import JSONFormatter, setup_logging


def test_json_formatter():
    record = logging.LogRecord("user_directory", logging.INFO, __file__, 1, "User added: %s", ("u-1",), None)
    data = json.loads(JSONFormatter().format(record))
    assert data["message"] == "User added: u-1"
    assert data["level"] == "INFO"
    assert data["logger"] == "user_directory"


def test_setup_logging_uses_json_in_production():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging(Settings(_env_file=None, environment="production", log_level="debug"))
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
