"""structlog pipeline honours the configured LOG_LEVEL."""
import json

import structlog

from skillswap.config import get_settings
from skillswap.main import configure_logging


class TestConfigureLogging:

    def teardown_method(self):
        configure_logging(get_settings().LOG_LEVEL)

    def test_events_below_level_are_dropped(self, capsys):
        configure_logging("ERROR")
        log = structlog.get_logger("skillswap.test_level_error")

        log.info("request_handled", path="/health")
        log.error("store_failure", operation="list_matches")

        lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert [line["event"] for line in lines] == ["store_failure"]
        assert lines[0]["level"] == "error"

    def test_lowercase_level_name_accepted(self, capsys):
        configure_logging("debug")
        log = structlog.get_logger("skillswap.test_level_debug")

        log.debug("engine_created")

        assert json.loads(capsys.readouterr().out)["event"] == "engine_created"
