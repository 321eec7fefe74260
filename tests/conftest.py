import json

import pytest


class RecordingSink:
    def __init__(self):
        self.calls = []

    def debug(self, message):
        self.calls.append(("debug", message))

    def info(self, message):
        self.calls.append(("info", message))

    def warn(self, message):
        self.calls.append(("warn", message))

    def error(self, message):
        self.calls.append(("error", message))

    def messages(self, level):
        return [message for called_level, message in self.calls if called_level == level]

    def entries(self, level):
        return [json.loads(message) for message in self.messages(level) if message.startswith("{")]


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "logger.config.json"
    path.write_text(
        json.dumps(
            {
                "SIMPLE_EVENT": {"log_level": "info", "format": "Something happened"},
                "EVENT_WITH_FORMAT": {"log_level": "info", "format": "Some {detail} happened"},
            }
        ),
        encoding="utf-8",
    )
    return path
