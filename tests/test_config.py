import json
import textwrap
from types import SimpleNamespace

import pytest

from event_logger.config import MAPPING_SOURCE, load_config, read_config_file
from event_logger.exceptions import ConfigError
from event_logger.sink import Severity


def test_load_config_reads_json_file(config_path, sink):
    config = load_config(str(config_path), sink)
    assert config.source == str(config_path)
    assert set(config.events) == {"SIMPLE_EVENT", "EVENT_WITH_FORMAT"}
    simple = config.get("SIMPLE_EVENT")
    assert simple.format == "Something happened"
    assert simple.log_level is Severity.INFO
    assert simple.required_fields == ()


def test_load_config_reads_yaml_file(tmp_path, sink):
    config_path = tmp_path / "logger.config.yaml"
    config_path.write_text(
        textwrap.dedent(
            """\
            USER_SIGNED_IN:
              log_level: info
              format: "User {userId} signed in"
              required_fields:
                - userId
                - " userId "
            """
        ),
        encoding="utf-8",
    )

    config = load_config(config_path, sink)
    assert config.get("USER_SIGNED_IN").required_fields == ("userId",)


def test_load_config_accepts_mapping(sink):
    config = load_config({"SIMPLE_EVENT": {"log_level": "error", "format": "Boom"}}, sink)
    assert config.source == MAPPING_SOURCE
    assert config.get("SIMPLE_EVENT").log_level is Severity.ERROR
    assert "SIMPLE_EVENT" in config
    assert config.get("OTHER") is None


@pytest.mark.parametrize(
    "entry",
    [
        {"format": "Missing log level"},
        {"log_level": "info"},
        {"log_level": "info", "format": ""},
        "not a mapping",
    ],
)
def test_load_config_rejects_incomplete_event(entry, sink):
    with pytest.raises(ConfigError, match="Invalid config for event: INVALID_CONFIG"):
        load_config({"OK": {"log_level": "info", "format": "fine"}, "INVALID_CONFIG": entry}, sink)


def test_load_config_rejects_unknown_level(sink):
    with pytest.raises(ConfigError, match="Invalid log level 'verbose' for event: NOISY"):
        load_config({"NOISY": {"log_level": "verbose", "format": "x"}}, sink)


def test_load_config_rejects_level_missing_from_sink():
    limited = SimpleNamespace(info=print, warn=print, error=print)
    with pytest.raises(ConfigError, match="Invalid log level 'debug' for event: TRACE"):
        load_config({"TRACE": {"log_level": "debug", "format": "x"}}, limited)


def test_load_config_rejects_bad_required_fields(sink):
    with pytest.raises(ConfigError, match="required_fields"):
        load_config({"E": {"log_level": "info", "format": "x", "required_fields": "userId"}}, sink)


def test_read_config_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_config_file(tmp_path / "absent.json")


def test_read_config_file_rejects_malformed_json(tmp_path):
    path = tmp_path / "logger.config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="not valid JSON"):
        read_config_file(path)


def test_read_config_file_rejects_empty_and_non_mapping(tmp_path):
    empty = tmp_path / "empty.json"
    empty.write_text("  \n", encoding="utf-8")
    with pytest.raises(ConfigError, match="empty"):
        read_config_file(empty)

    listing = tmp_path / "list.json"
    listing.write_text(json.dumps(["SIMPLE_EVENT"]), encoding="utf-8")
    with pytest.raises(ConfigError, match="must be a mapping"):
        read_config_file(listing)
