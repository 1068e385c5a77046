"""Tests for detection configuration loading."""

import pytest
from pydantic import ValidationError

from tunnelscope.core.config import config_from_dict, load_config
from tunnelscope.core.errors import ConfigNotFoundError, ConfigValidationError
from tunnelscope.detection.reputation import ReputationChecker
from tunnelscope.models.config import DetectionConfig
from tunnelscope.models.record import Reputation


def test_defaults_without_path():
    config = load_config(None)
    assert config == DetectionConfig()
    assert config.thresholds.entropy == 4.2
    assert "45.33.22.11" in config.reputation.malicious


def test_load_partial_yaml(tmp_path):
    path = tmp_path / "detection.yaml"
    path.write_text(
        "reputation:\n"
        "  malicious: [203.0.113.7]\n"
        "thresholds:\n"
        "  length: 40\n"
    )
    config = load_config(path)
    assert config.reputation.malicious == frozenset({"203.0.113.7"})
    assert config.reputation.clean_prefix == "192.168."
    assert config.thresholds.length == 40
    assert config.thresholds.entropy == 4.2
    assert ReputationChecker(config.reputation).check("45.33.22.11") is Reputation.UNKNOWN


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == DetectionConfig()


def test_missing_file(tmp_path):
    with pytest.raises(ConfigNotFoundError) as exc_info:
        load_config(tmp_path / "nope.yaml")
    assert exc_info.value.code == "CONFIG_NOT_FOUND"


def test_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("thresholds: [unclosed\n")
    with pytest.raises(ConfigValidationError) as exc_info:
        load_config(path)
    assert exc_info.value.error.context["errors"][0].startswith("YAML parse error")


def test_unknown_key_is_rejected():
    with pytest.raises(ConfigValidationError) as exc_info:
        config_from_dict({"thresholds": {"entropy": 4.0, "colour": "red"}})
    assert any(e.startswith("thresholds.colour") for e in exc_info.value.error.context["errors"])


def test_out_of_range_threshold_is_rejected():
    with pytest.raises(ConfigValidationError):
        config_from_dict({"thresholds": {"score": 150}})


def test_non_mapping_is_rejected():
    with pytest.raises(ConfigValidationError):
        config_from_dict(["not", "a", "mapping"])


def test_config_is_immutable():
    config = DetectionConfig()
    with pytest.raises(ValidationError):
        config.thresholds = None
