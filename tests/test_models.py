"""Tests for data models."""

import pytest

from flowcontrol import AdapterConfig, FlowControlConfigError, FlowControlDataError, StatusSnapshot


class TestStatusSnapshot:
    """Tests for StatusSnapshot.from_dict."""

    def test_valid_payload(self):
        snapshot = StatusSnapshot.from_dict({"alive": 12.5, "valve": "open"})
        assert snapshot.alive == 12.5
        assert snapshot.valve == "open"

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            "alive",
            {"valve": "open"},
            {"alive": 1},
            {"alive": "1", "valve": "open"},
            {"alive": True, "valve": "open"},
            {"alive": 3, "valve": None},
            {"alive": 3, "valve": 5},
        ],
    )
    def test_invalid_payload(self, payload):
        with pytest.raises(FlowControlDataError):
            StatusSnapshot.from_dict(payload)


class TestAdapterConfig:
    """Tests for AdapterConfig."""

    def test_defaults(self):
        config = AdapterConfig()
        assert config.server is None
        assert config.log_level == "info"
        assert config.logging_level == "INFO"
        assert config.namespace == "flowcontrol.0"

    def test_from_native(self):
        config = AdapterConfig.from_native({"server": "10.0.0.5:80", "loglevel": "warn"})
        assert config.server == "10.0.0.5:80"
        assert config.logging_level == "WARNING"

    def test_blank_server_disables_polling(self):
        assert AdapterConfig.from_native({"server": ""}).server is None
        assert AdapterConfig(server="   ").server is None

    def test_invalid_log_level(self):
        with pytest.raises(FlowControlConfigError):
            AdapterConfig(log_level="loud")

    def test_invalid_timeout(self):
        with pytest.raises(FlowControlConfigError):
            AdapterConfig(request_timeout=0)

    def test_no_timeout(self):
        assert AdapterConfig.from_native({"request_timeout": None}).request_timeout is None

    def test_null_log_level_uses_default(self):
        assert AdapterConfig.from_native({"loglevel": None}).log_level == "info"
        assert AdapterConfig(log_level=None).log_level == "info"

    def test_non_numeric_timeout(self):
        with pytest.raises(FlowControlConfigError):
            AdapterConfig.from_native({"request_timeout": "soon"})
