"""Tests for YAML configuration loading."""

from pathlib import Path

import pytest

from pumpfun_sdk.config_loader import (
    get_nested_value,
    load_sdk_config,
    resolve_env_vars,
    validate_config,
)
from pumpfun_sdk.core.exceptions import ConfigError

MINIMAL = """
rpc_endpoint: "https://rpc.example.com"
private_key: "${TEST_PRIVATE_KEY}"
"""


def write_config(tmp_path: Path, text: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return str(path)


class TestLoadSdkConfig:
    def test_defaults_applied(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEST_PRIVATE_KEY", "secret")
        config = load_sdk_config(write_config(tmp_path, MINIMAL))

        assert config["private_key"] == "secret"
        assert config["commitment"] == "confirmed"
        assert config["trade"]["buy_slippage_bps"] == 500
        assert config["trade"]["sell_slippage_bps"] == 500
        assert config["retries"]["max_attempts"] == 3
        assert "fee_basis_points" not in config["trade"]

    def test_given_values_kept(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEST_PRIVATE_KEY", "secret")
        text = MINIMAL + "commitment: finalized\ntrade:\n  buy_slippage_bps: 100\n"
        config = load_sdk_config(write_config(tmp_path, text))
        assert config["commitment"] == "finalized"
        assert config["trade"]["buy_slippage_bps"] == 100
        assert config["trade"]["sell_slippage_bps"] == 500

    def test_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        # the env file overrides what the process already has
        monkeypatch.setenv("TEST_PRIVATE_KEY", "stale")
        (tmp_path / ".env").write_text("TEST_PRIVATE_KEY=from-dotenv\n")
        config = load_sdk_config(write_config(tmp_path, MINIMAL + 'env_file: ".env"\n'))
        assert config["private_key"] == "from-dotenv"

    def test_missing_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TEST_PRIVATE_KEY", raising=False)
        with pytest.raises(ConfigError, match="TEST_PRIVATE_KEY"):
            load_sdk_config(write_config(tmp_path, MINIMAL))

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_sdk_config(str(tmp_path / "absent.yaml"))

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_sdk_config(write_config(tmp_path, "- just\n- a list\n"))


class TestValidateConfig:
    def base(self) -> dict:
        return {
            "rpc_endpoint": "https://rpc.example.com",
            "private_key": "secret",
            "commitment": "confirmed",
            "trade": {"buy_slippage_bps": 500, "sell_slippage_bps": 500},
        }

    def test_valid(self) -> None:
        validate_config(self.base())

    def test_missing_required(self) -> None:
        config = self.base()
        del config["private_key"]
        with pytest.raises(ConfigError, match="private_key"):
            validate_config(config)

    def test_bad_endpoint(self) -> None:
        config = self.base()
        config["rpc_endpoint"] = "wss://rpc.example.com"
        with pytest.raises(ConfigError):
            validate_config(config)

    @pytest.mark.parametrize("value", [-1, 10_001, 0.5, True])
    def test_slippage_rules(self, value) -> None:
        config = self.base()
        config["trade"]["buy_slippage_bps"] = value
        with pytest.raises(ConfigError):
            validate_config(config)

    def test_bad_commitment(self) -> None:
        config = self.base()
        config["commitment"] = "recent"
        with pytest.raises(ConfigError, match="commitment"):
            validate_config(config)


class TestHelpers:
    def test_get_nested_value(self) -> None:
        assert get_nested_value({"a": {"b": 1}}, "a.b") == 1
        with pytest.raises(ConfigError):
            get_nested_value({"a": {}}, "a.b")

    def test_resolve_nested(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEST_ENDPOINT", "https://node")
        config = {"outer": {"endpoint": "${TEST_ENDPOINT}"}, "plain": "x"}
        resolve_env_vars(config)
        assert config == {"outer": {"endpoint": "https://node"}, "plain": "x"}
