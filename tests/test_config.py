import dataclasses

import pytest

from gcash import ConfigurationError, GCashConfig


def _env(merchant_keys, gateway_keys, **overrides):
    env = {
        "GCASH_PAYMENT_GATEWAY_URL": "https://gateway.example.com",
        "GCASH_CLIENT_ID": "2023050412345678",
        "GCASH_SIGNING_PRIVATE_KEY": merchant_keys.private_pem,
        "GCASH_SIGNING_PUBLIC_KEY": gateway_keys.public_pem,
    }
    env.update(overrides)
    return env


def test_from_env_defaults(merchant_keys, gateway_keys):
    cfg = GCashConfig.from_env(_env(merchant_keys, gateway_keys))
    assert cfg.base_url == "https://gateway.example.com"
    assert cfg.key_version == "0"
    assert cfg.algorithm == "RSA256"
    assert cfg.zone_id == "Asia/Manila"
    assert cfg.timeout_seconds == 10.0
    assert cfg.debug is False


def test_from_env_overrides(merchant_keys, gateway_keys):
    cfg = GCashConfig.from_env(_env(
        merchant_keys,
        gateway_keys,
        GCASH_SIGNING_KEY_VERSION="7",
        GCASH_ZONE_ID="UTC",
        GCASH_TIMEOUT_SECONDS="2.5",
        GCASH_DEBUG="True",
    ))
    assert cfg.key_version == "7"
    assert cfg.zone_id == "UTC"
    assert cfg.timeout_seconds == 2.5
    assert cfg.debug is True


def test_from_env_reads_process_environment(monkeypatch, merchant_keys, gateway_keys):
    for k, v in _env(merchant_keys, gateway_keys).items():
        monkeypatch.setenv(k, v)
    assert GCashConfig.from_env().client_id == "2023050412345678"


@pytest.mark.parametrize("missing", ["GCASH_PAYMENT_GATEWAY_URL", "GCASH_CLIENT_ID", "GCASH_SIGNING_PRIVATE_KEY", "GCASH_SIGNING_PUBLIC_KEY"])
def test_from_env_requires_values(merchant_keys, gateway_keys, missing):
    env = _env(merchant_keys, gateway_keys)
    del env[missing]
    with pytest.raises(ConfigurationError):
        GCashConfig.from_env(env)


@pytest.mark.parametrize("override", [
    {"GCASH_SIGNING_ALGORITHM": "RSA512"},
    {"GCASH_ZONE_ID": "Mars/Olympus_Mons"},
    {"GCASH_TIMEOUT_SECONDS": "soon"},
])
def test_from_env_rejects_bad_values(merchant_keys, gateway_keys, override):
    with pytest.raises(ConfigurationError):
        GCashConfig.from_env(_env(merchant_keys, gateway_keys, **override))


def test_config_is_frozen_and_repr_hides_keys(config):
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.client_id = "other"
    text = repr(config)
    assert "PRIVATE KEY" not in text
    assert "PUBLIC KEY" not in text
    assert config.client_id in text
