import pytest
from dataclasses import FrozenInstanceError, replace

from docutrust.config.scoring_config import (
    DEFAULT_SCORING_CONFIG,
    compute_config_fingerprint,
    load_scoring_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "DOCUTRUST_ANOMALY_AMOUNT_THRESHOLD",
        "DOCUTRUST_ANOMALY_PENALTY",
        "DOCUTRUST_VENDOR_UNPREDICTABLE_AVERAGE",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults_match_documented_constants():
    config = DEFAULT_SCORING_CONFIG
    assert config.tone_points == 15
    assert dict(config.fishiness_terms)["adjustment"] == 25
    assert config.transparency_baseline == 70
    assert config.anomaly_amount_threshold == 1_000_000
    assert config.anomaly_penalty == 35
    assert config.vendor_unpredictable_average == 50_000


def test_config_is_frozen():
    with pytest.raises(FrozenInstanceError):
        DEFAULT_SCORING_CONFIG.tone_points = 99


def test_load_without_overrides_returns_defaults():
    assert load_scoring_config() == DEFAULT_SCORING_CONFIG


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DOCUTRUST_ANOMALY_AMOUNT_THRESHOLD", "250000")
    monkeypatch.setenv("DOCUTRUST_VENDOR_UNPREDICTABLE_AVERAGE", "1000.5")

    config = load_scoring_config()
    assert config.anomaly_amount_threshold == 250_000
    assert config.vendor_unpredictable_average == 1000.5
    assert config.anomaly_penalty == DEFAULT_SCORING_CONFIG.anomaly_penalty


@pytest.mark.parametrize("raw", ["lots", "-1"])
def test_bad_override_rejected(monkeypatch, raw):
    monkeypatch.setenv("DOCUTRUST_ANOMALY_PENALTY", raw)
    with pytest.raises(ValueError, match="DOCUTRUST_ANOMALY_PENALTY"):
        load_scoring_config()


def test_fingerprint_is_deterministic_and_sensitive():
    fp = compute_config_fingerprint(DEFAULT_SCORING_CONFIG)
    assert fp == compute_config_fingerprint(replace(DEFAULT_SCORING_CONFIG))
    assert fp != compute_config_fingerprint(replace(DEFAULT_SCORING_CONFIG, tone_points=16))
