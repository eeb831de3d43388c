import pytest
from dataclasses import replace

from docutrust.analysis.vendor_history import VendorProfile
from docutrust.config.scoring_config import DEFAULT_SCORING_CONFIG
from docutrust.scoring.aggregator import (
    RiskSignals,
    aggregate_signals,
    build_storyline,
    reputation_score,
)
from docutrust.scoring.anomaly import AnomalyDetector, ThresholdAnomalyDetector
from docutrust.scoring.utils import clamp, round_half_up


@pytest.fixture
def clean_signals():
    return RiskSignals(
        anomaly_score=0,
        pii=(),
        pii_exposure=0,
        plagiarism_score=0,
        tone_score=0,
        fishiness_score=0,
        transparency_index=70,
        clarity_score=21,
    )


# ============================================================
# REPUTATION
# ============================================================

def test_clean_record_clamped_to_100(clean_signals):
    # 100 + 7 + 2.1
    assert reputation_score(clean_signals) == 100


def test_penalties_reduce_reputation(clean_signals):
    signals = replace(clean_signals, fishiness_score=65, transparency_index=30, clarity_score=9)
    # 100 - 45.5 + 3 + 0.9 = 58.4
    assert reputation_score(signals) == 58


def test_reputation_floor_at_zero(clean_signals):
    signals = replace(
        clean_signals,
        anomaly_score=35,
        pii=("PAN", "EMAIL"),
        pii_exposure=50,
        plagiarism_score=100,
        tone_score=30,
        fishiness_score=65,
    )
    assert reputation_score(signals) == 0


def test_unbounded_tone_only_clamped_at_reputation(clean_signals):
    signals = replace(clean_signals, tone_score=600)
    assert reputation_score(signals) == 0


def test_weights_come_from_config(clean_signals):
    config = replace(DEFAULT_SCORING_CONFIG, transparency_reward=0.0, clarity_reward=0.0)
    signals = replace(clean_signals, tone_score=30)
    # 100 - 18
    assert reputation_score(signals, config) == 82


# ============================================================
# STORYLINE
# ============================================================

def test_storyline_empty_when_nothing_triggers(clean_signals):
    assert build_storyline(clean_signals) == ""


def test_storyline_sentences_in_order(clean_signals):
    signals = replace(
        clean_signals,
        tone_score=15,
        pii=("EMAIL",),
        pii_exposure=25,
        fishiness_score=40,
        plagiarism_score=80,
    )
    assert build_storyline(signals) == (
        "Urgent tone increases fraud probability. "
        "Sensitive personal information detected. "
        "Suspicious wording detected. "
        "Possible repeated invoice text."
    )


def test_storyline_thresholds_are_strict(clean_signals):
    signals = replace(clean_signals, fishiness_score=20, plagiarism_score=20)
    assert build_storyline(signals) == ""

    signals = replace(clean_signals, plagiarism_score=21)
    assert build_storyline(signals) == "Possible repeated invoice text."


def test_aggregate_signals(clean_signals):
    assessment = aggregate_signals(replace(clean_signals, tone_score=15))
    assert assessment.reputation_score == 100
    assert assessment.storyline == "Urgent tone increases fraud probability."


# ============================================================
# ANOMALY STRATEGY
# ============================================================

def test_threshold_detector():
    detector = ThresholdAnomalyDetector()
    assert detector.score(500) == 0
    assert detector.score(1_000_000) == 0
    assert detector.score(1_000_001) == 35


def test_threshold_detector_reads_config():
    config = replace(DEFAULT_SCORING_CONFIG, anomaly_amount_threshold=10, anomaly_penalty=50)
    assert ThresholdAnomalyDetector(config).score(11, VendorProfile()) == 50


def test_detector_is_pluggable():
    class VendorAverageDetector(AnomalyDetector):
        def score(self, amount, context=None):
            if context is None or context.count == 0:
                return 0
            return 100 if amount > 10 * context.average_amount else 0

    detector = VendorAverageDetector()
    assert detector.score(5_000, VendorProfile(count=2, total_amount=400)) == 100
    assert detector.score(5_000, VendorProfile()) == 0


def test_abstract_detector_cannot_be_instantiated():
    with pytest.raises(TypeError):
        AnomalyDetector()


# ============================================================
# UTILS
# ============================================================

def test_round_half_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4) == 2
    assert round_half_up(-0.4) == 0


def test_clamp():
    assert clamp(150) == 100
    assert clamp(-5) == 0
    assert clamp(42) == 42
