# docutrust/scoring/aggregator.py

from dataclasses import dataclass
from typing import Tuple

from docutrust.config.scoring_config import ScoringConfig, DEFAULT_SCORING_CONFIG
from docutrust.scoring.utils import round_half_up, clamp


@dataclass(frozen=True)
class RiskSignals:
    anomaly_score: float
    pii: Tuple[str, ...]
    pii_exposure: int
    plagiarism_score: int
    tone_score: int
    fishiness_score: int
    transparency_index: int
    clarity_score: int


@dataclass(frozen=True)
class Assessment:
    reputation_score: int
    storyline: str


def reputation_score(signals: RiskSignals, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> int:
    """
    Weighted penalties and rewards on a base of 100, rounded half-up and
    clamped to [0, 100]. Inputs above 100 (tone, anomaly, PII exposure) are
    only bounded here.
    """
    base = 100.0
    base -= signals.anomaly_score * config.anomaly_weight
    base -= signals.pii_exposure * config.pii_weight
    base -= signals.plagiarism_score * config.plagiarism_weight
    base -= signals.tone_score * config.tone_weight
    base -= signals.fishiness_score * config.fishiness_weight
    base += signals.transparency_index * config.transparency_reward
    base += signals.clarity_score * config.clarity_reward

    return int(clamp(round_half_up(base)))


def build_storyline(signals: RiskSignals, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> str:
    lines = []
    if signals.tone_score > config.storyline_tone_threshold:
        lines.append("Urgent tone increases fraud probability.")
    if signals.pii:
        lines.append("Sensitive personal information detected.")
    if signals.fishiness_score > config.storyline_fishiness_threshold:
        lines.append("Suspicious wording detected.")
    if signals.plagiarism_score > config.storyline_plagiarism_threshold:
        lines.append("Possible repeated invoice text.")
    return " ".join(lines)


def aggregate_signals(signals: RiskSignals, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> Assessment:
    return Assessment(
        reputation_score=reputation_score(signals, config),
        storyline=build_storyline(signals, config),
    )
