# docutrust/analysis/text_metrics.py

"""
Deterministic lexical metrics over a single invoice description.

Every function here is a pure function of the text and the ScoringConfig.
Clamping of the unbounded tone score happens only at reputation aggregation.
"""
from dataclasses import dataclass
from typing import Tuple

from docutrust.config.scoring_config import ScoringConfig, DEFAULT_SCORING_CONFIG
from docutrust.detection.pii import detect_pii, redact_pii


@dataclass(frozen=True)
class TextMetrics:
    tone_score: int
    fishiness_score: int
    transparency_index: int
    clarity_score: int
    heatmap: Tuple[str, ...]
    pii: Tuple[str, ...]
    pii_exposure: int
    redacted_description: str


def tone_score(text: str, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> int:
    lowered = text.lower()
    hits = sum(lowered.count(phrase) for phrase in config.tone_lexicon)
    return hits * config.tone_points


def fishiness_score(text: str, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> int:
    lowered = text.lower()
    score = sum(points for term, points in config.fishiness_terms if term in lowered)
    return max(0, min(100, score))


def transparency_index(text: str, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> int:
    score = config.transparency_baseline
    if len(text) < config.transparency_min_length:
        score -= config.transparency_short_penalty

    lowered = text.lower()
    if any(term in lowered for term in config.vagueness_lexicon):
        score -= config.transparency_vague_penalty

    return max(0, score)


def clarity_score(text: str, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> int:
    # Word count proxy, not readability
    return min(100, len(text.split()) * config.clarity_per_word)


def risk_heatmap(text: str, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> Tuple[str, ...]:
    lowered = text.lower()
    return tuple(word for word in config.heatmap_keywords if word in lowered)


def analyze_text(text: str, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> TextMetrics:
    """
    Runs every text metric plus PII detection and redaction in one pass.

    Raises:
        TypeError: If text is not a string
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected description as str, got {type(text).__name__}")

    pii = tuple(detect_pii(text))

    return TextMetrics(
        tone_score=tone_score(text, config),
        fishiness_score=fishiness_score(text, config),
        transparency_index=transparency_index(text, config),
        clarity_score=clarity_score(text, config),
        heatmap=risk_heatmap(text, config),
        pii=pii,
        pii_exposure=len(pii) * config.pii_exposure_per_category,
        redacted_description=redact_pii(text),
    )
