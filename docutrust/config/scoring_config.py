"""
Single tunable table for every threshold, weight and lexicon used by the
scoring pipeline.

All analyzers take a ScoringConfig instead of reading literals, so a tuning
change is made here (or through the environment) and nowhere else.
"""
import hashlib
import json
import os
from dataclasses import dataclass, asdict, replace
from typing import Tuple

from dotenv import load_dotenv


@dataclass(frozen=True)
class ScoringConfig:
    # Tone
    tone_lexicon: Tuple[str, ...] = (
        "urgent",
        "immediately",
        "asap",
        "kindly approve",
        "please approve",
    )
    tone_points: int = 15

    # Fishiness: (term, points), each term counted once
    fishiness_terms: Tuple[Tuple[str, int], ...] = (
        ("urgent", 20),
        ("immediately", 20),
        ("asap", 20),
        ("kindly approve", 10),
        ("adjustment", 25),
        ("misc", 20),
        ("reimburse", 15),
        ("fee", 20),
        ("round off", 20),
    )

    # Transparency
    transparency_baseline: int = 70
    transparency_min_length: int = 30
    transparency_short_penalty: int = 20
    vagueness_lexicon: Tuple[str, ...] = ("misc", "fee", "adjust", "round")
    transparency_vague_penalty: int = 20

    # Clarity
    clarity_per_word: int = 3

    # Heatmap (UI highlighting only)
    heatmap_keywords: Tuple[str, ...] = (
        "urgent",
        "immediately",
        "fee",
        "misc",
        "adjustment",
        "reimburse",
    )

    # PII
    pii_exposure_per_category: int = 25

    # Anomaly placeholder
    anomaly_amount_threshold: float = 1_000_000
    anomaly_penalty: float = 35

    # Vendor pattern
    vendor_min_history: int = 3
    vendor_unpredictable_average: float = 50_000

    # Reputation weights
    anomaly_weight: float = 0.8
    pii_weight: float = 0.9
    plagiarism_weight: float = 0.7
    tone_weight: float = 0.6
    fishiness_weight: float = 0.7
    transparency_reward: float = 0.1
    clarity_reward: float = 0.1

    # Storyline triggers (strictly greater than)
    storyline_tone_threshold: float = 0
    storyline_fishiness_threshold: float = 20
    storyline_plagiarism_threshold: float = 20


DEFAULT_SCORING_CONFIG = ScoringConfig()

# env var -> config field
_ENV_OVERRIDES = {
    "DOCUTRUST_ANOMALY_AMOUNT_THRESHOLD": "anomaly_amount_threshold",
    "DOCUTRUST_ANOMALY_PENALTY": "anomaly_penalty",
    "DOCUTRUST_VENDOR_UNPREDICTABLE_AVERAGE": "vendor_unpredictable_average",
}


def load_scoring_config() -> ScoringConfig:
    """
    Returns the default table with numeric overrides taken from the
    environment (and a local .env file, if present).

    Raises:
        ValueError: If an override is not a non-negative number
    """
    load_dotenv()

    overrides = {}
    for env_name, field_name in _ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw is None or not raw.strip():
            continue
        try:
            value = float(raw)
        except ValueError:
            raise ValueError(f"{env_name} must be numeric, got {raw!r}")
        if value < 0:
            raise ValueError(f"{env_name} must be non-negative, got {raw!r}")
        overrides[field_name] = value

    return replace(DEFAULT_SCORING_CONFIG, **overrides)


def compute_config_fingerprint(config: ScoringConfig) -> str:
    """
    Deterministic SHA-256 over the whole table. Two ledgers built with the
    same fingerprint were scored with identical weights and lexicons.
    """
    payload = json.dumps(asdict(config), sort_keys=True).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()
