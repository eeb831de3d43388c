from typing import List

from docutrust.detection.patterns import PATTERNS, MASKS, PATTERN_ORDER


def _require_text(text) -> str:
    if not isinstance(text, str):
        raise TypeError(f"Expected text as str, got {type(text).__name__}")
    return text


def detect_pii(text: str) -> List[str]:
    """
    Returns the PII categories found in the text, in PATTERN_ORDER.
    """
    text = _require_text(text)
    return [name for name in PATTERN_ORDER if PATTERNS[name].search(text)]


def redact_pii(text: str) -> str:
    """
    Replaces every PII match with its category mask.

    Each mask is either invisible to every pattern or matched only by its own
    pattern (and then replaced by itself), so redacting twice is a no-op.
    """
    redacted = _require_text(text)
    for name in PATTERN_ORDER:
        redacted = PATTERNS[name].sub(MASKS[name], redacted)
    return redacted
