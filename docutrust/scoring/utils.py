import math


def round_half_up(value: float) -> int:
    """
    Rounds .5 up (towards +inf), unlike Python's banker's round().
    Scores are rounded this way so 0.5 boundaries don't depend on parity.
    """
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))
