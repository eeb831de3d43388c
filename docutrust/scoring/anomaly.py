# docutrust/scoring/anomaly.py

from abc import ABC, abstractmethod
from typing import Optional

from docutrust.analysis.vendor_history import VendorProfile
from docutrust.config.scoring_config import ScoringConfig, DEFAULT_SCORING_CONFIG


class AnomalyDetector(ABC):
    """
    Numeric outlier strategy. The aggregator only consumes the score, so a
    statistical or model-based detector can replace the threshold one.
    """

    @abstractmethod
    def score(self, amount: float, context: Optional[VendorProfile] = None) -> float:
        pass


class ThresholdAnomalyDetector(AnomalyDetector):
    """
    Fixed penalty when the amount is strictly above a single threshold.
    Ignores vendor context.
    """

    def __init__(self, config: ScoringConfig = DEFAULT_SCORING_CONFIG):
        self.threshold = config.anomaly_amount_threshold
        self.penalty = config.anomaly_penalty

    def score(self, amount: float, context: Optional[VendorProfile] = None) -> float:
        return self.penalty if amount > self.threshold else 0
