from dataclasses import dataclass
from typing import Dict

from docutrust.config.scoring_config import ScoringConfig, DEFAULT_SCORING_CONFIG
from docutrust.models.record import VendorPattern


@dataclass(frozen=True)
class VendorProfile:
    count: int = 0
    total_amount: float = 0.0

    @property
    def average_amount(self) -> float:
        if self.count == 0:
            return 0.0
        return self.total_amount / self.count


class VendorAggregates:
    """
    Per-vendor running aggregates over sealed records only.

    Lookups for an invoice happen before it is sealed, so a record never
    contributes to its own classification.
    """

    def __init__(self, config: ScoringConfig = DEFAULT_SCORING_CONFIG):
        self.config = config
        self._profiles: Dict[str, VendorProfile] = {}

    def profile(self, vendor_name: str) -> VendorProfile:
        return self._profiles.get(vendor_name, VendorProfile())

    def classify(self, vendor_name: str) -> VendorPattern:
        profile = self.profile(vendor_name)

        if profile.count < self.config.vendor_min_history:
            return VendorPattern.NEW

        if profile.average_amount > self.config.vendor_unpredictable_average:
            return VendorPattern.UNPREDICTABLE

        return VendorPattern.STABLE

    def update(self, vendor_name: str, amount: float) -> VendorProfile:
        current = self.profile(vendor_name)
        updated = VendorProfile(
            count=current.count + 1,
            total_amount=current.total_amount + amount,
        )
        self._profiles[vendor_name] = updated
        return updated
