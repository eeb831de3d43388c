from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class VendorPattern(str, Enum):
    NEW = "New Vendor (No risk pattern yet)"
    UNPREDICTABLE = "Unpredictable Vendor"
    STABLE = "Stable Vendor Pattern"


# =========================================================
# Scored, not yet chained
# =========================================================
@dataclass(frozen=True)
class DraftRecord:
    """
    A fully scored invoice that has not been sealed into the ledger.
    Every signal is computed once, at ingestion time.
    """
    # Identity
    invoice_number: str
    vendor_name: str
    amount: float
    description: str

    # Signals
    anomaly_score: float
    tone_score: int
    fishiness_score: int
    transparency_index: int
    clarity_score: int
    plagiarism_score: int
    pii: Tuple[str, ...]
    pii_exposure: int
    heatmap: Tuple[str, ...]
    redacted_description: str
    vendor_pattern: VendorPattern
    reputation_score: int
    storyline: str


# =========================================================
# Sealed ledger entry
# =========================================================
@dataclass(frozen=True)
class Record(DraftRecord):
    """
    A DraftRecord stamped with its chain link and content hash.
    record_hash covers every other field, previous_hash included.
    """
    previous_hash: str
    record_hash: str
