import logging
import math
import time
from typing import Optional, Tuple

from docutrust.analysis.similarity import CorpusHistory
from docutrust.analysis.text_metrics import analyze_text
from docutrust.analysis.vendor_history import VendorAggregates
from docutrust.config.scoring_config import ScoringConfig, DEFAULT_SCORING_CONFIG
from docutrust.ledger.chain import Ledger
from docutrust.models.record import DraftRecord, Record
from docutrust.scoring.aggregator import RiskSignals, aggregate_signals
from docutrust.scoring.anomaly import AnomalyDetector, ThresholdAnomalyDetector
from docutrust.telemetry import (
    emit_ingestion_telemetry,
    emit_exception_telemetry,
    scrub_exception_for_telemetry,
)

logger = logging.getLogger("docutrust.pipeline")


class IngestionValidationError(ValueError):
    """Invalid input. Raised before any state is touched."""


class IngestionError(RuntimeError):
    """Scoring or sealing failed. History, vendors and ledger are unchanged."""


def validate_invoice(
    invoice_number: str,
    vendor_name: str,
    amount: float,
    description: str,
) -> float:
    """
    Checks the four primitive fields and returns the amount normalized to
    float, so the same invoice always serializes (and hashes) identically.

    Raises:
        IngestionValidationError: On the first invalid field
    """
    if not isinstance(invoice_number, str) or not invoice_number.strip():
        raise IngestionValidationError("Invoice number is required")

    if not isinstance(vendor_name, str) or not vendor_name.strip():
        raise IngestionValidationError("Vendor name is required")

    # bool is an int subclass; True is not an amount
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise IngestionValidationError("Amount must be numeric")

    # ints too large for a float overflow instead of reporting inf
    try:
        finite = math.isfinite(amount)
    except OverflowError as e:
        raise IngestionValidationError("Amount must be finite") from e

    if not finite:
        raise IngestionValidationError("Amount must be finite")

    if amount < 0:
        raise IngestionValidationError("Amount must be non-negative")

    if not isinstance(description, str):
        raise IngestionValidationError("Description must be text")

    if not description.strip():
        raise IngestionValidationError("Description is required")

    return float(amount)


class DocuTrustEngine:
    """
    Owns one ledger together with its corpus history and vendor aggregates.

    Each ingestion is a single transaction under the ledger lock: history,
    vendor aggregates and the ledger are updated only after the record has
    been scored and sealed, so a failure leaves all three untouched.
    """

    def __init__(
        self,
        config: ScoringConfig = DEFAULT_SCORING_CONFIG,
        anomaly_detector: Optional[AnomalyDetector] = None,
    ):
        self.config = config
        self.anomaly_detector = anomaly_detector or ThresholdAnomalyDetector(config)
        self.ledger = Ledger()
        self.corpus = CorpusHistory()
        self.vendors = VendorAggregates(config)

    def ingest(
        self,
        invoice_number: str,
        vendor_name: str,
        amount: float,
        description: str,
    ) -> Record:
        start_time = time.perf_counter()

        with self.ledger.lock:
            amount = validate_invoice(invoice_number, vendor_name, amount, description)

            try:
                draft = self._score(invoice_number, vendor_name, amount, description)
                record = self.ledger.append(draft)
            except Exception as e:
                error_type = scrub_exception_for_telemetry(e)
                logger.error(f"INGEST_FAILED error={error_type}")
                emit_exception_telemetry(e)
                raise IngestionError(f"Ingestion failed: {error_type}") from e

            self.corpus.record(description)
            self.vendors.update(vendor_name, amount)
            chain_length = len(self.ledger)

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        emit_ingestion_telemetry(
            latency_ms=latency_ms,
            reputation_score=record.reputation_score,
            pii_detected=bool(record.pii),
            chain_length=chain_length,
        )
        logger.info(
            f"INGESTED index={chain_length - 1} DRS={record.reputation_score} "
            f"pii_categories={len(record.pii)} DURATION={latency_ms}ms"
        )
        return record

    def list_records(self) -> Tuple[Record, ...]:
        return self.ledger.list()

    def verify(self) -> None:
        self.ledger.verify()

    def _score(
        self,
        invoice_number: str,
        vendor_name: str,
        amount: float,
        description: str,
    ) -> DraftRecord:
        """
        Computes every signal for one invoice. Reads history, vendor
        aggregates and config; mutates nothing.
        """
        metrics = analyze_text(description, self.config)
        plagiarism = self.corpus.score(description)
        vendor_pattern = self.vendors.classify(vendor_name)
        anomaly = self.anomaly_detector.score(amount, self.vendors.profile(vendor_name))

        signals = RiskSignals(
            anomaly_score=anomaly,
            pii=metrics.pii,
            pii_exposure=metrics.pii_exposure,
            plagiarism_score=plagiarism,
            tone_score=metrics.tone_score,
            fishiness_score=metrics.fishiness_score,
            transparency_index=metrics.transparency_index,
            clarity_score=metrics.clarity_score,
        )
        assessment = aggregate_signals(signals, self.config)

        return DraftRecord(
            invoice_number=invoice_number,
            vendor_name=vendor_name,
            amount=amount,
            description=description,
            anomaly_score=anomaly,
            tone_score=metrics.tone_score,
            fishiness_score=metrics.fishiness_score,
            transparency_index=metrics.transparency_index,
            clarity_score=metrics.clarity_score,
            plagiarism_score=plagiarism,
            pii=metrics.pii,
            pii_exposure=metrics.pii_exposure,
            heatmap=metrics.heatmap,
            redacted_description=metrics.redacted_description,
            vendor_pattern=vendor_pattern,
            reputation_score=assessment.reputation_score,
            storyline=assessment.storyline,
        )
