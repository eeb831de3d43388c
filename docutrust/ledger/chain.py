import logging
import threading
from dataclasses import fields
from typing import List, Sequence, Tuple

from docutrust.ledger.hash_utils import (
    GENESIS_HASH,
    build_hash_payload,
    compute_record_hash,
)
from docutrust.models.record import DraftRecord, Record

logger = logging.getLogger("docutrust.ledger")


class LedgerIntegrityError(ValueError):
    """Raised when a stored record no longer matches its hash or link."""

    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Ledger broken at index {index}: {reason}")


def seal_record(draft: DraftRecord, previous_hash: str) -> Record:
    """
    Stamps a draft with its chain link and content hash.
    Pure: nothing is appended anywhere.
    """
    payload = build_hash_payload(draft, previous_hash)
    record_hash = compute_record_hash(payload)

    draft_values = {f.name: getattr(draft, f.name) for f in fields(DraftRecord)}
    return Record(
        **draft_values,
        previous_hash=previous_hash,
        record_hash=record_hash,
    )


def verify_chain(records: Sequence[Record]) -> None:
    """
    Recomputes every content hash and chain link.

    Raises:
        LedgerIntegrityError: On the first record whose hash or link
        doesn't match
    """
    expected_previous = GENESIS_HASH
    for index, record in enumerate(records):
        if record.previous_hash != expected_previous:
            raise LedgerIntegrityError(
                index,
                f"previous_hash={record.previous_hash}, expected={expected_previous}",
            )

        recomputed = compute_record_hash(build_hash_payload(record, record.previous_hash))
        if recomputed != record.record_hash:
            raise LedgerIntegrityError(
                index,
                f"record_hash={record.record_hash}, recomputed={recomputed}",
            )

        expected_previous = record.record_hash


class Ledger:
    """
    Append-only, hash-chained sequence of sealed records.

    append() is the only mutator. There is no update or delete: removing a
    record would invalidate every hash after it.
    """

    def __init__(self):
        self._records: List[Record] = []
        # Held by the ingestion pipeline for a whole transaction
        self.lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._records)

    @property
    def last_hash(self) -> str:
        if not self._records:
            return GENESIS_HASH
        return self._records[-1].record_hash

    def append(self, draft: DraftRecord) -> Record:
        with self.lock:
            record = seal_record(draft, self.last_hash)
            self._records.append(record)
            index = len(self._records) - 1

        logger.info(f"LEDGER_APPEND index={index} hash={record.record_hash[:12]}")
        return record

    def list(self) -> Tuple[Record, ...]:
        with self.lock:
            return tuple(self._records)

    def verify(self) -> None:
        verify_chain(self.list())
