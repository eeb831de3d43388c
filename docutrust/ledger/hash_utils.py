import json
import hashlib
from dataclasses import fields
from enum import Enum
from typing import Dict, Any

from docutrust.models.record import DraftRecord

GENESIS_HASH = "GEN"

EXCLUDED_HASH_FIELDS = {
    "record_hash",
}


def _to_json_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return [_to_json_value(v) for v in value]
    return value


def build_hash_payload(record: DraftRecord, previous_hash: str) -> Dict[str, Any]:
    """
    Canonical JSON-serializable payload of a record: every dataclass field
    except the self-referential record_hash, plus the chain link.
    """
    payload = {
        f.name: _to_json_value(getattr(record, f.name))
        for f in fields(record)
        if f.name not in EXCLUDED_HASH_FIELDS
    }
    payload["previous_hash"] = previous_hash
    return payload


def compute_record_hash(payload: Dict[str, Any]) -> str:
    """
    Deterministically compute a SHA-256 hash over the record payload,
    excluding self-referential hash fields.
    """
    canonical_payload = {
        k: payload[k]
        for k in sorted(payload.keys())
        if k not in EXCLUDED_HASH_FIELDS
    }

    serialized = json.dumps(
        canonical_payload,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )

    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()
