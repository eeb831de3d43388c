import logging
import os
import time
from typing import Any, Dict, List, Optional
from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from docutrust.config.scoring_config import load_scoring_config, compute_config_fingerprint
from docutrust.ledger.chain import LedgerIntegrityError
from docutrust.models.record import Record
from docutrust.orchestrator.pipeline import (
    DocuTrustEngine,
    IngestionError,
    IngestionValidationError,
)
from docutrust.telemetry import init_telemetry

# --- AUDIT LOGGING ---
logging.basicConfig(
    filename=os.getenv("DOCUTRUST_AUDIT_LOG", "audit.log"),
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
audit_logger = logging.getLogger("docutrust.api")

tags_metadata = [
    {
        "name": "Invoices",
        "description": "Score invoices and read the hash-chained ledger.",
    },
    {
        "name": "System",
        "description": "Health checks and operational metadata.",
    },
]


# --- DATA MODELS ---
class InvoiceRequest(BaseModel):
    invoiceNumber: str
    vendorName: str
    amount: float = Field(ge=0)
    description: str


class RecordResponse(BaseModel):
    invoiceNumber: str
    vendorName: str
    amount: float
    description: str
    anomalyScore: float
    toneScore: int
    fishinessScore: int
    transparencyIndex: int
    clarityScore: int
    plagiarismScore: int
    pii: List[str]
    piiExposure: int
    heatmap: List[str]
    redacted: str
    vendorPattern: str
    DRS: int
    storyline: str
    prevHash: str
    recordHash: str


def record_to_response(record: Record) -> Dict[str, Any]:
    """Field names match what the invoice dashboard already reads."""
    return {
        "invoiceNumber": record.invoice_number,
        "vendorName": record.vendor_name,
        "amount": record.amount,
        "description": record.description,
        "anomalyScore": record.anomaly_score,
        "toneScore": record.tone_score,
        "fishinessScore": record.fishiness_score,
        "transparencyIndex": record.transparency_index,
        "clarityScore": record.clarity_score,
        "plagiarismScore": record.plagiarism_score,
        "pii": list(record.pii),
        "piiExposure": record.pii_exposure,
        "heatmap": list(record.heatmap),
        "redacted": record.redacted_description,
        "vendorPattern": record.vendor_pattern.value,
        "DRS": record.reputation_score,
        "storyline": record.storyline,
        "prevHash": record.previous_hash,
        "recordHash": record.record_hash,
    }


def create_app(engine: Optional[DocuTrustEngine] = None) -> FastAPI:
    """
    Builds the HTTP boundary around one engine. The engine (and so the
    ledger) lives as long as the app.
    """
    if engine is None:
        config = load_scoring_config()
        engine = DocuTrustEngine(config=config)

    app = FastAPI(
        title="DocuTrust Invoice Ledger",
        description="""
        Deterministic invoice risk scoring with a **hash-chained**, append-only ledger.

        * **Signals:** tone, fishiness, transparency, clarity, plagiarism, PII.
        * **Reputation (DRS):** single 0-100 score with a storyline.
        * **Ledger:** every record carries the hash of its predecessor.
        """,
        version="1.0.0",
        openapi_tags=tags_metadata,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.engine = engine

    # --- MIDDLEWARE: AUDIT TRAIL ---
    @app.middleware("http")
    async def audit_middleware(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        client_host = request.client.host if request.client else "unknown"
        audit_logger.info(
            f"METHOD={request.method} PATH={request.url.path} "
            f"STATUS={response.status_code} CLIENT={client_host} "
            f"DURATION={process_time:.4f}s"
        )
        return response

    # --- ENDPOINTS ---
    @app.post("/process-invoice", response_model=RecordResponse, tags=["Invoices"])
    def process_invoice(request: InvoiceRequest):
        """
        Score an invoice and seal it into the ledger.
        """
        try:
            record = engine.ingest(
                invoice_number=request.invoiceNumber,
                vendor_name=request.vendorName,
                amount=request.amount,
                description=request.description,
            )
        except IngestionValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))
        except IngestionError as e:
            audit_logger.error(f"ENGINE_ERROR: {e}")
            raise HTTPException(status_code=500, detail="Ingestion failed")

        return record_to_response(record)

    @app.get("/invoices", response_model=List[RecordResponse], tags=["Invoices"])
    def list_invoices():
        return [record_to_response(r) for r in engine.list_records()]

    @app.get("/invoices/verify", tags=["Invoices"])
    def verify_invoices():
        try:
            engine.verify()
        except LedgerIntegrityError as e:
            audit_logger.error(f"LEDGER_INTEGRITY index={e.index}")
            raise HTTPException(
                status_code=409,
                detail={"valid": False, "index": e.index, "reason": e.reason},
            )
        return {"valid": True, "length": len(engine.ledger)}

    @app.get("/health", tags=["System"])
    def health():
        return {
            "status": "online",
            "modules": ["PatternMatchers", "TextMetrics", "Similarity", "VendorHistory", "Aggregator", "Ledger"],
            "chain_length": len(engine.ledger),
            "config_fingerprint": compute_config_fingerprint(engine.config),
        }

    return app


init_telemetry()

app = create_app()
