from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from sponsorcheck.config import Config
from sponsorcheck.matcher import NoMatch, describe
from sponsorcheck.phrases import PhraseMatchSet, scan
from sponsorcheck.sponsor import SponsorRegistry

logger = Config.logger

app = FastAPI(
    title="Sponsor Check API",
    version="1.0",
    description=(
        "Checks whether an employer on a job listing appears on the UK register "
        "of licensed sponsors, and scans listing text for sponsorship refusal "
        "language. Use /docs for interactive Swagger UI or /redoc for ReDoc documentation."
    )
)


# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ScanRequest(BaseModel):
    text: str = ""


class ListingRequest(BaseModel):
    company: Optional[str] = None
    text_sample: str = ""


@lru_cache(maxsize=1)
def get_registry() -> SponsorRegistry:
    """Process-wide registry; restart the app to pick up a rebuilt index."""
    return SponsorRegistry()


def _company_check(registry: SponsorRegistry, company: str) -> dict:
    try:
        result = registry.check(company)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Sponsor index unavailable: {e}")
        raise HTTPException(status_code=503, detail="Sponsor index unavailable")

    payload = {"match": result.to_dict(), "verdict": describe(result)}
    if isinstance(result, NoMatch):
        payload["suggestions"] = registry.suggest(company)
    return payload


def _phrase_payload(phrases: PhraseMatchSet) -> dict:
    return {
        "labels": list(phrases.labels),
        "refusals": list(phrases.refusals),
        "warnings": list(phrases.warnings),
        "summary": phrases.summary,
    }


@app.get("/")
def home():
    """API home endpoint with documentation"""

    return {
        "api": {
            "name": "Sponsor Check",
            "version": "1.0",
            "description": "Sponsor Check - UK licensed sponsor lookup powered by FastAPI",
            "base_url": "/"
        },
        "endpoints": {
            "GET /": "API documentation and metadata",
            "GET /sponsor/check": "Look up a company name: ?company=Tesco Stores Ltd",
            "GET /sponsor/metadata": "Provenance of the loaded sponsor index",
            "POST /phrases/scan": "Scan listing text for refusal language: {\"text\": \"...\"}",
            "POST /listing/check": "Company lookup and text scan together: {\"company\": \"...\", \"text_sample\": \"...\"}"
        },
        "notes": [
            "The sponsor index is rebuilt offline with build-sponsor-index.",
            "Company names are matched case-insensitively, ignoring Ltd/PLC/LLP-style suffixes.",
            Config.DISCLAIMER_TEXT
        ]
    }


@app.get("/sponsor/check")
def check_sponsor(
    company: str = Query(..., description="Company name as shown on the job listing"),
    registry: SponsorRegistry = Depends(get_registry)
):
    """Check a company against the sponsor register"""
    return {
        "success": True,
        "params": {
            "company": company
        },
        **_company_check(registry, company)
    }


@app.get("/sponsor/metadata")
def sponsor_metadata(registry: SponsorRegistry = Depends(get_registry)):
    """Get provenance of the sponsor index"""
    try:
        metadata = registry.metadata
    except ValueError as e:
        logger.error(f"Sponsor metadata unreadable: {e}")
        raise HTTPException(status_code=503, detail="Sponsor metadata unavailable")

    if metadata is None:
        raise HTTPException(status_code=404, detail="Sponsor metadata not found")

    return {
        "success": True,
        "metadata": metadata.to_dict()
    }


@app.post("/phrases/scan")
def scan_phrases(request: ScanRequest):
    """Scan job text for sponsorship refusal language"""
    phrases = scan(request.text[:Config.TEXT_SAMPLE_LIMIT])
    return {
        "success": True,
        **_phrase_payload(phrases)
    }


@app.post("/listing/check")
def check_listing(request: ListingRequest, registry: SponsorRegistry = Depends(get_registry)):
    """Check a job listing's company and text together"""
    company = (request.company or "").strip()
    if company:
        sponsor = _company_check(registry, company)
    else:
        sponsor = {"match": NoMatch().to_dict(), "verdict": "—"}

    return {
        "success": True,
        "params": {
            "company": company or None
        },
        "sponsor": sponsor,
        "cos": _phrase_payload(scan(request.text_sample[:Config.TEXT_SAMPLE_LIMIT]))
    }


# Error handling in FastAPI is via exceptions
@app.exception_handler(404)
def not_found(request, exc):
    return JSONResponse(
        status_code=404,
        content={"success": False, "detail": getattr(exc, "detail", None) or "Endpoint not found"}
    )

@app.exception_handler(500)
def internal_error(request, exc):
    return JSONResponse(
        status_code=500,
        content={"success": False, "detail": "Internal server error"}
    )

#uvicorn main:app --host 0.0.0.0 --port 5000 --reload
