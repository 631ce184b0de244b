"""JE Translator FastAPI application - Japanese to English gloss lookup API."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from models import (
    ReportRequest,
    ReportResponse,
    TokenizeRequest,
    TokenizeResponse,
    TranslateRequest,
    TranslateResponse,
)
from services import settings
from services.aggregator import GlossAggregator
from services.analysis import report_glosses, translate_text
from services.tokenizer import SudachiTokenizer, tokenize_raw

__version__ = "0.1.0"


# ============================================================================
# Application Lifespan
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the dictionary and tokenizer on startup."""
    settings.configure_logging()
    _ = GlossAggregator.get_instance()
    yield


def get_aggregator() -> GlossAggregator:
    return GlossAggregator.get_instance()


# ============================================================================
# FastAPI Application
# ============================================================================


app = FastAPI(
    title="JE Translator API",
    description="""Japanese to English gloss lookup built on JMdict.

## Endpoints
- `/translate` - Word-by-word sentence translation (first gloss per word)
- `/report` - Every gloss for every word, with a tab-separated report
- `/tokenize` - Raw Sudachi tokenization
""",
    version=__version__,
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Health Endpoints
# ============================================================================


@app.get("/", tags=["Health"])
async def root() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "service": "jetranslator", "version": __version__}


@app.get("/health", tags=["Health"])
async def health() -> dict[str, str]:
    """Detailed health check."""
    return {"status": "healthy", "version": __version__}


# ============================================================================
# Translation Endpoints
# ============================================================================


@app.post("/translate", response_model=TranslateResponse, tags=["Translation"])
async def translate_endpoint(
    request: TranslateRequest,
    aggregator: GlossAggregator = Depends(get_aggregator),
) -> TranslateResponse:
    """
    Translate Japanese text word by word.

    Each word is replaced by its first English gloss, or UNKNOWN.
    """
    try:
        return translate_text(aggregator, request.text)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Translation failed: {e!s}") from e


@app.post("/report", response_model=ReportResponse, tags=["Translation"])
async def report_endpoint(
    request: ReportRequest,
    aggregator: GlossAggregator = Depends(get_aggregator),
) -> ReportResponse:
    """
    Look up every gloss for every word.

    Uses `words` as given, or tokenizes `text`. Unknown words are split
    into smaller phrases where possible.
    """
    try:
        return report_glosses(aggregator, text=request.text, words=request.words)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Report failed: {e!s}") from e


# ============================================================================
# Debug Endpoints
# ============================================================================


@app.post("/tokenize", response_model=TokenizeResponse, tags=["Debug"])
async def tokenize_endpoint(
    request: TokenizeRequest,
    aggregator: GlossAggregator = Depends(get_aggregator),
) -> dict[str, Any]:
    """Raw Sudachi tokenization output for debugging."""
    tokenizer = aggregator.tokenizer
    if not isinstance(tokenizer, SudachiTokenizer):
        raise HTTPException(status_code=501, detail="Raw tokenization needs the Sudachi tokenizer")
    try:
        return tokenize_raw(tokenizer, request.text)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Tokenization failed: {e!s}") from e


# ============================================================================
# CLI Entry Point
# ============================================================================


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
