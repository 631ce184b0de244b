"""Pydantic models for the translator API requests and responses."""

from typing import Any, Literal

from pydantic import BaseModel, Field


# ============================================================================
# Request Models
# ============================================================================


class TranslateRequest(BaseModel):
    """Request body for sentence translation."""
    text: str = Field(..., max_length=10000, description="Japanese text to translate")


class ReportRequest(BaseModel):
    """Request body for a gloss report."""
    text: str = Field("", max_length=10000, description="Japanese text to tokenize and report on")
    words: list[str] | None = Field(None, description="Words to report on (skips tokenization)")


class TokenizeRequest(BaseModel):
    """Request body for raw tokenization."""
    text: str = Field(..., min_length=1, max_length=10000, description="Japanese text to tokenize")


# ============================================================================
# Response Components
# ============================================================================


class GlossEntry(BaseModel):
    """Glosses found for one word."""
    word: str = Field(..., description="Word as looked up")
    kind: Literal["not_found", "kana_only", "kanji_with_readings", "decomposed"] = Field(
        ..., description="How the word was resolved"
    )
    glosses: list[str] | None = Field(None, description="Glosses of a kana-only word")
    readings: dict[str, list[str]] | None = Field(None, description="Kana reading -> glosses for a kanji word")
    components: list["GlossEntry"] | None = Field(None, description="Sub-tokens of a decomposed phrase")


GlossEntry.model_rebuild()


# ============================================================================
# Response Models
# ============================================================================


class TranslateResponse(BaseModel):
    """Response for /translate."""
    text: str = Field(..., description="Input text")
    translation: str = Field(..., description="First gloss of each token, space separated")
    tokens: list[str] = Field(default_factory=list, description="Tokens the text was split into")


class ReportResponse(BaseModel):
    """Response for /report."""
    entries: list[GlossEntry]
    count: int = Field(..., description="Number of words reported")
    tsv: str = Field(..., description="Tab-separated report")


class TokenizeResponse(BaseModel):
    """Response for /tokenize."""
    tokens: list[dict[str, Any]]
    count: int
    result: str = Field(..., description="Human-readable text format")
