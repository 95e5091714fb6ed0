from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Enums
# ============================================================================


class ScoringMethod(str, Enum):
    """Statistics for comparing observed and reference distributions."""

    CHI_SQUARED = "chi_squared"
    CORRELATION = "correlation"

    @property
    def lower_is_better(self) -> bool:
        return self is ScoringMethod.CHI_SQUARED


# ============================================================================
# Statistics Schemas
# ============================================================================


class FrequencyData(BaseModel):
    """Character frequency data."""

    character: str
    count: int = Field(ge=0)
    frequency: float = Field(ge=0.0, le=1.0)


class StatisticsProfile(BaseModel):
    """Statistical profile of the letters in a text."""

    model_config = ConfigDict(from_attributes=True)

    length: int
    unique_chars: int
    character_frequencies: list[FrequencyData]
    index_of_coincidence: float
    entropy: float


class ShiftScore(BaseModel):
    """Score of one candidate shift."""

    shift: int = Field(ge=0, le=25)
    score: float


class PlaintextCandidate(BaseModel):
    """A candidate plaintext with scoring."""

    plaintext: str
    key: int = Field(ge=0, le=25)
    score: float
    confidence: float = Field(ge=0.0, le=1.0)


# ============================================================================
# Request Schemas
# ============================================================================


class AnalyzeRequest(BaseModel):
    """Request schema for /analyze endpoint."""

    text: str = Field(max_length=100_000)


class BreakRequest(BaseModel):
    """Request schema for /break endpoint."""

    model_config = ConfigDict(extra="forbid")

    ciphertext: str = Field(min_length=1, max_length=100_000)
    reference: dict[str, float] | None = Field(
        default=None,
        description="Letter proportions summing to 1. Defaults to English.",
    )
    method: ScoringMethod = ScoringMethod.CHI_SQUARED
    candidate_limit: int | None = Field(
        default=None,
        ge=1,
        le=26,
        description="Number of ranked candidates to return. Defaults to the configured limit.",
    )


class DecryptRequest(BaseModel):
    """Request schema for /decrypt endpoint."""

    ciphertext: str = Field(min_length=1, max_length=100_000)
    key: int = Field(ge=0, le=25)


class EncryptRequest(BaseModel):
    """Request schema for /encrypt endpoint."""

    plaintext: str = Field(min_length=1, max_length=100_000)
    key: int | None = Field(default=None, ge=0, le=25)


# ============================================================================
# Response Schemas
# ============================================================================


class AnalyzeResponse(BaseModel):
    """Response schema for /analyze endpoint."""

    counts: dict[str, int]
    proportions: dict[str, float] | None
    total_letters: int
    statistics: StatisticsProfile


class BreakResponse(BaseModel):
    """Response schema for /break endpoint."""

    key: int
    plaintext: str
    score: float
    method: ScoringMethod
    ambiguous: bool
    near_ties: list[int]
    scores: list[ShiftScore]
    candidates: list[PlaintextCandidate]
    explanations: list[str]
    analysis_id: int | None = None


class DecryptResponse(BaseModel):
    """Response schema for /decrypt endpoint."""

    plaintext: str
    key_used: int
    explanation: str


class EncryptResponse(BaseModel):
    """Response schema for /encrypt endpoint."""

    ciphertext: str
    key_used: int


class ReferenceResponse(BaseModel):
    """Response schema for /reference endpoint."""

    name: str
    frequencies: dict[str, float]


class AnalysisHistoryItem(BaseModel):
    """Single history item."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    ciphertext_hash: str
    ciphertext_preview: str
    key: int
    ambiguous: bool
    created_at: datetime


class HistoryResponse(BaseModel):
    """Response schema for /history endpoint."""

    items: list[AnalysisHistoryItem]
    total: int
    page: int
    page_size: int


class AnalysisDetailResponse(BaseModel):
    """Full analysis detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    ciphertext_hash: str
    ciphertext: str
    key: int
    plaintext: str
    score: float
    method: str
    ambiguous: bool
    near_ties: list[int]
    counts: dict[str, int]
    reference_name: str
    explanations: list[str]
    created_at: datetime
    updated_at: datetime


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
