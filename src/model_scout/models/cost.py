"""Pydantic models for the usage cost calculator."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CostRates(BaseModel):
    """Per-million-token rates. Unknown rates are None."""

    input: float | None = None
    output: float | None = None
    reasoning: float | None = None
    cache_read: float | None = None
    cache_write: float | None = None
    input_audio: float | None = None
    output_audio: float | None = None


class CostInputs(BaseModel):
    """Token volumes for one call, plus call counts for projections."""

    input_tokens: int = Field(default=0, ge=0)
    output_tokens: int = Field(default=0, ge=0)
    calls_per_day: int = Field(default=0, ge=0)
    calls_per_month: int = Field(default=0, ge=0)
    reasoning_tokens: int = Field(default=0, ge=0)
    cache_read_tokens: int = Field(default=0, ge=0)
    cache_write_tokens: int = Field(default=0, ge=0)
    input_audio_tokens: int = Field(default=0, ge=0)
    output_audio_tokens: int = Field(default=0, ge=0)


class CostBreakdownItem(BaseModel):
    label: str
    tokens: int
    price_per_m_tokens: float | None = None
    cost_per_call: float | None = None  # None when the rate is unknown


class CostEstimate(BaseModel):
    per_call: float | None = None
    per_day: float | None = None
    per_month: float | None = None
    breakdown: list[CostBreakdownItem] = Field(default_factory=list)
    missing_rates: list[str] = Field(default_factory=list)
