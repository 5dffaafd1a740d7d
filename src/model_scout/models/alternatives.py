"""Pydantic models for the open-weights alternatives ranker."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from model_scout.models.catalog import ModelSummary

Polarity = Literal["positive", "negative"]
ModalityStatus = Literal["match", "partial", "none"]


class ReasonCandidate(BaseModel):
    """A human-readable justification and how much it moved the score."""

    model_config = ConfigDict(frozen=True)

    label: str
    impact: float
    polarity: Polarity


class ModalityMatch(BaseModel):
    """How well a candidate covers the base's modalities in one direction."""

    model_config = ConfigDict(frozen=True)

    score: float
    status: ModalityStatus
    has_base: bool


class ModalitiesInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: float
    input: ModalityMatch
    output: ModalityMatch


class RatioInfo(BaseModel):
    """Candidate/base ratio for a numeric limit (context or output tokens)."""

    model_config = ConfigDict(frozen=True)

    score: float
    ratio: float | None = None
    has_base: bool
    has_candidate: bool


class PriceInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: float
    ratio: float | None = None
    base_has_price: bool
    candidate_has_price: bool


class RecencyInfo(BaseModel):
    """Recency of the candidate's best available date."""

    model_config = ConfigDict(frozen=True)

    score: float
    base_date: float | None = None  # POSIX timestamps
    candidate_date: float | None = None
    is_newer_than_base: bool = False
    is_recent: bool = False
    is_older: bool = False


class AlternativeItem(BaseModel):
    """A ranked open-weights substitute for a base model."""

    id: str
    score: int  # 0-100
    reasons: list[str] = Field(default_factory=list)
    summary: ModelSummary
