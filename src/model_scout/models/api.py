"""Pydantic models for HTTP request/response payloads."""

from __future__ import annotations

from pydantic import BaseModel, Field

from model_scout.models.alternatives import AlternativeItem
from model_scout.models.catalog import ModelDetail, ModelSummary
from model_scout.models.cost import CostEstimate, CostInputs


class HealthResponse(BaseModel):
    """Response for GET /health."""

    status: str
    catalog_loaded: bool
    model_count: int = 0


class SearchResponse(BaseModel):
    """Response for GET /search."""

    page: int
    page_size: int
    total: int
    items: list[ModelSummary]
    used_strict: bool = True


class ModelResponse(BaseModel):
    """Response for GET /model."""

    summary: ModelSummary
    detail: ModelDetail


class AlternativesResponse(BaseModel):
    """Response for GET /alternatives."""

    base_id: str
    items: list[AlternativeItem] = Field(default_factory=list)


class WarmResponse(BaseModel):
    """Response for GET /warm."""

    ok: bool = True
    model_count: int


class CostRequest(BaseModel):
    """Request body for POST /cost."""

    id: str
    inputs: CostInputs = Field(default_factory=CostInputs)


class CostResponse(BaseModel):
    """Response for POST /cost."""

    id: str
    estimate: CostEstimate
