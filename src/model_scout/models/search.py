"""Pydantic models for search requests and results."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from model_scout.models.catalog import ModelSummary

SortOption = Literal["release", "updated", "context", "output", "cheapest", "best"]

SORT_OPTIONS: tuple[SortOption, ...] = (
    "release",
    "updated",
    "context",
    "output",
    "cheapest",
    "best",
)


class SearchFilters(BaseModel):
    """Caller-supplied search filters. Every condition is AND-ed."""

    query: str = ""
    providers: list[str] = Field(default_factory=list)
    modalities_in: list[str] = Field(default_factory=list)
    modalities_out: list[str] = Field(default_factory=list)

    # "Must support" flags: when set, the summary value must be exactly True
    tool_call: bool = False
    structured_output: bool = False
    temperature: bool = False
    open_weights: bool = False
    reasoning: bool = False

    min_context: float | None = None
    min_output: float | None = None
    max_price_in: float | None = None
    max_price_out: float | None = None

    hide_deprecated: bool = False


class SearchRequest(SearchFilters):
    """Filters plus paging and ordering."""

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=25, ge=1)
    sort: SortOption = "best"


class SearchResult(BaseModel):
    """One page of a filtered and sorted result set."""

    items: list[ModelSummary] = Field(default_factory=list)
    total: int = 0
    used_strict: bool = True  # False when the loose-match fallback fired
