"""Pydantic models for Model Scout."""

from model_scout.models.alternatives import (
    AlternativeItem,
    ModalitiesInfo,
    ModalityMatch,
    PriceInfo,
    RatioInfo,
    ReasonCandidate,
    RecencyInfo,
)
from model_scout.models.api import (
    AlternativesResponse,
    CostRequest,
    CostResponse,
    HealthResponse,
    ModelResponse,
    SearchResponse,
    WarmResponse,
)
from model_scout.models.catalog import (
    CatalogIndex,
    CatalogMeta,
    ModelCost,
    ModelDates,
    ModelDetail,
    ModelLimits,
    ModelModalities,
    ModelSource,
    ModelSummary,
    NormalizedModel,
    ProviderInfo,
)
from model_scout.models.cost import (
    CostBreakdownItem,
    CostEstimate,
    CostInputs,
    CostRates,
)
from model_scout.models.search import (
    SORT_OPTIONS,
    SearchFilters,
    SearchRequest,
    SearchResult,
    SortOption,
)

__all__ = [
    # Catalog models
    "CatalogIndex",
    "CatalogMeta",
    "ModelCost",
    "ModelDates",
    "ModelDetail",
    "ModelLimits",
    "ModelModalities",
    "ModelSource",
    "ModelSummary",
    "NormalizedModel",
    "ProviderInfo",
    # Search models
    "SORT_OPTIONS",
    "SearchFilters",
    "SearchRequest",
    "SearchResult",
    "SortOption",
    # Alternatives models
    "AlternativeItem",
    "ModalitiesInfo",
    "ModalityMatch",
    "PriceInfo",
    "RatioInfo",
    "ReasonCandidate",
    "RecencyInfo",
    # Cost models
    "CostBreakdownItem",
    "CostEstimate",
    "CostInputs",
    "CostRates",
    # API models
    "AlternativesResponse",
    "CostRequest",
    "CostResponse",
    "HealthResponse",
    "ModelResponse",
    "SearchResponse",
    "WarmResponse",
]
