"""Pydantic models for the normalized model catalog.

Every record is frozen: a catalog snapshot is built once per normalization
pass and replaced wholesale on refresh. Unknown values are always ``None``;
capability flags are tri-state (``True`` / ``False`` / ``None``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

Number = int | float


class ProviderInfo(BaseModel):
    """A catalog provider (e.g. ``openai``, ``mistral``)."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str | None = None  # Falls back to the id during normalization
    logo_url: str | None = None
    doc_url: str | None = None
    api_url: str | None = None


class ModelSummary(BaseModel):
    """Flattened projection of a model used for listing, filtering and ranking."""

    model_config = ConfigDict(frozen=True)

    id: str  # "provider/model", unique within a catalog
    name: str | None = None
    provider_id: str
    provider_name: str | None = None
    logo_url: str | None = None
    modalities_in: tuple[str, ...] = ()
    modalities_out: tuple[str, ...] = ()
    context_tokens: Number | None = None
    output_tokens: Number | None = None
    tool_call: bool | None = None
    structured_output: bool | None = None
    temperature: bool | None = None
    open_weights: bool | None = None
    reasoning: bool | None = None
    status: str | None = None
    price_in_per_m_tokens: Number | None = None
    price_out_per_m_tokens: Number | None = None
    release_date: str | None = None
    last_updated: str | None = None
    knowledge_cutoff: str | None = None
    search_text: str = ""  # Lower-cased id, name, provider, family, modalities

    @property
    def is_deprecated(self) -> bool:
        """Whether the status is the "deprecated" sentinel (case-insensitive)."""
        return self.status is not None and self.status.lower() == "deprecated"

    @property
    def has_price(self) -> bool:
        """Whether at least one of the input/output prices is known."""
        return self.price_in_per_m_tokens is not None or self.price_out_per_m_tokens is not None


class ModelModalities(BaseModel):
    model_config = ConfigDict(frozen=True)

    input: tuple[str, ...] = ()
    output: tuple[str, ...] = ()


class ModelLimits(BaseModel):
    model_config = ConfigDict(frozen=True)

    context: Number | None = None
    input: Number | None = None
    output: Number | None = None


class ModelCost(BaseModel):
    """Per-million-token rates. Each rate is independently nullable."""

    model_config = ConfigDict(frozen=True)

    input: Number | None = None
    output: Number | None = None
    cache_read: Number | None = None
    cache_write: Number | None = None
    reasoning: Number | None = None
    input_audio: Number | None = None
    output_audio: Number | None = None


class ModelDates(BaseModel):
    model_config = ConfigDict(frozen=True)

    release: str | None = None
    last_updated: str | None = None
    knowledge_cutoff: str | None = None


class ModelSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    doc_url: str | None = None
    api_url: str | None = None


class NormalizedModel(BaseModel):
    """The full normalized record behind a summary."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str | None = None
    provider: ProviderInfo
    family: str | None = None
    attachment: bool | None = None
    reasoning: bool | None = None
    tool_call: bool | None = None
    structured_output: bool | None = None
    temperature: bool | None = None
    open_weights: bool | None = None
    status: str | None = None
    modalities: ModelModalities = Field(default_factory=ModelModalities)
    limits: ModelLimits = Field(default_factory=ModelLimits)
    cost: ModelCost = Field(default_factory=ModelCost)
    dates: ModelDates = Field(default_factory=ModelDates)
    source: ModelSource = Field(default_factory=ModelSource)


class ModelDetail(BaseModel):
    """Normalized record plus the untouched upstream payload."""

    model_config = ConfigDict(frozen=True)

    id: str
    normalized: NormalizedModel
    raw: dict[str, Any] = Field(default_factory=dict)


class CatalogMeta(BaseModel):
    """Vocabularies derived from a catalog, used to build filter menus."""

    model_config = ConfigDict(frozen=True)

    providers: tuple[ProviderInfo, ...] = ()
    modalities_in: tuple[str, ...] = ()
    modalities_out: tuple[str, ...] = ()


class CatalogIndex(BaseModel):
    """Output of one normalization pass."""

    model_config = ConfigDict(frozen=True)

    summaries: tuple[ModelSummary, ...] = ()  # Discovery order
    summary_by_id: dict[str, ModelSummary] = Field(default_factory=dict)
    by_id: dict[str, ModelDetail] = Field(default_factory=dict)
    providers: tuple[ProviderInfo, ...] = ()  # Sorted by name, then id
    modalities_in: tuple[str, ...] = ()
    modalities_out: tuple[str, ...] = ()

    def meta(self) -> CatalogMeta:
        """Return the provider and modality vocabularies."""
        return CatalogMeta(
            providers=self.providers,
            modalities_in=self.modalities_in,
            modalities_out=self.modalities_out,
        )

    @property
    def model_count(self) -> int:
        return len(self.summaries)
