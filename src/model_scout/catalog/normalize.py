"""Normalize a raw provider -> model catalog into a queryable index.

The upstream payload is a mapping of provider key to provider object, each
holding a mapping of model key to model object. Any field may be missing or
carry the wrong type; every coercion falls back to ``None`` (or an empty
collection) instead of raising.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

from model_scout.logging import get_logger
from model_scout.models.catalog import (
    CatalogIndex,
    ModelCost,
    ModelDates,
    ModelDetail,
    ModelLimits,
    ModelModalities,
    ModelSource,
    ModelSummary,
    NormalizedModel,
    Number,
    ProviderInfo,
)

logger = get_logger(__name__)

LOGO_BASE_URL = "https://models.dev/logos"


# ============================================================================
# Coercion helpers
# ============================================================================


def to_string(value: Any) -> str | None:
    """Return the trimmed string, or None for non-strings and blank strings."""
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    return trimmed or None


def to_number(value: Any) -> Number | None:
    """Return a finite number parsed from a number or numeric string.

    Booleans are not numbers. Integral strings come back as ``int``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = float(text)
        except ValueError:
            return None
        if not math.isfinite(parsed):
            return None
        return int(parsed) if parsed.is_integer() else parsed
    return None


def to_boolean(value: Any) -> bool | None:
    """Pass literal booleans through; anything else is unknown."""
    return value if isinstance(value, bool) else None


def normalize_string_array(value: Any) -> tuple[str, ...]:
    """Keep string items, trimmed and lower-cased, without blanks or duplicates."""
    if not isinstance(value, list | tuple):
        return ()
    items = (item.strip().lower() for item in value if isinstance(item, str))
    return tuple(dict.fromkeys(item for item in items if item))


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def build_search_text(parts: Iterable[str | None]) -> str:
    """Join the searchable fields of a model into one lower-cased blob."""
    return " ".join(part.lower() for part in parts if isinstance(part, str))


def build_model_id(provider_id: str, model_id: str) -> str:
    """Build the ``provider/model`` id, adding the prefix only when missing."""
    trimmed = model_id.strip("/")
    if trimmed.startswith(f"{provider_id}/"):
        return trimmed
    return f"{provider_id}/{trimmed}"


# ============================================================================
# Record builders
# ============================================================================


def build_provider_info(provider_id: str, provider: Mapping[str, Any]) -> ProviderInfo:
    """Build the provider record. The display name falls back to the id."""
    return ProviderInfo(
        id=provider_id,
        name=to_string(provider.get("name")) or provider_id,
        logo_url=f"{LOGO_BASE_URL}/{provider_id}.svg",
        doc_url=to_string(provider.get("doc")),
        api_url=to_string(provider.get("api")),
    )


def normalize_model(
    provider: ProviderInfo,
    model_key: str,
    model: Mapping[str, Any],
) -> NormalizedModel:
    """Normalize one raw model payload under its provider."""
    model_id = to_string(model.get("id")) or model_key
    full_id = build_model_id(provider.id, model_id)

    modalities = _mapping(model.get("modalities"))
    limits = _mapping(model.get("limit"))
    cost = _mapping(model.get("cost"))

    status = to_string(model.get("status"))
    if status is None and to_boolean(model.get("deprecated")) is True:
        status = "deprecated"

    return NormalizedModel(
        id=full_id,
        name=to_string(model.get("name")) or model_id,
        provider=provider,
        family=to_string(model.get("family")),
        attachment=to_boolean(model.get("attachment")),
        reasoning=to_boolean(model.get("reasoning")),
        tool_call=to_boolean(model.get("tool_call")),
        structured_output=to_boolean(model.get("structured_output")),
        temperature=to_boolean(model.get("temperature")),
        open_weights=to_boolean(model.get("open_weights")),
        status=status,
        modalities=ModelModalities(
            input=normalize_string_array(modalities.get("input")),
            output=normalize_string_array(modalities.get("output")),
        ),
        limits=ModelLimits(
            context=to_number(limits.get("context")),
            input=to_number(limits.get("input")),
            output=to_number(limits.get("output")),
        ),
        cost=ModelCost(
            input=to_number(cost.get("input")),
            output=to_number(cost.get("output")),
            cache_read=to_number(cost.get("cache_read")),
            cache_write=to_number(cost.get("cache_write")),
            reasoning=to_number(cost.get("reasoning")),
            input_audio=to_number(cost.get("input_audio")),
            output_audio=to_number(cost.get("output_audio")),
        ),
        dates=ModelDates(
            release=to_string(model.get("release_date")),
            last_updated=to_string(model.get("last_updated")),
            knowledge_cutoff=to_string(model.get("knowledge")),
        ),
        source=ModelSource(doc_url=provider.doc_url, api_url=provider.api_url),
    )


def build_summary(normalized: NormalizedModel) -> ModelSummary:
    """Project a normalized model onto the lightweight summary record."""
    provider = normalized.provider
    return ModelSummary(
        id=normalized.id,
        name=normalized.name,
        provider_id=provider.id,
        provider_name=provider.name,
        logo_url=provider.logo_url,
        modalities_in=normalized.modalities.input,
        modalities_out=normalized.modalities.output,
        context_tokens=normalized.limits.context,
        output_tokens=normalized.limits.output,
        tool_call=normalized.tool_call,
        structured_output=normalized.structured_output,
        temperature=normalized.temperature,
        open_weights=normalized.open_weights,
        reasoning=normalized.reasoning,
        status=normalized.status,
        price_in_per_m_tokens=normalized.cost.input,
        price_out_per_m_tokens=normalized.cost.output,
        release_date=normalized.dates.release,
        last_updated=normalized.dates.last_updated,
        knowledge_cutoff=normalized.dates.knowledge_cutoff,
        search_text=build_search_text(
            [
                normalized.id,
                normalized.name,
                provider.id,
                provider.name,
                normalized.family,
                *normalized.modalities.input,
                *normalized.modalities.output,
            ]
        ),
    )


# ============================================================================
# Catalog
# ============================================================================


def normalize_catalog(raw: Any) -> CatalogIndex:
    """Normalize a raw catalog payload into a ``CatalogIndex``.

    Never raises on malformed input. Providers without a usable id and models
    that are not objects are skipped; when two models normalize to the same
    id the first one wins.

    Args:
        raw: Decoded JSON payload (provider key -> provider object).

    Returns:
        The summaries, lookup maps, sorted provider list and modality vocabularies.
    """
    summaries: list[ModelSummary] = []
    summary_by_id: dict[str, ModelSummary] = {}
    by_id: dict[str, ModelDetail] = {}
    providers: list[ProviderInfo] = []
    modalities_in: set[str] = set()
    modalities_out: set[str] = set()
    duplicates = 0

    for provider_key, provider_value in _mapping(raw).items():
        if not isinstance(provider_value, Mapping):
            continue
        provider_id = to_string(provider_value.get("id")) or to_string(provider_key)
        if not provider_id:
            continue

        provider = build_provider_info(provider_id, provider_value)
        providers.append(provider)

        models = provider_value.get("models")
        if not isinstance(models, Mapping):
            continue

        for model_key, model_value in models.items():
            if not isinstance(model_value, Mapping):
                continue
            normalized = normalize_model(provider, str(model_key), model_value)

            if normalized.id in by_id:
                duplicates += 1
                logger.debug("Skipping duplicate model id", model_id=normalized.id)
                continue

            summary = build_summary(normalized)
            modalities_in.update(summary.modalities_in)
            modalities_out.update(summary.modalities_out)

            by_id[normalized.id] = ModelDetail(
                id=normalized.id, normalized=normalized, raw=dict(model_value)
            )
            summary_by_id[normalized.id] = summary
            summaries.append(summary)

    providers.sort(key=lambda p: (p.name or p.id).casefold())

    logger.info(
        "Normalized catalog",
        model_count=len(summaries),
        provider_count=len(providers),
        duplicates_skipped=duplicates,
    )

    return CatalogIndex(
        summaries=tuple(summaries),
        summary_by_id=summary_by_id,
        by_id=by_id,
        providers=tuple(providers),
        modalities_in=tuple(sorted(modalities_in)),
        modalities_out=tuple(sorted(modalities_out)),
    )
