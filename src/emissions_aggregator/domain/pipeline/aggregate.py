# pipeline/aggregate.py

import logging
from collections.abc import Sequence

from emissions_aggregator.domain.charts import create_category_data, map_to_server_data
from emissions_aggregator.domain.identity import resolve
from emissions_aggregator.schemas import (
    ChartSection,
    EmissionArtifact,
    EmissionData,
    RawSectionData,
    RegistryProtocol,
)

from .context import FuturesLookup, PipelineContext

logger = logging.getLogger(__name__)


async def aggregate_metadata(
    protocol_name: str,
    real_time_chart: Sequence[ChartSection],
    documented_chart: Sequence[ChartSection],
    raw_data: RawSectionData,
    context: PipelineContext,
) -> tuple[EmissionArtifact, str]:
    """
    Assemble a protocol's artifact (without valuation) and its canonical key.

    Token allocations are computed for both chart variants from the same category
    map. When a documented chart exists, both variants are attached; otherwise the
    real-time chart is published as the documented data and `realTimeData` is
    left out.

    Args:
        protocol_name (str): Name of the adapter being processed.
        real_time_chart (Sequence[ChartSection]): Market-observed unlock series.
        documented_chart (Sequence[ChartSection]): Contractual unlock series,
            possibly empty.
        raw_data (RawSectionData): Evaluated adapter output.
        context (PipelineContext): Registries and lookups for the run.

    Returns:
        tuple[EmissionArtifact, str]: The artifact and the canonical protocol key.

    Raises:
        MissingMetadataError: If a guarded adapter cannot be resolved.
    """
    resolution = resolve(
        protocol_name,
        raw_data.metadata,
        context.reference_tables,
        guarded=context.guarded_adapters,
    )

    real_time_allocation = create_category_data(real_time_chart, raw_data.categories)
    documented_allocation = create_category_data(documented_chart, raw_data.categories)

    futures = await _lookup_futures(resolution.match, context.fetch_futures)

    real_time_data = EmissionData(
        data=map_to_server_data(real_time_chart),
        token_allocation=real_time_allocation,
    )

    if documented_chart:
        documented_data = EmissionData(
            data=map_to_server_data(documented_chart),
            token_allocation=documented_allocation,
        )
    else:
        documented_data, real_time_data = real_time_data, None

    artifact = EmissionArtifact(
        real_time_data=real_time_data,
        documented_data=documented_data,
        metadata=raw_data.metadata,
        name=resolution.identity.name,
        gecko_id=resolution.identity.gecko_id,
        futures=futures,
        categories=raw_data.categories,
    )
    return artifact, resolution.canonical_key


async def _lookup_futures(
    match: RegistryProtocol | None,
    fetch_futures: FuturesLookup,
) -> dict[str, object] | None:
    """
    Look up futures market data for a registry match that has a trading symbol.

    Args:
        match (RegistryProtocol | None): Registry match of the protocol.
        fetch_futures (FuturesLookup): Futures lookup.

    Returns:
        dict[str, object] | None: Futures data, or None when there is no symbol or
            the lookup fails.
    """
    if match is None or not match.symbol:
        return None

    try:
        return await fetch_futures(match.symbol)
    except Exception as error:
        logger.warning("Futures lookup failed for %s: %s", match.symbol, error)
        return None
