# pipeline/processor.py

import logging

from emissions_aggregator.domain._utils import storage_slug
from emissions_aggregator.domain.charts import create_chart_data, create_raw_sections
from emissions_aggregator.domain.errors import NullChartDataError, NullSectionsError
from emissions_aggregator.schemas import AdapterDefinition
from emissions_aggregator.storage import save_artifact

from .aggregate import aggregate_metadata
from .context import PipelineContext
from .valuation import compute_usd_unlocks

logger = logging.getLogger(__name__)


async def process_protocol(
    definition: AdapterDefinition,
    protocol_name: str,
    context: PipelineContext,
) -> str:
    """
    Build and store the emissions artifact of one adapter definition.

    Steps run strictly in order: evaluate raw sections, shape charts (honoring
    the documented `replaces` list), aggregate metadata, value incentive unlocks,
    then write the artifact under its storage slug. Only valuation is allowed to
    fail without failing the protocol.

    Args:
        definition (AdapterDefinition): Adapter definition to process.
        protocol_name (str): Name of the adapter the definition came from.
        context (PipelineContext): Collaborators for the run.

    Returns:
        str: Storage slug of the written artifact.

    Raises:
        NullSectionsError: If the definition yields no raw sections.
        NullChartDataError: If chart shaping yields no real-time data.
        MissingMetadataError: If a guarded adapter cannot be resolved.
    """
    raw_data = await create_raw_sections(definition)
    if raw_data.raw_sections is None:
        raise NullSectionsError(protocol_name)

    chart_data = create_chart_data(protocol_name, raw_data, raw_data.replaces)
    if chart_data.real_time is None:
        raise NullChartDataError(protocol_name)

    artifact, canonical_key = await aggregate_metadata(
        protocol_name,
        chart_data.real_time,
        chart_data.documented,
        raw_data,
        context,
    )

    unlock_usd_chart = await compute_usd_unlocks(artifact, context.fetch_price)
    artifact = artifact.model_copy(update={"unlock_usd_chart": unlock_usd_chart})

    slug = storage_slug(canonical_key)
    await save_artifact(context.store, slug, artifact)

    logger.info("Stored emissions for %s as %s.", protocol_name, slug)
    return slug
