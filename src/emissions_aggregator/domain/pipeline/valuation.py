# pipeline/valuation.py

import asyncio
import logging
import time
from collections import defaultdict
from typing import TypeAlias

from emissions_aggregator.domain.errors import ValuationError
from emissions_aggregator.schemas import EmissionArtifact

from .context import PriceLookup

logger = logging.getLogger(__name__)

# categories whose unlocks are valued in USD
INCENTIVE_CATEGORIES = ("farming", "airdrop")

UsdChart: TypeAlias = list[tuple[str, float]]


async def compute_usd_unlocks(
    artifact: EmissionArtifact,
    fetch_price: PriceLookup,
    *,
    now: float | None = None,
) -> UsdChart:
    """
    Value a protocol's past incentive unlocks in USD.

    Documented series labelled under an incentive category are summed per
    timestamp (future points excluded), every distinct timestamp is priced
    concurrently, and each timestamp's unlocked amount, taken as the change from
    the previous timestamp's total (starting from zero), is multiplied by its
    price. Timestamps without a price contribute 0.

    Valuation is best-effort: any failure is logged and yields an empty chart.

    Args:
        artifact (EmissionArtifact): Artifact whose documented data is valued.
        fetch_price (PriceLookup): Historical price lookup.
        now (float | None, optional): Cut-off Unix time. Defaults to the current
            time.

    Returns:
        UsdChart: `[timestamp, usd]` pairs in ascending timestamp order, with the
            timestamp as a string.
    """
    cutoff = time.time() if now is None else now

    try:
        return await _price_unlocks(artifact, fetch_price, cutoff)
    except Exception as error:
        logger.warning("USD unlock valuation failed for %s: %s", artifact.name, error)
        return []


async def _price_unlocks(
    artifact: EmissionArtifact,
    fetch_price: PriceLookup,
    cutoff: float,
) -> UsdChart:
    """
    Compute the USD unlock chart; see compute_usd_unlocks.

    Args:
        artifact (EmissionArtifact): Artifact whose documented data is valued.
        fetch_price (PriceLookup): Historical price lookup.
        cutoff (float): Only points strictly before this Unix time are valued.

    Returns:
        UsdChart: `[timestamp, usd]` pairs in ascending timestamp order.

    Raises:
        ValuationError: If the artifact has no token to price.
    """
    token = artifact.metadata.token
    if not token:
        raise ValuationError(f"{artifact.name}: no token")

    unlocks = _unlocks_by_timestamp(artifact, cutoff)
    timestamps = sorted(unlocks)

    # every lookup settles before any delta is computed
    prices = await asyncio.gather(
        *(_safe_price(fetch_price, token, timestamp) for timestamp in timestamps),
    )

    chart: UsdChart = []
    previous = 0.0
    for timestamp, price in zip(timestamps, prices, strict=True):
        unlocked = unlocks[timestamp] - previous
        previous = unlocks[timestamp]
        chart.append((str(timestamp), unlocked * price if price else 0.0))

    return chart


def _unlocks_by_timestamp(
    artifact: EmissionArtifact,
    cutoff: float,
) -> dict[int, float]:
    """
    Sum the cumulative unlocked amounts of incentive series per timestamp.

    Args:
        artifact (EmissionArtifact): Artifact whose documented data is read.
        cutoff (float): Only points strictly before this Unix time are included.

    Returns:
        dict[int, float]: Timestamp to summed cumulative unlocked amount.
    """
    labels = {
        label
        for category in INCENTIVE_CATEGORIES
        for label in artifact.categories.get(category, ())
    }

    unlocks: defaultdict[int, float] = defaultdict(float)
    for section in artifact.documented_data.data:
        if section.label not in labels:
            continue
        for point in section.data:
            if point.timestamp < cutoff:
                unlocks[point.timestamp] += point.unlocked

    return dict(unlocks)


async def _safe_price(
    fetch_price: PriceLookup,
    token: str,
    timestamp: int,
) -> float | None:
    """
    Look up a price, treating any failure as a missing price.

    Args:
        fetch_price (PriceLookup): Historical price lookup.
        token (str): Token to price.
        timestamp (int): Unix timestamp.

    Returns:
        float | None: The price, or None.
    """
    try:
        return await fetch_price(token, timestamp)
    except Exception as error:
        logger.debug("Price lookup for %s at %d failed: %s", token, timestamp, error)
        return None
