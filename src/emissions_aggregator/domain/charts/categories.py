# charts/categories.py

import time
from collections.abc import Mapping, Sequence

from emissions_aggregator.schemas import ChartSection, TokenAllocation


def create_category_data(
    sections: Sequence[ChartSection],
    categories: Mapping[str, Sequence[str]],
    *,
    now: float | None = None,
) -> TokenAllocation:
    """
    Break a chart variant down by category, in percent of the total.

    `final` weighs each category by its sections' fully unlocked amounts, and
    `current` by what had unlocked as of `now`. Sections not listed under any
    category are ignored. Percentages are rounded to two decimals.

    Args:
        sections (Sequence[ChartSection]): Chart sections of one variant.
        categories (Mapping[str, Sequence[str]]): Category name to section labels.
        now (float | None, optional): Reference Unix time for `current`. Defaults
            to the current time.

    Returns:
        TokenAllocation: Current and final category shares.
    """
    now = time.time() if now is None else now
    by_label = {section.label: section for section in sections}

    current: dict[str, float] = {}
    final: dict[str, float] = {}

    for category, labels in categories.items():
        members = [by_label[label] for label in labels if label in by_label]
        current[category] = sum(_unlocked_at(section, now) for section in members)
        final[category] = sum(_unlocked_at(section, None) for section in members)

    return TokenAllocation(current=_as_shares(current), final=_as_shares(final))


def _unlocked_at(section: ChartSection, at: float | None) -> float:
    """
    Cumulative amount a section had unlocked at a given time.

    Args:
        section (ChartSection): Cumulative unlock series.
        at (float | None): Unix time, or None for the end of the schedule.

    Returns:
        float: Unlocked amount, 0 if nothing had unlocked yet.
    """
    unlocked = 0.0
    for point in section.data:
        if at is not None and point.timestamp > at:
            break
        unlocked = point.unlocked
    return unlocked


def _as_shares(amounts: dict[str, float]) -> dict[str, float]:
    total = sum(amounts.values())
    if not total:
        return {category: 0.0 for category in amounts}
    return {
        category: round(amount / total * 100, 2) for category, amount in amounts.items()
    }
