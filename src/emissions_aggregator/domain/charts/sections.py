# charts/sections.py

import inspect
import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence

from emissions_aggregator.schemas import (
    AdapterDefinition,
    ChartData,
    ChartPoint,
    ChartSection,
    ProtocolMetadata,
    RawSection,
    RawSectionData,
    UnlockEvent,
)

logger = logging.getLogger(__name__)

# definition keys that describe the schedule rather than name a section
_RESERVED_KEYS = frozenset({"meta", "categories", "documented"})
_DOCUMENTED_RESERVED_KEYS = frozenset({"replaces"})


async def create_raw_sections(definition: AdapterDefinition) -> RawSectionData:
    """
    Evaluate an adapter definition into raw, labelled unlock sections.

    Every non-reserved key of the definition names a section. Its value is a
    schedule: an unlock event mapping, a sequence of them, or a zero-argument
    (possibly async) callable returning either. Sections under "documented" are
    evaluated the same way.

    Args:
        definition (AdapterDefinition): The adapter definition mapping.

    Returns:
        RawSectionData: Metadata, categories and evaluated sections. When the
            definition names no sections, `raw_sections` is None.
    """
    documented = definition.get("documented") or {}

    raw_sections = await _evaluate_sections(definition, _RESERVED_KEYS)
    documented_sections = await _evaluate_sections(
        documented,
        _DOCUMENTED_RESERVED_KEYS,
    )

    return RawSectionData(
        metadata=ProtocolMetadata.model_validate(definition.get("meta") or {}),
        categories=definition.get("categories") or {},
        raw_sections=raw_sections or None,
        documented_sections=documented_sections,
        replaces=documented.get("replaces") or [],
    )


def create_chart_data(
    protocol_name: str,
    raw_data: RawSectionData,
    replaces: Sequence[str],
) -> ChartData:
    """
    Shape raw sections into real-time and documented cumulative unlock series.

    The documented variant is the adapter's documented sections plus every
    real-time section not named in `replaces`. It is empty when the adapter
    documents nothing.

    Args:
        protocol_name (str): Adapter name, for logging.
        raw_data (RawSectionData): Evaluated adapter output.
        replaces (Sequence[str]): Real-time labels superseded by documented ones.

    Returns:
        ChartData: Both chart variants; `real_time` is None without raw sections.
    """
    if raw_data.raw_sections is None:
        return ChartData()

    real_time = [_to_chart_section(section) for section in raw_data.raw_sections]

    if not raw_data.documented_sections:
        return ChartData(real_time=real_time)

    replaced = set(replaces)
    documented = [_to_chart_section(s) for s in raw_data.documented_sections]
    documented += [section for section in real_time if section.label not in replaced]

    logger.debug(
        "%s: %d real-time and %d documented sections (%d replaced).",
        protocol_name,
        len(real_time),
        len(documented),
        len(replaced),
    )
    return ChartData(real_time=real_time, documented=documented)


def map_to_server_data(sections: Iterable[ChartSection]) -> list[ChartSection]:
    """
    Prepare chart sections for publishing by dropping series without points.

    Args:
        sections (Iterable[ChartSection]): Chart sections to publish.

    Returns:
        list[ChartSection]: Sections that carry at least one point.
    """
    return [section for section in sections if section.data]


async def _evaluate_sections(
    definition: Mapping[str, object],
    reserved: frozenset[str],
) -> list[RawSection]:
    """
    Evaluate each schedule-bearing key of a mapping into a RawSection.

    Args:
        definition (Mapping[str, object]): Mapping of section label to schedule.
        reserved (frozenset[str]): Keys to skip.

    Returns:
        list[RawSection]: One section per label, in mapping order.
    """
    sections = []
    for label, schedule in definition.items():
        if label in reserved:
            continue
        events = await _evaluate_schedule(schedule)
        sections.append(RawSection(label=label, events=events))
    return sections


async def _evaluate_schedule(schedule: object) -> list[UnlockEvent]:
    """
    Resolve a schedule value into a flat list of unlock events.

    Callables are invoked and awaited if they return an awaitable; nested
    sequences are flattened.

    Args:
        schedule (object): Event mapping, sequence of events, or callable.

    Returns:
        list[UnlockEvent]: Validated unlock events.
    """
    if callable(schedule):
        schedule = schedule()
    if inspect.isawaitable(schedule):
        schedule = await schedule

    if schedule is None:
        return []

    if isinstance(schedule, Mapping | UnlockEvent):
        return [UnlockEvent.model_validate(schedule)]

    events: list[UnlockEvent] = []
    for item in schedule:
        events.extend(await _evaluate_schedule(item))
    return events


def _to_chart_section(section: RawSection) -> ChartSection:
    """
    Convert a raw section into a cumulative series, one point per timestamp.

    Args:
        section (RawSection): Raw unlock events under one label.

    Returns:
        ChartSection: Time-ordered points with cumulative `unlocked` totals.
    """
    per_timestamp: defaultdict[int, float] = defaultdict(float)
    for event in section.events:
        per_timestamp[event.timestamp] += event.amount

    points = []
    cumulative = 0.0
    for timestamp in sorted(per_timestamp):
        emission = per_timestamp[timestamp]
        cumulative += emission
        points.append(
            ChartPoint(timestamp=timestamp, unlocked=cumulative, raw_emission=emission),
        )

    return ChartSection(label=section.label, data=points)
