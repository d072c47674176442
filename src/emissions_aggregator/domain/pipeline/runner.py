# pipeline/runner.py

import asyncio
import logging
import os
import random
from collections.abc import Callable, Collection, Mapping, Sequence
from contextlib import AsyncExitStack
from typing import NamedTuple, TypeAlias

from emissions_aggregator.adapters import (
    AdapterEntry,
    DiscordNotifier,
    load_adapter_registry,
    open_futures_feed,
    open_price_feed,
    resolve_definitions,
)
from emissions_aggregator.config import Settings, load_settings
from emissions_aggregator.domain.errors import BatchTimeoutError, ItemTimeoutError
from emissions_aggregator.schemas import AdapterDefinition
from emissions_aggregator.storage import (
    load_reference_tables,
    make_blob_store,
    merge_protocol_index,
)

from .context import PipelineContext
from .processor import process_protocol
from .reporter import FailureReporter, Notifier, notify

logger = logging.getLogger(__name__)

Shuffle: TypeAlias = Callable[[list[AdapterEntry]], None]


class RunResult(NamedTuple):
    slugs: list[str]
    failures: tuple[str, ...]
    index: list[str]


def select_adapters(
    registry: Sequence[AdapterEntry],
    protocol_indexes: Collection[int],
    *,
    shuffle: Shuffle = random.shuffle,
) -> list[AdapterEntry]:
    """
    Pick the adapters at the given registry positions, in random order.

    Shuffling keeps any adapter from always running first (or last, when the run
    is cut short by its timeout).

    Args:
        registry (Sequence[AdapterEntry]): The full adapter registry.
        protocol_indexes (Collection[int]): Registry positions to run.
        shuffle (Shuffle, optional): In-place shuffle. Defaults to random.shuffle.

    Returns:
        list[AdapterEntry]: Selected adapters, shuffled.
    """
    wanted = set(protocol_indexes)
    selected = [entry for index, entry in enumerate(registry) if index in wanted]
    shuffle(selected)
    return selected


async def process_protocol_list(
    protocol_indexes: Collection[int],
    *,
    registry: Sequence[AdapterEntry],
    context: PipelineContext,
    notifier: Notifier,
    concurrency: int = 2,
    item_timeout: float = 180.0,
    shuffle: Shuffle = random.shuffle,
) -> RunResult:
    """
    Process the selected adapters and merge their results into the protocol index.

    At most `concurrency` adapters run at once. The definitions of one adapter
    run concurrently, each bounded by `item_timeout`. A failing or timed-out
    definition marks its adapter as failed without affecting any other work.
    Once every adapter has settled, the run's slugs are merged into the stored
    index and a single failure summary is sent if anything failed.

    Args:
        protocol_indexes (Collection[int]): Registry positions to run.
        registry (Sequence[AdapterEntry]): The full adapter registry.
        context (PipelineContext): Collaborators for the run.
        notifier (Notifier): Channel for the failure summary.
        concurrency (int, optional): Adapters processed at once. Defaults to 2.
        item_timeout (float, optional): Seconds allowed per definition. Defaults
            to 180.
        shuffle (Shuffle, optional): In-place shuffle. Defaults to random.shuffle.

    Returns:
        RunResult: Slugs stored this run, failed adapters and the merged index.
    """
    adapters = select_adapters(registry, protocol_indexes, shuffle=shuffle)
    reporter = FailureReporter()
    semaphore = asyncio.Semaphore(concurrency)

    logger.info("Processing %d adapters.", len(adapters))

    async with asyncio.TaskGroup() as task_group:
        tasks = [
            task_group.create_task(
                _run_adapter(entry, semaphore, context, reporter, item_timeout),
            )
            for entry in adapters
        ]

    slugs = [slug for task in tasks for slug in task.result()]

    index = await merge_protocol_index(context.store, slugs)
    await reporter.report(notifier)

    logger.info(
        "Stored %d protocols; %d adapters failed.",
        len(slugs),
        len(reporter.failures),
    )
    return RunResult(slugs, reporter.failures, index)


async def store_emissions(
    protocol_indexes: Collection[int],
    *,
    registry: Sequence[AdapterEntry] | None = None,
    context: PipelineContext | None = None,
    notifier: Notifier | None = None,
    settings: Settings | None = None,
    shuffle: Shuffle = random.shuffle,
) -> RunResult | None:
    """
    Run one emissions batch under the overall batch timeout.

    Collaborators not supplied are built from settings: the adapter registry from
    entry points, the reference tables from disk, the blob store, price and
    futures feeds, and the Discord notifier. Invalid settings, a batch timeout or
    any other error that escapes the run is reported through the notifier and
    swallowed, so the caller always sees normal completion.

    Args:
        protocol_indexes (Collection[int]): Registry positions to run.
        registry (Sequence[AdapterEntry] | None, optional): Adapter registry.
        context (PipelineContext | None, optional): Collaborators for the run.
        notifier (Notifier | None, optional): Notification channel.
        settings (Settings | None, optional): Settings; read from the environment
            when omitted.
        shuffle (Shuffle, optional): In-place shuffle. Defaults to random.shuffle.

    Returns:
        RunResult | None: The run's result, or None if the batch failed.
    """
    try:
        settings = settings or load_settings()
        notifier = notifier or DiscordNotifier(settings.webhook_url)

        async with AsyncExitStack() as stack:
            if context is None:
                context = await _open_context(stack, settings)
            if registry is None:
                registry = load_adapter_registry()

            return await asyncio.wait_for(
                process_protocol_list(
                    protocol_indexes,
                    registry=registry,
                    context=context,
                    notifier=notifier,
                    concurrency=settings.adapter_concurrency,
                    item_timeout=settings.item_timeout_seconds,
                    shuffle=shuffle,
                ),
                timeout=settings.batch_timeout_seconds,
            )

    except TimeoutError:
        error = BatchTimeoutError(f"{settings.batch_timeout_seconds:g}s")
        logger.error("storeEmissions aborted: %s", error)
        await notify(notifier, f"storeEmissions: {error}")

    except Exception as error:
        logger.exception("storeEmissions failed")
        # settings may have failed to load
        notifier = notifier or DiscordNotifier(os.getenv("UNLOCKS_WEBHOOK") or None)
        await notify(notifier, f"storeEmissions failed: {error!r}")

    return None


async def handle_event(event: Mapping[str, object]) -> None:
    """
    Entry point for scheduled triggers carrying `{"protocolIndexes": [...]}`.

    Args:
        event (Mapping[str, object]): Trigger payload.

    Returns:
        None
    """
    await store_emissions(event.get("protocolIndexes") or [])


async def _open_context(stack: AsyncExitStack, settings: Settings) -> PipelineContext:
    """
    Build the run's collaborators, registering feed cleanup on the exit stack.

    Args:
        stack (AsyncExitStack): Stack that closes the feeds after the run.
        settings (Settings): Run settings.

    Returns:
        PipelineContext: Collaborators for the run.
    """
    price_feed = await stack.enter_async_context(open_price_feed())
    futures_feed = await stack.enter_async_context(open_futures_feed())

    return PipelineContext(
        reference_tables=load_reference_tables(settings.reference_tables_path),
        store=make_blob_store(settings),
        fetch_price=price_feed.fetch_price,
        fetch_futures=futures_feed.fetch_futures,
    )


async def _run_adapter(
    entry: AdapterEntry,
    semaphore: asyncio.Semaphore,
    context: PipelineContext,
    reporter: FailureReporter,
    item_timeout: float,
) -> list[str]:
    """
    Resolve an adapter's definitions and process them all concurrently, holding
    one of the pool's slots for the duration.

    Args:
        entry (AdapterEntry): Adapter to run.
        semaphore (asyncio.Semaphore): Pool bounding concurrent adapters.
        context (PipelineContext): Collaborators for the run.
        reporter (FailureReporter): Collector of failed adapter names.
        item_timeout (float): Seconds allowed per definition.

    Returns:
        list[str]: Slugs of the adapter's successfully stored protocols.
    """
    async with semaphore:
        try:
            definitions = await asyncio.wait_for(
                resolve_definitions(entry),
                timeout=item_timeout,
            )
        except TimeoutError:
            _record_failure(entry.name, ItemTimeoutError("loading definitions"), reporter)
            return []
        except Exception as error:
            _record_failure(entry.name, error, reporter)
            return []

        results = await asyncio.gather(
            *(
                _run_definition(definition, entry.name, context, reporter, item_timeout)
                for definition in definitions
            ),
        )

    return [slug for slug in results if slug is not None]


async def _run_definition(
    definition: AdapterDefinition,
    protocol_name: str,
    context: PipelineContext,
    reporter: FailureReporter,
    item_timeout: float,
) -> str | None:
    """
    Process one definition under the per-item timeout, converting any failure
    into a failure record.

    Args:
        definition (AdapterDefinition): Definition to process.
        protocol_name (str): Name of the owning adapter.
        context (PipelineContext): Collaborators for the run.
        reporter (FailureReporter): Collector of failed adapter names.
        item_timeout (float): Seconds allowed for this definition.

    Returns:
        str | None: The stored slug, or None on failure.
    """
    try:
        return await asyncio.wait_for(
            process_protocol(definition, protocol_name, context),
            timeout=item_timeout,
        )
    except TimeoutError:
        _record_failure(protocol_name, ItemTimeoutError(f"{item_timeout:g}s"), reporter)
    except Exception as error:
        _record_failure(protocol_name, error, reporter)
    return None


def _record_failure(
    protocol_name: str,
    error: Exception,
    reporter: FailureReporter,
) -> None:
    logger.error("%s: storing %s", error, protocol_name)
    reporter.record(protocol_name)
