# pipeline/reporter.py

import logging
from typing import Protocol

logger = logging.getLogger(__name__)

_HEADER = "storeEmissions errors: \n"


class Notifier(Protocol):
    async def send(self, message: str) -> None: ...


class FailureReporter:
    """
    Collects the names of adapters that failed during one batch run and sends a
    single summary notification at the end of it.
    """

    __slots__ = ("_failures",)

    def __init__(self) -> None:
        self._failures: list[str] = []

    @property
    def failures(self) -> tuple[str, ...]:
        """Failed adapter names in first-failure order, without duplicates."""
        return tuple(dict.fromkeys(self._failures))

    def record(self, adapter_name: str) -> None:
        self._failures.append(adapter_name)

    def compose(self) -> str | None:
        """
        Compose the summary message.

        Returns:
            str | None: The message listing every failed adapter, or None if
                nothing failed.
        """
        if not self._failures:
            return None
        return _HEADER + ", ".join(self.failures)

    async def report(self, notifier: Notifier) -> None:
        """
        Send the summary through the notifier if anything failed.

        Args:
            notifier (Notifier): Notification channel.

        Returns:
            None
        """
        message = self.compose()
        if message is None:
            return

        logger.warning("%d adapters failed: %s", len(self.failures), self.failures)
        await notify(notifier, message)


async def notify(notifier: Notifier, message: str) -> None:
    """
    Send a message, logging it instead if the notifier itself fails.

    Args:
        notifier (Notifier): Notification channel.
        message (str): Message text.

    Returns:
        None
    """
    try:
        await notifier.send(message)
    except Exception as error:
        logger.error("Notification failed (%s): %s", error, message)
