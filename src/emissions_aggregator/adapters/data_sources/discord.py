# data_sources/discord.py

import logging
from collections.abc import Iterator

import httpx

from ._utils import ClientFactory, describe_httpx_error, make_client_factory

logger = logging.getLogger(__name__)

# Discord rejects message content longer than this
_MAX_CONTENT_LENGTH = 2000

_DEFAULT_CLIENT_FACTORY: ClientFactory = make_client_factory()


class DiscordNotifier:
    """
    Best-effort notification channel posting to a Discord webhook.

    Without a webhook URL, or when a post fails, messages are written to the log
    instead. Sending never raises.

    Attributes:
        _webhook_url (str | None): Target webhook, or None when unconfigured.
        _client_factory (ClientFactory): Factory for the HTTP client used to post.
    """

    __slots__ = ("_webhook_url", "_client_factory")

    def __init__(
        self,
        webhook_url: str | None,
        client_factory: ClientFactory = _DEFAULT_CLIENT_FACTORY,
    ) -> None:
        self._webhook_url = webhook_url
        self._client_factory = client_factory

    async def send(self, message: str) -> None:
        """
        Send a message, split into chunks Discord accepts.

        Args:
            message (str): Message text.

        Returns:
            None
        """
        if not self._webhook_url:
            logger.warning("No webhook configured: %s", message)
            return

        try:
            async with self._client_factory() as client:
                for chunk in _chunks(message, _MAX_CONTENT_LENGTH):
                    response = await client.post(
                        self._webhook_url,
                        json={"content": chunk},
                    )
                    response.raise_for_status()
        except httpx.HTTPError as error:
            logger.error(
                "Discord webhook failed (%s): %s",
                describe_httpx_error(error),
                message,
            )


def _chunks(text: str, size: int) -> Iterator[str]:
    """
    Split text into consecutive chunks of at most `size` characters.

    Args:
        text (str): Text to split.
        size (int): Maximum chunk length.

    Yields:
        str: Consecutive chunks; a single empty chunk for empty text.
    """
    if not text:
        yield text
        return
    for start in range(0, len(text), size):
        yield text[start : start + size]
