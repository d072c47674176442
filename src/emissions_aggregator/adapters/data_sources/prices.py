# data_sources/prices.py

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from ._cache import load_cache_entry, save_cache_entry
from ._utils import ClientFactory, describe_httpx_error, make_client_factory

logger = logging.getLogger(__name__)

_PRICES_BASE_URL = "https://coins.llama.fi"
_CACHE_NAME = "historical_prices"

_DEFAULT_CLIENT_FACTORY: ClientFactory = make_client_factory(base_url=_PRICES_BASE_URL)


@asynccontextmanager
async def open_price_feed(
    client_factory: ClientFactory = _DEFAULT_CLIENT_FACTORY,
) -> AsyncIterator["PriceFeed"]:
    """
    Context manager to create and close a PriceFeed with its own HTTP client.

    Args:
        client_factory (ClientFactory, optional): Callable returning an
            httpx.AsyncClient. Defaults to a client for coins.llama.fi.

    Yields:
        PriceFeed: A feed backed by an open client.
    """
    client = client_factory()
    try:
        yield PriceFeed(client)
    finally:
        await client.aclose()


class PriceFeed:
    """
    Historical token prices from the coins.llama.fi price API.

    Prices at a past timestamp never change, so every price found is cached per
    (token, timestamp). Missing prices and failed requests are not cached.

    Attributes:
        _client (httpx.AsyncClient): Client used for price requests.
        _use_cache (bool): Whether to read and write the price cache.
    """

    __slots__ = ("_client", "_use_cache")

    def __init__(self, client: httpx.AsyncClient, *, use_cache: bool = True) -> None:
        self._client = client
        self._use_cache = use_cache

    async def fetch_price(self, token: str, timestamp: int) -> float | None:
        """
        Fetch the USD spot price of a token at a given timestamp.

        Network, HTTP and decoding failures are logged and reported as a missing
        price; they never propagate.

        Args:
            token (str): Price-feed token id, e.g. "coingecko:uniswap".
            timestamp (int): Unix timestamp in seconds.

        Returns:
            float | None: The price, or None if unavailable.
        """
        cache_key = f"{token}@{timestamp}"

        if self._use_cache:
            cached = load_cache_entry(_CACHE_NAME, cache_key)
            if cached is not None:
                return cached

        try:
            price = await self._request_price(token, timestamp)
        except (httpx.HTTPError, AttributeError, TypeError, ValueError) as error:
            logger.warning(
                "No price for %s at %d: %s",
                token,
                timestamp,
                describe_httpx_error(error),
            )
            return None

        if price is not None and self._use_cache:
            save_cache_entry(_CACHE_NAME, cache_key, price)

        return price

    async def _request_price(self, token: str, timestamp: int) -> float | None:
        """
        Request the historical price endpoint and extract the token's price.

        Args:
            token (str): Price-feed token id.
            timestamp (int): Unix timestamp in seconds.

        Returns:
            float | None: The price, or None if the response lists no price.

        Raises:
            httpx.HTTPError: If the request fails or returns a non-2xx status.
            ValueError: If the body is not valid JSON or the price is not numeric.
            AttributeError, TypeError: If the body is not shaped as expected.
        """
        response = await self._client.get(
            f"{_PRICES_BASE_URL}/prices/historical/{timestamp}/{token}",
        )
        response.raise_for_status()

        coin = (response.json().get("coins") or {}).get(token) or {}
        price = coin.get("price")

        return None if price is None else float(price)
