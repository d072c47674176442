# data_sources/futures.py

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from ._utils import ClientFactory, describe_httpx_error, make_client_factory

logger = logging.getLogger(__name__)

_FUTURES_BASE_URL = "https://fapi.binance.com"
_QUOTE_ASSET = "USDT"

_DEFAULT_CLIENT_FACTORY: ClientFactory = make_client_factory(
    base_url=_FUTURES_BASE_URL,
)


@asynccontextmanager
async def open_futures_feed(
    client_factory: ClientFactory = _DEFAULT_CLIENT_FACTORY,
) -> AsyncIterator["FuturesFeed"]:
    """
    Context manager to create and close a FuturesFeed with its own HTTP client.

    Args:
        client_factory (ClientFactory, optional): Callable returning an
            httpx.AsyncClient. Defaults to a client for the Binance futures API.

    Yields:
        FuturesFeed: A feed backed by an open client.
    """
    client = client_factory()
    try:
        yield FuturesFeed(client)
    finally:
        await client.aclose()


class FuturesFeed:
    """
    Perpetual futures market snapshot (funding rate, open interest) per symbol,
    read from the Binance USD-M futures public API.
    """

    __slots__ = ("_client",)

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch_futures(self, symbol: str) -> dict[str, object] | None:
        """
        Fetch the futures market snapshot for a token symbol.

        The symbol is paired with USDT, e.g. "UNI" → "UNIUSDT". Tokens without a
        listed perpetual, and any request failure, yield None.

        Args:
            symbol (str): Token trading symbol.

        Returns:
            dict[str, object] | None: Snapshot with `symbol`, `markPrice`,
                `fundingRate`, `nextFundingTime` and `openInterest`, or None.
        """
        if not symbol or symbol == "-":
            return None

        pair = f"{symbol.upper()}{_QUOTE_ASSET}"

        try:
            premium, interest = await asyncio.gather(
                self._get_json("/fapi/v1/premiumIndex", pair),
                self._get_json("/fapi/v1/openInterest", pair),
            )
            return {
                "symbol": pair,
                "markPrice": float(premium["markPrice"]),
                "fundingRate": float(premium["lastFundingRate"]),
                "nextFundingTime": int(premium["nextFundingTime"]),
                "openInterest": float(interest["openInterest"]),
            }
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as error:
            logger.debug("No futures data for %s: %s", pair, describe_httpx_error(error))
            return None

    async def _get_json(self, path: str, pair: str) -> dict[str, object]:
        response = await self._client.get(
            f"{_FUTURES_BASE_URL}{path}",
            params={"symbol": pair},
        )
        response.raise_for_status()
        return response.json()
