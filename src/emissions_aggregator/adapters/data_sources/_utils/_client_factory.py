# _utils/_client_factory.py

from collections.abc import Callable

from httpx import AsyncClient, AsyncHTTPTransport, Limits, Timeout

ClientFactory = Callable[..., AsyncClient]

# per-client connection pool
_LIMITS = Limits(max_connections=64, max_keepalive_connections=32)

_HEADERS = {
    "Accept": "application/json",
    "Accept-Encoding": "gzip",
    "User-Agent": "emissions-aggregator",
}


def make_client_factory(
    *,
    read_timeout: float = 30.0,
    retries: int = 1,
    **overrides: object,
) -> ClientFactory:
    """
    Build a factory of JSON-API clients shared by the price, futures and webhook
    data sources.

    Each call of the returned factory opens a new HTTP/2 `httpx.AsyncClient` on its
    own transport. Keyword arguments given to the factory call override those
    fixed here.

    Args:
        read_timeout (float, optional): Seconds to wait for a response body.
            Defaults to 30.
        retries (int, optional): Connection retries of the transport. Defaults to 1.
        **overrides: Further AsyncClient arguments, e.g. base_url or headers.

    Returns:
        ClientFactory: Callable creating configured AsyncClient instances.

    Example:
        prices_client = make_client_factory(base_url="https://coins.llama.fi")
        async with prices_client() as client:
            ...
    """
    timeout = Timeout(connect=5.0, read=read_timeout, write=5.0, pool=None)

    def _factory(**call_overrides: object) -> AsyncClient:
        transport = AsyncHTTPTransport(http2=True, retries=retries, limits=_LIMITS)
        params: dict[str, object] = {
            "http2": True,
            "transport": transport,
            "timeout": timeout,
            "headers": _HEADERS,
            **overrides,
            **call_overrides,
        }
        return AsyncClient(**params)

    return _factory
