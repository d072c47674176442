# data_sources/__init__.py

from .discord import DiscordNotifier
from .futures import FuturesFeed, open_futures_feed
from .prices import PriceFeed, open_price_feed

__all__ = [
    # notification
    "DiscordNotifier",
    # market data
    "FuturesFeed",
    "PriceFeed",
    "open_futures_feed",
    "open_price_feed",
]
