# _cache/__init__.py

from ._cache import load_cache_entry, save_cache_entry

__all__ = ["load_cache_entry", "save_cache_entry"]
