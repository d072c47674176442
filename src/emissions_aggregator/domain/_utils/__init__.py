# _utils/__init__.py

from ._slug import slugify, storage_slug

__all__ = ["slugify", "storage_slug"]
