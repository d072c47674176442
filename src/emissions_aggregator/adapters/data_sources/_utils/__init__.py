# _utils/__init__.py

from ._client_factory import ClientFactory, make_client_factory
from ._errors import describe_httpx_error

__all__ = ["ClientFactory", "describe_httpx_error", "make_client_factory"]
