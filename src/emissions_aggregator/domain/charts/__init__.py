# charts/__init__.py

from .categories import create_category_data
from .sections import create_chart_data, create_raw_sections, map_to_server_data

__all__ = [
    "create_category_data",
    "create_chart_data",
    "create_raw_sections",
    "map_to_server_data",
]
