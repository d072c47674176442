# _utils/test_slug.py

import pytest

from emissions_aggregator.domain._utils import slugify, storage_slug

pytestmark = pytest.mark.unit


def test_slugify_lowercases_and_dashes_spaces() -> None:
    """
    ARRANGE: mixed-case key with spaces
    ACT:     slugify
    ASSERT:  lower-case, dash-separated
    """
    assert slugify("Uniswap  V3 ") == "uniswap-v3"


def test_slugify_strips_unsafe_characters() -> None:
    """
    ARRANGE: key with apostrophe and slash
    ACT:     slugify
    ASSERT:  characters removed
    """
    assert slugify("Jupiter's/Perps") == "jupitersperps"


def test_slugify_keeps_parent_marker() -> None:
    """
    ARRANGE: parent key
    ACT:     slugify
    ASSERT:  '#' kept
    """
    assert slugify("parent#Aave") == "parent#aave"


def test_storage_slug_removes_parent_marker() -> None:
    """
    ARRANGE: parent key
    ACT:     storage_slug
    ASSERT:  marker removed
    """
    assert storage_slug("parent#Aave") == "aave"


def test_storage_slug_leaves_plain_key() -> None:
    """
    ARRANGE: non-parent key
    ACT:     storage_slug
    ASSERT:  equals slugify result
    """
    assert storage_slug("Curve DEX") == slugify("Curve DEX")
