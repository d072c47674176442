# _utils/_slug.py

import re

_PARENT_MARKER = "parent#"

# characters that would split or escape a storage key
_UNSAFE = re.compile(r"[/\\?%*:|\"<>']")


def slugify(value: str) -> str:
    """
    Convert a protocol key into a lower-case, dash-separated slug.

    Spaces become dashes and apostrophes or path-unsafe characters are removed;
    the "#" of a parent marker is kept.

    Args:
        value (str): The key to slugify, e.g. "Uniswap V3".

    Returns:
        str: The slug, e.g. "uniswap-v3".
    """
    return _UNSAFE.sub("", "-".join(value.strip().lower().split()))


def storage_slug(canonical_key: str) -> str:
    """
    Slug under which a protocol's artifact is stored, with the parent marker removed.

    Args:
        canonical_key (str): Canonical protocol key, e.g. "parent#Aave".

    Returns:
        str: Storage slug, e.g. "aave".
    """
    return slugify(canonical_key).replace(_PARENT_MARKER, "", 1)
