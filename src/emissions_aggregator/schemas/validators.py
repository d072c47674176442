# schemas/validators.py

from datetime import datetime

# timestamps above this are treated as milliseconds (year 5138 in seconds)
_MILLISECOND_THRESHOLD = 100_000_000_000


def to_label(value: object) -> object:
    """
    Normalise a series label by collapsing internal whitespace.

    Args:
        value (object): Raw label value.

    Returns:
        object: The cleaned label when given a string, otherwise the value unchanged
            so that pydantic reports the type error.
    """
    if not isinstance(value, str):
        return value
    return " ".join(value.split())


def to_timestamp(value: object) -> object:
    """
    Coerce a raw timestamp into whole Unix seconds.

    Accepts ints, floats, numeric strings and datetimes. Values that look like
    millisecond timestamps are divided down to seconds.

    Args:
        value (object): Raw timestamp value.

    Returns:
        object: Integer seconds, or the original value if it cannot be coerced.
    """
    if isinstance(value, bool):
        return value

    if isinstance(value, datetime):
        return int(value.timestamp())

    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return value

    if isinstance(value, int | float):
        seconds = int(value)
        if seconds > _MILLISECOND_THRESHOLD:
            seconds //= 1000
        return seconds

    return value
