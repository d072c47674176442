# schemas/types.py

from typing import Annotated

from pydantic import BeforeValidator, Field, StringConstraints

from .validators import to_label, to_timestamp

# Non-empty string with whitespace stripped.
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Series label, e.g. "Liquidity Mining"; surrounding whitespace removed.
LabelStr = Annotated[NonEmptyStr, BeforeValidator(to_label)]

# Unix timestamp in whole seconds. Millisecond values are scaled down.
Timestamp = Annotated[int, BeforeValidator(to_timestamp), Field(ge=0)]

# Token quantity, never negative.
NonNegFloat = Annotated[float, Field(ge=0)]
