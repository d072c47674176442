# schemas/chart.py

from pydantic import BaseModel, ConfigDict, Field

from .types import LabelStr, NonNegFloat, Timestamp


class ChartPoint(BaseModel):
    """
    One point of an unlock series.

    Fields:
      - timestamp: Unix seconds
      - unlocked: cumulative tokens unlocked up to and including this point
      - raw_emission: tokens unlocked at this point alone
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: Timestamp
    unlocked: NonNegFloat
    raw_emission: NonNegFloat = Field(0.0, alias="rawEmission")


class ChartSection(BaseModel):
    """A labelled, time-ordered unlock series."""

    model_config = ConfigDict(frozen=True)

    label: LabelStr
    data: list[ChartPoint] = Field(default_factory=list)


class ChartData(BaseModel):
    """
    Real-time (observed) and documented (contractual) variants of the same
    protocol's unlock series. `documented` is empty when the adapter publishes no
    separate contractual schedule; `real_time` is None when shaping failed.
    """

    model_config = ConfigDict(frozen=True)

    real_time: list[ChartSection] | None = None
    documented: list[ChartSection] = Field(default_factory=list)
