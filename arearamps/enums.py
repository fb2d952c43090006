from __future__ import annotations

from enum import Enum


class TableTypeEnum(Enum):
    AREAS = 'areas'
    DISTRICTS = 'districts'
    LINKS = 'links'
    NET_LOAD_RAMP = 'netLoadRamp'


class TimeStepEnum(Enum):
    """
    Time resolution of the timeId column of a simulation table.

    Members are ordered by coarseness via their rank, so that resampling operations can
    decide whether a conversion aggregates (hourly -> daily) or would have to split values.
    """
    HOURLY = 'hourly'
    DAILY = 'daily'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'
    ANNUAL = 'annual'

    @property
    def rank(self) -> int:
        return list(TimeStepEnum).index(self)

    @classmethod
    def from_value(cls, value: TimeStepEnum | str) -> TimeStepEnum:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(
                f"Unknown time step {value!r}. Allowed values: {[ts.value for ts in cls]}"
            ) from None


class QuantityTypeEnum(Enum):
    """
    Physical property that determines how a quantity behaves under time aggregation.

    INTENSIVE: Quantities measured per unit (rates, power, ramps)
       - Averaging when reducing granularity (e.g. hourly -> daily)
       Examples: power [MW], ramps [MW/h], prices [€/MWh]

    EXTENSIVE: Quantities representing totals or amounts
       - Summation when reducing granularity (e.g. hourly -> daily)
       Examples: volume [MWh], energy [MWh]
    """

    INTENSIVE = "intensive"  # power, ramp
    EXTENSIVE = "extensive"  # volume, energy


class BoundaryModeEnum(Enum):
    """How the first row of every series is identified when computing ramps."""
    PER_ENTITY = 'per_entity'  # first row of each area / district / mcYear series
    GLOBAL_MIN_TIME_ID = 'global_min_time_id'  # rows at the table-wide minimum timeId


class WeekdayEnum(Enum):
    Monday = 0
    Tuesday = 1
    Wednesday = 2
    Thursday = 3
    Friday = 4
    Saturday = 5
    Sunday = 6
